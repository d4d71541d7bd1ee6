"""Business logic shared by the HTTP routes."""
