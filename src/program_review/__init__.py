"""Program review backend — departments, programs and versioned documents."""
