"""Session-based authentication and group gating."""

from program_review.auth.middleware import (
    get_user,
    require_authenticated_user,
    require_groups,
    session_user,
)

__all__ = [
    "get_user",
    "require_authenticated_user",
    "require_groups",
    "session_user",
]
