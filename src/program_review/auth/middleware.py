"""Authentication helpers — protect routes behind a signed session cookie."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import HTTPException, Request, status

if TYPE_CHECKING:
    from collections.abc import Callable

    from program_review.models.user import User

ADMINISTRATORS = "Administrators"


def session_user(user: User) -> dict[str, Any]:
    """Build the session payload for a signed-in user."""
    return {
        "id": user.id,
        "username": user.username,
        "groups": list(user.groups),
        "root": user.root,
    }


def get_user(request: Request) -> dict[str, Any] | None:
    """Extract the authenticated user from the session, if present."""
    return request.session.get("user") if hasattr(request, "session") else None


def require_authenticated_user(request: Request) -> dict[str, Any]:
    """Return the authenticated user or raise HTTP 401."""
    user = get_user(request)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return user


def require_groups(*groups: str) -> Callable[[Request], dict[str, Any]]:
    """Build a dependency that admits root users and members of ``groups``."""

    def dependency(request: Request) -> dict[str, Any]:
        user = require_authenticated_user(request)
        if user.get("root") or set(groups) & set(user.get("groups", [])):
            return user
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions",
        )

    return dependency

