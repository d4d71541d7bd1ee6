"""Action log — records who changed what."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from program_review.models.action import Action

if TYPE_CHECKING:
    from program_review.database.repositories.actions import ActionRepository

logger = logging.getLogger(__name__)


async def log_action(
    message: str,
    user: dict[str, Any] | None,
    target_type: str,
    target_id: str,
    target_name: str,
    repo: ActionRepository,
) -> Action | None:
    """Write an action entry. Failures are logged, never raised."""
    action = Action(
        message=message,
        user_id=user.get("id") if user else None,
        username=user.get("username") if user else None,
        target_type=target_type,
        target_id=target_id,
        target_name=target_name,
    )
    try:
        await repo.create(action)
    except Exception:  # noqa: BLE001
        logger.warning(
            "Failed to log action — target=%s:%s",
            target_type,
            target_id,
            exc_info=True,
        )
        return None
    return action
