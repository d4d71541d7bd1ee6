"""User business logic — account creation and credential checks."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from program_review.models.user import User

if TYPE_CHECKING:
    from program_review.database.repositories.users import UserRepository
    from program_review.schemas import UserCreate

logger = logging.getLogger(__name__)


async def create_user(payload: UserCreate, repo: UserRepository) -> User:
    """Create a user with a hashed password."""
    user = User.model_validate(payload.model_dump(exclude={"password"}))
    user.set_password(payload.password)
    await repo.create(user)
    logger.info("User created — id=%s username=%s", user.id, user.username)
    return user


async def authenticate(username: str, password: str, repo: UserRepository) -> User | None:
    """Return the user when ``password`` matches, otherwise None."""
    user = await repo.get_by_username(username)
    if user is None or not user.compare_password(password):
        logger.info("Failed login — username=%s", username)
        return None
    logger.info("Login — username=%s", username)
    return user
