"""User document model with bcrypt password hashing."""

from __future__ import annotations

from typing import Any

import bcrypt
from pydantic import BaseModel, EmailStr, Field

from program_review.config import MAX_USERNAME_LENGTH, MIN_USERNAME_LENGTH, SALT_ROUNDS
from program_review.models.base import DocumentBase


class PersonName(BaseModel):
    first: str = ""
    last: str = ""


class User(DocumentBase):
    """A person who can sign in. ``password_hash`` never leaves the backend."""

    username: str = Field(min_length=MIN_USERNAME_LENGTH, max_length=MAX_USERNAME_LENGTH)
    email: EmailStr
    name: PersonName = Field(default_factory=PersonName)
    internal: bool = True
    root: bool = False
    groups: list[str] = Field(default_factory=list)
    password_hash: str | None = None

    def set_password(self, password: str) -> None:
        """Hash and store ``password``."""
        salt = bcrypt.gensalt(rounds=SALT_ROUNDS)
        self.password_hash = bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def compare_password(self, password: str) -> bool:
        """Return True if ``password`` matches the stored hash."""
        if not self.password_hash:
            return False
        return bcrypt.checkpw(password.encode("utf-8"), self.password_hash.encode("utf-8"))

    def in_group(self, *groups: str) -> bool:
        return self.root or any(group in self.groups for group in groups)

    def to_public(self) -> dict[str, Any]:
        """Serialize without credential fields."""
        return self.model_dump(mode="json", exclude={"password_hash"})
