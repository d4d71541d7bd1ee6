"""Request bodies accepted by the HTTP API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from program_review.models.user import PersonName


class _Patch(BaseModel):
    """Partial update; unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid")

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class DocumentCreate(BaseModel):
    title: str
    program_id: str | None = None


class DocumentUpdate(_Patch):
    title: str | None = Field(default=None, min_length=1)
    current_revision: int | None = None


class RevisionCreate(BaseModel):
    message: str = ""


class CommentCreate(BaseModel):
    body: str


class DepartmentCreate(BaseModel):
    name: str
    chairs: list[str] = Field(default_factory=list)


class DepartmentUpdate(_Patch):
    name: str | None = None
    chairs: list[str] | None = None


class ProgramCreate(BaseModel):
    name: str
    department_id: str


class ProgramUpdate(_Patch):
    name: str | None = None
    department_id: str | None = None


class UserCreate(BaseModel):
    username: str
    email: str
    password: str = Field(min_length=1)
    name: PersonName = Field(default_factory=PersonName)
    internal: bool = True
    root: bool = False
    groups: list[str] = Field(default_factory=list)


class LoginRequest(BaseModel):
    username: str
    password: str
