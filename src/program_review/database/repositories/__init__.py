"""Repository modules for each Cosmos DB container."""

from program_review.database.repositories.actions import ActionRepository
from program_review.database.repositories.comments import CommentRepository
from program_review.database.repositories.departments import (
    DepartmentRepository,
    ProgramRepository,
)
from program_review.database.repositories.documents import DocumentRepository
from program_review.database.repositories.users import UserRepository

__all__ = [
    "ActionRepository",
    "CommentRepository",
    "DepartmentRepository",
    "DocumentRepository",
    "ProgramRepository",
    "UserRepository",
]
