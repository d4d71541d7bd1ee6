"""Data models for Cosmos DB document types."""

from program_review.models.action import Action
from program_review.models.comment import Comment
from program_review.models.department import Department, Program
from program_review.models.document import Document, Revision
from program_review.models.user import PersonName, User

__all__ = [
    "Action",
    "Comment",
    "Department",
    "Document",
    "PersonName",
    "Program",
    "Revision",
    "User",
]
