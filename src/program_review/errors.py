"""Domain errors and their HTTP status codes."""

from __future__ import annotations

from fastapi import status


class ProgramReviewError(Exception):
    """Base class for errors the HTTP layer reports to the client."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class RevisionNotFoundError(ProgramReviewError):
    status_code = status.HTTP_404_NOT_FOUND


class RevisionFileExistsError(ProgramReviewError):
    """The revision already carries a file; files are write-once."""

    status_code = status.HTTP_409_CONFLICT


class UnsupportedFileTypeError(ProgramReviewError):
    status_code = status.HTTP_400_BAD_REQUEST


class FileTooLargeError(ProgramReviewError):
    status_code = status.HTTP_413_CONTENT_TOO_LARGE


class DependentRecordsError(ProgramReviewError):
    """A record cannot be removed while other records reference it."""

    status_code = status.HTTP_400_BAD_REQUEST


class UsernameTakenError(ProgramReviewError):
    status_code = status.HTTP_409_CONFLICT
