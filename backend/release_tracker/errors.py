"""Error taxonomy shared by the release store and the API layer."""

from enum import Enum


class ReleaseErrorKind(str, Enum):
    VALIDATION = "validation"
    # Update request carried no recognized fields
    NO_OP = "no_op"
    NOT_FOUND = "not_found"
    STORAGE = "storage"


class ReleaseTrackerError(Exception):
    """Base exception for release tracker errors."""

    kind: ReleaseErrorKind = ReleaseErrorKind.STORAGE

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ReleaseTrackerError):
    """A required field is missing or a value is out of range."""

    kind = ReleaseErrorKind.VALIDATION


class EmptyUpdateError(ValidationError):
    """An update was requested without any field to apply."""

    kind = ReleaseErrorKind.NO_OP


class NotFoundError(ReleaseTrackerError):
    """The release id does not resolve to a stored record."""

    kind = ReleaseErrorKind.NOT_FOUND

    def __init__(self, release_id: object):
        super().__init__(f"No release found with id {release_id}")
        self.release_id = release_id


class StorageError(ReleaseTrackerError):
    """The backing database failed. Details are for logs only."""

    kind = ReleaseErrorKind.STORAGE
