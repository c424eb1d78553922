# filmorate/exceptions.py
from __future__ import annotations


class FilmorateError(Exception):
    """Base class for every failure the domain layer raises on purpose."""

    error = "Invalid request"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(FilmorateError):
    """A referenced film, user, genre or MPA rating does not exist."""

    error = "Object not found"


class DomainValidationError(FilmorateError):
    """Input the domain refuses regardless of what is stored."""

    error = "Invalid request"


class ContentNotFoundError(FilmorateError):
    """
    Both endpoints exist but the relation row to remove does not
    (a like that was never added, a friendship that was never made).
    """

    error = "Content not found"


class StorageIntegrityError(FilmorateError):
    """A foreign key or uniqueness constraint rejected a write."""

    error = "Conflict"


__all__ = [
    "FilmorateError",
    "NotFoundError",
    "DomainValidationError",
    "ContentNotFoundError",
    "StorageIntegrityError",
]
