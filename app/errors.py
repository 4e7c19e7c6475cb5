"""Typed failures raised by the watchlist core and mapped at the HTTP boundary."""

from __future__ import annotations

from pydantic import ValidationError


class MyListError(Exception):
    """Base class for failures that carry an HTTP status."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ContentNotFound(MyListError):
    """Referenced content has no catalog record."""

    status_code = 404


class DuplicateEntry(MyListError):
    """The triple is already present in the user's list."""

    status_code = 409

    def __init__(self, message: str = "Item already exists in your list"):
        super().__init__(message)


class EntryNotFound(MyListError):
    """The triple is not present in the user's list."""

    status_code = 404

    def __init__(self, message: str = "Item not found in your list"):
        super().__init__(message)


class InvalidInput(MyListError):
    """Malformed request shape."""

    status_code = 400

    @classmethod
    def from_validation_error(cls, exc: ValidationError) -> "InvalidInput":
        return cls(describe_validation_error(exc))


class StorageFailure(MyListError):
    """Persistence layer could not read or write a collection."""

    status_code = 500


class OrphanedEntry(MyListError):
    """A listed entry references content that has left the catalog."""

    status_code = 500


def describe_validation_error(exc: ValidationError) -> str:
    """Return a short message for the first validation failure."""

    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part != "body"]
    field = location[-1] if location else "value"
    error_type = first.get("type", "")
    if error_type == "missing":
        return f'"{field}" is required'
    if error_type.startswith("uuid"):
        return f'"{field}" must be a valid UUID'
    if error_type == "literal_error":
        expected = first.get("ctx", {}).get("expected", "")
        return f'"{field}" must be {expected}'
    message = str(first.get("msg", "is invalid"))
    return f'"{field}" {message[0].lower()}{message[1:]}' if message else f'"{field}" is invalid'
