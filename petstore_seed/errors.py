"""
Error taxonomy for seeding operations.

Driver exceptions raised while a seeding step runs are converted by
`translate_errors` into `DataAccessError` subclasses that carry the step and
collection involved. The underlying pymongo exception is kept as `__cause__`.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Generator, Optional

from bson.errors import InvalidDocument
from pymongo import errors as pymongo_errors

DUPLICATE_KEY_CODES = frozenset({11000, 11001, 12582})
DOCUMENT_VALIDATION_CODE = 121


class DataAccessError(Exception):
    """Base class for failures talking to the database."""

    def __init__(
        self,
        message: str,
        *,
        step: Optional[str] = None,
        collection: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.step = step
        self.collection = collection


class DatabaseConnectionError(DataAccessError):
    """The database could not be reached, selected, or configured."""


class DuplicateKeyError(DataAccessError):
    """A write violated a unique index."""


class DocumentValidationError(DataAccessError):
    """A document was malformed or rejected by the store."""


def _write_error_codes(exc: pymongo_errors.BulkWriteError) -> set[int]:
    details = exc.details or {}
    return {error.get("code") for error in details.get("writeErrors", [])}


def classify(exc: Exception) -> type[DataAccessError]:
    """Map a driver exception to the matching DataAccessError subclass."""
    if isinstance(exc, pymongo_errors.DuplicateKeyError):
        return DuplicateKeyError
    if isinstance(exc, pymongo_errors.BulkWriteError):
        codes = _write_error_codes(exc)
        if codes & DUPLICATE_KEY_CODES:
            return DuplicateKeyError
        if DOCUMENT_VALIDATION_CODE in codes:
            return DocumentValidationError
        return DataAccessError
    if isinstance(exc, (pymongo_errors.ConnectionFailure, pymongo_errors.ConfigurationError)):
        return DatabaseConnectionError
    if isinstance(exc, InvalidDocument):
        # DocumentTooLarge subclasses InvalidDocument.
        return DocumentValidationError
    if isinstance(exc, pymongo_errors.OperationFailure):
        if exc.code in DUPLICATE_KEY_CODES:
            return DuplicateKeyError
        if exc.code == DOCUMENT_VALIDATION_CODE:
            return DocumentValidationError
    return DataAccessError


def _describe(exc: Exception) -> str:
    if isinstance(exc, pymongo_errors.BulkWriteError):
        errors = (exc.details or {}).get("writeErrors", [])
        if errors:
            return errors[0].get("errmsg", str(exc))
    return str(exc)


@contextmanager
def translate_errors(step: str, collection: Optional[str] = None) -> Generator[None, None, None]:
    """
    Re-raise driver errors from the enclosed block as DataAccessError.

    Example
    -------
        with translate_errors("insert", "users"):
            db["users"].insert_many(documents)
    """
    try:
        yield
    except DataAccessError:
        raise
    except (pymongo_errors.PyMongoError, InvalidDocument) as exc:
        error_type = classify(exc)
        where = f"{step} on '{collection}'" if collection else step
        raise error_type(f"{where} failed: {_describe(exc)}", step=step, collection=collection) from exc


__all__ = [
    "DataAccessError",
    "DatabaseConnectionError",
    "DocumentValidationError",
    "DuplicateKeyError",
    "classify",
    "translate_errors",
]
