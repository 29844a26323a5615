from __future__ import annotations

import pytest
from bson.errors import InvalidDocument
from pymongo import errors as pymongo_errors

from petstore_seed.errors import (
    DataAccessError,
    DatabaseConnectionError,
    DocumentValidationError,
    DuplicateKeyError,
    classify,
    translate_errors,
)


@pytest.mark.parametrize(
    ("exc", "expected"),
    [
        (pymongo_errors.DuplicateKeyError("E11000 duplicate key", code=11000), DuplicateKeyError),
        (pymongo_errors.OperationFailure("E11000 index build", code=11000), DuplicateKeyError),
        (pymongo_errors.ServerSelectionTimeoutError("no servers"), DatabaseConnectionError),
        (pymongo_errors.ConfigurationError("bad uri"), DatabaseConnectionError),
        (pymongo_errors.WriteError("Document failed validation", code=121), DocumentValidationError),
        (pymongo_errors.DocumentTooLarge("too large"), DocumentValidationError),
        (InvalidDocument("cannot encode object"), DocumentValidationError),
        (pymongo_errors.OperationFailure("not authorized", code=13), DataAccessError),
    ],
)
def test_classify_maps_driver_errors(exc, expected):
    assert classify(exc) is expected


def test_bulk_write_error_is_classified_by_write_error_code():
    duplicate = pymongo_errors.BulkWriteError({"writeErrors": [{"index": 0, "code": 11000}]})
    invalid = pymongo_errors.BulkWriteError({"writeErrors": [{"index": 0, "code": 121}]})

    assert classify(duplicate) is DuplicateKeyError
    assert classify(invalid) is DocumentValidationError


def test_translate_errors_chains_and_annotates():
    with pytest.raises(DuplicateKeyError) as excinfo:
        with translate_errors("insert", "users"):
            raise pymongo_errors.BulkWriteError(
                {"writeErrors": [{"index": 0, "code": 11000, "errmsg": "E11000 dup username_1"}]}
            )

    error = excinfo.value
    assert error.step == "insert"
    assert error.collection == "users"
    assert "insert on 'users' failed: E11000 dup username_1" == str(error)
    assert isinstance(error.__cause__, pymongo_errors.BulkWriteError)


def test_translate_errors_leaves_other_exceptions_alone():
    with pytest.raises(KeyError):
        with translate_errors("insert", "pets"):
            raise KeyError("name")
