from __future__ import annotations

from core.db import StorageError
from core.errors import GENERIC_SERVER_MESSAGE, flatten_message, to_failure
from entries.errors import EntryDecodeError, EntryValidationError, FieldViolation


def test_decode_error_maps_to_400_with_diagnostic():
    failure = to_failure(EntryDecodeError("body: Invalid JSON: EOF while parsing"))

    assert failure.status_code == 400
    assert failure.message == "body: Invalid JSON: EOF while parsing"


def test_validation_error_maps_to_400_with_every_violation():
    failure = to_failure(
        EntryValidationError(
            [
                FieldViolation("title", "String should have at least 10 characters"),
                FieldViolation("text", "String should have at least 10 characters"),
            ]
        )
    )

    assert failure.status_code == 400
    assert failure.message == (
        "title: String should have at least 10 characters; "
        "text: String should have at least 10 characters"
    )


def test_storage_error_maps_to_500_with_underlying_text():
    failure = to_failure(StorageError("connection refused"))

    assert failure.status_code == 500
    assert failure.message == "connection refused"


def test_unclassified_error_maps_to_generic_500():
    failure = to_failure(ZeroDivisionError("secret detail"))

    assert failure.status_code == 500
    assert failure.message == GENERIC_SERVER_MESSAGE


def test_multiline_messages_are_flattened():
    failure = to_failure(StorageError("ERROR: syntax error\r\n  LINE 1: selec\n"))

    assert failure.message == "ERROR: syntax error | LINE 1: selec"
    assert flatten_message("a\n\nb") == "a | b"
    assert flatten_message("single line") == "single line"


def test_failure_response_body_shape():
    response = to_failure(EntryDecodeError("Request body is empty.")).to_response()

    assert response.status_code == 400
    assert response.body == b'{"message":"Request body is empty."}'
