"""Error Hierarchy — status codes, codes and response envelopes."""

from tasktracker.core.errors import (
    BadRequestError, DuplicateKeyError, ErrorContext, ForbiddenError,
    NoResultsError, ResourceNotFoundError, TaskValidationError,
)


def test_status_codes():
    assert BadRequestError("x").http_status == 400
    assert TaskValidationError("x", "title-missing").http_status == 400
    assert ForbiddenError("Team", "1").http_status == 403
    assert ResourceNotFoundError("Task", "1").http_status == 404
    assert NoResultsError().http_status == 404
    assert DuplicateKeyError("Task", "title").http_status == 409


def test_no_results_is_distinct_from_not_found():
    assert NoResultsError().code != ResourceNotFoundError("Task", "1").code


def test_response_envelope_carries_context():
    err = ResourceNotFoundError("Task", "abc", ErrorContext(task_id="abc"))
    body = err.to_response()["error"]
    assert body["code"] == "RESOURCE_NOT_FOUND"
    assert body["message"] == "Task 'abc' not found"
    assert body["context"]["task_id"] == "abc"


def test_validation_error_reports_rule():
    body = TaskValidationError("Title cannot be blank", "title-missing").to_response()
    assert body["error"]["rule"] == "title-missing"
    assert body["error"]["code"] == "VALIDATION_ERROR"


def test_duplicate_key_names_field():
    assert DuplicateKeyError("Team", "name").message == "A team with this name already exists"
