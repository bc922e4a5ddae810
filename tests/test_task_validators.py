import pytest

from taskboard.internal.api.validators.task_validators import (
    FieldError,
    create_task_validator,
    update_task_validator,
)


class TestCreateTaskValidator:
    """Rules for POST /tasks payloads."""

    @pytest.mark.parametrize("payload", [{}, {"title": ""}, {"title": "   "}, {"completed": True}])
    def test_missing_or_empty_title_is_rejected(self, payload):
        result = create_task_validator.validate(payload)

        assert result.ok is False
        assert result.errors == (FieldError("title", "Title is required"),)

    def test_non_string_title_is_rejected(self):
        result = create_task_validator.validate({"title": 42})

        assert result.ok is False
        assert result.errors == (FieldError("title", "Title must be a string"),)

    def test_title_is_stripped(self):
        result = create_task_validator.validate({"title": "  Buy milk "})

        assert result.ok is True
        assert result.data == {"title": "Buy milk"}

    def test_unknown_fields_are_dropped(self):
        result = create_task_validator.validate(
            {"title": "Buy milk", "completed": True, "owner": "me"}
        )

        assert result.data == {"title": "Buy milk"}

    @pytest.mark.parametrize("payload", [["Buy milk"], "Buy milk", None])
    def test_non_object_payload_reports_body(self, payload):
        result = create_task_validator.validate(payload)

        assert result.ok is False
        assert result.errors == (FieldError("body", "Request body must be a JSON object"),)


class TestUpdateTaskValidator:
    """Rules for PUT /tasks/{id} payloads."""

    def test_empty_update_is_valid(self):
        result = update_task_validator.validate({})

        assert result.ok is True
        assert result.data == {}

    def test_only_provided_fields_are_kept(self):
        result = update_task_validator.validate({"completed": True})

        assert result.data == {"completed": True}

    def test_false_is_kept(self):
        result = update_task_validator.validate({"completed": False, "title": "Walk"})

        assert result.data == {"completed": False, "title": "Walk"}

    @pytest.mark.parametrize("value", ["true", 1, None])
    def test_completed_must_be_boolean(self, value):
        result = update_task_validator.validate({"completed": value})

        assert result.ok is False
        assert result.errors == (FieldError("completed", "Completed must be a boolean"),)

    def test_empty_title_is_rejected(self):
        result = update_task_validator.validate({"title": "  "})

        assert result.errors == (FieldError("title", "Title must not be empty"),)

    def test_null_title_is_rejected(self):
        result = update_task_validator.validate({"title": None})

        assert result.errors == (FieldError("title", "Title must be a string"),)

    def test_errors_follow_field_order(self):
        result = update_task_validator.validate({"completed": "no", "title": ""})

        assert [e.field for e in result.errors] == ["title", "completed"]


def test_field_error_to_dict():
    assert FieldError("title", "Title is required").to_dict() == {
        "field": "title",
        "message": "Title is required",
    }
