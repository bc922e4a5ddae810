"""
Schema validators for task payloads.

A SchemaValidator wraps a Pydantic model and turns its verdict into a
ValidationResult: either the normalized payload or an ordered list of
field errors. Validation is pure; it never touches storage.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple, Type

from pydantic import BaseModel, ValidationError

from taskboard.internal.api.schemas.task_schemas import (
    TaskCreateRequest,
    TaskUpdateRequest,
)

# Field name reported when the payload as a whole is wrong (not an object)
BODY_FIELD = "body"


@dataclass(frozen=True)
class FieldError:
    """One violated rule."""

    field: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of SchemaValidator.validate()."""

    ok: bool
    data: Optional[Dict[str, Any]] = None
    errors: Tuple[FieldError, ...] = field(default_factory=tuple)


class SchemaValidator:
    """
    Validate raw payloads against a Pydantic model.

    ``messages`` maps (field, pydantic error type) to the message reported
    to clients; unmapped errors fall back to Pydantic's own wording.
    """

    def __init__(
        self,
        model: Type[BaseModel],
        messages: Optional[Mapping[Tuple[str, str], str]] = None,
    ):
        self.model = model
        self.messages = dict(messages or {})

    def validate(self, payload: Any) -> ValidationResult:
        try:
            parsed = self.model.model_validate(payload)
        except ValidationError as e:
            errors = tuple(self._field_error(err) for err in e.errors())
            return ValidationResult(ok=False, errors=errors)

        return ValidationResult(ok=True, data=parsed.model_dump(exclude_unset=True))

    def _field_error(self, error: Mapping[str, Any]) -> FieldError:
        loc = error.get("loc") or ()
        name = str(loc[0]) if loc else BODY_FIELD
        error_type = error.get("type", "")

        if name == BODY_FIELD and error_type in ("model_type", "model_attributes_type"):
            return FieldError(BODY_FIELD, "Request body must be a JSON object")

        message = self.messages.get((name, error_type), error.get("msg", "Invalid value"))
        return FieldError(name, message)

    def __repr__(self) -> str:
        return f"SchemaValidator({self.model.__name__})"


create_task_validator = SchemaValidator(
    TaskCreateRequest,
    messages={
        ("title", "missing"): "Title is required",
        ("title", "string_too_short"): "Title is required",
        ("title", "string_type"): "Title must be a string",
    },
)

update_task_validator = SchemaValidator(
    TaskUpdateRequest,
    messages={
        ("title", "string_too_short"): "Title must not be empty",
        ("title", "string_type"): "Title must be a string",
        ("completed", "bool_type"): "Completed must be a boolean",
    },
)
