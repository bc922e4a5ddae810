"""
Request validation middleware.

validate_body(validator) builds a FastAPI dependency for mutating routes:
it reads the JSON body, runs the validator and either hands the normalized
payload downstream or stops the request with a PayloadValidationError,
which the central handler renders as HTTP 400.
"""

import json
from typing import Any, Awaitable, Callable, Dict

from fastapi import Request

from taskboard.core.errors import PayloadValidationError
from taskboard.core.logger import logger
from taskboard.internal.api.validators.task_validators import (
    BODY_FIELD,
    FieldError,
    SchemaValidator,
)


async def read_json_body(request: Request) -> Any:
    """
    Decode the request body as JSON. An empty body reads as {}.

    Raises:
        PayloadValidationError: If the body is not valid JSON
    """
    raw = await request.body()
    if not raw.strip():
        return {}

    try:
        return json.loads(raw)
    except (ValueError, UnicodeDecodeError):
        logger.warning(f"Malformed JSON body: {request.method} {request.url.path}")
        raise PayloadValidationError([FieldError(BODY_FIELD, "Malformed JSON body")])


def validate_body(
    validator: SchemaValidator,
) -> Callable[[Request], Awaitable[Dict[str, Any]]]:
    """Create a dependency that validates the request body with ``validator``."""

    async def dependency(request: Request) -> Dict[str, Any]:
        payload = await read_json_body(request)
        result = validator.validate(payload)

        if not result.ok:
            logger.warning(
                f"Validation failed for {request.method} {request.url.path}: "
                + "; ".join(f"{e.field}: {e.message}" for e in result.errors)
            )
            raise PayloadValidationError(result.errors)

        # Downstream code reads the normalized payload, never the raw body
        request.state.body = result.data
        return result.data

    return dependency
