"""
API utility functions for response formatting.
"""

from typing import Dict, Iterable, List

from taskboard.internal.api.validators.task_validators import FieldError


def error_response(message: str) -> Dict[str, str]:
    """
    Create an error body.

    Args:
        message: Error message

    Returns:
        {"error": message}
    """
    return {"error": message}


def validation_error_response(errors: Iterable[FieldError]) -> Dict[str, List[Dict[str, str]]]:
    """
    Create a validation error body, one entry per violated rule, order preserved.

    Returns:
        {"errors": [{"field": ..., "message": ...}, ...]}
    """
    return {"errors": [error.to_dict() for error in errors]}
