"""Helpers shared by the JSON API views."""

import json
import re

from .exceptions import InvalidRequest

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def load_json_body(request) -> dict:
    """Parse the request body as a JSON object.

    An empty body is treated as an empty object.

    Raises:
        InvalidRequest: If the body is not valid JSON or not an object
    """
    if not request.body:
        return {}
    try:
        data = json.loads(request.body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise InvalidRequest("Invalid JSON")
    if not isinstance(data, dict):
        raise InvalidRequest("Expected a JSON object")
    return data


def to_snake_case(name: str) -> str:
    """Convert a camelCase key to snake_case (``reviewCount`` -> ``review_count``)."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def snake_case_keys(data: dict) -> dict:
    """Return a copy of ``data`` with camelCase keys converted to snake_case."""
    return {to_snake_case(key): value for key, value in data.items()}


def form_errors(form) -> dict:
    """Flatten form errors into ``{field: [message, ...]}``."""
    return {field: [str(message) for message in messages] for field, messages in form.errors.items()}
