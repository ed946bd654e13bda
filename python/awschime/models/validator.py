"""
awschime/models/validator.py

Checks decoded JSON (API responses, the config file) against an expected
type with pydantic's TypeAdapter before the rest of the code relies on its
shape. Both helpers raise ValueError so callers handle one exception type.
"""

import json
from functools import lru_cache
from typing import Any, Type, TypeVar

from pydantic import TypeAdapter, ValidationError

T = TypeVar("T")


@lru_cache(maxsize=None)
def _adapter(expected_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(expected_type)


def validate_type(obj: Any, expected_type: Type[T]) -> T:
    """
    Validate an already-decoded object.

    Args:
        obj (Any): Typically the result of json.loads.
        expected_type (Type[T]): e.g. ``Dict[str, Any]`` or ``List[Dict[str, Any]]``.

    Returns:
        T: The validated object.

    Raises:
        ValueError: If ``obj`` does not match ``expected_type``.
    """
    try:
        return _adapter(expected_type).validate_python(obj)
    except ValidationError as e:
        raise ValueError(
            f"expected {expected_type}, got {type(obj).__name__} "
            f"({e.error_count()} validation error(s))"
        ) from e


def decode_json(text: str, expected_type: Type[T]) -> T:
    """Parse JSON text and validate the result; ValueError on either failure."""
    try:
        obj = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"invalid JSON: {e}") from e
    return validate_type(obj, expected_type)
