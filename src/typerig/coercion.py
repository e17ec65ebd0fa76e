"""
TypeRig - String coercion and display formatting.

Everything the operator types arrives as a string. These pure functions
turn that string into a value of a property's declared type, and turn a
property value back into display text.

Rules for coerce(raw, target):
- Optional[T] / T | None is unwrapped to T; the literal "null" yields None
- str, Any, or a missing annotation take the raw text as-is
- Enum targets accept a member name or a member value
- everything else goes through pydantic's lax validation, which converts
  numeric text, booleans ("true"/"false"), ISO dates and datetimes, Decimal,
  UUID, ...
"""

import types
from enum import Enum
from functools import lru_cache
from typing import Any, Union, get_args, get_origin

from pydantic import PydanticSchemaGenerationError, TypeAdapter, ValidationError

from typerig.errors import CoercionError

NULL_LITERAL = "null"


def is_optional(target: Any) -> bool:
    """True for Optional[T] and T | None."""
    origin = get_origin(target)
    return origin in (Union, types.UnionType) and type(None) in get_args(target)


def unwrap_optional(target: Any) -> Any:
    """Optional[T] -> T. Other types are returned unchanged."""
    if not is_optional(target):
        return target
    args = [arg for arg in get_args(target) if arg is not type(None)]
    if len(args) == 1:
        return args[0]
    return Union[tuple(args)]


@lru_cache(maxsize=256)
def _adapter(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


def _coerce_enum(raw: str, target: type[Enum]) -> Enum:
    text = raw.strip()
    if text in target.__members__:
        return target[text]
    for member in target:
        if str(member.value) == text:
            return member
    raise CoercionError(f"'{raw}' is not a valid {target.__name__} (expected one of {', '.join(target.__members__)})")


def coerce(raw: str, target: Any) -> Any:
    """
    Convert operator text into a value of type `target`.

    Raises:
        CoercionError: if the text cannot be converted
    """
    if target is Any or target is None:
        return raw

    if is_optional(target) and raw.strip() == NULL_LITERAL:
        return None
    target = unwrap_optional(target)

    if target is str or target is Any:
        return raw

    if isinstance(target, type) and issubclass(target, Enum):
        return _coerce_enum(raw, target)

    try:
        adapter = _adapter(target)
    except (PydanticSchemaGenerationError, TypeError) as e:
        raise CoercionError(f"No conversion from text to {_type_name(target)}") from e

    try:
        return adapter.validate_python(raw.strip())
    except ValidationError as e:
        reason = e.errors()[0]["msg"] if e.errors() else str(e)
        raise CoercionError(f"'{raw}' cannot be converted to {_type_name(target)}: {reason}") from e


def format_value(value: Any) -> str:
    """Display text for a property value: strings quoted, None as null."""
    if value is None:
        return NULL_LITERAL
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, Enum):
        return value.name
    return str(value)


def _type_name(target: Any) -> str:
    return target.__name__ if isinstance(target, type) else str(target).replace("typing.", "")
