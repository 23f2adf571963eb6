# Clippy Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Value coercion for clippy arguments.

Converts raw command-line strings into the value type declared on a descriptor.
Built in support covers `str`, `int`, `float`, `bool`, `Path`, `datetime`, `Enum`
subclasses, `Literal[...]` and unions of those. Any other class can take part by
implementing the `ParsableValue` protocol, i.e. a `from_arg(cls, value)` classmethod.

Functions:
- coerce_bool: Convert a string to a boolean.
- coerce_enum: Convert a string to an Enum member.
- coerce_value: General-purpose coercion to a target type.
- is_coercible: Check at schema-build time that a type can be coerced at all.
- type_name: Readable name of a value type for messages.
"""
import types
from datetime import datetime
from enum import EnumMeta
from pathlib import Path
from typing import Any, Literal, Union, get_args, get_origin

from dateutil import parser as date_parser

from clippy.protocols import ParsableValue

SCALAR_TYPES: tuple[type, ...] = (str, int, float, bool, Path, datetime)


def coerce_bool(value: str) -> bool:
    """
    Convert a string to a boolean.

    Accepts 'true', 'yes', '1', 'on' and 'false', 'no', '0', 'off' in any case.

    Raises:
        ValueError: If the string is not a recognised boolean.
    """
    if isinstance(value, bool):
        return value
    normalized = value.strip().lower()
    if normalized in {"true", "t", "1", "yes", "y", "on"}:
        return True
    elif normalized in {"false", "f", "0", "no", "n", "off"}:
        return False
    raise ValueError(f"'{value}' is not a boolean")


def coerce_enum(value: Any, enum_type: EnumMeta) -> Any:
    """
    Convert a raw value or string to an Enum instance.

    Tries to resolve by name, then by value (coerced to the type of the members).

    Raises:
        ValueError: If the value cannot be resolved to a valid Enum member.
    """
    if isinstance(value, enum_type):
        return value

    if isinstance(value, str):
        try:
            return enum_type[value]
        except KeyError:
            pass

    base_type = type(next(iter(enum_type)).value)
    try:
        coerced_value = base_type(value)
        return enum_type(coerced_value)
    except (ValueError, TypeError):
        values = [str(enum.value) for enum in enum_type]
        raise ValueError(f"'{value}' should be one of {{{', '.join(values)}}}") from None


def _is_union(target_type: Any) -> bool:
    return isinstance(target_type, types.UnionType) or get_origin(target_type) is Union


def _has_from_arg(target_type: Any) -> bool:
    return isinstance(target_type, type) and isinstance(target_type, ParsableValue)


def is_coercible(target_type: Any) -> bool:
    """Return True if `coerce_value` knows how to build `target_type` from a string."""
    if get_origin(target_type) is Literal:
        return True
    if _is_union(target_type):
        return all(is_coercible(arg) for arg in get_args(target_type))
    if isinstance(target_type, EnumMeta):
        return True
    if _has_from_arg(target_type):
        return True
    return target_type in SCALAR_TYPES


def type_name(target_type: Any) -> str:
    return getattr(target_type, "__name__", None) or str(target_type)


def coerce_value(value: str, target_type: Any) -> Any:
    """
    Convert a string to the given target type.

    Args:
        value (str): The input string to convert.
        target_type (type): The desired type.

    Returns:
        Any: The coerced value.

    Raises:
        ValueError: If conversion fails or the value is invalid.
    """
    origin = get_origin(target_type)
    args = get_args(target_type)

    if origin is Literal:
        for arg in args:
            if str(arg) == value:
                return arg
        raise ValueError(f"Value '{value}' is not a valid literal for type {target_type}")

    if _is_union(target_type):
        for arg in args:
            try:
                return coerce_value(value, arg)
            except (ValueError, TypeError):
                continue
        raise ValueError(f"Value '{value}' could not be coerced to any of {args}")

    if isinstance(target_type, EnumMeta):
        return coerce_enum(value, target_type)

    if _has_from_arg(target_type):
        return target_type.from_arg(value)

    if target_type is bool:
        return coerce_bool(value)

    if target_type is datetime:
        try:
            return date_parser.parse(value)
        except (ValueError, OverflowError) as error:
            raise ValueError(f"Value '{value}' could not be parsed as a datetime") from error

    if target_type in SCALAR_TYPES:
        return target_type(value)

    raise TypeError(f"No method for parsing type: '{type_name(target_type)}'")
