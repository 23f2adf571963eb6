# Clippy Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Schema compilation for clippy.

Turns an ordered list of `Argument`s into `FieldSpec`s, one per argument, and builds
the dataclass used as the typed parse result. All of the checks that depend only on
the schema happen here, before any command line is read:

- Boolean flags become `bool` fields defaulting to `False` and may not declare a
  value type or a default.
- Value flags and positionals use the declared value type (`str` when unset), made
  optional unless the argument is required or has a default.
- Variadic positionals become `list[T]` fields defaulting to an empty list.
- Defaults are converted eagerly; a default that does not convert is an `InvalidDefault`.
- A value type that cannot be parsed from a string is `IncompatibleTypes`.
- Name and flag collisions, more than one variadic positional, and positionals
  declared after a variadic one are `SchemaConflict`s.
"""
from __future__ import annotations

from dataclasses import dataclass, field, make_dataclass
from typing import Any, Callable, Optional

from clippy.argument import Argument
from clippy.coerce import coerce_value, is_coercible, type_name
from clippy.exceptions import (
    CouldNotParse,
    IncompatibleTypes,
    InvalidArgName,
    InvalidDefault,
    SchemaConflict,
)
from clippy.logger import logger


@dataclass(frozen=True)
class FieldSpec:
    """
    Compiled field of the parse result.

    Attributes:
        argument (Argument): The argument this field is bound to.
        annotation (Any): Type annotation of the generated record field.
        value_type (Any): Type a single token is parsed into.
        default (Any): Default value, already converted.
        optional (bool): True if the field may hold None.
    """

    argument: Argument
    annotation: Any
    value_type: Any
    default: Any
    optional: bool

    @property
    def name(self) -> str:
        return self.argument.dest

    def parse(self, value: str) -> Any:
        """
        Convert a raw token string into this field's value type.

        Raises:
            CouldNotParse: If the conversion fails.
        """
        try:
            return coerce_value(value, self.value_type)
        except (ValueError, TypeError) as error:
            raise CouldNotParse(
                f"could not parse '{value}' as {type_name(self.value_type)} "
                f"for '{self.argument.name}': {error}",
                token=value,
            ) from error

    def default_factory(self) -> Callable[[], Any]:
        default = self.default
        if isinstance(default, list):
            return lambda: list(default)
        return lambda: default


def _check_conflicts(arguments: list[Argument]) -> None:
    dests: dict[str, Argument] = {}
    spellings: dict[str, Argument] = {}
    variadic: Argument | None = None
    for argument in arguments:
        dest = argument.dest
        if not dest.isidentifier():
            raise InvalidArgName(
                f"'{argument.descriptor.arg}': '{dest}' is not a valid field name"
            )
        if dest in dests:
            raise SchemaConflict(
                f"'{argument.descriptor.arg}' collides with "
                f"'{dests[dest].descriptor.arg}' (both named '{dest}')"
            )
        dests[dest] = argument

        for spelling in argument.flag_spellings():
            if spelling in spellings:
                raise SchemaConflict(
                    f"Flag '{spelling}' is declared by both "
                    f"'{spellings[spelling].descriptor.arg}' and '{argument.descriptor.arg}'"
                )
            spellings[spelling] = argument

        if argument.is_positional:
            if variadic is not None:
                raise SchemaConflict(
                    f"'{argument.descriptor.arg}' is declared after the variadic "
                    f"positional '{variadic.descriptor.arg}' and could never be bound"
                )
            if argument.variadic:
                variadic = argument


def compile_field(argument: Argument) -> FieldSpec:
    """Derive the result field for a single argument."""
    descriptor = argument.descriptor
    if argument.is_flag and not argument.accepts_value:
        if descriptor.value_type is not None:
            raise IncompatibleTypes(
                f"'{descriptor.arg}': a flag without a value is always a bool, "
                "remove value_type or add a value placeholder"
            )
        if descriptor.default is not None:
            raise InvalidDefault(
                f"'{descriptor.arg}': a flag without a value cannot have a default"
            )
        return FieldSpec(
            argument=argument,
            annotation=bool,
            value_type=bool,
            default=False,
            optional=False,
        )

    value_type = descriptor.value_type if descriptor.value_type is not None else str
    if not is_coercible(value_type):
        raise IncompatibleTypes(
            f"'{descriptor.arg}': no way to parse type '{type_name(value_type)}', "
            "declare a `from_arg` classmethod on it"
        )

    default: Any = None
    if descriptor.default is not None:
        raw_defaults = descriptor.default.split() if argument.variadic else [descriptor.default]
        try:
            converted = [coerce_value(raw, value_type) for raw in raw_defaults]
        except (ValueError, TypeError) as error:
            raise InvalidDefault(
                f"'{descriptor.arg}': default {descriptor.default!r} cannot be "
                f"parsed as {type_name(value_type)}: {error}"
            ) from error
        default = converted if argument.variadic else converted[0]

    if argument.variadic:
        return FieldSpec(
            argument=argument,
            annotation=list[value_type],  # type: ignore[valid-type]
            value_type=value_type,
            default=default or [],
            optional=False,
        )

    optional = not descriptor.required and descriptor.default is None
    return FieldSpec(
        argument=argument,
        annotation=Optional[value_type] if optional else value_type,
        value_type=value_type,
        default=default,
        optional=optional,
    )


def compile_schema(arguments: list[Argument]) -> list[FieldSpec]:
    """
    Compile an ordered list of arguments into field specifications.

    Raises:
        SchemaError: If the schema is inconsistent.
    """
    _check_conflicts(arguments)
    fields = [compile_field(argument) for argument in arguments]
    logger.debug(
        "Compiled schema: %s",
        ", ".join(f"{spec.name}: {type_name(spec.annotation)}" for spec in fields),
    )
    return fields


def build_record(name: str, fields: list[FieldSpec]) -> type:
    """
    Build the dataclass that holds a parse result.

    Every field has a default so a record can be created up front and filled in
    token by token. Required fields start out as None.
    """
    if not name.isidentifier():
        raise InvalidArgName(f"'{name}' is not a valid record name")
    record_fields = [
        (spec.name, spec.annotation, field(default_factory=spec.default_factory()))
        for spec in fields
    ]
    return make_dataclass(name, record_fields)
