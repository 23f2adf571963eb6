# Clippy Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Loads clippy schemas from YAML or TOML files.

A file holds either an `arguments` list (an `Arguments` schema) or a `commands` list
with optional `mutual` arguments (a `Commands` schema):

    name: tool
    mutual:
      - arg: --interactive
        help: Interactive mode.
    commands:
      - name: hello
        help: Say hello.
        arguments:
          - arg: item
            required: true
          - arg: -n/--limit value
            value_type: int
            default: 10

`value_type` is one of `str`, `int`, `float`, `bool`, `path`, `datetime`, or a dotted
import path such as `my_module.Color`.
"""
from __future__ import annotations

import importlib
from datetime import datetime
from pathlib import Path
from typing import Any

import toml
import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from clippy.argument import ArgumentDescriptor
from clippy.arguments import Arguments
from clippy.commands import Command, Commands
from clippy.exceptions import IncompatibleTypes
from clippy.logger import logger

TYPE_NAMES: dict[str, type] = {
    "str": str,
    "string": str,
    "int": int,
    "float": float,
    "bool": bool,
    "path": Path,
    "datetime": datetime,
}


def import_value_type(name: str) -> Any:
    """Resolve a value type from its short name or a dotted path like 'my.module.Type'."""
    if name.lower() in TYPE_NAMES:
        return TYPE_NAMES[name.lower()]
    module_path, _, attr = name.rpartition(".")
    if not module_path:
        raise IncompatibleTypes(
            f"Unknown value type '{name}'. Use one of {', '.join(TYPE_NAMES)} "
            "or a dotted import path."
        )
    try:
        module = importlib.import_module(module_path)
    except ModuleNotFoundError as error:
        logger.error("Failed to import module '%s': %s", module_path, error)
        raise IncompatibleTypes(f"Could not import '{name}': {error}") from error
    try:
        return getattr(module, attr)
    except AttributeError as error:
        logger.error("Module '%s' does not have attribute '%s': %s", module_path, attr, error)
        raise IncompatibleTypes(
            f"Module '{module_path}' has no attribute '{attr}'"
        ) from error


class RawArgument(BaseModel):
    """Raw argument model of a schema file."""

    arg: str
    help: str = ""
    display_name: str | None = None
    value_type: str | None = None
    default: str | None = None
    show_help: bool = True
    required: bool = False
    completion: str | None = None

    @field_validator("default", mode="before")
    @classmethod
    def validate_default(cls, value: Any) -> str | None:
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (list, tuple)):
            return " ".join(str(item) for item in value)
        return str(value)

    @model_validator(mode="after")
    def validate_required_default(self) -> RawArgument:
        if self.required and self.default is not None:
            raise ValueError(f"Argument '{self.arg}' cannot be required and have a default")
        return self

    def to_descriptor(self) -> ArgumentDescriptor:
        data = self.model_dump(exclude={"value_type"})
        value_type = import_value_type(self.value_type) if self.value_type else None
        return ArgumentDescriptor(value_type=value_type, **data)


class RawCommand(BaseModel):
    """Raw command model of a schema file."""

    name: str
    help: str = ""
    arguments: list[RawArgument] = Field(default_factory=list)
    fallback: bool = False
    completion: str | None = None

    def to_command(self) -> Command:
        return Command(
            name=self.name,
            help=self.help,
            arguments=[argument.to_descriptor() for argument in self.arguments],
            fallback=self.fallback,
            completion=self.completion,
        )


class RawSchema(BaseModel):
    """Top level model of a schema file."""

    name: str = "Parsed"
    arguments: list[RawArgument] | None = None
    commands: list[RawCommand] | None = None
    mutual: list[RawArgument] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_shape(self) -> RawSchema:
        if (self.arguments is None) == (self.commands is None):
            raise ValueError("Schema file must define exactly one of 'arguments' or 'commands'")
        if self.arguments is not None and self.mutual:
            raise ValueError("'mutual' is only allowed together with 'commands'")
        return self

    def to_schema(self) -> Arguments | Commands:
        if self.commands is not None:
            mutual = (
                Arguments([argument.to_descriptor() for argument in self.mutual], name="MutualParsed")
                if self.mutual
                else None
            )
            return Commands([command.to_command() for command in self.commands], mutual=mutual)
        assert self.arguments is not None
        return Arguments(
            [argument.to_descriptor() for argument in self.arguments], name=self.name
        )


def load_schema(file_path: Path | str) -> Arguments | Commands:
    """
    Load an `Arguments` or `Commands` schema from a YAML or TOML file.

    Args:
        file_path (Path | str): Path to a `.yaml`, `.yml` or `.toml` file.

    Returns:
        Arguments | Commands: The compiled schema.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the format is unsupported or the content is not a mapping.
        pydantic.ValidationError: If the content does not match the schema model.
        SchemaError: If the declared arguments do not form a valid schema.
    """
    if isinstance(file_path, (str, Path)):
        path = Path(file_path)
    else:
        raise TypeError("file_path must be a string or Path object.")

    if not path.is_file():
        raise FileNotFoundError(f"No such schema file: {file_path}")

    suffix = path.suffix
    with path.open("r", encoding="UTF-8") as schema_file:
        if suffix in (".yaml", ".yml"):
            raw_schema = yaml.safe_load(schema_file)
        elif suffix == ".toml":
            raw_schema = toml.load(schema_file)
        else:
            raise ValueError(f"Unsupported schema format: {suffix}")

    if not isinstance(raw_schema, dict):
        raise ValueError(
            "Schema file must contain a mapping with an 'arguments' or 'commands' list.\n"
            "Example:\n"
            "arguments:\n"
            "  - arg: 'file'\n"
            "    required: true"
        )

    logger.debug("Loading schema from %s", path)
    return RawSchema.model_validate(raw_schema).to_schema()
