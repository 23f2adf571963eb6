# Clippy Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by the clippy argument parser.

Errors come in two tiers. Schema errors are raised while a schema is being built
from its descriptors, before any command line is read. They represent an authoring
mistake and are never suppressed. Parse errors are raised while a token stream is
being consumed. They carry the offending raw token and can be suppressed by
forgiving mode.

Exception Hierarchy:
- ClippyError
    ├── SchemaError
    │     ├── MalformedDescriptor
    │     ├── InvalidArgName
    │     ├── IncompatibleTypes
    │     ├── InvalidDefault
    │     └── SchemaConflict
    └── ParseError
          ├── BadArgument
          ├── MissingFlagValue
          ├── FlagAsPositional
          ├── CouldNotParse
          ├── DuplicateFlag
          ├── InvalidFlag
          ├── TooManyArguments
          ├── MissingArgument
          ├── MissingCommand
          └── InvalidCommand
"""
from __future__ import annotations


class ClippyError(Exception):
    """Base exception for the clippy argument parser."""


class SchemaError(ClippyError):
    """Raised when a schema cannot be built from its descriptors."""


class MalformedDescriptor(SchemaError):
    """Raised when a descriptor string is structurally invalid (e.g. wrong dash count)."""


class InvalidArgName(SchemaError):
    """Raised when an argument name uses characters outside its allowed set."""


class IncompatibleTypes(SchemaError):
    """Raised when a value type has no way to be parsed from a string."""


class InvalidDefault(SchemaError):
    """Raised when a default value cannot be converted to the declared type."""


class SchemaConflict(SchemaError):
    """Raised when two parts of a schema collide or contradict each other."""


class ParseError(ClippyError):
    """Base class for errors raised while consuming a token stream."""

    def __init__(self, message: str, token: str | None = None) -> None:
        super().__init__(message)
        self.token = token

    @property
    def kind(self) -> str:
        return type(self).__name__


class BadArgument(ParseError):
    """Raised for a malformed raw argument such as a lone `-`."""


class MissingFlagValue(ParseError):
    """Raised when a flag that takes a value is the last token."""


class FlagAsPositional(ParseError):
    """Raised when a value was expected but a flag was found."""


class CouldNotParse(ParseError):
    """Raised when a token cannot be converted to the declared type."""


class DuplicateFlag(ParseError):
    """Raised when a flag is given more than once."""


class InvalidFlag(ParseError):
    """Raised when a flag is not part of the active schema."""


class TooManyArguments(ParseError):
    """Raised when a positional token has no argument left to bind to."""


class MissingArgument(ParseError):
    """Raised when a required argument was never given."""

    def __init__(self, name: str) -> None:
        super().__init__(f"missing argument '{name}'", token=None)
        self.name = name


class MissingCommand(ParseError):
    """Raised when the stream ends before a command was selected."""


class InvalidCommand(ParseError):
    """Raised when a command word matches no command and there is no fallback."""


DuplicateArgument = DuplicateFlag
UnknownFlag = InvalidFlag
TooFewArguments = MissingArgument
