# Clippy Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Parse state models shared by the Arguments and Commands parsers.

Contents:
- `ParseOutcome`: What happened to a single token.
- `ParseOptions`: Per-parse settings (forgiving mode, error sink, unhandled-token hook).
- `SeenMask`: Bitmask of which schema entries have already been bound.
- `CommandState`: Whether a Commands parser has selected a command yet.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from clippy.protocols import ErrorSink, UnhandledTokenCallback


class ParseOutcome(Enum):
    PARSED_FLAG = "parsed_flag"
    PARSED_POSITIONAL = "parsed_positional"
    PARSED_COMMAND = "parsed_command"
    UNPARSED_FLAG = "unparsed_flag"
    UNPARSED_POSITIONAL = "unparsed_positional"

    @property
    def parsed(self) -> bool:
        return self in (
            ParseOutcome.PARSED_FLAG,
            ParseOutcome.PARSED_POSITIONAL,
            ParseOutcome.PARSED_COMMAND,
        )


class CommandState(Enum):
    NO_COMMAND_SELECTED = "no_command_selected"
    COMMAND_ACTIVE = "command_active"


@dataclass
class ParseOptions:
    """
    Options for a single parse.

    Attributes:
        forgiving (bool): Skip over errors instead of raising them. Required
            arguments left unset keep their default or None.
        error_fn (ErrorSink | None): Called with every error that is about to be
            raised, e.g. `clippy.console.report_to_console`.
        unhandled_token (UnhandledTokenCallback | None): Called with tokens that
            no argument accepted (unknown flags, surplus positionals) instead of
            raising, so another consumer can take them.
    """

    forgiving: bool = False
    error_fn: ErrorSink | None = None
    unhandled_token: UnhandledTokenCallback | None = None


class SeenMask:
    """Bitmask over schema indices."""

    def __init__(self) -> None:
        self.bits: int = 0

    def is_set(self, index: int) -> bool:
        return bool(self.bits >> index & 1)

    def set(self, index: int) -> None:
        self.bits |= 1 << index

    def __repr__(self) -> str:
        return f"SeenMask({self.bits:b})"
