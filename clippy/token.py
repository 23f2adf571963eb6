# Clippy Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `Token`, a single command-line token produced by `ArgumentStream`.

A token is either a positional value or a flag. Flags remember whether they were
written in short (`-x`, one token per clustered character) or long (`--name`) form,
so that a long `--x` never matches a short `-x` declaration. Positional tokens carry
a strictly increasing 1-based sequence index.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from clippy.coerce import coerce_value, type_name
from clippy.exceptions import CouldNotParse, FlagAsPositional, IncompatibleTypes


@dataclass(frozen=True)
class Token:
    """
    A single parsed command-line token.

    Attributes:
        string (str): The token text without any leading dashes.
        flag (bool): True if the token is a flag.
        long (bool): True if the flag was written as `--name`.
        index (int | None): 1-based positional sequence index, None for flags
            and for values consumed by a flag.
    """

    string: str
    flag: bool = False
    long: bool = False
    index: int | None = None

    @property
    def raw(self) -> str:
        """The token as it was written on the command line."""
        if not self.flag:
            return self.string
        return f"--{self.string}" if self.long else f"-{self.string}"

    def is_(self, short: str | None = None, long: str | None = None) -> bool:
        """
        Check whether this token is the flag `-short` or `--long`.

        Always False for positional tokens.
        """
        if not self.flag:
            return False
        if short is not None and not self.long and self.string == short:
            return True
        if long is not None and self.long and self.string == long:
            return True
        return False

    def as_(self, target_type: type) -> Any:
        """
        Convert a positional token to an `int` or `float`.

        Raises:
            FlagAsPositional: If the token is a flag.
            CouldNotParse: If the string is not a valid number.
        """
        if self.flag:
            raise FlagAsPositional(
                f"expected a value but got flag '{self.raw}'", token=self.raw
            )
        if target_type not in (int, float):
            raise IncompatibleTypes(
                f"could not parse type given: '{type_name(target_type)}'"
            )
        try:
            return coerce_value(self.string, target_type)
        except ValueError as error:
            raise CouldNotParse(
                f"could not parse '{self.string}' as {type_name(target_type)}",
                token=self.string,
            ) from error

    def __str__(self) -> str:
        return self.raw
