# Clippy Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ArgumentStream`, the cursor that turns raw command-line strings into `Token`s.

Classification of each raw element:
- `-` on its own is a `BadArgument`.
- `--` is a separator. It is skipped and every following element is positional.
- `--name` is a single long flag token.
- `-abc` is a short flag cluster yielding one token per character.
- Anything else is a positional token with the next sequence index.

The stream supports `get_value()` for flags that need an argument, a single-step
`rewind()`, and `copy()` for non-destructive look-ahead.
"""
from __future__ import annotations

from enum import Enum
from typing import Sequence

from clippy.exceptions import (
    BadArgument,
    FlagAsPositional,
    InvalidFlag,
    MissingFlagValue,
    TooManyArguments,
)
from clippy.token import Token
from clippy.utils import split_arguments


class RawKind(Enum):
    """Classification of a raw command-line element."""

    SHORT_FLAG = "short_flag"
    LONG_FLAG = "long_flag"
    SEPARATOR = "separator"
    POSITIONAL = "positional"

    @classmethod
    def classify(cls, raw: str) -> RawKind:
        if raw.startswith("-"):
            if len(raw) == 1:
                raise BadArgument(f"bad argument: '{raw}'", token=raw)
            if raw == "--":
                return cls.SEPARATOR
            if raw.startswith("--"):
                return cls.LONG_FLAG
            return cls.SHORT_FLAG
        return cls.POSITIONAL


class ArgumentStream:
    """
    Sequential cursor over an in-memory list of raw argument strings.

    The program name must already be excluded from `args`.
    """

    def __init__(self, args: Sequence[str]) -> None:
        self._args: tuple[str, ...] = tuple(args)
        self._position: int = 0
        self._current: str = ""
        self._current_kind: RawKind = RawKind.POSITIONAL
        self._offset: int = 0
        self._counter: int = 0
        self._forced_positional: bool = False
        self._counted_previous: bool = False
        self.previous: Token | None = None

    @classmethod
    def from_string(cls, text: str) -> ArgumentStream:
        """Build a stream from a single string split on spaces and `=`."""
        return cls(split_arguments(text))

    @property
    def args(self) -> tuple[str, ...]:
        return self._args

    def arg_count(self) -> int:
        """Total number of raw elements in the backing sequence."""
        return len(self._args)

    def copy(self) -> ArgumentStream:
        """Return an independent stream positioned at the start of the same arguments."""
        return type(self)(self._args)

    def next(self) -> Token | None:
        """
        Return the next token, or None once the stream is exhausted.

        Raises:
            BadArgument: If the next raw element is a lone `-`.
        """
        token = self._next()
        self.previous = token
        return token

    def _reset_element(self) -> None:
        self._current = ""
        self._current_kind = RawKind.POSITIONAL
        self._offset = 0

    def _next(self) -> Token | None:
        self._counted_previous = False
        while self._offset >= len(self._current):
            self._reset_element()
            if self._position >= len(self._args):
                return None
            raw = self._args[self._position]
            self._position += 1
            if self._forced_positional:
                kind = RawKind.POSITIONAL
            else:
                kind = RawKind.classify(raw)
            if kind is RawKind.SEPARATOR:
                self._forced_positional = True
                continue
            self._current = raw
            self._current_kind = kind
            if kind is RawKind.POSITIONAL:
                # An empty string is still a positional value.
                break

        if self._current_kind is RawKind.SHORT_FLAG:
            if self._offset == 0:
                self._offset = 1
            self._offset += 1
            return Token(string=self._current[self._offset - 1], flag=True)

        self._offset = max(len(self._current), 1)
        if self._current_kind is RawKind.LONG_FLAG:
            return Token(string=self._current[2:], flag=True, long=True)

        self._counter += 1
        self._counted_previous = True
        return Token(string=self._current, index=self._counter)

    def get_value(self) -> Token:
        """
        Return the next token as the value of a flag.

        The positional sequence counter is not advanced.

        Raises:
            MissingFlagValue: If the stream is exhausted.
            FlagAsPositional: If the next token is a flag.
        """
        flag = self.previous
        token = self.next()
        if token is None:
            name = flag.raw if flag else "flag"
            raise MissingFlagValue(f"flag '{name}' expects a value", token=name)
        if token.flag:
            raise FlagAsPositional(
                f"expected a value but got flag '{token.raw}'", token=token.raw
            )
        self._counter -= 1
        self._counted_previous = False
        value = Token(string=token.string)
        self.previous = value
        return value

    def next_positional(self) -> Token | None:
        """
        Return the next token if it is positional, None at the end of the stream.

        Raises:
            FlagAsPositional: If the next token is a flag.
        """
        token = self.next()
        if token is not None and token.flag:
            raise FlagAsPositional(
                f"expected a positional but got flag '{token.raw}'", token=token.raw
            )
        return token

    def rewind(self) -> None:
        """
        Step back exactly one token so it is returned again by `next()`.

        Rewinding inside a short flag cluster only steps back one character.
        """
        if self.previous is None:
            raise ValueError("Nothing to rewind")
        if self._current_kind is RawKind.SHORT_FLAG and self._offset > 2:
            self._offset -= 1
        else:
            self._position -= 1
            self._offset = len(self._current) or 1
            if self._counted_previous:
                self._counter -= 1
        self._counted_previous = False
        self.previous = None

    def is_any(self, short: str | None, long: str | None) -> bool:
        """Scan a copy of the stream for the flag `-short` or `--long`."""
        nested = self.copy()
        while True:
            token = nested.next()
            if token is None:
                return False
            if token.is_(short, long):
                return True

    def assert_no_arguments(self) -> None:
        """
        Raise if any token is left in the stream.

        Raises:
            InvalidFlag: If the next token is a flag.
            TooManyArguments: If the next token is positional.
        """
        token = self.next()
        if token is None:
            return
        if token.flag:
            raise InvalidFlag(f"unknown flag '{token.raw}'", token=token.raw)
        raise TooManyArguments(
            f"argument '{token.string}' is too much", token=token.string
        )

    def __repr__(self) -> str:
        return f"ArgumentStream(args={list(self._args)!r}, position={self._position})"
