# Clippy Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `BaseParser`, the token loop shared by the Arguments and Commands parsers.

Subclasses implement `parse_token()` to place a single token and `get_parsed()` to
validate and return the result. `parse_all()` drives the stream to exhaustion and
applies the error policy: by default the first error is passed to the error sink and
raised; in forgiving mode it is logged and the token skipped. Tokens no argument
accepted go to the `unhandled_token` callback when one is given.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from clippy.exceptions import (
    FlagAsPositional,
    InvalidFlag,
    MissingFlagValue,
    ParseError,
    TooManyArguments,
)
from clippy.logger import logger
from clippy.parser_types import ParseOptions, ParseOutcome
from clippy.stream import ArgumentStream
from clippy.token import Token


class BaseParser(ABC):
    """Per-invocation parse state bound to one `ArgumentStream`."""

    def __init__(self, stream: ArgumentStream, options: ParseOptions | None = None) -> None:
        self.stream: ArgumentStream = stream
        self.options: ParseOptions = options or ParseOptions()
        self.awaiting_value: Token | None = None

    @abstractmethod
    def parse_token(self, token: Token) -> ParseOutcome:
        """Place a single token, returning what happened to it."""

    @abstractmethod
    def get_parsed(self) -> Any:
        """Validate required arguments and return the parse result."""

    @abstractmethod
    def remaining_flags(self) -> list[str]:
        """Flags that may still be given."""

    @abstractmethod
    def completion_hints(self) -> list[str]:
        """Completion actions of the value or positional that comes next."""

    def parse_arg(self, token: Token) -> bool:
        """Feed one token. Returns False if no argument accepted it."""
        return self.parse_token(token).parsed

    def throw_error(self, error: ParseError) -> None:
        """Route an error through the configured policy."""
        if self.options.forgiving:
            logger.debug("Ignoring %s: %s", error.kind, error)
            return
        if self.options.error_fn is not None:
            self.options.error_fn(error)
        raise error

    def _unparsed_error(self, token: Token, outcome: ParseOutcome) -> ParseError:
        if outcome is ParseOutcome.UNPARSED_FLAG:
            return InvalidFlag(f"unknown flag '{token.raw}'", token=token.raw)
        return TooManyArguments(
            f"argument '{token.string}' is too much", token=token.string
        )

    def parse_all(self) -> Any:
        """Consume the stream until it is exhausted and return the result."""
        while True:
            try:
                token = self.stream.next()
            except ParseError as error:
                self.throw_error(error)
                continue
            if token is None:
                break

            try:
                outcome = self.parse_token(token)
            except FlagAsPositional as error:
                if self.options.forgiving:
                    # Give the flag that was found in place of a value its own turn.
                    self.stream.rewind()
                self.throw_error(error)
                continue
            except MissingFlagValue as error:
                # Only happens at the end of the stream.
                self.awaiting_value = token
                self.throw_error(error)
                continue
            except ParseError as error:
                self.throw_error(error)
                continue

            if outcome.parsed:
                continue
            if self.options.unhandled_token is not None:
                logger.debug("Passing unhandled token '%s' to callback", token.raw)
                self.options.unhandled_token(self, token)
                continue
            self.throw_error(self._unparsed_error(token, outcome))

        return self.get_parsed()
