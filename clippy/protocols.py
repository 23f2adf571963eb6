# Clippy Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines structural protocols for extending clippy.

Protocols:
- ParsableValue: A user type that knows how to build itself from a raw string.
- ErrorSink: Receives parse errors before they are raised.
- UnhandledTokenCallback: Receives tokens the schema could not place.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from clippy.exceptions import ParseError
    from clippy.token import Token


@runtime_checkable
class ParsableValue(Protocol):
    @classmethod
    def from_arg(cls, value: str) -> Any: ...


@runtime_checkable
class ErrorSink(Protocol):
    def __call__(self, error: ParseError) -> None: ...


@runtime_checkable
class UnhandledTokenCallback(Protocol):
    def __call__(self, parser: Any, token: Token) -> None: ...
