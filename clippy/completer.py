# Clippy Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Provides `ClippyCompleter`, interactive completion for clippy schemas using
Prompt Toolkit.

Suggestions come from the schema's `suggest_next()`: command names until a command
is chosen (for a `Commands` schema), then the flags that can still be given. The
completion action of the next value is expanded here: file actions go through
Prompt Toolkit's `PathCompleter` and `(a b c)` lists offer their words. Tokens
already typed are replayed on a copy of the stream, so completing never changes the
state of a parse in progress.
"""

from __future__ import annotations

import os
import shlex
from typing import TYPE_CHECKING, Iterable

from prompt_toolkit.completion import Completer, Completion, PathCompleter
from prompt_toolkit.document import Document

from clippy.exceptions import ClippyError
from clippy.logger import logger

if TYPE_CHECKING:
    from clippy.arguments import Arguments
    from clippy.commands import Commands


class ClippyCompleter(Completer):
    """
    Prompt Toolkit completer for a clippy `Arguments` or `Commands` schema.

    Args:
        schema (Arguments | Commands): The schema whose flags and commands are offered.
    """

    def __init__(self, schema: Arguments | Commands):
        self.schema = schema

    def get_completions(self, document: Document, complete_event) -> Iterable[Completion]:
        """
        Yield completions for the word under the cursor.

        Args:
            document (Document): The current input buffer and cursor.
            complete_event: The triggering event, passed on to path completion.
        """
        text = document.text_before_cursor
        try:
            tokens = shlex.split(text)
        except ValueError:
            return
        cursor_at_end_of_token = text.endswith((" ", "\t")) or not tokens

        parsed_args = tokens if cursor_at_end_of_token else tokens[:-1]
        stub = "" if cursor_at_end_of_token else tokens[-1]

        try:
            suggestions = self.schema.suggest_next(parsed_args)
            hints = self.schema.completion_hints(parsed_args)
        except ClippyError as error:
            logger.debug("No completions for %r: %s", text, error)
            return
        words = [suggestion for suggestion in suggestions if suggestion not in hints]
        yield from self._yield_lcp_completions(words, stub)
        for hint in hints:
            yield from self._yield_hint_completions(hint, stub, complete_event)

    def _yield_hint_completions(
        self, hint: str, stub: str, complete_event
    ) -> Iterable[Completion]:
        """
        Expand a zsh completion action into completions.

        `_files` and `_path_files` complete paths, `_directories` completes directories
        and `(a b c)` offers its words. Other actions have no interactive equivalent.
        """
        if hint in ("_files", "_path_files"):
            yield from PathCompleter(expanduser=True).get_completions(
                Document(stub), complete_event
            )
        elif hint == "_directories":
            yield from PathCompleter(only_directories=True, expanduser=True).get_completions(
                Document(stub), complete_event
            )
        elif hint.startswith("(") and hint.endswith(")"):
            yield from self._yield_lcp_completions(hint[1:-1].split(), stub)
        else:
            logger.debug("No interactive completion for action %r", hint)

    def _ensure_quote(self, text: str) -> str:
        """Quote a suggestion that contains whitespace."""
        if " " in text or "\t" in text:
            return f'"{text}"'
        return text

    def _yield_lcp_completions(self, suggestions: list[str], stub: str):
        """
        Yield completions for `stub` using longest-common-prefix logic.

        - A single match is inserted fully.
        - Several matches sharing a prefix longer than the stub insert the prefix and
          list every match.
        - Otherwise every match is listed.
        """
        matches = [s for s in dict.fromkeys(suggestions) if s.startswith(stub)]
        if not matches:
            return

        lcp = os.path.commonprefix(matches)

        if len(matches) == 1:
            yield Completion(
                self._ensure_quote(matches[0]),
                start_position=-len(stub),
                display=matches[0],
            )
            return
        if len(lcp) > len(stub) and not lcp.startswith("-"):
            yield Completion(lcp, start_position=-len(stub), display=lcp)
        for match in matches:
            yield Completion(
                self._ensure_quote(match), start_position=-len(stub), display=match
            )
