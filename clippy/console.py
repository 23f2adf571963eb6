# Clippy Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instances and the default console error sink."""
from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

from clippy.exceptions import ParseError

clippy_theme = Theme(
    {
        "error": "bold red",
        "token": "bold yellow",
        "hint": "dim",
    }
)

console = Console(theme=clippy_theme)
error_console = Console(stderr=True, theme=clippy_theme)


def report_to_console(error: ParseError) -> None:
    """
    Print a parse error as `Kind: message` to standard error.

    Intended as a `ParseOptions.error_fn`. The parser raises the error after the
    sink returns, so callers that want to exit the process should catch it or
    raise `SystemExit` from their own sink.
    """
    error_console.print(f"[error]{error.kind}[/error]: {escape(str(error))}")
