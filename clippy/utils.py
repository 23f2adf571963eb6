# Clippy Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""utils.py"""
from __future__ import annotations

import logging
import os
import re
import textwrap

import pythonjsonlogger.json
from rich.logging import RichHandler

_SPLIT_PATTERN = re.compile(r"[ =]+")


def split_arguments(text: str) -> list[str]:
    """
    Split a command line on spaces and `=` signs.

    `--thing=that` becomes `["--thing", "that"]`. No quoting is honoured; this is
    meant for tests and interactive prompts, not for shell-accurate splitting.
    """
    return [part for part in _SPLIT_PATTERN.split(text) if part]


def wrap_text(
    text: str,
    column_limit: int,
    left_pad: int,
    continuation_indent: int,
) -> list[str]:
    """
    Word-wrap `text` into lines of at most `column_limit` characters.

    The first line is returned as-is, every following line is prefixed with
    `left_pad + continuation_indent` spaces so it lines up under the first one.
    """
    lines = textwrap.wrap(text, width=column_limit, break_on_hyphens=False)
    if not lines:
        return [""]
    prefix = " " * (left_pad + continuation_indent)
    return [lines[0]] + [f"{prefix}{line}" for line in lines[1:]]


def running_in_container() -> bool:
    try:
        with open("/proc/1/cgroup", "r", encoding="UTF-8") as f:
            content = f.read()
            return (
                "docker" in content
                or "kubepods" in content
                or "containerd" in content
                or "podman" in content
            )
    except OSError:
        return False


def setup_logging(
    mode: str | None = None,
    log_filename: str | None = None,
    json_log_to_file: bool = False,
    file_log_level: int = logging.DEBUG,
    console_log_level: int = logging.WARNING,
):
    """
    Configure logging for applications built on clippy.

    Sets up a console handler and, when `log_filename` is given, a file handler.

    Args:
        mode (str | None):
            Logging output mode. Can be:
                - "cli": human-readable Rich console logs (default outside containers)
                - "json": machine-readable JSON logs (default inside containers)
            If not provided, it will use the `CLIPPY_LOG_MODE` environment variable
            or fallback based on container detection.
        log_filename (str | None):
            Path to the log file. No file handler is installed when omitted.
        json_log_to_file (bool):
            Whether to format file logs as JSON instead of plain text.
        file_log_level (int):
            Logging level for file output. Defaults to `logging.DEBUG`.
        console_log_level (int):
            Logging level for console output. Defaults to `logging.WARNING`.

    Raises:
        ValueError: If an invalid logging `mode` is passed.
    """
    if not mode:
        mode = os.getenv("CLIPPY_LOG_MODE") or (
            "json" if running_in_container() else "cli"
        )

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    if root.hasHandlers():
        root.handlers.clear()

    if mode == "cli":
        console_handler: RichHandler | logging.StreamHandler = RichHandler(
            rich_tracebacks=True,
            show_time=True,
            show_level=True,
            show_path=False,
            markup=False,
            log_time_format="[%Y-%m-%d %H:%M:%S]",
        )
    elif mode == "json":
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(
            pythonjsonlogger.json.JsonFormatter(
                "%(asctime)s %(name)s %(levelname)s %(message)s"
            )
        )
    else:
        raise ValueError(f"Invalid log mode: {mode}")

    console_handler.setLevel(console_log_level)
    root.addHandler(console_handler)

    if log_filename:
        file_handler = logging.FileHandler(log_filename, "a", "UTF-8")
        file_handler.setLevel(file_log_level)
        if json_log_to_file:
            file_handler.setFormatter(
                pythonjsonlogger.json.JsonFormatter(
                    "%(asctime)s %(name)s %(levelname)s %(message)s"
                )
            )
        else:
            file_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s [%(name)s] [%(levelname)s] %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
        root.addHandler(file_handler)

    logger = logging.getLogger("clippy")
    logger.propagate = True
    logger.debug("Logging initialized in '%s' mode.", mode)
