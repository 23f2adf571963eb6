# Clippy Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""Defines `FlagForm`, the spelling a flag argument was declared with."""
from __future__ import annotations

from enum import Enum


class FlagForm(Enum):
    """
    How a flag may be written on the command line.

    Members:
        SHORT: Only `-x`, declared as `"-x"`.
        LONG: Only `--name`, declared as `"--name"`.
        SHORT_AND_LONG: Either `-x` or `--name`, declared as `"-x/--name"`.
    """

    SHORT = "short"
    LONG = "long"
    SHORT_AND_LONG = "short_and_long"
