"""
Clippy Argument Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .argument import Argument, ArgumentDescriptor
from .arguments import Arguments, ArgumentsParser
from .commands import Command, Commands, CommandsParsed, CommandsParser, Selected
from .completion import Shell
from .help import HelpFormatting
from .parser_types import CommandState, ParseOptions, ParseOutcome
from .stream import ArgumentStream
from .token import Token

__all__ = [
    "Argument",
    "ArgumentDescriptor",
    "ArgumentStream",
    "Arguments",
    "ArgumentsParser",
    "Command",
    "CommandState",
    "Commands",
    "CommandsParsed",
    "CommandsParser",
    "HelpFormatting",
    "ParseOptions",
    "ParseOutcome",
    "Selected",
    "Shell",
    "Token",
]
