# Clippy Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Plain-text help rendering for clippy schemas.

Each visible argument becomes one line: the name in `<angle>` brackets when required
or `[square]` brackets otherwise, padded to a fixed column, followed by the help text
word-wrapped to `help_len` characters. Defaults are appended as `(default: value).`

    <item>                    Positional argument.
    [-n/--limit value]        Limit.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from clippy.argument import Argument
from clippy.utils import wrap_text

if TYPE_CHECKING:
    from clippy.commands import Commands


@dataclass(frozen=True)
class HelpFormatting:
    """
    Layout of rendered help.

    Attributes:
        left_pad (int): Spaces before the argument name.
        help_len (int): Column limit of the help text.
        centre_padding (int): Width of the name column.
        indent (int): Extra indent of wrapped help lines and nested blocks.
    """

    left_pad: int = 4
    help_len: int = 48
    centre_padding: int = 26
    indent: int = 2


def help_text_for(argument: Argument) -> str:
    help_string = argument.descriptor.help
    if argument.descriptor.default is not None:
        help_string = f"{help_string} (default: {argument.descriptor.default})."
    return help_string.strip()


def help_line(name: str, help_string: str, formatting: HelpFormatting) -> str:
    padding = max(formatting.centre_padding - len(name), 1)
    wrapped = wrap_text(
        help_string,
        column_limit=formatting.help_len,
        left_pad=formatting.left_pad + formatting.centre_padding,
        continuation_indent=formatting.indent,
    )
    first = f"{' ' * formatting.left_pad}{name}{' ' * padding}{wrapped[0]}".rstrip()
    return "\n".join([first, *wrapped[1:]])


def help_argument(argument: Argument, formatting: HelpFormatting) -> str:
    """Render the help line of a single argument."""
    name = argument.get_display_name()
    bracketed = f"<{name}>" if argument.required else f"[{name}]"
    return help_line(bracketed, help_text_for(argument), formatting)


def render_arguments_help(
    arguments: list[Argument], formatting: HelpFormatting | None = None
) -> str:
    formatting = formatting or HelpFormatting()
    lines = [
        help_argument(argument, formatting)
        for argument in arguments
        if argument.descriptor.show_help
    ]
    return "".join(f"{line}\n" for line in lines)


def render_commands_help(commands: Commands, formatting: HelpFormatting | None = None) -> str:
    """
    Render help for a command set.

    Mutual arguments come first under `Options:`, then every command under
    `Commands:` with its own arguments indented beneath it. The fallback command is
    shown as `<name>`.
    """
    formatting = formatting or HelpFormatting()
    nested = replace(formatting, left_pad=formatting.left_pad + formatting.indent)
    sections: list[str] = []

    if commands.mutual is not None:
        mutual_help = render_arguments_help(commands.mutual.arguments, formatting)
        if mutual_help:
            sections.append(f"Options:\n{mutual_help}")

    command_lines = ["Commands:\n"]
    for command in commands.commands:
        name = f"<{command.name}>" if command.fallback else command.name
        command_lines.append(f"{help_line(name, command.help, formatting)}\n")
        command_lines.append(render_arguments_help(command.schema.arguments, nested))
    sections.append("".join(command_lines))

    return "\n".join(sections)
