# Clippy Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Shell completion script generation for clippy schemas.

An Arguments schema becomes one zsh function calling `_arguments` with one quoted
spec per visible argument, in declaration order. A Commands schema becomes one
function per command, named `_arguments_<root>_sub_<command>`, and a dispatcher
`_arguments_<root>` that offers the command names as a menu and dispatches on the
first word. The fallback command is dispatched with the `*)` wildcard.

Example:
    _arguments_name() {
        _arguments -C \\
            ':item:()' \\
            '(-n --limit)'{-n,--limit}'[Limit.]:value:()'
    }
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from clippy.argument import Argument, FlagInfo
from clippy.flag_form import FlagForm

if TYPE_CHECKING:
    from clippy.commands import Commands

NO_OP_ACTION = "()"


class Shell(Enum):
    """Target shell of a completion script."""

    ZSH = "zsh"

    @classmethod
    def _missing_(cls, value: object) -> Shell:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    def __str__(self) -> str:
        return self.value


@dataclass
class CompletionWriter:
    """Collects completion spec entries and joins them into a function."""

    items: list[str] = field(default_factory=list)

    def add(self, entry: str) -> None:
        self.items.append(entry)

    def finalize(self, name: str) -> str:
        body = " \\\n        ".join(["    _arguments -C", *self.items])
        return f"_arguments_{name}() {{\n{body}\n}}\n"


def _quote(text: str) -> str:
    return text.replace("'", "'\\''")


def _describe(text: str) -> str:
    return _quote(text).replace("[", "\\[").replace("]", "\\]")


class ZshCompletionWriter:
    """Writes zsh `_arguments` specs."""

    @staticmethod
    def write_flag(writer: CompletionWriter, argument: Argument) -> None:
        assert isinstance(argument.info, FlagInfo)
        description = f"[{_describe(argument.descriptor.help)}]"
        if argument.accepts_value:
            message = argument.info.value_name or argument.name
            action = argument.descriptor.completion or NO_OP_ACTION
            description = f"{description}:{_quote(message)}:{_quote(action)}"

        if argument.info.form is FlagForm.SHORT_AND_LONG:
            short, long = f"-{argument.short_name}", f"--{argument.long_name}"
            writer.add(f"'({short} {long})'{{{short},{long}}}'{description}'")
        else:
            writer.add(f"'{argument.flag_spellings()[0]}{description}'")

    @staticmethod
    def write_positional(writer: CompletionWriter, argument: Argument) -> None:
        action = _quote(argument.descriptor.completion or NO_OP_ACTION)
        colons = ":" if argument.required else "::"
        prefix = "*" if argument.variadic else ""
        writer.add(f"'{prefix}{colons}{argument.name}:{action}'")

    @classmethod
    def write_arguments(cls, writer: CompletionWriter, arguments: list[Argument]) -> None:
        for argument in arguments:
            if not argument.descriptor.show_help:
                continue
            if argument.is_flag:
                cls.write_flag(writer, argument)
            else:
                cls.write_positional(writer, argument)

    @classmethod
    def arguments_function(cls, arguments: list[Argument], function_name: str) -> str:
        writer = CompletionWriter()
        cls.write_arguments(writer, arguments)
        return writer.finalize(function_name)

    @classmethod
    def commands_function(cls, commands: Commands, function_name: str) -> str:
        mutual = commands.mutual.arguments if commands.mutual is not None else []
        parts: list[str] = []
        for command in commands.commands:
            parts.append(
                cls.arguments_function(
                    command.schema.arguments + mutual,
                    f"{function_name}_sub_{command.name}",
                )
            )

        menu = "{_describe 'command' subcmds}"
        fallback = commands.fallback
        if fallback is not None and fallback.completion:
            hint = fallback.completion
            if hint.startswith("{") and hint.endswith("}"):
                hint = hint[1:-1]
            menu = f"{{_describe 'command' subcmds; {hint}}}"

        writer = CompletionWriter()
        cls.write_arguments(writer, mutual)
        writer.add(f"'1: :{menu}'")
        writer.add("'*:: :->args'")

        lines = [
            f"_arguments_{function_name}() {{",
            "    local line state subcmds",
            "    subcmds=(",
        ]
        for command in commands.commands:
            if command.fallback:
                continue
            entry = f"{command.name}:{command.help or command.name}"
            lines.append(f"        '{_quote(entry)}'")
        lines.append("    )")
        lines.append(" \\\n        ".join(["    _arguments"] + writer.items))
        lines.append("    case $line[1] in")
        ordered = [c for c in commands.commands if not c.fallback]
        if fallback is not None:
            ordered.append(fallback)
        for command in ordered:
            pattern = "*" if command.fallback else command.name
            lines.append(f"        {pattern})")
            lines.append(f"            _arguments_{function_name}_sub_{command.name}")
            lines.append("        ;;")
        lines.append("    esac")
        lines.append("}")
        parts.append("\n".join(lines) + "\n")
        return "".join(parts)


COMPLETION_WRITERS: dict[Shell, type[ZshCompletionWriter]] = {
    Shell.ZSH: ZshCompletionWriter,
}


def get_writer(shell: Shell | str) -> type[ZshCompletionWriter]:
    return COMPLETION_WRITERS[Shell(shell)]


def generate_completion(
    arguments: list[Argument], shell: Shell | str = Shell.ZSH, function_name: str = "name"
) -> str:
    """Generate the completion function for an Arguments schema."""
    return get_writer(shell).arguments_function(arguments, function_name)


def generate_command_completion(
    commands: Commands, shell: Shell | str = Shell.ZSH, function_name: str = "name"
) -> str:
    """Generate the per-command functions and the dispatcher for a Commands schema."""
    return get_writer(shell).commands_function(commands, function_name)
