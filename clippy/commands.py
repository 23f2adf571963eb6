# Clippy Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements sub-command dispatch.

`Commands` is a set of named `Command`s, each with its own `Arguments` schema, plus
an optional schema of mutual arguments shared by every command. Parsing moves from
"no command selected" to "command active" on the first positional token and never
goes back:

- Before a command is selected, a positional token is compared against the command
  names in declaration order. If none matches, the fallback command (if any) is
  selected and the token becomes the value of its name positional. Otherwise the
  token is an `InvalidCommand`. Flags go to the mutual schema.
- Once a command is active, every token is offered to that command's arguments
  first and only falls through to the mutual schema if the command rejects it.
  Flags declared only on another command are never matched.

Example Usage:
    cli = Commands(
        [
            Command("hello", help="Say hello.", arguments=[{"arg": "item", "required": True}]),
            Command("world", arguments=["-c/--control"]),
        ],
        mutual=["--interactive"],
    )
    parsed = cli.parse_all(["hello", "abc", "--interactive"])
    # parsed.commands.hello.item == "abc", parsed.mutual.interactive is True
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Sequence, TextIO

from rich.console import Console

from clippy.argument import ArgumentDescriptor, FLAG_NAME_PATTERN, POSITIONAL_NAME_PATTERN
from clippy.arguments import Arguments, ArgumentsParser, DescriptorLike, as_stream, write_text
from clippy.base_parser import BaseParser
from clippy.completion import Shell, generate_command_completion
from clippy.exceptions import InvalidArgName, InvalidCommand, MissingCommand, SchemaConflict
from clippy.help import HelpFormatting, render_commands_help
from clippy.logger import logger
from clippy.parser_types import CommandState, ParseOptions, ParseOutcome
from clippy.protocols import UnhandledTokenCallback
from clippy.stream import ArgumentStream
from clippy.token import Token

RESERVED_COMMAND_NAMES = frozenset({"name", "parsed"})


@dataclass
class Command:
    """
    A named sub-command.

    Attributes:
        name (str): Command word. For a fallback command this is the name of the
            positional that receives the unmatched command word.
        help (str): Help text.
        arguments (Arguments | Iterable[DescriptorLike]): The command's own schema.
        fallback (bool): Select this command when no other name matches.
        completion (str | None): Completion action for the command word. Only
            allowed on the fallback command.
    """

    name: str
    help: str = ""
    arguments: Arguments | Iterable[DescriptorLike] = field(default_factory=list)
    fallback: bool = False
    completion: str | None = None
    schema: Arguments = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if isinstance(self.arguments, Commands):
            raise SchemaConflict(
                f"Command '{self.name}': commands cannot be nested more than one level"
            )
        pattern = POSITIONAL_NAME_PATTERN if self.fallback else FLAG_NAME_PATTERN
        if not self.name or self.name.startswith("-") or not pattern.fullmatch(self.name):
            raise InvalidArgName(f"Invalid command name '{self.name}'")
        if self.name in RESERVED_COMMAND_NAMES:
            raise SchemaConflict(
                f"Command name '{self.name}' is reserved, it is an attribute of the result"
            )
        if self.completion is not None and not self.fallback:
            raise SchemaConflict(
                f"Command '{self.name}': completion is only allowed on the fallback command"
            )

        descriptors = (
            list(self.arguments.descriptors)
            if isinstance(self.arguments, Arguments)
            else [ArgumentDescriptor.coerce(descriptor) for descriptor in self.arguments]
        )
        record_name = f"{self.name.replace('-', '_').title().replace('_', '')}Parsed"
        if not record_name.isidentifier():
            record_name = f"Command{record_name}"
        if self.fallback:
            name_positional = ArgumentDescriptor(
                arg=self.name,
                help=self.help,
                required=True,
                show_help=False,
                completion=self.completion,
            )
            self.schema = Arguments([name_positional, *descriptors], name=record_name)
        elif isinstance(self.arguments, Arguments):
            self.schema = self.arguments
        else:
            self.schema = Arguments(descriptors, name=record_name)


@dataclass
class Selected:
    """
    The command that was selected and its parsed arguments.

    `selected.<name>` returns the parsed record when `<name>` is the active command
    and raises `AttributeError` for any other name.
    """

    name: str
    parsed: Any

    def __getattr__(self, item: str) -> Any:
        if item.startswith("__"):
            raise AttributeError(item)
        if item == self.__dict__.get("name"):
            return self.__dict__["parsed"]
        raise AttributeError(
            f"Command '{item}' is not active (active command: '{self.__dict__.get('name')}')"
        )


@dataclass
class CommandsParsed:
    """Result of a Commands parse: mutual arguments and the selected command."""

    mutual: Any = None
    commands: Selected | None = None


class CommandsParser(BaseParser):
    """Parse state for one `Commands` schema."""

    def __init__(
        self,
        schema: Commands,
        stream: ArgumentStream,
        options: ParseOptions | None = None,
    ) -> None:
        super().__init__(stream, options)
        self.schema: Commands = schema
        self.mutual: ArgumentsParser | None = (
            schema.mutual.parser(stream, self.options) if schema.mutual is not None else None
        )
        self.active: Command | None = None
        self.command_parser: ArgumentsParser | None = None

    @property
    def state(self) -> CommandState:
        if self.active is None:
            return CommandState.NO_COMMAND_SELECTED
        return CommandState.COMMAND_ACTIVE

    def _activate(self, command: Command) -> None:
        logger.debug("Selected command '%s'", command.name)
        self.active = command
        self.command_parser = command.schema.parser(self.stream, self.options)

    def parse_token(self, token: Token) -> ParseOutcome:
        if self.command_parser is not None:
            outcome = self.command_parser.parse_token(token)
            if outcome.parsed:
                return outcome
        elif not token.flag:
            command = self.schema.find(token.string)
            if command is not None:
                self._activate(command)
                return ParseOutcome.PARSED_COMMAND
            fallback = self.schema.fallback
            if fallback is None:
                raise InvalidCommand(f"unknown command '{token.string}'", token=token.string)
            self._activate(fallback)
            assert self.command_parser is not None
            self.command_parser.parse_token(token)
            return ParseOutcome.PARSED_COMMAND

        if self.mutual is not None:
            return self.mutual.parse_token(token)
        if token.flag:
            return ParseOutcome.UNPARSED_FLAG
        return ParseOutcome.UNPARSED_POSITIONAL

    def get_parsed(self) -> CommandsParsed:
        result = CommandsParsed()
        if self.command_parser is None or self.active is None:
            names = ", ".join(self.schema.names())
            self.throw_error(MissingCommand(f"missing command, expected one of: {names}"))
        else:
            result.commands = Selected(self.active.name, self.command_parser.get_parsed())
        if self.mutual is not None:
            result.mutual = self.mutual.get_parsed()
        return result

    def remaining_flags(self) -> list[str]:
        flags: list[str] = []
        if self.command_parser is not None:
            flags.extend(self.command_parser.remaining_flags())
        if self.mutual is not None:
            flags.extend(flag for flag in self.mutual.remaining_flags() if flag not in flags)
        return flags

    def completion_hints(self) -> list[str]:
        if self.awaiting_value is not None:
            for parser in (self.command_parser, self.mutual):
                if parser is None:
                    continue
                hints = parser.value_hints(self.awaiting_value)
                if hints is not None:
                    return hints
            return []
        if self.command_parser is not None:
            return self.command_parser.positional_hints()
        fallback = self.schema.fallback
        if fallback is not None and fallback.completion:
            return [fallback.completion]
        return []


class Commands:
    """
    A compiled set of sub-commands with optional mutual arguments.

    Raises:
        SchemaConflict: For duplicate command names or more than one fallback.
    """

    def __init__(
        self,
        commands: Iterable[Command],
        mutual: Arguments | Iterable[DescriptorLike] | None = None,
    ) -> None:
        self.commands: list[Command] = list(commands)
        if not self.commands:
            raise SchemaConflict("Commands needs at least one command")
        if mutual is None or isinstance(mutual, Arguments):
            self.mutual: Arguments | None = mutual
        else:
            self.mutual = Arguments(mutual, name="MutualParsed")

        seen: set[str] = set()
        fallbacks: list[Command] = []
        for command in self.commands:
            if command.name in seen:
                raise SchemaConflict(f"Command '{command.name}' is declared twice")
            seen.add(command.name)
            if command.fallback:
                fallbacks.append(command)
        if len(fallbacks) > 1:
            raise SchemaConflict(
                "At most one fallback command is allowed, got: "
                + ", ".join(command.name for command in fallbacks)
            )
        self.fallback: Command | None = fallbacks[0] if fallbacks else None
        logger.debug("Built %s", self)

    def names(self) -> list[str]:
        """Literal command names, excluding the fallback."""
        return [command.name for command in self.commands if not command.fallback]

    def find(self, name: str) -> Command | None:
        for command in self.commands:
            if not command.fallback and command.name == name:
                return command
        return None

    def parser(
        self,
        stream: ArgumentStream | Sequence[str] | None = None,
        options: ParseOptions | None = None,
    ) -> CommandsParser:
        return CommandsParser(self, as_stream(stream), options)

    def parse_all(
        self,
        args: ArgumentStream | Sequence[str] | None = None,
        options: ParseOptions | None = None,
    ) -> CommandsParsed:
        return self.parser(args, options).parse_all()

    def parse_all_forgiving(
        self,
        args: ArgumentStream | Sequence[str] | None = None,
        unhandled_token: UnhandledTokenCallback | None = None,
    ) -> CommandsParsed:
        options = ParseOptions(forgiving=True, unhandled_token=unhandled_token)
        return self.parser(args, options).parse_all()

    def _replay(self, args: ArgumentStream | Sequence[str] | None) -> CommandsParser:
        parser = self.parser(as_stream(args).copy(), ParseOptions(forgiving=True))
        parser.parse_all()
        return parser

    def suggest_next(self, args: ArgumentStream | Sequence[str] | None = None) -> list[str]:
        """
        Suggest command names before a command is chosen, then remaining flags and
        the completion action of what comes next.
        """
        parser = self._replay(args)
        if parser.awaiting_value is not None:
            return parser.completion_hints()
        suggestions = parser.remaining_flags() + parser.completion_hints()
        if parser.state is CommandState.NO_COMMAND_SELECTED:
            return self.names() + suggestions
        return suggestions

    def completion_hints(self, args: ArgumentStream | Sequence[str] | None = None) -> list[str]:
        return self._replay(args).completion_hints()

    def render_help(self, formatting: HelpFormatting | None = None) -> str:
        return render_commands_help(self, formatting)

    def write_help(
        self,
        sink: Console | TextIO | None = None,
        formatting: HelpFormatting | None = None,
    ) -> None:
        write_text(self.render_help(formatting), sink)

    def generate_completion(
        self, shell: Shell | str = Shell.ZSH, function_name: str = "name"
    ) -> str:
        return generate_command_completion(self, shell, function_name)

    def __len__(self) -> int:
        return len(self.commands)

    def __iter__(self) -> Iterator[Command]:
        return iter(self.commands)

    def __str__(self) -> str:
        fallback = self.fallback.name if self.fallback else None
        return (
            f"Commands(commands={self.names()}, fallback={fallback!r}, "
            f"mutual={len(self.mutual) if self.mutual else 0})"
        )

    def __repr__(self) -> str:
        return str(self)
