# Clippy Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements `Arguments`, a schema built once from a list of argument
descriptors, and `ArgumentsParser`, the streaming matcher that fills its typed
result record one token at a time.

Matching rules:
- Arguments are scanned in declaration order and the first one that accepts the
  token wins.
- Flags match by spelling. A flag given twice is a `DuplicateFlag`. Value flags take
  the next token through `ArgumentStream.get_value()`.
- Positionals bind strictly in declaration order. A variadic positional keeps
  collecting every later positional token.
- After the stream is exhausted, the first unset required argument (lowest
  declaration index) is reported as `MissingArgument`.

Example Usage:
    schema = Arguments([
        ArgumentDescriptor("item", help="Positional argument.", required=True),
        ArgumentDescriptor("-n/--limit value", help="Limit.", value_type=int),
        ArgumentDescriptor("other", help="Another positional"),
        ArgumentDescriptor("-f/--flag", help="Toggleable"),
    ])
    parsed = schema.parse_all(["hello", "--limit", "12", "goodbye", "-f"])
    # Parsed(item='hello', limit=12, other='goodbye', flag=True)
"""
from __future__ import annotations

from typing import Any, Iterable, Iterator, Mapping, Sequence, TextIO

from rich.console import Console

from clippy.argument import Argument, ArgumentDescriptor, arguments_from_descriptors
from clippy.base_parser import BaseParser
from clippy.completion import Shell, generate_completion
from clippy.console import console
from clippy.exceptions import DuplicateFlag, MissingArgument
from clippy.help import HelpFormatting, render_arguments_help
from clippy.logger import logger
from clippy.parser_types import ParseOptions, ParseOutcome, SeenMask
from clippy.protocols import UnhandledTokenCallback
from clippy.schema import FieldSpec, build_record, compile_schema
from clippy.stream import ArgumentStream
from clippy.token import Token

DescriptorLike = ArgumentDescriptor | Mapping[str, Any] | str


def as_stream(args: ArgumentStream | Sequence[str] | None) -> ArgumentStream:
    if isinstance(args, ArgumentStream):
        return args
    if isinstance(args, str):
        return ArgumentStream.from_string(args)
    return ArgumentStream(args or [])


def write_text(text: str, sink: Console | TextIO | None) -> None:
    if sink is None or isinstance(sink, Console):
        (sink or console).print(text, end="", markup=False, highlight=False, soft_wrap=True)
    else:
        sink.write(text)


def _hints(argument: Argument) -> list[str]:
    completion = argument.descriptor.completion
    return [completion] if completion else []


class ArgumentsParser(BaseParser):
    """Parse state for one `Arguments` schema: a seen-mask and a partly filled record."""

    def __init__(
        self,
        schema: Arguments,
        stream: ArgumentStream,
        options: ParseOptions | None = None,
    ) -> None:
        super().__init__(stream, options)
        self.schema: Arguments = schema
        self.mask: SeenMask = SeenMask()
        self.parsed: Any = schema.Parsed()

    def parse_token(self, token: Token) -> ParseOutcome:
        for index, spec in enumerate(self.schema.fields):
            argument = spec.argument
            if not argument.matches(token):
                continue

            if argument.is_flag:
                if self.mask.is_set(index):
                    raise DuplicateFlag(
                        f"flag '{token.raw}' given more than once", token=token.raw
                    )
                if argument.accepts_value:
                    value = self.stream.get_value()
                    setattr(self.parsed, spec.name, spec.parse(value.string))
                else:
                    setattr(self.parsed, spec.name, True)
                self.mask.set(index)
                return ParseOutcome.PARSED_FLAG

            if argument.variadic:
                if not self.mask.is_set(index):
                    setattr(self.parsed, spec.name, [])
                getattr(self.parsed, spec.name).append(spec.parse(token.string))
                self.mask.set(index)
                return ParseOutcome.PARSED_POSITIONAL

            if not self.mask.is_set(index):
                setattr(self.parsed, spec.name, spec.parse(token.string))
                self.mask.set(index)
                return ParseOutcome.PARSED_POSITIONAL

        if token.flag:
            return ParseOutcome.UNPARSED_FLAG
        return ParseOutcome.UNPARSED_POSITIONAL

    def unset_required(self) -> Argument | None:
        for index, spec in enumerate(self.schema.fields):
            if spec.argument.required and not self.mask.is_set(index):
                return spec.argument
        return None

    def get_parsed(self) -> Any:
        missing = self.unset_required()
        if missing is not None:
            self.throw_error(MissingArgument(missing.name))
        return self.parsed

    def remaining_flags(self) -> list[str]:
        flags: list[str] = []
        for index, spec in enumerate(self.schema.fields):
            argument = spec.argument
            if argument.is_flag and argument.descriptor.show_help and not self.mask.is_set(index):
                flags.extend(argument.flag_spellings())
        return flags

    def value_hints(self, token: Token) -> list[str] | None:
        """Completion action of the value flag `token`, None if it is not declared here."""
        for spec in self.schema.fields:
            argument = spec.argument
            if argument.accepts_value and argument.matches(token):
                return _hints(argument)
        return None

    def positional_hints(self) -> list[str]:
        """Completion action of the next positional to be bound."""
        for index, spec in enumerate(self.schema.fields):
            argument = spec.argument
            if argument.is_positional and (argument.variadic or not self.mask.is_set(index)):
                return _hints(argument)
        return []

    def completion_hints(self) -> list[str]:
        if self.awaiting_value is not None:
            return self.value_hints(self.awaiting_value) or []
        return self.positional_hints()


class Arguments:
    """
    A compiled argument schema.

    Built once, typically at import time, from an ordered list of descriptors.
    Schema mistakes raise a `SchemaError` here, never while parsing.

    Args:
        descriptors: `ArgumentDescriptor`s, mappings of their fields, or bare
            descriptor strings.
        name (str): Class name of the generated result record.
    """

    def __init__(self, descriptors: Iterable[DescriptorLike], name: str = "Parsed") -> None:
        self.descriptors: list[ArgumentDescriptor] = [
            ArgumentDescriptor.coerce(descriptor) for descriptor in descriptors
        ]
        self.arguments: list[Argument] = arguments_from_descriptors(self.descriptors)
        self.fields: list[FieldSpec] = compile_schema(self.arguments)
        self.Parsed: type = build_record(name, self.fields)
        logger.debug("Built %s", self)

    def parser(
        self,
        stream: ArgumentStream | Sequence[str] | None = None,
        options: ParseOptions | None = None,
    ) -> ArgumentsParser:
        """Create fresh parse state over `stream` for incremental use."""
        return ArgumentsParser(self, as_stream(stream), options)

    def parse_all(
        self,
        args: ArgumentStream | Sequence[str] | None = None,
        options: ParseOptions | None = None,
    ) -> Any:
        """
        Parse every token and return the result record.

        Raises:
            ParseError: On the first invalid token or a missing required argument.
        """
        return self.parser(args, options).parse_all()

    def parse_all_forgiving(
        self,
        args: ArgumentStream | Sequence[str] | None = None,
        unhandled_token: UnhandledTokenCallback | None = None,
    ) -> Any:
        """Parse every token, skipping errors, and return whatever was bound."""
        options = ParseOptions(forgiving=True, unhandled_token=unhandled_token)
        return self.parser(args, options).parse_all()

    def _replay(self, args: ArgumentStream | Sequence[str] | None) -> ArgumentsParser:
        parser = self.parser(as_stream(args).copy(), ParseOptions(forgiving=True))
        parser.parse_all()
        return parser

    def suggest_next(self, args: ArgumentStream | Sequence[str] | None = None) -> list[str]:
        """
        Suggest what can follow `args`: flags not given yet, then the completion
        action of the next positional. If the last flag is still waiting for its
        value, only that flag's completion action is suggested.

        The tokens are replayed on a copy of the stream so an in-progress parse
        over the same stream is left untouched.
        """
        parser = self._replay(args)
        if parser.awaiting_value is not None:
            return parser.completion_hints()
        return parser.remaining_flags() + parser.completion_hints()

    def completion_hints(self, args: ArgumentStream | Sequence[str] | None = None) -> list[str]:
        """Completion actions, e.g. `_files`, of whatever comes after `args`."""
        return self._replay(args).completion_hints()

    def render_help(self, formatting: HelpFormatting | None = None) -> str:
        return render_arguments_help(self.arguments, formatting)

    def write_help(
        self,
        sink: Console | TextIO | None = None,
        formatting: HelpFormatting | None = None,
    ) -> None:
        """Write the help text to a rich `Console` (default) or any text stream."""
        write_text(self.render_help(formatting), sink)

    def generate_completion(
        self, shell: Shell | str = Shell.ZSH, function_name: str = "name"
    ) -> str:
        return generate_completion(self.arguments, shell, function_name)

    def __len__(self) -> int:
        return len(self.arguments)

    def __iter__(self) -> Iterator[Argument]:
        return iter(self.arguments)

    def __str__(self) -> str:
        positional = sum(argument.is_positional for argument in self.arguments)
        required = sum(argument.required for argument in self.arguments)
        return (
            f"Arguments(record={self.Parsed.__name__}, args={len(self.arguments)}, "
            f"positional={positional}, required={required})"
        )

    def __repr__(self) -> str:
        return str(self)
