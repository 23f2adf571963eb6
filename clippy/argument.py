# Clippy Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ArgumentDescriptor`, the author-facing declaration of one argument, and
`Argument`, its interpreted form.

The descriptor mini-language:
- Positional: a bare name of letters, digits and `_`, e.g. `file`.
- Variadic positional: the same with a trailing `...`, e.g. `files...`.
- Short flag: `-x`.
- Long flag: `--name` (letters, digits, `-` and `_`).
- Short and long flag: `-x/--name`.
- A flag followed by a space and a placeholder word takes a value, e.g.
  `-n/--limit value`. Without the placeholder the flag is a boolean.

Example:
    Argument.from_descriptor(ArgumentDescriptor("-n/--limit value", help="Limit."))
    # Argument(name='limit', info=FlagInfo(short_name='n', accepts_value=True, ...))
"""
from __future__ import annotations

import keyword
import re
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from clippy.exceptions import InvalidArgName, MalformedDescriptor
from clippy.flag_form import FlagForm
from clippy.token import Token

FLAG_NAME_PATTERN = re.compile(r"[A-Za-z0-9_-]+")
SHORT_NAME_PATTERN = re.compile(r"[A-Za-z0-9]")
POSITIONAL_NAME_PATTERN = re.compile(r"[A-Za-z0-9_]+")
VARIADIC_SUFFIX = "..."


@dataclass(frozen=True)
class ArgumentDescriptor:
    """
    Declarative description of a single command-line argument.

    Attributes:
        arg (str): Descriptor string, e.g. `"-n/--limit value"`, `"file"`, `"pos..."`.
        help (str): Help text.
        display_name (str | None): Name shown in help instead of `arg`.
        value_type (Any): Type the value is parsed into. None means `str`.
            Boolean flags must leave this unset.
        default (str | None): String-encoded default, converted when the schema is built.
        show_help (bool): Whether the argument is listed in help and completions.
        required (bool): Whether the argument must be given. Excludes `default`.
        completion (str | None): Shell completion action, e.g. `"_files"`.
    """

    arg: str
    help: str = ""
    display_name: str | None = None
    value_type: Any = None
    default: str | None = None
    show_help: bool = True
    required: bool = False
    completion: str | None = None

    @classmethod
    def coerce(cls, value: ArgumentDescriptor | Mapping[str, Any] | str) -> ArgumentDescriptor:
        """Accept a descriptor, a mapping of its fields, or a bare descriptor string."""
        if isinstance(value, ArgumentDescriptor):
            return value
        if isinstance(value, str):
            return cls(arg=value)
        if isinstance(value, Mapping):
            try:
                return cls(**value)
            except TypeError as error:
                raise MalformedDescriptor(f"Invalid descriptor {dict(value)!r}: {error}") from error
        raise MalformedDescriptor(
            f"Descriptor must be an ArgumentDescriptor, mapping or string, not {type(value).__name__}"
        )


@dataclass(frozen=True)
class FlagInfo:
    short_name: str | None = None
    accepts_value: bool = False
    form: FlagForm = FlagForm.SHORT
    value_name: str | None = None


@dataclass(frozen=True)
class PositionalInfo:
    variadic: bool = False


@dataclass(frozen=True)
class Argument:
    """
    An interpreted descriptor.

    Attributes:
        descriptor (ArgumentDescriptor): The originating descriptor.
        name (str): Canonical name: the long name of a flag, its short name when
            it has no long form, or the positional name without `...`.
        info (FlagInfo | PositionalInfo): Flag or positional specifics.
    """

    descriptor: ArgumentDescriptor
    name: str
    info: FlagInfo | PositionalInfo

    @property
    def is_flag(self) -> bool:
        return isinstance(self.info, FlagInfo)

    @property
    def is_positional(self) -> bool:
        return isinstance(self.info, PositionalInfo)

    @property
    def accepts_value(self) -> bool:
        return isinstance(self.info, FlagInfo) and self.info.accepts_value

    @property
    def variadic(self) -> bool:
        return isinstance(self.info, PositionalInfo) and self.info.variadic

    @property
    def required(self) -> bool:
        return self.descriptor.required

    @property
    def short_name(self) -> str | None:
        if not isinstance(self.info, FlagInfo):
            return None
        if self.info.form is FlagForm.SHORT:
            return self.name
        return self.info.short_name

    @property
    def long_name(self) -> str | None:
        if isinstance(self.info, FlagInfo) and self.info.form is not FlagForm.SHORT:
            return self.name
        return None

    @property
    def dest(self) -> str:
        """Attribute name of this argument on the parsed record."""
        dest = self.name.replace("-", "_")
        if keyword.iskeyword(dest):
            dest = f"{dest}_"
        return dest

    def flag_spellings(self) -> list[str]:
        """All ways of writing this flag, long form first."""
        spellings = []
        if self.long_name:
            spellings.append(f"--{self.long_name}")
        if self.short_name:
            spellings.append(f"-{self.short_name}")
        return spellings

    def get_display_name(self) -> str:
        return self.descriptor.display_name or self.descriptor.arg

    def matches(self, token: Token) -> bool:
        """Does `token` match this argument? Positionals match any non-flag token."""
        if isinstance(self.info, PositionalInfo):
            return not token.flag
        return token.is_(self.short_name, self.long_name)

    @classmethod
    def from_descriptor(
        cls, descriptor: ArgumentDescriptor | Mapping[str, Any] | str
    ) -> Argument:
        """
        Interpret a descriptor.

        Raises:
            MalformedDescriptor: If the descriptor string is structurally invalid.
            InvalidArgName: If a name uses characters outside its allowed set.
        """
        descriptor = ArgumentDescriptor.coerce(descriptor)
        if not isinstance(descriptor.arg, str) or not descriptor.arg:
            raise MalformedDescriptor("Descriptor must not be empty")
        if descriptor.required and descriptor.default is not None:
            raise MalformedDescriptor(
                f"'{descriptor.arg}': required and default are mutually exclusive"
            )
        if descriptor.arg.startswith("-"):
            return cls._interpret_flag(descriptor)
        return cls._interpret_positional(descriptor)

    @classmethod
    def _interpret_flag(cls, descriptor: ArgumentDescriptor) -> Argument:
        name_string, space, value_name = descriptor.arg.partition(" ")
        value_name = value_name.strip()
        if space and not value_name:
            raise MalformedDescriptor(
                f"'{descriptor.arg}': missing value placeholder after the flag"
            )
        if len(value_name.split()) > 1:
            raise MalformedDescriptor(
                f"'{descriptor.arg}': the value placeholder must be a single word"
            )

        short_name: str | None = None
        if "/" in name_string:
            short, _, long = name_string.partition("/")
            if "/" in long:
                raise MalformedDescriptor(
                    f"'{descriptor.arg}': at most one '/' is allowed"
                )
            if len(short) != 2 or not short.startswith("-") or short[1] == "-":
                raise MalformedDescriptor(
                    f"'{descriptor.arg}': short form must be exactly '-x'"
                )
            if not long.startswith("--") or long.startswith("---") or len(long) < 3:
                raise MalformedDescriptor(
                    f"'{descriptor.arg}': long form must start with exactly two dashes"
                )
            short_name = short[1]
            name = long[2:]
            form = FlagForm.SHORT_AND_LONG
        elif name_string.startswith("--"):
            name = name_string[2:]
            if not name or name.startswith("-"):
                raise MalformedDescriptor(
                    f"'{descriptor.arg}': long form must start with exactly two dashes"
                )
            form = FlagForm.LONG
        else:
            name = name_string[1:]
            if len(name) != 1:
                raise MalformedDescriptor(
                    f"'{descriptor.arg}': short flags take a single character"
                )
            form = FlagForm.SHORT

        if short_name is not None and not SHORT_NAME_PATTERN.fullmatch(short_name):
            raise InvalidArgName(f"'{descriptor.arg}': invalid short flag '{short_name}'")
        pattern = SHORT_NAME_PATTERN if form is FlagForm.SHORT else FLAG_NAME_PATTERN
        if not pattern.fullmatch(name):
            raise InvalidArgName(f"'{descriptor.arg}': invalid flag name '{name}'")

        return cls(
            descriptor=descriptor,
            name=name,
            info=FlagInfo(
                short_name=short_name,
                accepts_value=bool(space),
                form=form,
                value_name=value_name or None,
            ),
        )

    @classmethod
    def _interpret_positional(cls, descriptor: ArgumentDescriptor) -> Argument:
        name = descriptor.arg
        variadic = name.endswith(VARIADIC_SUFFIX)
        if variadic:
            name = name[: -len(VARIADIC_SUFFIX)]
        if not name:
            raise MalformedDescriptor(f"'{descriptor.arg}': positional name is empty")
        if not POSITIONAL_NAME_PATTERN.fullmatch(name):
            raise InvalidArgName(f"'{descriptor.arg}': invalid positional name '{name}'")
        if name[0].isdigit():
            raise InvalidArgName(f"'{descriptor.arg}': name must not start with a digit")
        return cls(
            descriptor=descriptor,
            name=name,
            info=PositionalInfo(variadic=variadic),
        )

    def __str__(self) -> str:
        kind = "flag" if self.is_flag else "positional"
        return f"Argument({kind} '{self.name}')"


def arguments_from_descriptors(
    descriptors: Iterable[ArgumentDescriptor | Mapping[str, Any] | str],
) -> list[Argument]:
    """Interpret every descriptor, in order."""
    return [Argument.from_descriptor(descriptor) for descriptor in descriptors]
