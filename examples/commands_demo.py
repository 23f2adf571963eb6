"""commands_demo.py"""

import shlex

from prompt_toolkit import PromptSession

from clippy import ArgumentDescriptor, Command, Commands
from clippy.completer import ClippyCompleter
from clippy.console import console, report_to_console
from clippy.exceptions import ParseError
from clippy.parser_types import ParseOptions
from clippy.utils import setup_logging

cli = Commands(
    [
        Command(
            "hello",
            help="Greet someone.",
            arguments=[
                ArgumentDescriptor("name", help="Who to greet.", required=True),
                ArgumentDescriptor("-t/--times value", help="Repeat count.", value_type=int, default="1"),
            ],
        ),
        Command(
            "world",
            help="Take over the world.",
            arguments=[ArgumentDescriptor("-c/--control", help="Take control.")],
        ),
        Command(
            "program",
            help="Run anything else.",
            arguments=[ArgumentDescriptor("args...", help="Program arguments.")],
            fallback=True,
            completion="{_command_names -e}",
        ),
    ],
    mutual=[ArgumentDescriptor("-i/--interactive", help="Interactive mode.")],
)


def run(line: str) -> None:
    try:
        parsed = cli.parse_all(shlex.split(line), ParseOptions(error_fn=report_to_console))
    except ParseError:
        return
    match parsed.commands.name:
        case "hello":
            for _ in range(parsed.commands.hello.times):
                console.print(f"Hello, {parsed.commands.hello.name}!")
        case "world":
            console.print(f"World (control={parsed.commands.world.control})")
        case _:
            console.print(f"Would run {parsed.commands.program.program} {parsed.commands.program.args}")


def main() -> None:
    setup_logging(mode="cli")
    console.print(cli.render_help(), markup=False)
    session: PromptSession = PromptSession("clippy > ", completer=ClippyCompleter(cli))
    while True:
        try:
            line = session.prompt()
        except (EOFError, KeyboardInterrupt):
            break
        if line.strip():
            run(line)


if __name__ == "__main__":
    main()
