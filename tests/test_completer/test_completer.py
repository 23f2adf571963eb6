from types import SimpleNamespace

import pytest
from prompt_toolkit.completion import Completion
from prompt_toolkit.document import Document

from clippy.argument import ArgumentDescriptor
from clippy.arguments import Arguments
from clippy.commands import Command, Commands
from clippy.completer import ClippyCompleter
from clippy.exceptions import ClippyError


@pytest.fixture
def commands():
    return Commands(
        [
            Command("hello", arguments=["item", "-n/--limit value"]),
            Command("help", arguments=["topic"]),
            Command("world", arguments=["-c/--control"]),
        ],
        mutual=["-i/--interactive"],
    )


def texts(completer, text):
    return [c.text for c in completer.get_completions(Document(text), None)]


def test_empty_input_suggests_commands_and_mutual(commands):
    results = list(ClippyCompleter(commands).get_completions(Document(""), None))
    assert all(isinstance(c, Completion) for c in results)
    assert [c.text for c in results] == ["hello", "help", "world", "--interactive", "-i"]


def test_command_prefix_uses_common_prefix(commands):
    assert texts(ClippyCompleter(commands), "he") == ["hel", "hello", "help"]


def test_single_match_completes_fully(commands):
    results = list(ClippyCompleter(commands).get_completions(Document("wo"), None))
    assert [c.text for c in results] == ["world"]
    assert results[0].start_position == -2


def test_flags_after_command(commands):
    assert texts(ClippyCompleter(commands), "world ") == ["--control", "-c", "--interactive", "-i"]
    assert texts(ClippyCompleter(commands), "world --c") == ["--control"]


def test_used_flags_not_suggested(commands):
    assert texts(ClippyCompleter(commands), "world -c ") == ["--interactive", "-i"]


def test_unbalanced_quotes_yield_nothing(commands):
    assert texts(ClippyCompleter(commands), 'hello "abc') == []


def test_no_match(commands):
    assert texts(ClippyCompleter(commands), "world --zzz") == []


def test_arguments_schema():
    schema = Arguments(["file", "-v/--verbose", "--version"])
    completer = ClippyCompleter(schema)
    assert texts(completer, "--ver") == ["--verbose", "--version"]
    assert texts(completer, "x -v ") == ["--version"]


def test_schema_errors_are_swallowed():
    def broken(tokens):
        raise ClippyError("boom")

    completer = ClippyCompleter(SimpleNamespace(suggest_next=broken))
    assert texts(completer, "a ") == []


def test_lcp_completions_quote_spaces(commands):
    completer = ClippyCompleter(commands)
    suggestions = ["London", "New York", "San Francisco"]
    completions = list(completer._yield_lcp_completions(suggestions, "N"))
    assert [c.text for c in completions] == ['"New York"']


def test_file_completion_for_value(tmp_path, monkeypatch):
    (tmp_path / "alpha.txt").write_text("")
    (tmp_path / "beta.log").write_text("")
    monkeypatch.chdir(tmp_path)
    completer = ClippyCompleter(
        Arguments([ArgumentDescriptor("--out value", completion="_files"), "-v"])
    )

    def displays(text):
        return {c.display_text for c in completer.get_completions(Document(text), None)}

    assert displays("--out ") == {"alpha.txt", "beta.log"}
    assert displays("--out al") == {"alpha.txt"}


def test_file_completion_for_positional(tmp_path, monkeypatch):
    (tmp_path / "notes.md").write_text("")
    monkeypatch.chdir(tmp_path)
    completer = ClippyCompleter(Arguments([ArgumentDescriptor("file", completion="_files"), "-f"]))
    assert texts(completer, "") == ["-f", "notes.md"]
    assert texts(completer, "notes.md ") == ["-f"]


def test_choice_completion():
    completer = ClippyCompleter(
        Arguments([ArgumentDescriptor("--color value", completion="(red green blue)"), "-v"])
    )
    assert texts(completer, "--color ") == ["red", "green", "blue"]
    assert texts(completer, "--color g") == ["green"]
    assert texts(completer, "--color green ") == ["-v"]


def test_unknown_completion_action_is_skipped():
    completer = ClippyCompleter(Arguments([ArgumentDescriptor("host", completion="_hosts")]))
    assert texts(completer, "") == []
