from datetime import datetime
from http import HTTPStatus
from pathlib import Path

import pytest
from pydantic import ValidationError

from clippy.arguments import Arguments
from clippy.commands import Commands
from clippy.config import RawArgument, import_value_type, load_schema
from clippy.exceptions import IncompatibleTypes, InvalidDefault

YAML_ARGUMENTS = """
name: ToolArgs
arguments:
  - arg: file
    help: Input file.
    value_type: path
    required: true
  - arg: -n/--limit value
    value_type: int
    default: 10
  - arg: -v/--verbose
"""

YAML_COMMANDS = """
mutual:
  - arg: -i/--interactive
commands:
  - name: hello
    help: Say hello.
    arguments:
      - arg: item
        required: true
  - name: program
    fallback: true
    arguments:
      - arg: args...
"""

TOML_ARGUMENTS = """
[[arguments]]
arg = "--since value"
value_type = "datetime"

[[arguments]]
arg = "--status value"
value_type = "http.HTTPStatus"
default = "NOT_FOUND"
"""


def write(tmp_path: Path, name: str, content: str) -> Path:
    path = tmp_path / name
    path.write_text(content, encoding="UTF-8")
    return path


def test_load_yaml_arguments(tmp_path):
    schema = load_schema(write(tmp_path, "tool.yaml", YAML_ARGUMENTS))
    assert isinstance(schema, Arguments)
    assert schema.Parsed.__name__ == "ToolArgs"
    parsed = schema.parse_all(["a.txt", "-v"])
    assert parsed.file == Path("a.txt")
    assert parsed.limit == 10
    assert parsed.verbose is True


def test_load_yaml_commands(tmp_path):
    schema = load_schema(str(write(tmp_path, "tool.yml", YAML_COMMANDS)))
    assert isinstance(schema, Commands)
    parsed = schema.parse_all(["vim", "x", "-i"])
    assert parsed.commands.program.program == "vim"
    assert parsed.commands.program.args == ["x"]
    assert parsed.mutual.interactive is True


def test_load_toml(tmp_path):
    schema = load_schema(write(tmp_path, "tool.toml", TOML_ARGUMENTS))
    parsed = schema.parse_all(["--since", "2024-05-01"])
    assert parsed.since == datetime(2024, 5, 1)
    assert parsed.status is HTTPStatus.NOT_FOUND


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_schema(tmp_path / "missing.yaml")


def test_unsupported_format(tmp_path):
    with pytest.raises(ValueError):
        load_schema(write(tmp_path, "tool.json", "{}"))


def test_not_a_mapping(tmp_path):
    with pytest.raises(ValueError):
        load_schema(write(tmp_path, "tool.yaml", "- just\n- a list\n"))


@pytest.mark.parametrize(
    "content",
    [
        "name: nothing\n",
        "arguments: []\ncommands: []\n",
        "arguments: []\nmutual:\n  - arg: -x\n",
        "arguments:\n  - arg: file\n    required: true\n    default: x\n",
    ],
)
def test_invalid_shapes(tmp_path, content):
    with pytest.raises(ValidationError):
        load_schema(write(tmp_path, "tool.yaml", content))


def test_invalid_default_reaches_schema(tmp_path):
    content = "arguments:\n  - arg: --n value\n    value_type: int\n    default: many\n"
    with pytest.raises(InvalidDefault):
        load_schema(write(tmp_path, "tool.yaml", content))


def test_default_normalized_to_string():
    assert RawArgument(arg="--n value", default=3).default == "3"
    assert RawArgument(arg="--on value", default=True).default == "true"
    assert RawArgument(arg="rest...", default=[1, 2]).default == "1 2"


@pytest.mark.parametrize(
    "name, expected",
    [("int", int), ("STR", str), ("path", Path), ("datetime", datetime)],
)
def test_import_value_type_names(name, expected):
    assert import_value_type(name) is expected


@pytest.mark.parametrize("name", ["nonsense", "no_such_module.Type", "pathlib.NoSuchType"])
def test_import_value_type_errors(name):
    with pytest.raises(IncompatibleTypes):
        import_value_type(name)
