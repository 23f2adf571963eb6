from dataclasses import fields
from enum import Enum
from pathlib import Path
from typing import Optional

import pytest

from clippy.argument import ArgumentDescriptor
from clippy.arguments import Arguments
from clippy.exceptions import (
    IncompatibleTypes,
    InvalidArgName,
    InvalidDefault,
    SchemaConflict,
    SchemaError,
)


class Mode(Enum):
    FAST = "fast"
    SLOW = "slow"


def field_types(schema: Arguments) -> dict:
    return {field.name: field.type for field in fields(schema.Parsed)}


def test_record_field_types():
    schema = Arguments(
        [
            ArgumentDescriptor("item", required=True),
            ArgumentDescriptor("-n/--limit value", value_type=int),
            ArgumentDescriptor("-m/--mode value", value_type=Mode, default="fast"),
            ArgumentDescriptor("-f/--flag"),
            ArgumentDescriptor("paths...", value_type=Path),
        ]
    )
    assert field_types(schema) == {
        "item": str,
        "limit": Optional[int],
        "mode": Mode,
        "flag": bool,
        "paths": list[Path],
    }


def test_record_defaults():
    schema = Arguments(
        [
            ArgumentDescriptor("item", required=True),
            ArgumentDescriptor("--count value", value_type=int, default="3"),
            ArgumentDescriptor("-f"),
            ArgumentDescriptor("rest...", value_type=int, default="1 2"),
        ]
    )
    record = schema.Parsed()
    assert record.item is None
    assert record.count == 3
    assert record.f is False
    assert record.rest == [1, 2]
    record.rest.append(3)
    assert schema.Parsed().rest == [1, 2]


def test_record_name():
    assert Arguments(["-v"], name="Options").Parsed.__name__ == "Options"
    with pytest.raises(InvalidArgName):
        Arguments(["-v"], name="not valid")


def test_bool_flag_rejects_value_type():
    with pytest.raises(IncompatibleTypes):
        Arguments([ArgumentDescriptor("-f", value_type=int)])


def test_bool_flag_rejects_default():
    with pytest.raises(InvalidDefault):
        Arguments([ArgumentDescriptor("-f", default="true")])


def test_unsupported_type():
    with pytest.raises(IncompatibleTypes):
        Arguments([ArgumentDescriptor("--data value", value_type=dict)])


def test_invalid_default():
    with pytest.raises(InvalidDefault):
        Arguments([ArgumentDescriptor("--count value", value_type=int, default="many")])


@pytest.mark.parametrize(
    "descriptors",
    [
        ["-v/--verbose", "--verbose"],
        ["-v/--verbose", "-v/--version"],
        ["--dry-run", "--dry_run"],
        ["item", "--item"],
        ["files...", "extra"],
        ["files...", "more..."],
    ],
)
def test_schema_conflicts(descriptors):
    with pytest.raises(SchemaConflict):
        Arguments(descriptors)


def test_schema_errors_share_a_base():
    with pytest.raises(SchemaError):
        Arguments([ArgumentDescriptor("--count value", value_type=int, default="many")])


def test_keyword_argument_field():
    schema = Arguments(["--class value"])
    assert schema.parse_all(["--class", "x"]).class_ == "x"
