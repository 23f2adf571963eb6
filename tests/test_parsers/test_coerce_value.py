from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Literal, Optional, Union

import pytest

from clippy.coerce import coerce_bool, coerce_enum, coerce_value, is_coercible


class Color(Enum):
    RED = "red"
    GREEN = "green"


class Level(Enum):
    LOW = 1
    HIGH = 2


class Size:
    def __init__(self, amount: int):
        self.amount = amount

    @classmethod
    def from_arg(cls, value: str) -> "Size":
        if not value.endswith("k"):
            raise ValueError(f"bad size {value!r}")
        return cls(int(value[:-1]) * 1024)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("true", True),
        ("YES", True),
        ("1", True),
        ("on", True),
        ("false", False),
        ("No", False),
        ("0", False),
        ("off", False),
    ],
)
def test_coerce_bool(value, expected):
    assert coerce_bool(value) is expected


def test_coerce_bool_invalid():
    with pytest.raises(ValueError):
        coerce_bool("maybe")


def test_coerce_enum_by_name_and_value():
    assert coerce_enum("RED", Color) is Color.RED
    assert coerce_enum("green", Color) is Color.GREEN
    assert coerce_enum("2", Level) is Level.HIGH
    with pytest.raises(ValueError):
        coerce_enum("blue", Color)


def test_coerce_scalars():
    assert coerce_value("12", int) == 12
    assert coerce_value("1.5", float) == 1.5
    assert coerce_value("abc", str) == "abc"
    assert coerce_value("/tmp/x", Path) == Path("/tmp/x")
    assert coerce_value("2024-01-02", datetime) == datetime(2024, 1, 2)


def test_coerce_errors():
    with pytest.raises(ValueError):
        coerce_value("abc", int)
    with pytest.raises(ValueError):
        coerce_value("not a date", datetime)
    with pytest.raises(TypeError):
        coerce_value("x", dict)


def test_coerce_literal():
    assert coerce_value("fast", Literal["fast", "slow"]) == "fast"
    assert coerce_value("3", Literal[1, 3]) == 3
    with pytest.raises(ValueError):
        coerce_value("medium", Literal["fast", "slow"])


def test_coerce_union():
    assert coerce_value("5", Union[int, str]) == 5
    assert coerce_value("five", int | str) == "five"
    assert coerce_value("7", Optional[int]) == 7


def test_coerce_from_arg():
    assert coerce_value("2k", Size).amount == 2048
    with pytest.raises(ValueError):
        coerce_value("2", Size)


@pytest.mark.parametrize(
    "target_type, expected",
    [
        (int, True),
        (Path, True),
        (Color, True),
        (Size, True),
        (Literal["a"], True),
        (int | float, True),
        (dict, False),
        (list[int], False),
        (int | dict, False),
    ],
)
def test_is_coercible(target_type, expected):
    assert is_coercible(target_type) is expected
