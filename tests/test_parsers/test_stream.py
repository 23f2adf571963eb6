import pytest

from clippy.exceptions import (
    BadArgument,
    FlagAsPositional,
    InvalidFlag,
    MissingFlagValue,
    TooManyArguments,
)
from clippy.stream import ArgumentStream, RawKind
from clippy.token import Token


def test_iterates_mixed_arguments():
    stream = ArgumentStream.from_string("-tf -k hello --thing=that 1 2 5.0 -q")

    assert stream.arg_count() == 9
    assert stream.is_any(None, "thing")

    assert stream.next() == Token("t", flag=True)
    assert stream.next() == Token("f", flag=True)
    assert stream.next() == Token("k", flag=True)
    assert stream.get_value().string == "hello"
    assert stream.next() == Token("thing", flag=True, long=True)
    assert stream.get_value().string == "that"
    assert stream.next() == Token("1", index=1)
    assert stream.next() == Token("2", index=2)
    positional = stream.next()
    assert positional == Token("5.0", index=3)
    assert positional.as_(float) == 5.0
    assert stream.next() == Token("q", flag=True)
    assert stream.next() is None
    assert stream.next() is None


def test_is_any_does_not_consume():
    stream = ArgumentStream(["-v", "file"])
    assert stream.is_any("v", None)
    assert not stream.is_any(None, "v")
    assert not stream.is_any("x", "verbose")
    assert stream.next() == Token("v", flag=True)


def test_lone_dash_is_bad_argument():
    stream = ArgumentStream(["-", "after"])
    with pytest.raises(BadArgument):
        stream.next()
    assert stream.next() == Token("after", index=1)


def test_separator_forces_positionals():
    stream = ArgumentStream(["-a", "--", "-b", "--long", "-"])
    assert stream.next() == Token("a", flag=True)
    assert stream.next() == Token("-b", index=1)
    assert stream.next() == Token("--long", index=2)
    assert stream.next() == Token("-", index=3)
    assert stream.next() is None


def test_empty_string_is_positional():
    stream = ArgumentStream(["", "x"])
    assert stream.next() == Token("", index=1)
    assert stream.next() == Token("x", index=2)


def test_get_value_does_not_advance_counter():
    stream = ArgumentStream(["-n", "10", "file"])
    stream.next()
    value = stream.get_value()
    assert value.string == "10"
    assert value.index is None
    assert stream.next() == Token("file", index=1)


def test_get_value_missing():
    stream = ArgumentStream(["--limit"])
    stream.next()
    with pytest.raises(MissingFlagValue):
        stream.get_value()


def test_get_value_flag_as_positional():
    stream = ArgumentStream(["--limit", "-f"])
    stream.next()
    with pytest.raises(FlagAsPositional):
        stream.get_value()


def test_get_value_inside_cluster():
    stream = ArgumentStream(["-nf"])
    assert stream.next() == Token("n", flag=True)
    with pytest.raises(FlagAsPositional):
        stream.get_value()


def test_rewind_positional():
    stream = ArgumentStream(["a", "b"])
    assert stream.next() == Token("a", index=1)
    stream.rewind()
    assert stream.next() == Token("a", index=1)
    assert stream.next() == Token("b", index=2)


def test_rewind_inside_cluster():
    stream = ArgumentStream(["-abc"])
    stream.next()
    stream.next()
    stream.rewind()
    assert stream.next() == Token("b", flag=True)
    assert stream.next() == Token("c", flag=True)


def test_rewind_first_flag_of_cluster():
    stream = ArgumentStream(["-ab", "x"])
    stream.next()
    stream.rewind()
    assert stream.next() == Token("a", flag=True)
    assert stream.next() == Token("b", flag=True)
    assert stream.next() == Token("x", index=1)


def test_rewind_long_flag():
    stream = ArgumentStream(["--one", "--two"])
    stream.next()
    stream.next()
    stream.rewind()
    assert stream.next() == Token("two", flag=True, long=True)


def test_rewind_needs_a_previous_token():
    stream = ArgumentStream(["a"])
    with pytest.raises(ValueError):
        stream.rewind()
    stream.next()
    stream.rewind()
    with pytest.raises(ValueError):
        stream.rewind()


def test_copy_restarts_from_beginning():
    stream = ArgumentStream(["a", "-b"])
    stream.next()
    nested = stream.copy()
    assert nested.next() == Token("a", index=1)
    assert stream.next() == Token("b", flag=True)


def test_next_positional():
    stream = ArgumentStream(["a", "-b"])
    assert stream.next_positional() == Token("a", index=1)
    with pytest.raises(FlagAsPositional):
        stream.next_positional()
    assert stream.next_positional() is None


def test_assert_no_arguments():
    ArgumentStream([]).assert_no_arguments()
    with pytest.raises(InvalidFlag):
        ArgumentStream(["--x"]).assert_no_arguments()
    with pytest.raises(TooManyArguments):
        ArgumentStream(["x"]).assert_no_arguments()


@pytest.mark.parametrize(
    "raw, kind",
    [
        ("--", RawKind.SEPARATOR),
        ("--name", RawKind.LONG_FLAG),
        ("-abc", RawKind.SHORT_FLAG),
        ("value", RawKind.POSITIONAL),
        ("", RawKind.POSITIONAL),
    ],
)
def test_classify(raw, kind):
    assert RawKind.classify(raw) is kind
