import os
from argparse import ArgumentTypeError, Namespace
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path

import pytest

from argp import (
    Command,
    CommandArgumentError,
    DuplicateOptionError,
    MissingArgValueError,
    MissingRequirements,
    MissingRequirementsError,
    ParseArgumentError,
    UnknownArgumentError,
)


def get_goup() -> Command:
    command = Command(description="Reach new heights.")
    command.add_argument("-j", "--jump", action="store_true", help="whether or not to jump")
    command.add_argument("--height", type=int, default=1, help="how high to go")
    command.add_argument("--pilot-nickname", help="an optional nickname for the pilot")
    return command


def test_str():
    """Test the string representation of Command."""
    command = Command(name="test")
    assert (
        str(command)
        == "Command(name='test', args=0, flags=0, positional=0, required=0, subcommands=0)"
    )

    command.add_argument("test", help="Test argument")
    assert (
        str(command)
        == "Command(name='test', args=1, flags=0, positional=1, required=1, subcommands=0)"
    )

    command.add_argument("-o", "--optional", help="Optional argument")
    command.add_argument("--flag", help="Flag argument", required=True)
    command.add_subcommands(Command(name="sub"))
    assert (
        str(command)
        == "Command(name='test', args=3, flags=3, positional=1, required=2, subcommands=1)"
    )
    assert repr(command) == str(command)


def test_basic_example():
    args = get_goup().from_args(["goup"], ["--jump", "--height", "5"])
    assert args == Namespace(jump=True, height=5, pilot_nickname=None)


def test_no_args():
    args = get_goup().from_args(["goup"], [])
    assert args == Namespace(jump=False, height=1, pilot_nickname=None)


def test_short_flag_and_optional_value():
    args = get_goup().from_args("goup", ["-j", "--pilot-nickname", "Wes"])
    assert args.jump is True
    assert args.pilot_nickname == "Wes"


def test_long_name_derived_from_dest():
    command = Command()
    argument = command.add_argument("-d", dest="dry_run", action="store_true")
    assert argument.long == "--dry-run"
    assert command.from_args("cmd", ["--dry-run"]).dry_run is True
    assert command.from_args("cmd", ["-d"]).dry_run is True


def test_long_alphanumeric():
    command = Command(description="Short description")
    command.add_argument("--ac97", required=True, help="fooey")
    assert command.from_args("cmdname", ["--ac97", "bar"]).ac97 == "bar"


def test_factory_dataclass():
    @dataclass
    class GoUp:
        jump: bool
        height: int
        pilot_nickname: str | None

    command = Command(factory=GoUp)
    command.add_argument("-j", "--jump", action="store_true")
    command.add_argument("--height", type=int, default=1)
    command.add_argument("--pilot-nickname")

    assert command.from_args("goup", ["-j"]) == GoUp(True, 1, None)


def test_repeating_option():
    command = Command(description="Woot")
    command.add_argument("-n", action="append", type=int, help="fooey")

    assert command.from_args("cmd", []).n == []
    assert command.from_args("cmd", ["-n", "1", "--n", "2"]).n == [1, 2]


def test_count_switch():
    command = Command()
    command.add_argument("-v", "--verbose", action="count")

    assert command.from_args("cmd", []).verbose == 0
    assert command.from_args("cmd", ["-v", "--verbose", "-v"]).verbose == 3


def test_store_bool_optional_switch():
    command = Command()
    command.add_argument("--color", action="store_bool_optional")

    assert command.from_args("cmd", []).color is None
    assert command.from_args("cmd", ["--color"]).color is True


def test_default_factory():
    calls = []

    def make_default():
        calls.append(1)
        return "computed"

    command = Command()
    command.add_argument("--value", default_factory=make_default)

    assert command.from_args("cmd", ["--value", "given"]).value == "given"
    assert calls == []
    assert command.from_args("cmd", []).value == "computed"
    assert calls == [1]


def test_hidden_arguments_still_parse():
    command = Command()
    command.add_argument("--secret", hidden=True)
    assert command.from_args("cmd", ["--secret", "x"]).secret == "x"


def test_missing_arg_value():
    command = Command(description="Woot")
    command.add_argument("-n", required=True, help="fooey")

    with pytest.raises(MissingArgValueError) as excinfo:
        command.from_args("program-name", ["--n"])
    assert excinfo.value == MissingArgValueError("--n")
    assert str(excinfo.value) == "No value provided for option '--n'."


def test_duplicate_option():
    with pytest.raises(DuplicateOptionError) as excinfo:
        get_goup().from_args("goup", ["--height", "1", "--height", "2"])
    assert excinfo.value == DuplicateOptionError("--height")


def test_parse_error():
    with pytest.raises(ParseArgumentError) as excinfo:
        get_goup().from_args("goup", ["--height", "high"])
    assert excinfo.value.arg == "--height"
    assert excinfo.value.value == "high"
    assert str(excinfo.value).startswith(
        "Error parsing argument '--height' with value 'high': "
    )


def test_parse_error_from_decimal():
    command = Command()
    command.add_argument("--amount", type=Decimal)

    with pytest.raises(ParseArgumentError) as excinfo:
        command.from_args("cmd", ["--amount", "abc"])
    assert excinfo.value.arg == "--amount"
    assert excinfo.value.value == "abc"
    assert command.from_args("cmd", ["--amount", "1.50"]).amount == Decimal("1.50")


def parse_port(value: str) -> int:
    if not value.isdigit():
        raise ArgumentTypeError("not a port")
    return int(value)


def test_parse_error_from_custom_converter():
    command = Command()
    command.add_argument("port", type=parse_port)

    with pytest.raises(ParseArgumentError) as excinfo:
        command.from_args("cmd", ["http"])
    assert excinfo.value.arg == "port"
    assert excinfo.value.value == "http"
    assert excinfo.value.msg == "not a port"
    assert command.from_args("cmd", ["8080"]).port == 8080


def test_unknown_arguments():
    with pytest.raises(UnknownArgumentError) as excinfo:
        get_goup().from_args("goup", ["--nope"])
    assert str(excinfo.value) == "Unrecognized argument: --nope"

    with pytest.raises(UnknownArgumentError) as excinfo:
        get_goup().from_args("goup", ["extra"])
    assert str(excinfo.value) == "Unrecognized argument: extra"


def test_missing_required_option():
    command = Command()
    command.add_argument("-s", "--scribble", required=True)
    command.add_argument("--other", required=True)

    with pytest.raises(MissingRequirementsError) as excinfo:
        command.from_args("cmd", ["--other", "x"])
    assert excinfo.value == MissingRequirementsError(
        MissingRequirements(options=["--scribble"])
    )
    assert isinstance(excinfo.value, CommandArgumentError)


def test_handles_args_with_invalid_utf8():
    command = Command(description="Goofy thing.")
    command.add_argument("-m", "--msg", type=bytes, required=True, help="message")
    command.add_argument("path", type=Path, help="path")

    msg = b"fo\x80o"
    path = b"/fo\x80o"
    args = command.from_args(["cmdname"], ["-m", msg, path])
    assert args.msg == msg
    assert args.path == Path(os.fsdecode(path))


def test_invalid_utf8_for_text_argument():
    command = Command()
    command.add_argument("value")

    with pytest.raises(ParseArgumentError) as excinfo:
        command.from_args("cmd", [b"fo\x80o"])
    assert excinfo.value.arg == "value"
    assert excinfo.value.msg == "not a valid UTF-8 string"
