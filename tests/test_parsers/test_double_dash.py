from argparse import Namespace

from argp import Command


def get_command() -> Command:
    command = Command()
    command.add_argument("-f", "--force", action="store_true")
    command.add_argument("values", nargs="*")
    return command


def test_double_dash_ends_options():
    args = get_command().from_args("cmd", ["--", "-f", "x"])
    assert args == Namespace(force=False, values=["-f", "x"])


def test_options_before_double_dash():
    args = get_command().from_args("cmd", ["-f", "a", "--", "--force"])
    assert args == Namespace(force=True, values=["a", "--force"])


def test_help_after_double_dash_is_a_value():
    args = get_command().from_args("cmd", ["--", "--help", "-h", "help"])
    assert args.values == ["--help", "-h", "help"]


def test_second_double_dash_is_a_value():
    args = get_command().from_args("cmd", ["--", "--"])
    assert args.values == ["--"]
