import pytest

from argp import Command, CommandInfo, SchemaError, SubCommands
from argp.parser import ArgumentAction, Optionality


@pytest.mark.parametrize(
    "flags, kwargs",
    [
        ((), {}),
        (("-h",), {}),
        (("--help",), {}),
        (("help",), {}),
        (("-a", "-b"), {}),
        (("--aa", "--bb"), {}),
        (("-abc",), {}),
        (("--Upper",), {}),
        (("--under_score",), {}),
        (("a", "b"), {}),
        (("a", "--b"), {}),
        (("-f",), {"dest": "1abc"}),
        (("-f",), {"action": "store_false"}),
        (("-f",), {"action": "store_true", "required": True}),
        (("-f",), {"action": "store_true", "default": True}),
        (("-f",), {"action": "count", "nargs": "?"}),
        (("-f",), {"required": True, "default": "x"}),
        (("-f",), {"nargs": "*"}),
        (("-f",), {"greedy": True}),
        (("-f",), {"action": "append", "required": True}),
        (("-f",), {"action": "append", "default": ["x"]}),
        (("-f",), {"default": "x", "default_factory": lambda: "y"}),
        (("-f",), {"default_factory": "not callable"}),
        (("-f",), {"type": 5}),
        (("-f",), {"is_global": True, "dest": "help"}),
        (("a",), {"action": "append"}),
        (("a",), {"nargs": "+"}),
        (("a",), {"is_global": True}),
        (("a",), {"nargs": "?", "required": True}),
        (("a",), {"nargs": "*", "default": ["x"]}),
        (("a",), {"greedy": True, "required": True}),
    ],
)
def test_invalid_arguments(flags, kwargs):
    command = Command()
    with pytest.raises(SchemaError):
        command.add_argument(*flags, **kwargs)


def test_duplicate_flags_and_dests():
    command = Command()
    command.add_argument("-f", "--force", action="store_true")

    with pytest.raises(SchemaError, match="already"):
        command.add_argument("-f", "--fast", action="store_true")

    with pytest.raises(SchemaError, match="already defined"):
        command.add_argument("--other", dest="force")

    with pytest.raises(SchemaError, match="already defined"):
        command.add_subcommands(Command(name="sub"), dest="force")


@pytest.mark.parametrize(
    "kwargs, expected",
    [
        ({}, Optionality.OPTIONAL),
        ({"required": True}, Optionality.REQUIRED),
        ({"default": "x"}, Optionality.DEFAULTED),
        ({"default_factory": list}, Optionality.DEFAULTED),
        ({"action": "append"}, Optionality.REPEATING),
        ({"action": "store_true"}, Optionality.OPTIONAL),
    ],
)
def test_option_optionality(kwargs, expected):
    argument = Command().add_argument("--value", **kwargs)
    assert argument.optionality is expected


@pytest.mark.parametrize(
    "kwargs, expected",
    [
        ({}, Optionality.REQUIRED),
        ({"nargs": "?"}, Optionality.OPTIONAL),
        ({"default": "x"}, Optionality.DEFAULTED),
        ({"nargs": "?", "default": "x"}, Optionality.DEFAULTED),
        ({"nargs": "*"}, Optionality.REPEATING),
        ({"greedy": True}, Optionality.GREEDY),
    ],
)
def test_positional_optionality(kwargs, expected):
    argument = Command().add_argument("value", **kwargs)
    assert argument.positional
    assert argument.optionality is expected


def test_typing_constructs_are_valid_types():
    from typing import Literal

    command = Command()
    command.add_argument("--mode", type=Literal["dev", "prod"])
    command.add_argument("--number", type=int | float)
    assert command.from_args("cmd", ["--mode", "dev", "--number", "1.5"]).number == 1.5


def test_action_enum_accepted():
    argument = Command().add_argument("-v", action=ArgumentAction.COUNT)
    assert argument.action is ArgumentAction.COUNT


def test_subcommands_declared_once():
    command = Command()
    command.add_subcommands(Command(name="one"))
    with pytest.raises(SchemaError):
        command.add_subcommands(Command(name="two"))


def test_subcommand_dests_must_differ():
    with pytest.raises(SchemaError):
        Command().add_subcommands(Command(name="one"), dest="same", name_dest="same")


@pytest.mark.parametrize(
    "commands",
    [
        [Command()],
        [Command(name="help")],
        [Command(name="one"), Command(name="one")],
        ["one"],
    ],
)
def test_invalid_subcommands(commands):
    with pytest.raises(SchemaError):
        SubCommands(*commands)


def test_invalid_dynamic_subcommand():
    class NotDynamic:
        def commands(self):
            return [CommandInfo("x")]

    with pytest.raises(SchemaError):
        SubCommands(Command(name="one"), dynamic=NotDynamic())
