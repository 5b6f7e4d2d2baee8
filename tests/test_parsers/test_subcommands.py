from argparse import Namespace

import pytest

from argp import (
    Command,
    CommandArgumentError,
    CommandInfo,
    DynamicSubCommand,
    MissingRequirementsError,
    SubCommands,
)


class ThreeFourFive:
    """Subcommands whose names are only known at runtime."""

    INFOS = [
        CommandInfo("three", "Third command"),
        CommandInfo("four", "Fourth command"),
        CommandInfo("five", "Fifth command"),
    ]

    def commands(self):
        return self.INFOS

    def try_from_args(self, command_name, args):
        if not command_name:
            raise CommandArgumentError("No command")
        description = next(
            (info.description for info in self.INFOS if info.name == command_name[-1]),
            None,
        )
        if description is None:
            return None
        if len(args) > 1:
            raise CommandArgumentError("Too many arguments")
        if not args:
            raise CommandArgumentError("Not enough arguments")
        return f"{description} got {args[0]!r}"


def get_top_level(**kwargs) -> Command:
    one = Command(name="one", description="First subcommand.")
    one.add_argument("--x", type=int, required=True, help="how many x")

    two = Command(name="two", description="Second subcommand.")
    two.add_argument("--fooey", action="store_true", help="whether to fooey")

    top = Command(description="Top-level command.")
    top.add_subcommands(one, two, dest="nested", dynamic=ThreeFourFive(), **kwargs)
    return top


def test_dynamic_subcommand_protocol():
    assert isinstance(ThreeFourFive(), DynamicSubCommand)


def test_static_subcommands():
    top = get_top_level()
    assert top.from_args("cmdname", ["one", "--x", "2"]) == Namespace(
        nested=Namespace(x=2)
    )
    assert top.from_args("cmdname", ["two", "--fooey"]) == Namespace(
        nested=Namespace(fooey=True)
    )


@pytest.mark.parametrize(
    "args, expected",
    [
        (["three", "beans"], "Third command got 'beans'"),
        (["four", "boulders"], "Fourth command got 'boulders'"),
        (["five", "gold rings"], "Fifth command got 'gold rings'"),
    ],
)
def test_dynamic_subcommands(args, expected):
    assert get_top_level().from_args("cmdname", args).nested == expected


def test_dynamic_subcommand_error():
    with pytest.raises(CommandArgumentError) as excinfo:
        get_top_level().from_args("cmdname", ["three", "a", "b"])
    assert excinfo.value == CommandArgumentError("Too many arguments")


def test_subcommand_name_dest():
    top = get_top_level(name_dest="name")
    args = top.from_args("cmdname", ["four", "x"])
    assert args.name == "four"
    assert args.nested == "Fourth command got 'x'"


def test_missing_required_subcommand():
    with pytest.raises(MissingRequirementsError) as excinfo:
        get_top_level().from_args("cmdname", [])
    assert excinfo.value.requirements.subcommands == [
        "one",
        "two",
        "three",
        "four",
        "five",
    ]
    assert str(excinfo.value) == (
        "One of the following subcommands must be present:\n"
        "    help\n"
        "    one\n"
        "    two\n"
        "    three\n"
        "    four\n"
        "    five\n"
    )


def test_optional_subcommand():
    top = get_top_level(required=False)
    assert top.from_args("cmdname", []) == Namespace(nested=None)


def test_subcommand_errors_propagate():
    with pytest.raises(MissingRequirementsError) as excinfo:
        get_top_level().from_args("cmdname", ["one"])
    assert excinfo.value.requirements.options == ["--x"]


def test_nested_subcommands():
    leaf = Command(name="leaf", description="Leaf.")
    leaf.add_argument("value")
    middle = Command(name="middle", description="Middle.")
    middle.add_subcommands(leaf)
    top = Command()
    top.add_subcommands(middle)

    args = top.from_args("cmd", ["middle", "leaf", "v"])
    assert args.command.command.value == "v"


def test_subcommand_does_not_panic():
    sub = Command(name="one", description="First subcommand.")
    sub.add_argument("x", type=int, help="how many x")
    two = Command(name="two", description="Second subcommand.")
    two.add_argument("--fooey", action="store_true")
    subcommands = SubCommands(sub, two)

    with pytest.raises(CommandArgumentError) as excinfo:
        subcommands.from_args([], ["5"])
    assert excinfo.value == CommandArgumentError("no subcommand name")

    with pytest.raises(CommandArgumentError) as excinfo:
        subcommands.from_args(["fooey"], ["5"])
    assert excinfo.value == CommandArgumentError("no subcommand matched")

    assert subcommands.from_args(["one"], ["5"]) == Namespace(x=5)


def test_subcommand_short_description():
    sub = Command(name="sub", description="\nFirst line.\nMore details.")
    assert SubCommands(sub).infos() == [CommandInfo("sub", "First line.")]
