import pytest

from argp import Command, HelpSignal, OptionsAfterHelpError

MAIN_HELP = (
    "Usage: cmdname <command> [<args>]\n"
    "\n"
    "A type for testing `--help`/`help`\n"
    "\n"
    "Options:\n"
    "  -h, --help  Show this help message and exit.\n"
    "\n"
    "Commands:\n"
    "  first       First subcommmand for testing `help`.\n"
)

FIRST_HELP = (
    "Usage: cmdname first <command> [<args>]\n"
    "\n"
    "First subcommmand for testing `help`.\n"
    "\n"
    "Options:\n"
    "  -h, --help  Show this help message and exit.\n"
    "\n"
    "Commands:\n"
    "  second      Second subcommand for testing `help`.\n"
)

SECOND_HELP = (
    "Usage: cmdname first second\n"
    "\n"
    "Second subcommand for testing `help`.\n"
    "\n"
    "Options:\n"
    "  -h, --help  Show this help message and exit.\n"
)


def get_command() -> Command:
    second = Command(name="second", description="Second subcommand for testing `help`.")
    first = Command(name="first", description="First subcommmand for testing `help`.")
    first.add_subcommands(second)
    command = Command(name="cmdname", description="A type for testing `--help`/`help`")
    command.add_subcommands(first)
    return command


@pytest.mark.parametrize(
    "args, expected",
    [
        (["help"], MAIN_HELP),
        (["--help"], MAIN_HELP),
        (["-h"], MAIN_HELP),
        (["help", "first"], FIRST_HELP),
        (["first", "help"], FIRST_HELP),
        (["first", "--help"], FIRST_HELP),
        (["first", "help", "second"], SECOND_HELP),
        (["help", "first", "second"], SECOND_HELP),
        (["first", "second", "-h"], SECOND_HELP),
    ],
)
def test_help_keyword(args, expected):
    with pytest.raises(HelpSignal) as excinfo:
        get_command().from_args(["cmdname"], args)
    assert excinfo.value.help.generate() == expected
    assert str(excinfo.value.help) == expected


def test_help_skips_requirement_checks():
    command = Command(description="Woot")
    command.add_argument("-s", "--scribble", required=True)
    command.add_argument("a")

    with pytest.raises(HelpSignal):
        command.from_args("cmd", ["--help"])


def test_help_signal_is_not_an_exception():
    with pytest.raises(HelpSignal) as excinfo:
        get_command().from_args(["cmdname"], ["help"])
    assert not isinstance(excinfo.value, Exception)
    assert excinfo.value.help.command_name == ["cmdname"]


def test_options_after_help_keyword():
    with pytest.raises(OptionsAfterHelpError) as excinfo:
        get_command().from_args(["cmdname"], ["help", "--foo", "bar"])
    assert str(excinfo.value) == "Trailing options are not allowed after `help`."
