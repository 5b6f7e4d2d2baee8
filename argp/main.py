# Argp CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Entry points that parse the process arguments and exit on help or error.

`from_env()` is what a program calls from its `main()`:

    args = from_env(command)

It returns the parse result. When help is requested the help message is printed
to stdout and the process exits with status 0. When the arguments are invalid
the error is printed to stderr, followed by a hint to run `--help`, and the
process exits with status 1.

`cargo_from_env()` does the same for programs started through a driver that
passes the subcommand name as the first argument, e.g. `cargo <name> ...`.
"""
from __future__ import annotations

import shutil
import sys
from typing import Any, Sequence

from argp.console import console, error_console
from argp.exceptions import CommandArgumentError
from argp.help import HelpStyle
from argp.logger import logger
from argp.parser.command import Command
from argp.signals import HelpSignal
from argp.utils import basename


def _terminal_width() -> int | None:
    if not sys.stdout.isatty():
        return None
    return shutil.get_terminal_size().columns


def _parse_or_exit(
    command: Command,
    command_name: str,
    args: Sequence[str | bytes],
    style: HelpStyle | None,
    hint: str,
) -> Any:
    try:
        return command.from_args([command_name], args)
    except HelpSignal as signal:
        console.print(
            signal.help.generate(style, _terminal_width()), end="", markup=False
        )
        sys.exit(0)
    except CommandArgumentError as error:
        logger.debug("Parsing failed: %r", error)
        error_console.print(f"{error}\n{hint}", markup=False)
        sys.exit(1)


def from_env(
    command: Command,
    argv: Sequence[str | bytes] | None = None,
    style: HelpStyle | None = None,
) -> Any:
    """
    Parse the process arguments with `command`.

    Args:
        command (Command): The top-level command schema.
        argv (Sequence[str | bytes] | None): Arguments including the program
            name. Defaults to `sys.argv`.
        style (HelpStyle | None): Style used to render help.

    Returns:
        Any: The parse result.
    """
    argv = list(sys.argv if argv is None else argv)
    if not argv:
        error_console.print("No program name, argv is empty", markup=False)
        sys.exit(1)
    command_name = basename(argv[0])
    return _parse_or_exit(
        command,
        command_name,
        argv[1:],
        style,
        f"Run {command_name} --help for more information.",
    )


def cargo_from_env(
    command: Command,
    argv: Sequence[str | bytes] | None = None,
    style: HelpStyle | None = None,
) -> Any:
    """
    Parse the process arguments of a program run as `<driver> <name> ...`.

    The second element of `argv` is used as the command name and skipped.
    """
    argv = list(sys.argv if argv is None else argv)
    if len(argv) < 2:
        error_console.print("No command name, argv is too short", markup=False)
        sys.exit(1)
    command_name = basename(argv[1])
    return _parse_or_exit(
        command,
        command_name,
        argv[2:],
        style,
        "Run --help for more information.",
    )
