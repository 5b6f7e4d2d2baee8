"""
Argp CLI Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import json
import logging
import os
import sys
from argparse import Namespace
from dataclasses import asdict, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Literal, Sequence

from argp.config import loader
from argp.console import console, error_console
from argp.exceptions import ConfigError
from argp.main import from_env
from argp.parser import Command
from argp.utils import setup_logging


def find_argp_schema() -> Path | None:
    """An explicit $ARGP_SCHEMA is returned even if missing so the loader reports it."""
    if env_schema := os.environ.get("ARGP_SCHEMA"):
        return Path(env_schema)
    candidates = [
        Path.cwd() / "argp.yaml",
        Path.cwd() / "argp.toml",
        Path.cwd() / ".argp.yaml",
        Path.cwd() / ".argp.toml",
    ]
    return next((p for p in candidates if p.is_file()), None)


def get_command() -> Command:
    command = Command(
        name="argp",
        description=(
            "Parse arguments against an Argp schema file and print the result as JSON."
        ),
        footer=[
            "Arguments after the first one are passed to the schema verbatim. Use\n"
            "`{command_name} -- --help` to show the help of the schema itself.",
            "The schema defaults to $ARGP_SCHEMA, then argp.yaml or argp.toml in the\n"
            "current directory.",
        ],
    )
    command.add_argument(
        "-s",
        "--schema",
        type=Path,
        arg_name="file",
        help="YAML or TOML file describing the command to parse.",
    )
    command.add_argument(
        "--prog",
        arg_name="name",
        help="Command name shown in help and errors. Defaults to the schema name.",
    )
    command.add_argument(
        "--log-mode",
        type=Literal["cli", "json"],
        arg_name="mode",
        help="Log output format, `cli` or `json`. Defaults to $ARGP_LOG_MODE.",
    )
    command.add_argument(
        "-v",
        "--verbose",
        action="count",
        help="Log more. Repeat for debug output.",
    )
    command.add_argument("args", greedy=True)
    return command


def to_jsonable(value: Any) -> Any:
    """Convert a parse result into plain JSON values."""
    if isinstance(value, Namespace):
        return {key: to_jsonable(item) for key, item in vars(value).items()}
    if is_dataclass(value) and not isinstance(value, type):
        return to_jsonable(asdict(value))
    if isinstance(value, dict):
        return {str(key): to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    if isinstance(value, Enum):
        return to_jsonable(value.value)
    if isinstance(value, bytes):
        return os.fsdecode(value)
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    return str(value)


def main(argv: Sequence[str | bytes] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    options = from_env(get_command(), ["argp", *argv])

    levels = [logging.WARNING, logging.INFO, logging.DEBUG]
    setup_logging(
        options.log_mode,
        console_log_level=levels[min(options.verbose, len(levels) - 1)],
    )

    schema_path = options.schema or find_argp_schema()
    if schema_path is None:
        error_console.print(
            "No schema file given and none found.\nRun argp --help for more information.",
            markup=False,
        )
        return 1
    try:
        command, style = loader(schema_path)
    except ConfigError as error:
        error_console.print(str(error), markup=False)
        return 1

    prog = options.prog or command.name or schema_path.stem
    result = from_env(command, [prog, *options.args], style)
    console.print_json(json.dumps(to_jsonable(result)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
