# Argp CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by the Argp parser.

These exceptions separate the two kinds of failure the parser can report:
problems with the schema itself, detected while a `Command` is being built or
loaded from a configuration file, and problems with the command line being
parsed, detected while tokens are consumed.

All exceptions inherit from `ArgpError`, the base exception for the package.

Exception Hierarchy:
- ArgpError
    ├── SchemaError
    ├── ConfigError
    └── CommandArgumentError
            ├── DuplicateOptionError
            ├── MissingArgValueError
            ├── MissingRequirementsError
            ├── OptionsAfterHelpError
            ├── ParseArgumentError
            └── UnknownArgumentError

`CommandArgumentError` doubles as the open-ended "other" parse error, e.g. when a
subcommand set is dispatched without any command name.

Parse errors compare equal when they are of the same kind and render the same
message, which keeps test assertions short.
"""
from __future__ import annotations

from dataclasses import dataclass, field


class ArgpError(Exception):
    """Base exception for the Argp parser."""


class SchemaError(ArgpError):
    """Exception raised when an argument or subcommand definition is invalid."""


class ConfigError(ArgpError):
    """Exception raised when a schema configuration file cannot be loaded."""


class CommandArgumentError(ArgpError):
    """Exception raised when the command line does not match the schema."""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CommandArgumentError):
            return NotImplemented
        return type(self) is type(other) and str(self) == str(other)

    def __hash__(self) -> int:
        return hash((type(self).__name__, str(self)))


class DuplicateOptionError(CommandArgumentError):
    """Exception raised when a non-repeating option is given twice."""

    def __init__(self, option: str):
        self.option = option
        super().__init__(f"duplicate values provided for option '{option}'")


class MissingArgValueError(CommandArgumentError):
    """Exception raised when an option expecting a value is the last token."""

    def __init__(self, option: str):
        self.option = option
        super().__init__(f"No value provided for option '{option}'.")


class OptionsAfterHelpError(CommandArgumentError):
    """Exception raised when an option follows the `help` keyword."""

    def __init__(self):
        super().__init__("Trailing options are not allowed after `help`.")


class ParseArgumentError(CommandArgumentError):
    """Exception raised when a value cannot be converted to the argument type."""

    def __init__(self, arg: str, value: str, msg: str):
        self.arg = arg
        self.value = value
        self.msg = msg
        super().__init__(f"Error parsing argument '{arg}' with value '{value}': {msg}")


class UnknownArgumentError(CommandArgumentError):
    """Exception raised when a token matches no option, positional or subcommand."""

    def __init__(self, arg: str):
        self.arg = arg
        super().__init__(f"Unrecognized argument: {arg}")


_NEWLINE_INDENT = "\n    "


@dataclass
class MissingRequirements:
    """
    Collects every unmet requirement of one command level.

    Positional arguments are recorded by name, options by their long name and the
    subcommand group, when required and not selected, once as the full list of
    subcommand names.
    """

    positional_args: list[str] = field(default_factory=list)
    options: list[str] = field(default_factory=list)
    subcommands: list[str] | None = None

    def missing_positional_arg(self, name: str) -> None:
        self.positional_args.append(name)

    def missing_option(self, name: str) -> None:
        self.options.append(name)

    def missing_subcommands(self, names: list[str]) -> None:
        self.subcommands = list(names)

    def __bool__(self) -> bool:
        return bool(
            self.positional_args or self.options or self.subcommands is not None
        )

    def raise_on_any(self) -> None:
        """Raise `MissingRequirementsError` if anything was recorded."""
        if self:
            raise MissingRequirementsError(self)

    def __str__(self) -> str:
        sections: list[str] = []
        if self.positional_args:
            sections.append(
                "Required positional arguments not provided:"
                + "".join(_NEWLINE_INDENT + name for name in self.positional_args)
            )
        if self.options:
            sections.append(
                "Required options not provided:"
                + "".join(_NEWLINE_INDENT + name for name in self.options)
            )
        if self.subcommands is not None:
            sections.append(
                "One of the following subcommands must be present:"
                + "".join(_NEWLINE_INDENT + name for name in ["help", *self.subcommands])
            )
        return "\n".join(sections) + "\n"


class MissingRequirementsError(CommandArgumentError):
    """Exception raised when required arguments or a subcommand were not given."""

    def __init__(self, requirements: MissingRequirements):
        self.requirements = requirements
        super().__init__(str(requirements))
