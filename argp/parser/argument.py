# Argp CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `Argument` dataclass used by `Command` to represent individual
command-line parameters in a structured, introspectable format.

Each `Argument` instance describes one CLI input: its flags, its action and
cardinality, how its value is converted, its default and how it is presented
in usage and help text.

Arguments should be created using `Command.add_argument()` or defined in YAML
or TOML configurations, which validate the combination of settings. The help
fragments rendered here rely on that validation.

Key Attributes:
- `dest`: Name of the field in the parsed result
- `action`: `ArgumentAction` describing whether a value is consumed
- `optionality`: `Optionality` describing how many values are accepted
- `long` / `short`: Option flags (`--verbose`, `-v`); unset for positionals
- `arg_name`: Value placeholder for options, display name for positionals
- `type`: Type coercion or callable converter
- `default` / `default_factory`: Fallback value for defaulted arguments
- `is_global`: Whether descendant subcommands may set this option
- `hidden`: Parsed normally but left out of usage and help

Used By:
- `Command` slot construction and requirement checks
- Plain-text help generation
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from argp.help import OptionArgInfo
from argp.parser.argument_action import ArgumentAction, Optionality
from argp.parser.utils import coerce_token


@dataclass
class Argument:
    """
    Represents a command-line argument.

    Attributes:
        dest (str): The destination name for the argument.
        action (ArgumentAction): The action to be taken when the argument is encountered.
        optionality (Optionality): Cardinality of the argument's values.
        long (str | None): Long flag, e.g. `--scribble`. Always set for options.
        short (str | None): Short flag, e.g. `-s`.
        arg_name (str | None): Placeholder for the option value or positional name.
        type (Any): The type of the argument (e.g., str, int, float) or a callable
            that converts the argument value.
        default (Any): The default value if the argument is not provided.
        default_factory (Callable[[], Any] | None): Computes the default value.
        help (str): Help text for the argument.
        positional (bool): True if the argument is positional (no flags).
        is_global (bool): True if descendant subcommands may set the option.
        hidden (bool): True if the argument is left out of usage and help.
    """

    dest: str
    action: ArgumentAction = ArgumentAction.STORE
    optionality: Optionality = Optionality.OPTIONAL
    long: str | None = None
    short: str | None = None
    arg_name: str | None = None
    type: Any = str
    default: Any = None
    default_factory: Callable[[], Any] | None = None
    help: str = ""
    positional: bool = False
    is_global: bool = False
    hidden: bool = False

    @property
    def flags(self) -> tuple[str, ...]:
        """Option flags in short, long order."""
        return tuple(flag for flag in (self.short, self.long) if flag)

    @property
    def display_name(self) -> str:
        """Name used in error messages and missing-requirement reports."""
        if self.positional:
            return self.arg_name or self.dest.strip("_")
        return self.long or self.dest

    @property
    def value_name(self) -> str:
        if self.arg_name:
            return self.arg_name
        if self.long:
            return self.long[2:]
        return self.dest.strip("_")

    @property
    def required(self) -> bool:
        return self.optionality is Optionality.REQUIRED

    @property
    def greedy(self) -> bool:
        return self.optionality is Optionality.GREEDY

    def get_default(self) -> Any:
        """Return the default value, calling `default_factory` if one is set."""
        if self.default_factory is not None:
            return self.default_factory()
        return self.default

    def convert(self, token: str | bytes) -> Any:
        """Convert a raw token with the argument's type."""
        return coerce_token(token, self.type)

    def get_usage_text(self) -> str:
        """Get the usage-line fragment for the argument."""
        if self.hidden:
            return ""
        if self.positional:
            name = self.display_name
            if self.optionality is Optionality.REQUIRED:
                return f"<{name}>"
            if self.optionality is Optionality.REPEATING:
                return f"[<{name}...>]"
            if self.optionality is Optionality.GREEDY:
                return f"[{name}...]"
            return f"[<{name}>]"

        flag = self.short or self.long
        if self.action.is_switch:
            return f"[{flag}]"
        if self.optionality is Optionality.REPEATING:
            return f"[{flag} <{self.value_name}...>]"
        text = f"{flag} <{self.value_name}>"
        if self.optionality is Optionality.REQUIRED:
            return text
        return f"[{text}]"

    def get_names_text(self) -> str:
        """Get the left column of the argument's help entry."""
        if self.positional:
            if self.greedy:
                return ""
            return self.display_name
        text = f"{self.short}, " if self.short else "    "
        text += self.long or ""
        if not self.action.is_switch:
            text += f" <{self.value_name}>"
        return text

    def to_help_info(self) -> OptionArgInfo:
        return OptionArgInfo(
            usage=self.get_usage_text(),
            names=self.get_names_text(),
            description=self.help,
            is_global=self.is_global,
        )

    def __str__(self) -> str:
        flags = ", ".join(self.flags) or self.display_name
        return (
            f"Argument(dest={self.dest!r}, flags={flags!r}, action={self.action}, "
            f"optionality={self.optionality})"
        )
