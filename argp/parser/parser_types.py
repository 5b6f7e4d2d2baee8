# Argp CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Argument state models for Argp's command-line parser.

Every argument of a command level gets one slot for the duration of a parse.
Slots are the only mutable parse state: option tables and the positional
sequencer hold references to them, and global options of a parent level are
filled through the same slot objects, so values set by a subcommand are seen
by the parent once control returns.

Contents:
- `ValueSlot`: Accumulates converted values for options and positionals.
- `FlagSlot`: Records switches, which never consume a value token.
- `create_slot`: Build the right slot kind for an `Argument`.
"""
from __future__ import annotations

from typing import Any

from argp.exceptions import DuplicateOptionError, ParseArgumentError
from argp.parser.argument import Argument
from argp.parser.argument_action import ArgumentAction, Optionality
from argp.parser.utils import token_display


class ValueSlot:
    """Holds the converted value(s) of a value-taking option or positional."""

    def __init__(self, argument: Argument) -> None:
        self.argument = argument
        self.values: list[Any] = []

    @property
    def filled(self) -> bool:
        return bool(self.values)

    def fill(self, arg: str, token: str | bytes) -> None:
        """
        Convert and store one value.

        Args:
            arg (str): The option token as typed, or the positional name.
            token (str | bytes): The raw value token.

        Raises:
            DuplicateOptionError: If the slot is full and not repeating.
            ParseArgumentError: If the value cannot be converted.
        """
        if self.values and not self.argument.optionality.is_repeating:
            raise DuplicateOptionError(arg)
        try:
            value = self.argument.convert(token)
        except Exception as error:
            raise ParseArgumentError(arg, token_display(token), str(error)) from error
        self.values.append(value)

    def finalize(self) -> Any:
        optionality = self.argument.optionality
        if optionality.is_repeating:
            return list(self.values)
        if self.values:
            return self.values[0]
        if optionality is Optionality.DEFAULTED:
            return self.argument.get_default()
        return None

    def __repr__(self) -> str:
        return f"ValueSlot(dest={self.argument.dest!r}, values={self.values!r})"


class FlagSlot:
    """Holds the state of a switch."""

    def __init__(self, argument: Argument) -> None:
        self.argument = argument
        self.count = 0

    @property
    def filled(self) -> bool:
        return self.count > 0

    def set_flag(self) -> None:
        self.count += 1

    def finalize(self) -> Any:
        action = self.argument.action
        if action is ArgumentAction.COUNT:
            return self.count
        if action is ArgumentAction.STORE_BOOL_OPTIONAL:
            return True if self.count else None
        return self.count > 0

    def __repr__(self) -> str:
        return f"FlagSlot(dest={self.argument.dest!r}, count={self.count})"


Slot = ValueSlot | FlagSlot


def create_slot(argument: Argument) -> Slot:
    if argument.action.is_switch:
        return FlagSlot(argument)
    return ValueSlot(argument)
