# Argp CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ArgumentAction` and `Optionality`, the enums that describe how an
argument consumes tokens and how many values it accepts.

`ArgumentAction` follows the names of Python's `argparse` actions. Only the
actions that map onto the parser's slot kinds exist: value options (`store`,
`append`) and switches that never consume a value (`store_true`, `count`,
`store_bool_optional`).

Both enums accept shorthand aliases so schemas written in YAML or TOML can use
the vocabulary of the command line, e.g. `switch` or `repeating`.

Exports:
    - ArgumentAction: Enum of allowed actions for command arguments.
    - Optionality: Enum of value cardinalities for options and positionals.

Example:
    ArgumentAction("store_true") → ArgumentAction.STORE_TRUE
    ArgumentAction("switch")     → ArgumentAction.STORE_TRUE (via alias)
    ArgumentAction("repeating")  → ArgumentAction.APPEND
"""
from __future__ import annotations

from enum import Enum


class ArgumentAction(Enum):
    """
    Defines the action to be taken when the argument is encountered.

    Members:
        STORE: Store the single value that follows the option (default).
        APPEND: Append the value to a list each time the option is given.
        STORE_TRUE: Store `True` if the switch is present, `False` otherwise.
        COUNT: Count the number of occurrences, e.g. `-vvv` is 3.
        STORE_BOOL_OPTIONAL: Store `True` if the switch is present, `None` otherwise.

    Aliases:
        - "option" → "store"
        - "repeating" → "append"
        - "switch", "true" → "store_true"
        - "counter" → "count"
        - "optional" → "store_bool_optional"

    Example:
        ArgumentAction("switch") → ArgumentAction.STORE_TRUE
    """

    STORE = "store"
    APPEND = "append"
    STORE_TRUE = "store_true"
    COUNT = "count"
    STORE_BOOL_OPTIONAL = "store_bool_optional"

    @classmethod
    def choices(cls) -> list[ArgumentAction]:
        """Return a list of all argument actions."""
        return list(cls)

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "option": "store",
            "repeating": "append",
            "switch": "store_true",
            "true": "store_true",
            "counter": "count",
            "optional": "store_bool_optional",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> ArgumentAction:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower()
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    @property
    def is_switch(self) -> bool:
        """Whether the action never consumes a value token."""
        return self in (
            ArgumentAction.STORE_TRUE,
            ArgumentAction.COUNT,
            ArgumentAction.STORE_BOOL_OPTIONAL,
        )

    def __str__(self) -> str:
        """Return the string representation of the argument action."""
        return self.value


class Optionality(Enum):
    """
    How many values an argument accepts and what happens when none is given.

    Members:
        REQUIRED: Exactly one value must be given.
        OPTIONAL: At most one value; `None` when absent.
        DEFAULTED: At most one value; the default when absent.
        REPEATING: Any number of values, collected into a list.
        GREEDY: Positional only. Any number of values, and every token after
            the first one is captured verbatim, options and `--` included.
    """

    REQUIRED = "required"
    OPTIONAL = "optional"
    DEFAULTED = "defaulted"
    REPEATING = "repeating"
    GREEDY = "greedy"

    @property
    def is_repeating(self) -> bool:
        return self in (Optionality.REPEATING, Optionality.GREEDY)

    def __str__(self) -> str:
        return self.value
