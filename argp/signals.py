# Argp CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines flow control signals raised by the Argp parser.

A help request is not an error: parsing stops early and the caller is expected
to print the rendered help and exit successfully. It is therefore raised as a
signal rather than a `CommandArgumentError`.

All signals inherit from `FlowSignal`, which is a subclass of `BaseException`
to ensure they bypass standard `except Exception` blocks.

Signals:
- HelpSignal: Help was requested with `--help`, `-h` or `help`.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from argp.help import Help


class FlowSignal(BaseException):
    """Base class for all flow control signals in Argp.

    These are not errors. They end parsing early with an outcome the caller
    should present to the user.
    """


class HelpSignal(FlowSignal):
    """Raised to display help information for the command level that requested it."""

    def __init__(self, help: Help, message: str = "Help signal received."):
        super().__init__(message)
        self.help = help
