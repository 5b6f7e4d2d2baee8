"""
Argp CLI Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .argument import Argument
from .argument_action import ArgumentAction, Optionality
from .command import Command, SubCommands

__all__ = [
    "Argument",
    "ArgumentAction",
    "Command",
    "Optionality",
    "SubCommands",
]
