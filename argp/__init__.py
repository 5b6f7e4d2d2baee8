"""
Argp CLI Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .exceptions import (
    ArgpError,
    CommandArgumentError,
    ConfigError,
    DuplicateOptionError,
    MissingArgValueError,
    MissingRequirements,
    MissingRequirementsError,
    OptionsAfterHelpError,
    ParseArgumentError,
    SchemaError,
    UnknownArgumentError,
)
from .help import CommandInfo, Help, HelpStyle, OptionArgInfo
from .main import cargo_from_env, from_env
from .parser import Argument, ArgumentAction, Command, Optionality, SubCommands
from .protocols import DynamicSubCommand, GlobalOptionScope
from .signals import HelpSignal

logger = logging.getLogger("argp")

__version__ = "0.1.0"

__all__ = [
    "ArgpError",
    "Argument",
    "ArgumentAction",
    "Command",
    "CommandArgumentError",
    "CommandInfo",
    "ConfigError",
    "DuplicateOptionError",
    "DynamicSubCommand",
    "GlobalOptionScope",
    "Help",
    "HelpSignal",
    "HelpStyle",
    "MissingArgValueError",
    "MissingRequirements",
    "MissingRequirementsError",
    "OptionArgInfo",
    "Optionality",
    "OptionsAfterHelpError",
    "ParseArgumentError",
    "SchemaError",
    "SubCommands",
    "UnknownArgumentError",
    "cargo_from_env",
    "from_env",
]
