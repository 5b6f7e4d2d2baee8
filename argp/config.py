# Argp CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Configuration loader for Argp command schemas.

A schema file describes the top-level command, its arguments and nested
subcommands in YAML or TOML, plus an optional `help_style` table:

    name: deploy
    description: Deploy {command_name} targets.
    arguments:
      - flags: ["-v", "--verbose"]
        action: count
      - flags: ["--region"]
        global: true
        default: eu-west-1
    subcommands:
      - name: push
        description: Push an image.
        arguments:
          - flags: ["image"]
    help_style:
      wrap_width_range: [60, 100]

Argument `type` is one of `str`, `int`, `float`, `bool`, `path`, `datetime`,
`bytes`, or a dotted import path to a converter. `dynamic` names a dotted import
path to a `DynamicSubCommand` class or instance.
"""
from __future__ import annotations

import importlib
from datetime import datetime
from pathlib import Path
from typing import Any

import toml
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from argp.exceptions import ConfigError, SchemaError
from argp.help import HelpStyle
from argp.logger import logger
from argp.parser.command import Command
from argp.protocols import DynamicSubCommand

MAX_DEPTH = 16

TYPE_ALIASES: dict[str, Any] = {
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
    "path": Path,
    "datetime": datetime,
    "bytes": bytes,
}


def import_object(dotted_path: str) -> Any:
    """Dynamically imports an object from a dotted path like 'my.module.func'."""
    module_path, _, attr = dotted_path.rpartition(".")
    if not module_path:
        raise ConfigError(f"Invalid import path: {dotted_path}")
    try:
        module = importlib.import_module(module_path)
    except ModuleNotFoundError as error:
        logger.error("Failed to import module '%s': %s", module_path, error)
        raise ConfigError(
            f"Could not import '{dotted_path}': {error}. Ensure the module is "
            "installed and discoverable via PYTHONPATH."
        ) from error
    try:
        return getattr(module, attr)
    except AttributeError as error:
        logger.error(
            "Module '%s' does not have attribute '%s': %s", module_path, attr, error
        )
        raise ConfigError(
            f"Module '{module_path}' has no attribute '{attr}': {error}"
        ) from error


def resolve_type(name: str) -> Any:
    if name in TYPE_ALIASES:
        return TYPE_ALIASES[name]
    converter = import_object(name)
    if not callable(converter):
        raise ConfigError(f"Type '{name}' is not callable")
    return converter


def resolve_dynamic(dotted_path: str) -> DynamicSubCommand:
    provider = import_object(dotted_path)
    if isinstance(provider, type):
        provider = provider()
    if not isinstance(provider, DynamicSubCommand):
        raise ConfigError(
            f"'{dotted_path}' must provide commands() and try_from_args()"
        )
    return provider


class RawArgument(BaseModel):
    """Raw argument model for Argp schema configuration."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    flags: list[str]
    dest: str | None = None
    action: str = "store"
    nargs: str | None = None
    type: str = "str"
    default: Any = None
    required: bool = False
    help: str = ""
    arg_name: str | None = None
    greedy: bool = False
    is_global: bool = Field(default=False, alias="global")
    hidden: bool = False

    @field_validator("flags")
    @classmethod
    def validate_flags(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("flags must contain at least one name")
        return value


class RawCommand(BaseModel):
    """Raw command model for Argp schema configuration."""

    model_config = ConfigDict(extra="forbid")

    name: str = ""
    description: str = ""
    footer: str | list[str] = ""
    arguments: list[RawArgument] = Field(default_factory=list)
    subcommands: list[RawCommand] = Field(default_factory=list)
    subcommands_required: bool = True
    subcommand_dest: str = "command"
    name_dest: str | None = None
    dynamic: str | None = None


class RawHelpStyle(BaseModel):
    """Raw help style model for Argp schema configuration."""

    model_config = ConfigDict(extra="forbid")

    wrap_width_range: tuple[int, int] = (80, 80)
    indent: int = 2
    description_min_indent: int = 8
    description_max_indent: int = 30

    @field_validator("wrap_width_range")
    @classmethod
    def validate_wrap_width_range(cls, value: tuple[int, int]) -> tuple[int, int]:
        low, high = value
        if low <= 0 or high < low:
            raise ValueError("wrap_width_range must be two positive widths, low first")
        return value

    def to_help_style(self) -> HelpStyle:
        return HelpStyle(**self.model_dump())


def convert_command(raw_command: RawCommand, depth: int = 0) -> Command:
    if depth > MAX_DEPTH:
        raise ConfigError(f"Maximum subcommand depth exceeded ({MAX_DEPTH} levels deep)")
    command = Command(
        name=raw_command.name,
        description=raw_command.description,
        footer=raw_command.footer,
    )
    for raw_argument in raw_command.arguments:
        options = raw_argument.model_dump(exclude={"flags", "type"})
        command.add_argument(
            *raw_argument.flags,
            type=resolve_type(raw_argument.type),
            **options,
        )
    if raw_command.subcommands or raw_command.dynamic:
        command.add_subcommands(
            *(convert_command(sub, depth + 1) for sub in raw_command.subcommands),
            dest=raw_command.subcommand_dest,
            required=raw_command.subcommands_required,
            dynamic=resolve_dynamic(raw_command.dynamic) if raw_command.dynamic else None,
            name_dest=raw_command.name_dest,
        )
    return command


class ArgpConfig(BaseModel):
    """Argp schema configuration model."""

    command: RawCommand
    help_style: RawHelpStyle = Field(default_factory=RawHelpStyle)

    def to_command(self) -> tuple[Command, HelpStyle]:
        return convert_command(self.command), self.help_style.to_help_style()


def loader(file_path: Path | str) -> tuple[Command, HelpStyle]:
    """
    Load an Argp command schema from a YAML or TOML file.

    The file should contain a dictionary describing the top-level command. An
    optional `help_style` key configures help rendering.

    Args:
        file_path (Path | str): Path to the config file (YAML or TOML).

    Returns:
        tuple[Command, HelpStyle]: The top-level command and its help style.

    Raises:
        ConfigError: If the file cannot be read, parsed or validated, or if
            it describes an invalid schema.
    """
    if isinstance(file_path, (str, Path)):
        path = Path(file_path)
    else:
        raise TypeError("file_path must be a string or Path object.")

    if not path.is_file():
        raise ConfigError(f"No such config file: {file_path}")

    suffix = path.suffix
    try:
        with path.open("r", encoding="UTF-8") as config_file:
            if suffix in (".yaml", ".yml"):
                raw_config = yaml.safe_load(config_file)
            elif suffix == ".toml":
                raw_config = toml.load(config_file)
            else:
                raise ConfigError(f"Unsupported config format: {suffix}")
    except (yaml.YAMLError, toml.TomlDecodeError) as error:
        raise ConfigError(f"Could not parse {path}: {error}") from error

    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Configuration file must contain a dictionary describing a command.\n"
            "Example:\n"
            "name: 'tool'\n"
            "description: 'Example command'\n"
            "arguments:\n"
            "  - flags: ['-v', '--verbose']\n"
            "    action: 'switch'"
        )

    help_style = raw_config.pop("help_style", None) or {}
    try:
        config = ArgpConfig(command=raw_config, help_style=help_style)
        command, style = config.to_command()
    except ValidationError as error:
        raise ConfigError(f"Invalid schema in {path}:\n{error}") from error
    except SchemaError as error:
        raise ConfigError(f"Invalid schema in {path}: {error}") from error
    logger.debug("Loaded schema '%s' from %s.", command.name, path)
    return command, style
