# Argp CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines structural protocols for the extension points of the Argp parser.

These runtime-checkable `Protocol` classes specify the expected interfaces for:
- Subcommand providers whose names are only known at runtime (plugins)
- The parent scope a subcommand level uses to resolve global options

Protocols:
- DynamicSubCommand: Lists runtime subcommands and parses the one it claims.
- GlobalOptionScope: Resolves option tokens against enclosing global options.
"""
from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from argp.help import CommandInfo, OptionArgInfo


@runtime_checkable
class DynamicSubCommand(Protocol):
    def commands(self) -> list[CommandInfo]: ...

    def try_from_args(
        self, command_name: list[str], args: list[str | bytes]
    ) -> Any | None: ...


@runtime_checkable
class GlobalOptionScope(Protocol):
    def try_parse_global(self, arg: str, remaining: deque[str | bytes]) -> bool: ...

    def global_options(self) -> list[OptionArgInfo]: ...
