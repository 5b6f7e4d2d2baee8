# Argp CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements the token loop that parses one command level.

`Command.from_args()` builds the per-level parse state (slots, an option
resolver, a positional sequencer and, when subcommands are declared, a
dispatcher) and hands it to `parse_command_args()`, which consumes the tokens.
When a subcommand name is matched the loop recurses into the child command with
the current `OptionResolver` as the child's parent scope, so the child can fill
global options declared by any enclosing level.

Key Features:
- GNU-style long (`--foo`) and short (`-f`) options, one value token each
- POSIX-style bundling of short options (`-abc` is `-a -b -c`); only the last
  option of a bundle can take a value
- `--` ends option parsing for the rest of the level
- `--help`, `-h` and `help` request help until options have ended; options after
  the `help` keyword are rejected
- Global options resolved outward through the chain of parent levels
- A trailing repeating positional that stays active for every remaining value,
  and a greedy one that captures the rest of the line verbatim
- All missing requirements of a level reported together

Public Interface:
- `parse_command_args(...)`: Consume the tokens of one command level.
- `check_requirements(...)`: Raise `MissingRequirementsError` for unmet requirements.
- `OptionResolver`: Option token to slot table of one level, and its parent scope.
- `PositionalSequencer`: Assigns bare tokens to positional slots in order.
- `SubCommandDispatcher`: Matches subcommand names and recurses into them.

Design Notes:
Parsing is synchronous and keeps no state outside the slots of the levels on
the current call stack. Help and errors unwind the recursion as exceptions.
"""
from __future__ import annotations

from collections import deque
from itertools import chain
from typing import TYPE_CHECKING, Any, Iterable

from argp.exceptions import (
    MissingArgValueError,
    MissingRequirements,
    OptionsAfterHelpError,
    UnknownArgumentError,
)
from argp.help import HELP_KEYWORDS, CommandInfo, Help, HelpInfo, OptionArgInfo
from argp.logger import logger
from argp.parser.parser_types import FlagSlot, Slot, ValueSlot
from argp.parser.utils import token_display, token_text
from argp.protocols import GlobalOptionScope
from argp.signals import HelpSignal

if TYPE_CHECKING:
    from argp.parser.command import SubCommands


class OptionResolver:
    """
    Resolves option tokens of one command level to their slots.

    Tokens are looked up in the local table first. A token the level does not
    declare is offered to the parent scope, which only accepts its own global
    options and in turn asks its parent.

    Args:
        table (dict[str, Slot]): Maps each flag (`-f`, `--foo`) to its slot.
        help_options (list[OptionArgInfo]): Help metadata of the level's options,
            used to collect global options for descendants.
        parent (GlobalOptionScope | None): Resolver of the enclosing level.
    """

    def __init__(
        self,
        table: dict[str, Slot],
        help_options: list[OptionArgInfo] | None = None,
        parent: GlobalOptionScope | None = None,
    ) -> None:
        self.table = table
        self.help_options = help_options or []
        self.parent = parent

    def parse(self, arg: str, remaining: deque[str | bytes]) -> None:
        """
        Fill the slot of an option token.

        Raises:
            UnknownArgumentError: If no level in the chain declares the option.
            MissingArgValueError: If the option takes a value and none remains.
        """
        slot = self.table.get(arg)
        if slot is not None:
            self._fill_slot(slot, arg, remaining)
            return
        if self.parent is not None and self.parent.try_parse_global(arg, remaining):
            logger.debug("Option '%s' resolved as a global option of a parent.", arg)
            return
        raise UnknownArgumentError(arg)

    def try_parse_global(self, arg: str, remaining: deque[str | bytes]) -> bool:
        slot = self.table.get(arg)
        if slot is not None and slot.argument.is_global:
            self._fill_slot(slot, arg, remaining)
            return True
        if self.parent is not None:
            return self.parent.try_parse_global(arg, remaining)
        return False

    def global_options(self) -> list[OptionArgInfo]:
        """Return global options of this level and its ancestors, outermost first."""
        options = self.parent.global_options() if self.parent is not None else []
        options.extend(option for option in self.help_options if option.is_global)
        return options

    @staticmethod
    def _fill_slot(slot: Slot, arg: str, remaining: deque[str | bytes]) -> None:
        if isinstance(slot, FlagSlot):
            slot.set_flag()
            return
        if not remaining:
            raise MissingArgValueError(arg)
        slot.fill(arg, remaining.popleft())


class PositionalSequencer:
    """Assigns bare tokens to the positional slots of one level, in order."""

    def __init__(self, slots: list[ValueSlot]) -> None:
        self.slots = slots
        self.index = 0
        last = slots[-1].argument if slots else None
        self.last_is_repeating = last is not None and last.optionality.is_repeating
        self.last_is_greedy = last is not None and last.greedy

    def parse(self, token: str | bytes) -> bool:
        """
        Fill the next positional slot.

        Returns:
            bool: True if option parsing must stop because a greedy positional
            captured the token.

        Raises:
            UnknownArgumentError: If every positional has been filled.
        """
        if self.index >= len(self.slots):
            raise UnknownArgumentError(token_display(token))
        slot = self.slots[self.index]
        slot.fill(slot.argument.display_name, token)
        if self.last_is_repeating and self.index == len(self.slots) - 1:
            return self.last_is_greedy
        self.index += 1
        return False


class SubCommandDispatcher:
    """
    Matches bare tokens against subcommand names and parses the selected child.

    Dynamic subcommands are listed once per parse and checked after the static
    ones. The first match wins.
    """

    def __init__(self, subcommands: SubCommands) -> None:
        self.subcommands = subcommands
        self.dynamic: list[CommandInfo] = subcommands.dynamic_commands()
        self.selected: str | None = None
        self.result: Any = None

    @property
    def names(self) -> list[str]:
        return [info.name for info in chain(self.subcommands.infos(), self.dynamic)]

    def parse(
        self,
        help_requested: bool,
        command_name: list[str],
        arg: str,
        remaining: Iterable[str | bytes],
        parent: GlobalOptionScope,
    ) -> bool:
        """
        Parse the rest of the tokens with the subcommand named `arg`.

        Returns:
            bool: True if `arg` named a subcommand and the child consumed the
            remaining tokens.
        """
        if arg not in self.names:
            return False
        child_name = [*command_name, arg]
        args = list(remaining)
        if help_requested:
            args.insert(0, "help")
        logger.debug("Dispatching to subcommand '%s'.", " ".join(child_name))
        self.result = self.subcommands._from_args(child_name, args, parent)
        self.selected = arg
        return True


def parse_command_args(
    command_name: list[str],
    args: Iterable[str | bytes],
    options: OptionResolver,
    positionals: PositionalSequencer,
    subcommand: SubCommandDispatcher | None,
    help_info: HelpInfo,
) -> None:
    """
    Consume the tokens of one command level.

    Args:
        command_name (list[str]): Command path from the root to this level.
        args (Iterable[str | bytes]): Tokens following the command name.
        options (OptionResolver): Option table of this level.
        positionals (PositionalSequencer): Positional slots of this level.
        subcommand (SubCommandDispatcher | None): Subcommands of this level, if any.
        help_info (HelpInfo): Help metadata rendered when help is requested.

    Raises:
        HelpSignal: If help was requested and no subcommand took it over.
        CommandArgumentError: If a token cannot be parsed.
    """
    remaining: deque[str | bytes] = deque(args)
    help_requested = False
    help_keyword = False
    options_ended = False
    greedy = False

    while remaining:
        token = remaining.popleft()
        text = token_text(token)

        if not options_ended and text in HELP_KEYWORDS:
            help_requested = True
            help_keyword = text == "help"
            continue

        if not options_ended and text.startswith("-"):
            if text == "--":
                options_ended = True
                continue
            if help_keyword:
                raise OptionsAfterHelpError()
            if len(text) > 2 and text[1] != "-":
                shorts = text[1:]
                for short in shorts[:-1]:
                    options.parse(f"-{short}", deque())
                options.parse(f"-{shorts[-1]}", remaining)
            else:
                options.parse(text, remaining)
            continue

        if subcommand is not None and not greedy:
            if subcommand.parse(help_requested, command_name, text, remaining, options):
                help_requested = False
                break

        if positionals.parse(token):
            options_ended = greedy = True

    if help_requested:
        logger.debug("Help requested for '%s'.", " ".join(command_name))
        global_options = options.parent.global_options() if options.parent else []
        raise HelpSignal(Help(help_info, command_name, global_options))


def check_requirements(
    positionals: Iterable[ValueSlot],
    options: Iterable[Slot],
    subcommand: SubCommandDispatcher | None,
) -> None:
    """
    Collect every unmet requirement of a level and raise them together.

    Raises:
        MissingRequirementsError: If a required positional, a required option or
            a required subcommand was not given.
    """
    missing = MissingRequirements()
    for slot in positionals:
        if slot.argument.required and not slot.filled:
            missing.missing_positional_arg(slot.argument.display_name)
    for slot in options:
        if slot.argument.required and not slot.filled:
            missing.missing_option(slot.argument.display_name)
    if (
        subcommand is not None
        and subcommand.subcommands.required
        and subcommand.selected is None
    ):
        missing.missing_subcommands(subcommand.names)
    missing.raise_on_any()
