# Argp CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements `Command` and `SubCommands`, the runtime schema builder
of the Argp parser.

A `Command` describes one command level: its options, positional arguments and
optional set of subcommands, together with the text shown in its help message.
Arguments are declared with `add_argument()`, in the manner of `argparse`, and
every definition rule is checked when the argument is added so that a broken
schema fails at startup with a `SchemaError` rather than while parsing.

Key Features:
- Switches (`store_true`, `count`, `store_bool_optional`) and value options
  (`store`, `append`) with short and long flags
- Required, optional, defaulted, repeating and greedy positionals
- Global options that descendant subcommands may set
- Static subcommands plus one dynamic provider for runtime-discovered names
- Hidden arguments that parse normally but stay out of usage and help
- Results built by any factory callable, `argparse.Namespace` by default

Example Usage:
    command = Command(description="Reach new heights.")
    command.add_argument("-j", "--jump", action="store_true", help="whether or not to jump")
    command.add_argument("--height", type=int, default=1, help="how high to go")
    command.add_argument("--pilot-nickname", help="an optional nickname for the pilot")

    args = command.from_args(["goup"], ["--jump", "--height", "5"])
    # Namespace(jump=True, height=5, pilot_nickname=None)
"""
from __future__ import annotations

import re
from argparse import Namespace
from typing import Any, Callable, Iterable, get_origin

from argp.exceptions import CommandArgumentError, SchemaError
from argp.help import HELP_KEYWORDS, CommandInfo, Help, HelpInfo, HelpStyle
from argp.logger import logger
from argp.parser.argument import Argument
from argp.parser.argument_action import ArgumentAction, Optionality
from argp.parser.command_argument_parser import (
    OptionResolver,
    PositionalSequencer,
    SubCommandDispatcher,
    check_requirements,
    parse_command_args,
)
from argp.parser.parser_types import ValueSlot, create_slot
from argp.protocols import DynamicSubCommand, GlobalOptionScope
from argp.utils import kebab_case

LONG_NAME_PATTERN = re.compile(r"[a-z0-9-]+")
DEST_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


class Command:
    """
    Declarative schema of one command level.

    Args:
        name (str): Name matched against the command line when this command is a
            subcommand. Ignored for the top-level command.
        description (str): Help description. `{command_name}` is replaced with
            the command path.
        footer (str | list[str]): Text shown after the sections of the help
            message. A list is joined into paragraphs.
        factory (Callable[..., Any] | None): Called with one keyword argument per
            destination to build the parse result. Defaults to `argparse.Namespace`.
    """

    def __init__(
        self,
        name: str = "",
        description: str = "",
        footer: str | list[str] = "",
        factory: Callable[..., Any] | None = None,
    ) -> None:
        self.name: str = name
        self.description: str = description
        if isinstance(footer, str):
            footer = [footer] if footer else []
        self.footer: str = "\n\n".join(footer)
        self.factory: Callable[..., Any] = factory or Namespace
        self._arguments: list[Argument] = []
        self._positional: list[Argument] = []
        self._options: list[Argument] = []
        self._flag_map: dict[str, Argument] = {}
        self._dest_set: set[str] = set()
        self._subcommands: SubCommands | None = None

    @property
    def arguments(self) -> list[Argument]:
        return list(self._arguments)

    @property
    def subcommands(self) -> SubCommands | None:
        return self._subcommands

    @property
    def short_description(self) -> str:
        """First line of the description, shown in the parent's Commands section."""
        for line in self.description.strip().splitlines():
            if line.strip():
                return line.strip()
        return ""

    def _is_positional(self, flags: tuple[str, ...]) -> bool:
        """Check if the flags are positional."""
        positional = any(not flag.startswith("-") for flag in flags)
        if positional and len(flags) > 1:
            raise SchemaError("Positional arguments cannot have multiple flags")
        return positional

    def _validate_flags(self, flags: tuple[str, ...]) -> tuple[str | None, str | None]:
        """Validate the flags provided for an option and split them into short and long."""
        short: str | None = None
        long: str | None = None
        for flag in flags:
            if not isinstance(flag, str):
                raise SchemaError(f"Flag '{flag}' must be a string")
            if flag in HELP_KEYWORDS:
                raise SchemaError(f"Flag '{flag}' is reserved for help")
            if flag.startswith("--"):
                if long is not None:
                    raise SchemaError(f"Only one long flag is allowed, got '{long}' and '{flag}'")
                self._validate_long_name(flag)
                long = flag
            elif len(flag) == 2 and flag != "--":
                if short is not None:
                    raise SchemaError(
                        f"Only one short flag is allowed, got '{short}' and '{flag}'"
                    )
                short = flag
            else:
                raise SchemaError(
                    f"Flag '{flag}' must be a single character or start with '--'"
                )
        return short, long

    def _validate_long_name(self, flag: str) -> None:
        if not LONG_NAME_PATTERN.fullmatch(flag[2:]):
            raise SchemaError(
                f"Long flag '{flag}' must contain only lowercase ASCII letters, "
                "digits and hyphens"
            )

    def _get_dest(
        self, flags: tuple[str, ...], short: str | None, long: str | None, dest: str | None
    ) -> str:
        """Derive the destination name from the flags unless one is given."""
        if dest is None:
            if long:
                dest = long[2:].replace("-", "_")
            elif short:
                dest = short[1:]
            else:
                dest = flags[0]
        if not DEST_PATTERN.fullmatch(dest):
            raise SchemaError(
                f"dest '{dest}' must be a valid identifier (letters, digits, and underscores only)"
            )
        if dest in self._dest_set:
            raise SchemaError(f"Destination '{dest}' is already defined.")
        return dest

    def _validate_action(
        self, action: ArgumentAction | str, positional: bool
    ) -> ArgumentAction:
        if not isinstance(action, ArgumentAction):
            try:
                action = ArgumentAction(action)
            except ValueError as error:
                raise SchemaError(str(error)) from error
        if positional and action is not ArgumentAction.STORE:
            raise SchemaError(
                f"Action '{action}' is not supported for positional arguments; "
                "use nargs to accept several values"
            )
        return action

    def _validate_type(self, type: Any) -> Any:
        if not callable(type) and get_origin(type) is None:
            raise SchemaError(f"type must be a type or a callable, got {type!r}")
        return type

    def _determine_optionality(
        self,
        action: ArgumentAction,
        positional: bool,
        nargs: str | None,
        required: bool,
        has_default: bool,
        greedy: bool,
    ) -> Optionality:
        """Determine the argument cardinality from its settings."""
        if action.is_switch:
            if required:
                raise SchemaError(f"Argument with action {action} cannot be required")
            if has_default:
                raise SchemaError(
                    f"Default value cannot be set for action {action}. It is a switch."
                )
            if nargs is not None or greedy:
                raise SchemaError(f"Action {action} does not take any values")
            return Optionality.OPTIONAL

        if required and has_default:
            raise SchemaError("A required argument cannot have a default value")

        if not positional:
            if nargs is not None:
                raise SchemaError("nargs is only supported for positional arguments")
            if greedy:
                raise SchemaError("Only positional arguments can be greedy")
            if action is ArgumentAction.APPEND:
                if required or has_default:
                    raise SchemaError(
                        "Repeating options cannot be required or have a default value"
                    )
                return Optionality.REPEATING
            if required:
                return Optionality.REQUIRED
            return Optionality.DEFAULTED if has_default else Optionality.OPTIONAL

        if nargs not in (None, "?", "*"):
            raise SchemaError(
                f"Invalid nargs value: {nargs!r}. Positionals accept None, '?' or '*'"
            )
        if greedy or nargs == "*":
            if required or has_default:
                raise SchemaError(
                    "Repeating positionals cannot be required or have a default value"
                )
            return Optionality.GREEDY if greedy else Optionality.REPEATING
        if nargs == "?":
            if required:
                raise SchemaError("A positional with nargs='?' cannot be required")
            return Optionality.DEFAULTED if has_default else Optionality.OPTIONAL
        return Optionality.DEFAULTED if has_default else Optionality.REQUIRED

    def _validate_positional_order(self, argument: Argument) -> None:
        if self._positional and not self._positional[-1].required:
            last = self._positional[-1]
            raise SchemaError(
                f"Positional '{argument.display_name}' cannot follow "
                f"{last.optionality} positional '{last.display_name}'. Only the last "
                "positional argument may be optional, defaulted, repeating or greedy."
            )

    def _register_argument(self, argument: Argument) -> None:
        for flag in argument.flags:
            if flag in self._flag_map:
                existing = self._flag_map[flag]
                raise SchemaError(
                    f"Flag '{flag}' is already used by argument '{existing.dest}'"
                )
        for flag in argument.flags:
            self._flag_map[flag] = argument
        self._dest_set.add(argument.dest)
        self._arguments.append(argument)
        if argument.positional:
            self._positional.append(argument)
        else:
            self._options.append(argument)

    def add_argument(
        self,
        *flags: str,
        action: str | ArgumentAction = "store",
        nargs: str | None = None,
        default: Any = None,
        default_factory: Callable[[], Any] | None = None,
        type: Any = str,
        required: bool = False,
        help: str = "",
        dest: str | None = None,
        arg_name: str | None = None,
        greedy: bool = False,
        is_global: bool = False,
        hidden: bool = False,
    ) -> Argument:
        """
        Define a new argument for the command.

        Args:
            *flags (str): A positional name, or the short and/or long flags of an
                option (e.g., "-v", "--verbose").
            action (str | ArgumentAction): The argument action type (default: "store").
            nargs (str | None): `None` (one value), `"?"` (zero or one) or `"*"`
                (any number). Positionals only.
            default (Any): Default value if the argument is not provided.
            default_factory (Callable[[], Any] | None): Computes the default value.
            type (type): Type or callable to convert argument values with.
            required (bool): Whether this option is mandatory.
            help (str): Help text for rendering in command help.
            dest (str | None): Custom destination key in the result.
            arg_name (str | None): Value placeholder of an option, or the display
                name of a positional.
            greedy (bool): Capture every token after the first value verbatim.
                Positionals only.
            is_global (bool): Let descendant subcommands set this option.
            hidden (bool): Leave the argument out of usage and help.

        Returns:
            Argument: The registered argument.

        Raises:
            SchemaError: If the definition is invalid or conflicts with another.
        """
        if not flags:
            raise SchemaError("No flags provided")
        positional = self._is_positional(flags)
        short: str | None = None
        long: str | None = None
        if positional:
            if flags[0] in HELP_KEYWORDS:
                raise SchemaError(f"Positional name '{flags[0]}' is reserved for help")
        else:
            short, long = self._validate_flags(flags)
        dest = self._get_dest(flags, short, long, dest)
        if not positional and long is None:
            long = f"--{kebab_case(dest)}"
            self._validate_long_name(long)
            if long in HELP_KEYWORDS:
                raise SchemaError(f"Flag '{long}' is reserved for help")
        action = self._validate_action(action, positional)
        type = self._validate_type(type)
        if default is not None and default_factory is not None:
            raise SchemaError("Only one of default and default_factory can be set")
        if default_factory is not None and not callable(default_factory):
            raise SchemaError("default_factory must be callable")
        if positional and is_global:
            raise SchemaError("Positional arguments cannot be global")
        optionality = self._determine_optionality(
            action,
            positional,
            nargs,
            required,
            default is not None or default_factory is not None,
            greedy,
        )
        argument = Argument(
            dest=dest,
            action=action,
            optionality=optionality,
            long=long,
            short=short,
            arg_name=arg_name,
            type=type,
            default=default,
            default_factory=default_factory,
            help=help,
            positional=positional,
            is_global=is_global,
            hidden=hidden,
        )
        if positional:
            self._validate_positional_order(argument)
        self._register_argument(argument)
        logger.debug("Registered %s on command '%s'.", argument, self.name)
        return argument

    def add_subcommands(
        self,
        *commands: Command,
        dest: str = "command",
        required: bool = True,
        dynamic: DynamicSubCommand | None = None,
        name_dest: str | None = None,
    ) -> SubCommands:
        """
        Declare the subcommands of this command.

        Args:
            *commands (Command): Static subcommands, matched in order.
            dest (str): Destination of the selected subcommand's result.
            required (bool): Whether a subcommand must be given.
            dynamic (DynamicSubCommand | None): Provider of subcommands whose
                names are only known at runtime. Checked after static ones.
            name_dest (str | None): Optional destination of the selected name.

        Returns:
            SubCommands: The registered subcommand set.

        Raises:
            SchemaError: If subcommands are already declared, a name is invalid
                or duplicated, or a destination is already used.
        """
        if self._subcommands is not None:
            raise SchemaError(f"Command '{self.name}' already has subcommands")
        for target in (dest, name_dest):
            if target is None:
                continue
            if not DEST_PATTERN.fullmatch(target):
                raise SchemaError(f"dest '{target}' must be a valid identifier")
            if target in self._dest_set:
                raise SchemaError(f"Destination '{target}' is already defined.")
        if name_dest is not None and name_dest == dest:
            raise SchemaError("dest and name_dest must be different")
        subcommands = SubCommands(
            *commands, dest=dest, required=required, dynamic=dynamic, name_dest=name_dest
        )
        self._dest_set.add(dest)
        if name_dest is not None:
            self._dest_set.add(name_dest)
        self._subcommands = subcommands
        return subcommands

    def get_argument(self, dest: str) -> Argument | None:
        return next((arg for arg in self._arguments if arg.dest == dest), None)

    @property
    def help_info(self) -> HelpInfo:
        """Static help metadata of this command level."""
        visible = [arg for arg in self._arguments if not arg.hidden]
        subcommands = self._subcommands
        return HelpInfo(
            description=self.description,
            positionals=[arg.to_help_info() for arg in visible if arg.positional],
            options=[arg.to_help_info() for arg in visible if not arg.positional],
            subcommand_usage=subcommands.get_usage_text() if subcommands else "",
            subcommands=subcommands.infos() if subcommands else [],
            dynamic_subcommands=subcommands.dynamic_commands if subcommands else list,
            footer=self.footer,
        )

    def format_help(
        self,
        command_name: list[str] | str | None = None,
        style: HelpStyle | None = None,
        term_width: int | None = None,
    ) -> str:
        """Render the help message of this command as the top-level command."""
        if command_name is None:
            command_name = [self.name]
        return Help(self.help_info, command_name).generate(style, term_width)

    def from_args(self, command_name: list[str] | str, args: Iterable[str | bytes]) -> Any:
        """
        Parse `args` as the arguments of this command.

        Args:
            command_name (list[str] | str): Command path used in help output,
                usually the program name.
            args (Iterable[str | bytes]): The tokens following the command name.

        Returns:
            Any: The result built by `factory`.

        Raises:
            HelpSignal: If help was requested.
            CommandArgumentError: If the arguments do not match the schema.
        """
        if isinstance(command_name, str):
            command_name = [command_name]
        return self._from_args(list(command_name), args, None)

    def _from_args(
        self,
        command_name: list[str],
        args: Iterable[str | bytes],
        parent: GlobalOptionScope | None,
    ) -> Any:
        slots = {arg.dest: create_slot(arg) for arg in self._arguments}
        table = {
            flag: slots[arg.dest] for arg in self._options for flag in arg.flags
        }
        help_info = self.help_info
        options = OptionResolver(table, help_info.options, parent)
        positional_slots = [slots[arg.dest] for arg in self._positional]
        positionals = PositionalSequencer(
            [slot for slot in positional_slots if isinstance(slot, ValueSlot)]
        )
        dispatcher = (
            SubCommandDispatcher(self._subcommands) if self._subcommands else None
        )

        parse_command_args(
            command_name, args, options, positionals, dispatcher, help_info
        )
        check_requirements(
            positionals.slots, [slots[arg.dest] for arg in self._options], dispatcher
        )

        values = {dest: slot.finalize() for dest, slot in slots.items()}
        if dispatcher is not None:
            values[dispatcher.subcommands.dest] = dispatcher.result
            if dispatcher.subcommands.name_dest is not None:
                values[dispatcher.subcommands.name_dest] = dispatcher.selected
        logger.debug("Parsed '%s'.", " ".join(command_name))
        return self.factory(**values)

    def __str__(self) -> str:
        """Return a human-readable summary of the command schema."""
        positional = len(self._positional)
        required = sum(arg.required for arg in self._arguments)
        subcommands = len(self._subcommands.commands) if self._subcommands else 0
        return (
            f"Command(name={self.name!r}, args={len(self._arguments)}, "
            f"flags={len(self._flag_map)}, positional={positional}, "
            f"required={required}, subcommands={subcommands})"
        )

    def __repr__(self) -> str:
        return str(self)


class SubCommands:
    """
    The set of subcommands of a command level.

    Static commands are matched by name in declaration order, then the names
    listed by the dynamic provider. `from_args()` dispatches directly on the
    last element of a command path, which is how the parent hands over once a
    subcommand name was matched.

    Args:
        *commands (Command): Static subcommands.
        dest (str): Destination of the selected subcommand's result.
        required (bool): Whether a subcommand must be given.
        dynamic (DynamicSubCommand | None): Provider of runtime subcommands.
        name_dest (str | None): Optional destination of the selected name.
    """

    def __init__(
        self,
        *commands: Command,
        dest: str = "command",
        required: bool = True,
        dynamic: DynamicSubCommand | None = None,
        name_dest: str | None = None,
    ) -> None:
        names: set[str] = set()
        for command in commands:
            if not isinstance(command, Command):
                raise SchemaError(f"Subcommand must be a Command, got {command!r}")
            if not command.name:
                raise SchemaError("Subcommands must have a name")
            if command.name in HELP_KEYWORDS:
                raise SchemaError(f"Subcommand name '{command.name}' is reserved for help")
            if command.name in names:
                raise SchemaError(f"Subcommand '{command.name}' is already defined")
            names.add(command.name)
        if dynamic is not None and not isinstance(dynamic, DynamicSubCommand):
            raise SchemaError(
                f"dynamic must provide commands() and try_from_args(), got {dynamic!r}"
            )
        self.commands: list[Command] = list(commands)
        self.dest = dest
        self.required = required
        self.dynamic = dynamic
        self.name_dest = name_dest

    def infos(self) -> list[CommandInfo]:
        return [
            CommandInfo(command.name, command.short_description)
            for command in self.commands
        ]

    def dynamic_commands(self) -> list[CommandInfo]:
        if self.dynamic is None:
            return []
        return list(self.dynamic.commands())

    def get_usage_text(self) -> str:
        if self.required:
            return "<command> [<args>]"
        return "[<command>] [<args>]"

    def from_args(self, command_name: list[str], args: Iterable[str | bytes]) -> Any:
        """
        Parse `args` with the subcommand named by the last element of `command_name`.

        Raises:
            CommandArgumentError: If `command_name` is empty or names no subcommand.
        """
        return self._from_args(list(command_name), args, None)

    def _from_args(
        self,
        command_name: list[str],
        args: Iterable[str | bytes],
        parent: GlobalOptionScope | None,
    ) -> Any:
        if not command_name:
            raise CommandArgumentError("no subcommand name")
        name = command_name[-1]
        for command in self.commands:
            if command.name == name:
                return command._from_args(command_name, args, parent)
        if self.dynamic is not None:
            result = self.dynamic.try_from_args(command_name, list(args))
            if result is not None:
                return result
        raise CommandArgumentError("no subcommand matched")

    def __repr__(self) -> str:
        names = [command.name for command in self.commands]
        return f"SubCommands(commands={names!r}, dest={self.dest!r}, required={self.required})"
