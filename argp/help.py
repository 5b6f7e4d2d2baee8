# Argp CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Plain-text help rendering for Argp commands.

This module turns the static help metadata of one command level, plus the
global options collected from every enclosing level, into a column-aligned,
word-wrapped help message. The output is deterministic so it can be compared
byte for byte in tests and printed verbatim by the entry points.

Layout:
    Usage: <command path> <option usage> <positional usage> <command usage>

    <description>

    Arguments:
      <name>      <description>

    Options:
      -s, --long  <description>
      -h, --help  Show this help message and exit.

    Commands:
      <name>      <description>

    <footer>

A single description column is shared by all sections. Descriptions wrap
between words, never inside one, and continuation lines are re-indented to
the description column.

Exports:
- CommandInfo: Name and description of a subcommand.
- OptionArgInfo: Usage fragment and help entry of an option or positional.
- HelpInfo: Static help metadata of one command level.
- HelpStyle: Indentation and wrapping settings.
- Help: A renderable help message for a command path.
"""
from __future__ import annotations

import textwrap
from dataclasses import dataclass, field
from typing import Callable, Iterable

HELP_KEYWORDS = ("--help", "-h", "help")


@dataclass(frozen=True)
class CommandInfo:
    """Name and one-line description of a subcommand."""

    name: str
    description: str = ""


@dataclass(frozen=True)
class OptionArgInfo:
    """
    Help metadata for a single option or positional argument.

    Attributes:
        usage (str): Fragment shown in the usage line, e.g. `[-f <foo>]`.
            Empty for hidden arguments.
        names (str): Left column of the help entry, e.g. `-f, --foo <foo>`.
            Empty for greedy positionals, which are left out of the entries.
        description (str): Right column of the help entry.
        is_global (bool): Whether the option is shown for descendant subcommands.
    """

    usage: str
    names: str
    description: str = ""
    is_global: bool = False


HELP_OPTION = OptionArgInfo(
    usage="",
    names="-h, --help",
    description="Show this help message and exit.",
)


def _no_dynamic_subcommands() -> list[CommandInfo]:
    return []


@dataclass
class HelpInfo:
    """Static help metadata of one command level."""

    description: str = ""
    positionals: list[OptionArgInfo] = field(default_factory=list)
    options: list[OptionArgInfo] = field(default_factory=list)
    subcommand_usage: str = ""
    subcommands: list[CommandInfo] = field(default_factory=list)
    dynamic_subcommands: Callable[[], list[CommandInfo]] = _no_dynamic_subcommands
    footer: str = ""


@dataclass
class HelpStyle:
    """
    Settings for rendering help messages.

    Attributes:
        wrap_width_range (tuple[int, int]): Inclusive bounds for the wrap width.
            A known terminal width is clamped into this range, otherwise the
            lower bound is used.
        indent (int): Indentation of entries within a section.
        description_min_indent (int): Smallest column for descriptions.
        description_max_indent (int): Widest name column that still gets its
            description on the same line.
    """

    wrap_width_range: tuple[int, int] = (80, 80)
    indent: int = 2
    description_min_indent: int = 8
    description_max_indent: int = 30

    def wrap_width(self, term_width: int | None = None) -> int:
        low, high = self.wrap_width_range
        if term_width is None:
            return low
        return max(low, min(term_width, high))


def compute_description_indent(names: Iterable[str], style: HelpStyle) -> int:
    """Return the shared description column for the given name columns."""
    widths = [style.indent + len(name) + 2 for name in names]
    fitting = [width for width in widths if width <= style.description_max_indent]
    return max([*fitting, style.description_min_indent])


def wrap_paragraph(line: str, width: int) -> list[str]:
    """Wrap one line of prose, keeping its leading indentation."""
    if not line.strip():
        return [""]
    indent = line[: len(line) - len(line.lstrip())]
    return textwrap.wrap(
        line.strip(),
        width=width,
        initial_indent=indent,
        subsequent_indent=indent,
        break_long_words=False,
        break_on_hyphens=False,
    )


def format_entry(names: str, description: str, indent: int, style: HelpStyle, width: int) -> list[str]:
    """Render one `names  description` entry of a section."""
    head = " " * style.indent + names
    if not description.strip():
        return [head]
    lines: list[str] = []
    if len(head) < indent:
        initial = head.ljust(indent)
    else:
        lines.append(head)
        initial = " " * indent
    lines.extend(
        textwrap.wrap(
            description,
            width=width,
            initial_indent=initial,
            subsequent_indent=" " * indent,
            break_long_words=False,
            break_on_hyphens=False,
        )
    )
    return lines


def wrap_usage(command_name: str, fragments: list[str], width: int) -> list[str]:
    """Render the usage line, wrapping whole fragments under the first one."""
    prefix = f"Usage: {command_name}"
    continuation = " " * (len(prefix) + 1)
    lines: list[str] = []
    line = prefix
    has_fragment = False
    for fragment in fragments:
        if has_fragment and len(line) + 1 + len(fragment) > width:
            lines.append(line)
            line = continuation + fragment
        else:
            line = f"{line} {fragment}"
        has_fragment = True
    lines.append(line)
    return lines


class Help:
    """
    A help message for one command level, ready to be rendered.

    `Help` is created by the parser when `--help`, `-h` or `help` is seen and is
    carried by `HelpSignal`. Rendering is deferred so the caller can choose a
    `HelpStyle` and pass the terminal width.

    Args:
        info (HelpInfo): Static metadata of the command level.
        command_name (list[str] | str): Command path from the root command.
        global_options (list[OptionArgInfo] | None): Global options of the
            enclosing levels, outermost first.

    Example:
        >>> help = Help(command.help_info, ["tool", "sub"])
        >>> print(help.generate(), end="")
    """

    def __init__(
        self,
        info: HelpInfo,
        command_name: list[str] | str,
        global_options: list[OptionArgInfo] | None = None,
    ) -> None:
        self.info = info
        if isinstance(command_name, str):
            command_name = [command_name]
        self.command_name: list[str] = list(command_name)
        self.global_options: list[OptionArgInfo] = list(global_options or [])

    def generate(self, style: HelpStyle | None = None, term_width: int | None = None) -> str:
        style = style or HelpStyle()
        width = style.wrap_width(term_width)
        command_name = " ".join(self.command_name)

        positionals = list(self.info.positionals)
        options = [*self.global_options, *self.info.options, HELP_OPTION]
        commands = [*self.info.subcommands, *self.info.dynamic_subcommands()]

        indent = compute_description_indent(
            [entry.names for entry in positionals]
            + [entry.names for entry in options]
            + [command.name for command in commands],
            style,
        )

        fragments = [
            entry.usage for entry in [*self.global_options, *self.info.options, *positionals]
        ]
        if self.info.subcommand_usage:
            fragments.append(self.info.subcommand_usage)
        lines = wrap_usage(command_name, [fragment for fragment in fragments if fragment], width)

        description = self.info.description.replace("{command_name}", command_name).strip("\n")
        if description:
            lines.append("")
            for line in description.splitlines():
                lines.extend(wrap_paragraph(line, width))

        for title, entries in (
            ("Arguments:", [(entry.names, entry.description) for entry in positionals]),
            ("Options:", [(entry.names, entry.description) for entry in options]),
            ("Commands:", [(command.name, command.description) for command in commands]),
        ):
            entries = [(names, desc) for names, desc in entries if names]
            if not entries:
                continue
            lines.extend(["", title])
            for names, desc in entries:
                lines.extend(format_entry(names, desc, indent, style, width))

        footer = self.info.footer.replace("{command_name}", command_name).strip("\n")
        if footer:
            lines.append("")
            for line in footer.splitlines():
                lines.extend(wrap_paragraph(line, width))

        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.generate()

    def __repr__(self) -> str:
        return f"Help(command_name={self.command_name!r})"
