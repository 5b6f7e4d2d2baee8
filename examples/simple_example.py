"""simple_example.py"""

from dataclasses import dataclass

from argp import Command, from_env


@dataclass
class SubCommandOne:
    x: int


@dataclass
class SubCommandTwo:
    fooey: bool


@dataclass
class TopLevel:
    nested: SubCommandOne | SubCommandTwo


def get_command() -> Command:
    one = Command("one", "First subcommand.", factory=SubCommandOne)
    one.add_argument("--x", type=int, required=True, help="how many x")

    two = Command("two", "Second subcommand.", factory=SubCommandTwo)
    two.add_argument("--fooey", action="switch", help="whether to fooey")

    top = Command(description="Top-level command.", factory=TopLevel)
    top.add_subcommands(one, two, dest="nested")
    return top


if __name__ == "__main__":
    toplevel = from_env(get_command())
    print(toplevel)
