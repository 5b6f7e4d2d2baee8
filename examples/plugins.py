"""plugins.py"""

from argp import Command, CommandArgumentError, CommandInfo, from_env


class Plugins:
    """Subcommands discovered at runtime, e.g. from executables on $PATH."""

    def __init__(self, names: list[str]):
        self.names = names

    def commands(self) -> list[CommandInfo]:
        return [CommandInfo(name, f"Run the {name} plugin.") for name in self.names]

    def try_from_args(self, command_name, args):
        if command_name[-1] not in self.names:
            return None
        if len(args) > 1:
            raise CommandArgumentError("Too many arguments")
        return {"plugin": command_name[-1], "args": list(args)}


command = Command(
    description="Run a builtin or a plugin.",
    footer="Use `{command_name} help <command>` for details on a builtin.",
)
command.add_argument("-v", "--verbose", action="count", is_global=True, help="say more")
status = Command("status", "Show status.")
status.add_argument("--short", action="switch", help="one line per entry")
command.add_subcommands(status, dynamic=Plugins(["lint", "format"]), name_dest="name")

if __name__ == "__main__":
    print(from_env(command))
