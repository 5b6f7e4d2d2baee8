"""rosetta.py"""

from pathlib import Path

from argp import Command, from_env


def parse_width(value: str) -> int:
    try:
        width = int(value)
    except ValueError:
        raise ValueError("not a number") from None
    if width == 0:
        raise ValueError("width must be positive")
    return width


command = Command(description="App")
command.add_argument("--number", type=int, required=True, help="sets number")
command.add_argument("--opt-number", type=int, help="sets optional number")
command.add_argument("--width", type=parse_width, default=10, help="sets width [default: 10]")
command.add_argument("input", type=Path, nargs="*", help="input")

if __name__ == "__main__":
    args = from_env(command)
    print(args.number)
    print(args.opt_number)
    print(args.width)
    if len(args.input) >= 10:
        print(len(args.input))
    else:
        print(args)
