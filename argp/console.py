# Argp CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instances used to print help and errors."""
from rich.console import Console

console = Console(highlight=False, emoji=False, soft_wrap=True)
error_console = Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)
