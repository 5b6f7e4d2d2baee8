"""config_loading.py"""

from argp import from_env
from argp.config import loader

command, style = loader("argp.yaml")

if __name__ == "__main__":
    print(from_env(command, style=style))
