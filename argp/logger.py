# Argp CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global logger instance for the Argp parser."""
import logging

logger: logging.Logger = logging.getLogger("argp")
