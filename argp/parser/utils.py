# Argp CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Contains value coercion utilities for Argp argument parsing.

This module provides type coercion functions for converting command-line tokens
into expected Python types, including `Enum`, `bool`, `datetime`, `bytes` and
`Literal`. Tokens may be `str` or raw `bytes`; raw bytes are decoded as UTF-8
unless the target type is `bytes` or a path, which keep undecodable bytes.

Functions:
- coerce_bool: Convert a string to a boolean.
- coerce_enum: Convert a string or raw value to an Enum instance.
- coerce_value: General-purpose coercion to a target type (including nested unions, enums, etc.).
- coerce_token: Coerce a raw `str` or `bytes` command-line token.
- token_text: Decode a token for matching against option and command names.
"""
import os
import types
from datetime import datetime
from enum import EnumMeta
from pathlib import PurePath
from typing import Any, Literal, Union, get_args, get_origin

from dateutil import parser as date_parser


def coerce_bool(value: str) -> bool:
    """
    Convert a string to a boolean.

    Accepts various truthy and falsy representations such as 'true', 'yes', '0', 'off', etc.

    Args:
        value (str): The input string or boolean.

    Returns:
        bool: Parsed boolean result.

    Raises:
        ValueError: If the value is not a recognized boolean.
    """
    if isinstance(value, bool):
        return value
    value = value.strip().lower()
    if value in {"true", "t", "1", "yes", "y", "on"}:
        return True
    elif value in {"false", "f", "0", "no", "n", "off", ""}:
        return False
    raise ValueError(f"'{value}' is not a valid boolean")


def coerce_enum(value: Any, enum_type: EnumMeta) -> Any:
    """
    Convert a raw value or string to an Enum instance.

    Tries to resolve by name, value, or coerced base type.

    Args:
        value (Any): The input value to convert.
        enum_type (EnumMeta): The target Enum class.

    Returns:
        Enum: The corresponding Enum instance.

    Raises:
        ValueError: If the value cannot be resolved to a valid Enum member.
    """
    if isinstance(value, enum_type):
        return value

    if isinstance(value, str):
        try:
            return enum_type[value]
        except KeyError:
            pass

    base_type = type(next(iter(enum_type)).value)
    try:
        coerced_value = base_type(value)
        return enum_type(coerced_value)
    except (ValueError, TypeError):
        values = [str(enum.value) for enum in enum_type]
        raise ValueError(f"'{value}' should be one of {{{', '.join(values)}}}") from None


def coerce_value(value: str, target_type: Any) -> Any:
    """
    Attempt to convert a string to the given target type.

    Handles complex typing constructs such as Union, Literal, Enum, and datetime.
    Any other callable, e.g. `int`, `Path` or a user function, is called with
    the string.

    Args:
        value (str): The input string to convert.
        target_type (type): The desired type or converter.

    Returns:
        Any: The coerced value.

    Raises:
        ValueError: If conversion fails or the value is invalid.
        Exception: Whatever a custom converter raises is passed through.
    """
    origin = get_origin(target_type)
    args = get_args(target_type)

    if origin is Literal:
        if value not in args:
            raise ValueError(
                f"Value '{value}' is not a valid literal for type {target_type}"
            )
        return value

    if isinstance(target_type, types.UnionType) or origin is Union:
        for arg in args:
            if arg is type(None):
                continue
            try:
                return coerce_value(value, arg)
            except (ValueError, TypeError):
                continue
        raise ValueError(f"Value '{value}' could not be coerced to any of {args}")

    if isinstance(target_type, EnumMeta):
        return coerce_enum(value, target_type)

    if target_type is bool:
        return coerce_bool(value)

    if target_type is bytes:
        return os.fsencode(value)

    if target_type is datetime:
        try:
            return date_parser.parse(value)
        except (ValueError, OverflowError) as e:
            raise ValueError(f"Value '{value}' could not be parsed as a datetime") from e

    return target_type(value)


def coerce_token(token: str | bytes, target_type: Any) -> Any:
    """
    Convert a raw command-line token to the target type.

    Raises:
        ValueError: If the token is not valid UTF-8 for a text target, or
            if `coerce_value` fails.
    """
    if isinstance(token, bytes):
        if target_type is bytes:
            return token
        if isinstance(target_type, type) and issubclass(target_type, PurePath):
            return target_type(os.fsdecode(token))
        try:
            token = token.decode("utf-8")
        except UnicodeDecodeError:
            raise ValueError("not a valid UTF-8 string") from None
    return coerce_value(token, target_type)


def token_text(token: str | bytes) -> str:
    """Return the token as text, or an empty string if it is not valid UTF-8."""
    if isinstance(token, bytes):
        try:
            return token.decode("utf-8")
        except UnicodeDecodeError:
            return ""
    return token


def token_display(token: str | bytes) -> str:
    """Return the token as text for error messages, replacing invalid bytes."""
    if isinstance(token, bytes):
        return token.decode("utf-8", errors="replace")
    return token
