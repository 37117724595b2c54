"""Percent-encoding used for purl components.

Purl quoting differs from plain URL quoting in two ways: a colon is always
kept literal, and spaces and plus signs are always percent-encoded so that
`+` never stands for a space on either side of the round trip.
"""
from __future__ import annotations

import enum
from typing import Any, Callable
from urllib.parse import quote as _url_quote
from urllib.parse import unquote as _url_unquote


class Direction(enum.Enum):
    """Which way a component is being normalized."""

    ENCODE = "encode"
    DECODE = "decode"
    NONE = "none"


def quote(segment: Any) -> str:
    """Percent-encodes a single purl segment.

    Everything outside `A-Za-z0-9_.-~` is encoded except `:`. Spaces become
    `%20` and plus signs become `%2B`.

    Args:
        segment: The value to encode. Non-string values are converted with `str()`.

    Returns:
        The encoded segment, or an empty string for empty input.
    """
    if segment is None:
        return ""
    text = str(segment)
    if not text:
        return ""
    return _url_quote(text, safe=":")


def unquote(segment: Any) -> str:
    """Decodes `%XX` escapes in a purl segment.

    A literal `+` stays a plus sign and a literal space stays a space.
    Malformed escapes are left untouched.
    """
    if segment is None:
        return ""
    text = str(segment)
    if not text:
        return ""
    return _url_unquote(text)


def _identity(segment: Any) -> Any:
    return segment


def get_quoter(direction: Direction) -> Callable[[Any], Any]:
    """Returns the codec function for a normalization direction.

    Args:
        direction: ENCODE for `quote`, DECODE for `unquote`, NONE for a pass-through.

    Returns:
        A single-argument callable.
    """
    if direction is Direction.ENCODE:
        return quote
    if direction is Direction.DECODE:
        return unquote
    return _identity
