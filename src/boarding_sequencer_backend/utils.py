"""
Utility functions for text normalization and upload decoding.

This module provides helper functions for:
- Splitting uploaded text into lines regardless of line-ending style
- Removing every whitespace character from a token
- Decoding raw upload bytes without failing on bad sequences
"""

from __future__ import annotations

import re
from typing import List

# Pattern to match any run of whitespace, including tabs and non-breaking spaces
WHITESPACE_PATTERN = re.compile(r"\s+")

# Line terminators: LF or CRLF only; other control characters stay inside the line
LINE_BREAK_PATTERN = re.compile(r"\r?\n")


def strip_whitespace(value: str) -> str:
    """
    Remove all whitespace from a string, not only the ends.

    Args:
        value: The string to clean

    Returns:
        The string with every whitespace character removed

    Example:
        >>> strip_whitespace(" A20, C2 ")
        "A20,C2"
    """
    return WHITESPACE_PATTERN.sub("", value)


def split_lines(text: str) -> List[str]:
    """
    Split text on ``\\n`` and ``\\r\\n`` only.

    A lone ``\\r``, form feed or Unicode line separator is left inside the
    line, where parsing treats it as ordinary whitespace.

    Args:
        text: The full text block

    Returns:
        The list of lines without their terminators
    """
    return LINE_BREAK_PATTERN.split(text)


def decode_upload(raw: bytes, encoding: str = "utf-8-sig") -> str:
    """
    Decode uploaded bytes into text.

    Undecodable byte sequences are replaced with U+FFFD rather than raising,
    so a single bad byte only affects the line it appears on.

    Args:
        raw: The uploaded file content
        encoding: Codec name; ``utf-8-sig`` drops a leading byte-order mark

    Returns:
        The decoded text
    """
    return raw.decode(encoding, errors="replace")
