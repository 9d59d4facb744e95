"""
Lenient parsing of query/path integers.

Path ids and `?page=` are taken as strings and read up to the first
non-digit, so "12abc" is 12 and "abc" is nothing. Values outside the
INTEGER column range can never match a row.
"""

from __future__ import annotations

import re

MAX_ID = 2**31 - 1
MIN_INT = -(2**31)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_leading_int(raw: str | None) -> int | None:
    match = _LEADING_INT.match(raw or "")
    if match is None:
        return None
    return int(match.group(1))


def parse_int32(raw: str | None) -> int | None:
    value = parse_leading_int(raw)
    if value is None or not MIN_INT <= value <= MAX_ID:
        return None
    return value


def parse_id(raw: str | None) -> int | None:
    """
    A serial row id usable as an asyncpg INTEGER parameter, or None.
    """
    value = parse_int32(raw)
    if value is None or value < 1:
        return None
    return value
