"""Validation helpers for manual field edits."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

_TRUE_WORDS = {"yes", "y", "true", "1", "solved"}
_FALSE_WORDS = {"no", "n", "false", "0", "failed"}


@dataclass
class ParsedField:
    value: Union[int, bool, None]
    error: Optional[str] = None


def parse_optional_int(raw_value: str, name: str) -> ParsedField:
    raw_value = raw_value.strip()
    if not raw_value:
        return ParsedField(None)
    if not _is_int(raw_value):
        return ParsedField(None, f"{name} must be a whole number")
    value = int(raw_value)
    if value < 0:
        return ParsedField(None, f"{name} must not be negative")
    return ParsedField(value)


def parse_solved(raw_value: str) -> ParsedField:
    raw_value = raw_value.strip().lower()
    if not raw_value:
        return ParsedField(None)
    if raw_value in _TRUE_WORDS:
        return ParsedField(True)
    if raw_value in _FALSE_WORDS:
        return ParsedField(False)
    return ParsedField(None, "solved must be yes, no or empty")


def parse_duration(raw_value: str) -> ParsedField:
    """Accept seconds ("83") or a clock ("1:23")."""

    raw_value = raw_value.strip()
    if ":" not in raw_value:
        return parse_optional_int(raw_value, "time")
    minutes, _, seconds = raw_value.partition(":")
    if not (_is_int(minutes) and _is_int(seconds)) or int(minutes) < 0 or not 0 <= int(seconds) < 60:
        return ParsedField(None, "time must be seconds or m:ss")
    return ParsedField(int(minutes) * 60 + int(seconds))


def format_solved(value: Optional[bool]) -> str:
    if value is None:
        return ""
    return "yes" if value else "no"


def format_optional(value: Optional[int]) -> str:
    return "" if value is None else str(value)


def _is_int(value: str) -> bool:
    try:
        int(value)
    except ValueError:
        return False
    return True
