"""Helpers for cleaning up tab-separated input lines."""

from __future__ import annotations

# Number of tab separators expected in a normalized line
TABS_IN_LINE = 2


def ltrim(text: str) -> str:
    """Return text without leading whitespace."""
    return text.lstrip()


def rtrim(text: str) -> str:
    """Return text without trailing whitespace."""
    return text.rstrip()


def trim(text: str) -> str:
    """Return text without leading or trailing whitespace."""
    return rtrim(ltrim(text))


def normalize_line(line: str, tabs: int = TABS_IN_LINE) -> str:
    """Strip line breaks from line and check its tab count.

    Args:
        line: Raw input line
        tabs: Exact number of tab characters the line must contain

    Returns:
        The line with every carriage return and newline removed

    Raises:
        ValueError: If the line does not contain exactly ``tabs`` tab characters
    """
    normalized = line.replace("\r", "").replace("\n", "")

    count = normalized.count("\t")
    if count != tabs:
        raise ValueError(f"invalid \\t count, expected {tabs}, line has {count}")

    return normalized


def split_fields(line: str, tabs: int = TABS_IN_LINE) -> list[str]:
    """Normalize line and split it into its tab-separated fields.

    Raises:
        ValueError: If the line does not contain exactly ``tabs`` tab characters
    """
    return normalize_line(line, tabs).split("\t")
