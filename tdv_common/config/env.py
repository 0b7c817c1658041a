"""Environment variable parsing utilities."""

from __future__ import annotations


def parse_bool_env(value: str | None) -> bool | None:
    """Parse a boolean from an environment variable string.

    Returns True for "1", "true", "yes", "on" (case-insensitive).
    Returns None if value is None.
    """
    if value is None:
        return None
    return value.strip().lower() in {"1", "true", "yes", "on"}


def parse_int_env(value: str | None) -> int | None:
    """Parse an integer from an environment variable string.

    Returns None if value is None or cannot be parsed.
    """
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def parse_int_list_env(value: str | None) -> list[int]:
    """Parse a comma-separated list of integers.

    Example: "10,25,50" -> [10, 25, 50]
    Tokens that are not integers are skipped. Returns an empty list if value
    is None or empty.
    """
    numbers: list[int] = []
    if not value:
        return numbers
    for token in value.split(","):
        parsed = parse_int_env(token.strip())
        if parsed is None:
            continue
        numbers.append(parsed)
    return numbers
