"""Parsing helpers for rule settings supplied as lists or delimited strings."""

from typing import Any, FrozenSet


def parse_name_set(value: Any, separator: str = ',') -> FrozenSet[str]:
    """
    Normalize a rule setting into a set of names.

    Accepts a delimited string ("CS Zurich,CS London"), any iterable of
    strings, or None. Surrounding whitespace is stripped and empty entries
    are dropped.
    """
    if value is None:
        return frozenset()
    if isinstance(value, str):
        items = value.split(separator)
    else:
        items = value

    return frozenset(str(item).strip() for item in items if str(item).strip())


def is_blank(value: Any) -> bool:
    return value is None or not str(value).strip()
