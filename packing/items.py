"""Decoding raw item strings into item sequences."""

from __future__ import annotations

import re
from collections.abc import Sequence

from .base import ItemParseError

_SEPARATORS = re.compile(r"[\s,]+")
_SIZE_TOKEN = re.compile(r"[0-9]+")


def parse_items(text: str) -> list[int]:
    """Decode a raw item string.

    The compact form has one item per character, each a digit from 1 to 9
    (``"163841689525773"``). When the text contains commas or whitespace it is
    split on them instead and every token is read as a positive integer, so
    sizes above 9 can be written (``"12, 7, 30"``).
    """

    stripped = text.strip()
    if not stripped:
        return []

    if _SEPARATORS.search(stripped):
        items: list[int] = []
        for token in _SEPARATORS.split(stripped):
            if not token:
                continue
            if not _SIZE_TOKEN.fullmatch(token) or int(token) == 0:
                raise ItemParseError(f"Invalid item size: {token!r}")
            items.append(int(token))
        return items

    items = []
    for position, char in enumerate(stripped):
        if char not in "123456789":
            raise ItemParseError(
                f"Invalid item {char!r} at position {position}: expected a digit 1-9"
            )
        items.append(int(char))
    return items


def keep_item_order(items: Sequence[int]) -> list[int]:
    return list(items)


def sort_items_by_decreasing_size(items: Sequence[int]) -> list[int]:
    # sorted() stays stable with reverse=True; equal sizes keep input order
    return sorted(items, reverse=True)


def string_to_unsorted_list(text: str) -> list[int]:
    return keep_item_order(parse_items(text))


def string_to_sorted_list(text: str) -> list[int]:
    return sort_items_by_decreasing_size(parse_items(text))
