"""Kind classifier — priority tiers and detector category mapping."""

from __future__ import annotations
from typing import Iterable

from .types import Action, Category, Checking, Content, Range, Regex

RANGE_TIER = 0
REGEX_TIER = 1
ACTION_TIER = 2
CONTENT_TIER = 3


def tier(checking: Checking) -> int:
    """Priority tier of a checking; lower wins overlap conflicts."""
    match checking:
        case Range():
            return RANGE_TIER
        case Regex():
            return REGEX_TIER
        case Action():
            return ACTION_TIER
        case Content():
            return CONTENT_TIER
    raise TypeError(f"not a checking: {checking!r}")


def category_of(checking: Checking) -> Category | None:
    """Detector category for a content checking, None for the others."""
    match checking:
        case Content(category=category):
            return category
        case _:
            return None


def checking_for(tag: str | Category) -> Content | None:
    """Checking for a detector category tag; None means unsupported."""
    if isinstance(tag, Category):
        return Content(tag)
    try:
        return Content(Category(tag))
    except ValueError:
        return None


def ordered(checkings: Iterable[Checking]) -> list[Checking]:
    """Deduplicate (first occurrence kept) and stable-sort by tier."""
    unique = list(dict.fromkeys(checkings))
    return sorted(unique, key=tier)
