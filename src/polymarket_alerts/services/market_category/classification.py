# -*- coding: utf-8 -*-
"""Event tag slugs -> (category, subcategory) rules."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from polymarket_alerts.models.trade import CategoryInfo

OTHER = "Other"

# Checked in order; the first category with a matching slug wins
MAJOR_CATEGORIES: tuple[tuple[str, frozenset[str]], ...] = (
    ("Politics", frozenset({"politics", "elections", "geopolitics"})),
    ("Crypto", frozenset({"crypto"})),
    ("Sports", frozenset({"sports"})),
    ("Business", frozenset({"business", "economy"})),
    ("Culture", frozenset({"culture", "entertainment"})),
    ("Tech/Science", frozenset({"science", "technology", "tech"})),
)

MAJOR_SLUGS: frozenset[str] = frozenset().union(*(slugs for _, slugs in MAJOR_CATEGORIES))

# Generic tags that say nothing about the topic
NOISE_SLUGS: frozenset[str] = frozenset(
    {"recurring", "monthly", "daily", "weekly", "featured", "new"}
)


def normalize_tag_slugs(raw: Iterable[object]) -> tuple[str, ...]:
    """Strip slugs and drop empty ones, keeping event order."""
    return tuple(s for s in (str(x or "").strip() for x in raw) if s)


def pick_major_category(tag_slugs: Iterable[str]) -> str:
    slugs = {s.lower() for s in tag_slugs}
    for category, members in MAJOR_CATEGORIES:
        if slugs & members:
            return category
    return OTHER


def pick_subcategory(tag_slugs: Sequence[str], major: str) -> str:
    """First slug (event order, lower-cased) that is neither major nor noise; else `major`."""
    for slug in tag_slugs:
        s = slug.lower()
        if s and s not in MAJOR_SLUGS and s not in NOISE_SLUGS:
            return s
    return major


def classify(tag_slugs: Sequence[str]) -> CategoryInfo:
    major = pick_major_category(tag_slugs)
    return CategoryInfo(
        category=major,
        subcategory=pick_subcategory(tag_slugs, major),
        tag_slugs=tuple(tag_slugs),
    )
