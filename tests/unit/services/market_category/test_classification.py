# -*- coding: utf-8 -*-
"""Unit tests for tag slug classification rules."""

from __future__ import annotations

from polymarket_alerts.models.trade import CategoryInfo
from polymarket_alerts.services.market_category.classification import (
    classify,
    normalize_tag_slugs,
    pick_major_category,
    pick_subcategory,
)


def test_classify_election_event() -> None:
    assert classify(("elections", "senate-2026")) == CategoryInfo(
        category="Politics",
        subcategory="senate-2026",
        tag_slugs=("elections", "senate-2026"),
    )


def test_classify_noise_only_event_is_other() -> None:
    info = classify(("recurring", "weekly"))

    assert info.category == "Other"
    assert info.subcategory == "Other"
    assert info.tag_slugs == ("recurring", "weekly")


def test_classify_no_tags() -> None:
    assert classify(()) == CategoryInfo()


def test_major_category_follows_priority_not_tag_order() -> None:
    assert pick_major_category(["sports", "crypto"]) == "Crypto"
    assert pick_major_category(["technology", "economy"]) == "Business"
    assert pick_major_category(["entertainment", "science"]) == "Culture"
    assert pick_major_category(["geopolitics", "sports"]) == "Politics"


def test_major_category_is_case_insensitive() -> None:
    assert pick_major_category(["CRYPTO"]) == "Crypto"
    assert pick_major_category(["Tech"]) == "Tech/Science"


def test_subcategory_skips_major_and_noise_slugs_in_event_order() -> None:
    tags = ["featured", "crypto", "Sports", "Bitcoin", "eth"]
    assert pick_subcategory(tags, "Crypto") == "bitcoin"


def test_subcategory_falls_back_to_major() -> None:
    assert pick_subcategory(["sports", "daily"], "Sports") == "Sports"


def test_classify_keeps_original_slugs() -> None:
    info = classify(("Crypto", "Bitcoin"))

    assert info.category == "Crypto"
    assert info.subcategory == "bitcoin"
    assert info.tag_slugs == ("Crypto", "Bitcoin")


def test_normalize_tag_slugs_drops_blanks() -> None:
    assert normalize_tag_slugs([" politics ", "", None, "us"]) == ("politics", "us")
