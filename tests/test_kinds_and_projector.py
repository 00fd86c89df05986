"""Tests for the kind classifier and result projector."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from datetime import datetime, timedelta, timezone

import pytest

from text_checking import (
    ACTION, ADDRESS, DATE, LINK, PHONE_NUMBER, TRANSIT_INFORMATION,
    AddressResult, Category, DateResult, LinkResult, PhoneNumberResult,
    Range, RawMatch, Regex, TextRange, TransitInformationResult,
)
from text_checking.kinds import category_of, checking_for, ordered, tier
from text_checking.projector import project, resolve_url


# ── Tiers ────────────────────────────────────────────────────────────

def test_tiers():
    assert tier(Range(TextRange(0, 1))) == 0
    assert tier(Regex("x")) == 1
    assert tier(ACTION) == 2
    for checking in (DATE, LINK, ADDRESS, PHONE_NUMBER, TRANSIT_INFORMATION):
        assert tier(checking) == 3


def test_tier_rejects_non_checkings():
    with pytest.raises(TypeError):
        tier("date")


def test_ordered_dedupes_and_is_stable():
    rng = Range(TextRange(0, 2))
    result = ordered([LINK, Regex("b"), DATE, rng, Regex("a"), LINK, ACTION, Regex("b")])
    assert result == [rng, Regex("b"), Regex("a"), ACTION, LINK, DATE]


def test_checkings_compare_by_payload():
    assert Regex("a") == Regex("a")
    assert Regex("a") != Regex("b")
    assert Range(TextRange(1, 2)) == Range(TextRange(1, 2))
    assert Range(TextRange(1, 2)) != Range(TextRange(1, 3))


# ── Category mapping ─────────────────────────────────────────────────

@pytest.mark.parametrize("checking", [DATE, LINK, ADDRESS, PHONE_NUMBER, TRANSIT_INFORMATION])
def test_category_round_trip(checking):
    assert checking_for(category_of(checking).value) == checking


def test_non_content_checkings_have_no_category():
    assert category_of(ACTION) is None
    assert category_of(Regex("x")) is None


def test_unknown_tag_is_unsupported():
    assert checking_for("spelling") is None


# ── Projection ───────────────────────────────────────────────────────

def _raw(category, **payload):
    return RawMatch(category.value, TextRange(0, 1), payload)


def test_date_without_instant():
    result = project(Category.DATE, _raw(Category.DATE, duration=604800))
    assert result == DateResult(date=None, duration=604800.0, time_zone=None)


def test_date_defaults_duration():
    when = datetime(2024, 1, 1, tzinfo=timezone(timedelta(hours=2), "CEST"))
    result = project(Category.DATE, _raw(Category.DATE, date=when))
    assert result.duration == 0.0
    assert result.time_zone == "CEST"


def test_date_rejects_non_datetime():
    assert project(Category.DATE, _raw(Category.DATE, date="tomorrow")) is None


@pytest.mark.parametrize("raw, url", [
    ("https://example.com/a", "https://example.com/a"),
    ("example.com", "http://example.com"),
    ("bob@example.com", "mailto:bob@example.com"),
    ("  ", None),
    (None, None),
])
def test_resolve_url(raw, url):
    assert resolve_url(raw) == url


def test_link_without_url_is_dropped():
    assert project(Category.LINK, _raw(Category.LINK)) is None
    assert project(Category.LINK, _raw(Category.LINK, url="a.io")) == LinkResult("http://a.io")


def test_partial_address_keeps_absent_fields_none():
    result = project(Category.ADDRESS, _raw(
        Category.ADDRESS, components={"street": "1 Main St", "city": "Springfield", "zip": ""},
    ))
    assert result == AddressResult(street="1 Main St", city="Springfield")
    assert result.zip is None


def test_empty_address_is_dropped():
    assert project(Category.ADDRESS, _raw(Category.ADDRESS, components={})) is None
    assert project(Category.ADDRESS, _raw(Category.ADDRESS)) is None


def test_phone_number():
    assert project(Category.PHONE_NUMBER, _raw(Category.PHONE_NUMBER, phone_number="+14155552671")) \
        == PhoneNumberResult("+14155552671")
    assert project(Category.PHONE_NUMBER, _raw(Category.PHONE_NUMBER)) is None


def test_transit_information():
    result = project(Category.TRANSIT_INFORMATION, _raw(
        Category.TRANSIT_INFORMATION, components={"flight": "UA123"},
    ))
    assert result == TransitInformationResult(airline=None, flight="UA123")
    assert project(Category.TRANSIT_INFORMATION, _raw(Category.TRANSIT_INFORMATION)) is None


def test_malformed_payloads_are_unprojectable():
    assert project(Category.DATE, _raw(Category.DATE, duration="soon")) is None
    assert project(Category.ADDRESS, _raw(Category.ADDRESS, components="1 Main St")) is None
    assert project(Category.TRANSIT_INFORMATION, _raw(
        Category.TRANSIT_INFORMATION, components=["UA", "123"],
    )) is None
    assert project(Category.LINK, RawMatch("link", TextRange(0, 1), "a.io")) is None
