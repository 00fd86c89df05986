"""Result projector — raw detector matches into typed results.

Every projection returns None when the raw match lacks the data its
payload requires; callers drop such matches.
"""

from __future__ import annotations
import logging
from datetime import datetime
from typing import Any, Mapping
from urllib.parse import urlsplit

from .types import (
    AddressResult, Category, DateResult, LinkResult, PhoneNumberResult,
    RawMatch, Result, TransitInformationResult,
)

logger = logging.getLogger(__name__)

_ADDRESS_FIELDS = (
    "name", "job_title", "organization", "street", "city",
    "state", "zip", "country", "phone",
)


def _text(value: Any) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def resolve_url(raw: str | None) -> str | None:
    """Resolve a detected link to an absolute URL."""
    raw = _text(raw)
    if raw is None:
        return None
    if urlsplit(raw).scheme:
        return raw
    if "@" in raw and "/" not in raw:
        return f"mailto:{raw}"
    return f"http://{raw}"


def project_date(payload: Mapping[str, Any]) -> DateResult | None:
    date = payload.get("date")
    if date is not None and not isinstance(date, datetime):
        return None
    time_zone = _text(payload.get("time_zone"))
    if time_zone is None and date is not None and date.tzinfo is not None:
        time_zone = date.tzname()
    try:
        duration = float(payload.get("duration") or 0.0)
    except (TypeError, ValueError):
        return None
    return DateResult(
        date=date,
        duration=duration,
        time_zone=time_zone,
    )


def project_link(payload: Mapping[str, Any]) -> LinkResult | None:
    url = resolve_url(payload.get("url"))
    return LinkResult(url) if url else None


def project_address(payload: Mapping[str, Any]) -> AddressResult | None:
    components = payload.get("components") or {}
    if not isinstance(components, Mapping):
        return None
    fields = {name: _text(components.get(name)) for name in _ADDRESS_FIELDS}
    if not any(fields.values()):
        return None
    return AddressResult(**fields)


def project_phone_number(payload: Mapping[str, Any]) -> PhoneNumberResult | None:
    number = _text(payload.get("phone_number"))
    return PhoneNumberResult(number) if number else None


def project_transit_information(
    payload: Mapping[str, Any],
) -> TransitInformationResult | None:
    components = payload.get("components")
    if not components or not isinstance(components, Mapping):
        return None
    airline = _text(components.get("airline"))
    flight = _text(components.get("flight"))
    if airline is None and flight is None:
        return None
    return TransitInformationResult(airline=airline, flight=flight)


_PROJECTIONS = {
    Category.DATE: project_date,
    Category.LINK: project_link,
    Category.ADDRESS: project_address,
    Category.PHONE_NUMBER: project_phone_number,
    Category.TRANSIT_INFORMATION: project_transit_information,
}


def project(category: Category, match: RawMatch) -> Result | None:
    """Project a raw match of a known category; None if unprojectable."""
    result = None
    if isinstance(match.payload, Mapping):
        result = _PROJECTIONS[category](match.payload)
    if result is None:
        logger.debug("dropping unprojectable %s match at %s", category.value, match.range)
    return result
