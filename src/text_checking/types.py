"""Core types.

Checkings describe *what to look for*; results carry the typed payload of a
detection.  Both are closed sets of frozen dataclasses so callers can use
``match`` statements over them.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Union


@dataclass(frozen=True, slots=True, order=True)
class TextRange:
    """Half-open character range ``[location, location + length)``."""
    location: int
    length: int

    @property
    def end(self) -> int:
        return self.location + self.length

    def overlaps(self, other: TextRange) -> bool:
        return self.location < other.end and other.location < self.end

    def within(self, size: int) -> bool:
        return 0 <= self.location and self.length >= 0 and self.end <= size

    @classmethod
    def from_span(cls, start: int, end: int) -> TextRange:
        return cls(start, end - start)


class Category(Enum):
    """Category tags reported by a content detector."""
    DATE = "date"
    LINK = "link"
    ADDRESS = "address"
    PHONE_NUMBER = "phone_number"
    TRANSIT_INFORMATION = "transit_information"


# ── Checkings ────────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class Range:
    """Caller asserts this exact range is a detection."""
    range: TextRange


@dataclass(frozen=True, slots=True)
class Regex:
    """Search the text with a (case-insensitive) pattern."""
    pattern: str


@dataclass(frozen=True, slots=True)
class Action:
    """Adopt the action markers already attached to the text."""


@dataclass(frozen=True, slots=True)
class Content:
    """One content-detector category."""
    category: Category


Checking = Union[Range, Regex, Action, Content]

ACTION = Action()
DATE = Content(Category.DATE)
LINK = Content(Category.LINK)
ADDRESS = Content(Category.ADDRESS)
PHONE_NUMBER = Content(Category.PHONE_NUMBER)
TRANSIT_INFORMATION = Content(Category.TRANSIT_INFORMATION)

DEFAULT_CHECKINGS: tuple[Checking, ...] = (
    DATE, LINK, ADDRESS, PHONE_NUMBER, TRANSIT_INFORMATION,
)
EMPTY_CHECKINGS: tuple[Checking, ...] = ()


# ── Results ──────────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class RangeResult:
    text: str


@dataclass(frozen=True, slots=True)
class RegexResult:
    text: str


@dataclass(frozen=True, slots=True)
class ActionResult:
    payload: Any


@dataclass(frozen=True, slots=True)
class DateResult:
    date: datetime | None = None
    duration: float = 0.0                  # seconds
    time_zone: str | None = None


@dataclass(frozen=True, slots=True)
class LinkResult:
    url: str


@dataclass(frozen=True, slots=True)
class AddressResult:
    name: str | None = None
    job_title: str | None = None
    organization: str | None = None
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    country: str | None = None
    phone: str | None = None


@dataclass(frozen=True, slots=True)
class PhoneNumberResult:
    number: str


@dataclass(frozen=True, slots=True)
class TransitInformationResult:
    airline: str | None = None
    flight: str | None = None


Result = Union[
    RangeResult, RegexResult, ActionResult, DateResult, LinkResult,
    AddressResult, PhoneNumberResult, TransitInformationResult,
]


@dataclass(frozen=True, slots=True)
class Detection:
    """The winning (checking, result) pair for one range."""
    checking: Checking
    result: Result


DetectionMap = dict[TextRange, Detection]


# ── Inputs ───────────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class RawMatch:
    """A single match as reported by a content detector."""
    category: str          # detector tag, e.g. "date", "link"
    range: TextRange
    payload: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ActionMarker:
    """An externally defined annotation attached to a text range."""
    payload: Any = None


@dataclass(frozen=True, slots=True)
class StyleRun:
    range: TextRange
    attributes: Mapping[str, Any]


@dataclass(frozen=True, slots=True)
class AnnotatedText:
    """Plain text plus its pre-attached action markers and style runs."""
    string: str
    actions: tuple[tuple[TextRange, ActionMarker], ...] = ()
    styles: tuple[StyleRun, ...] = ()

    def __len__(self) -> int:
        return len(self.string)

    def substring(self, rng: TextRange) -> str:
        return self.string[rng.location:rng.end]

    def action_payload(self, rng: TextRange) -> Any:
        """Reverse lookup of the marker attached at exactly ``rng``."""
        for marker_range, marker in self.actions:
            if marker_range == rng:
                return marker.payload
        raise KeyError(rng)

    def attributes_at(self, index: int) -> dict[str, Any]:
        """Effective attributes at a character index (later runs win)."""
        merged: dict[str, Any] = {}
        for run in self.styles:
            if run.range.location <= index < run.range.end:
                merged.update(run.attributes)
        return merged
