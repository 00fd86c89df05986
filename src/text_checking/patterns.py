"""Matchers — produce ordered candidate detections for one checking.

Each matcher returns a MatcherOutcome instead of raising: a failed
checking contributes no candidates and records why, so one bad pattern
never suppresses unrelated detections.
"""

from __future__ import annotations
import logging
import re
from dataclasses import dataclass, field
from typing import Collection, Protocol

from .kinds import checking_for
from .projector import project
from .types import (
    ACTION, ActionResult, AnnotatedText, Category, Checking, RawMatch,
    Range, RangeResult, Regex, RegexResult, Result, TextRange,
)

logger = logging.getLogger(__name__)


class ContentDetector(Protocol):
    """Multi-category scanner for dates, links, addresses, phones, flights."""

    def detect(self, text: str) -> list[RawMatch]:
        ...


@dataclass(frozen=True, slots=True)
class Candidate:
    range: TextRange
    checking: Checking
    result: Result


@dataclass(slots=True)
class MatcherOutcome:
    """Candidates found for one checking, or the reason there are none."""
    candidates: list[Candidate] = field(default_factory=list)
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @classmethod
    def failure(cls, error: str) -> MatcherOutcome:
        return cls(candidates=[], error=error)


def match_range(text: AnnotatedText, checking: Range) -> MatcherOutcome:
    """The caller-supplied range itself, with its substring."""
    rng = checking.range
    if not rng.within(len(text)):
        return MatcherOutcome.failure(f"range {rng} outside text of length {len(text)}")
    return MatcherOutcome([Candidate(rng, checking, RangeResult(text.substring(rng)))])


def match_regex(text: AnnotatedText, checking: Regex) -> MatcherOutcome:
    """All non-overlapping case-insensitive matches, left to right."""
    try:
        pattern = re.compile(checking.pattern, re.IGNORECASE)
    except (re.error, OverflowError, RecursionError) as e:
        return MatcherOutcome.failure(f"invalid pattern {checking.pattern!r}: {e}")

    candidates: list[Candidate] = []
    for m in pattern.finditer(text.string):
        if m.start() == m.end():
            continue
        candidates.append(Candidate(
            TextRange.from_span(m.start(), m.end()),
            checking,
            RegexResult(m.group()),
        ))
    return MatcherOutcome(candidates)


def match_actions(text: AnnotatedText) -> MatcherOutcome:
    """Pre-attached action markers, in their existing order."""
    return MatcherOutcome([
        Candidate(rng, ACTION, ActionResult(text.action_payload(rng)))
        for rng, _marker in text.actions
    ])


def match_content(
    text: AnnotatedText,
    detector: ContentDetector | None,
    requested: Collection[Category],
) -> MatcherOutcome:
    """Run the detector once and keep projectable matches of requested categories."""
    if detector is None:
        return MatcherOutcome.failure("content detector unavailable")
    try:
        raw_matches = detector.detect(text.string)
    except Exception as e:
        return MatcherOutcome.failure(f"content detector failed: {e}")

    candidates: list[Candidate] = []
    for raw in raw_matches:
        checking = checking_for(raw.category)
        if checking is None or checking.category not in requested:
            continue
        if not raw.range.within(len(text)):
            logger.debug("dropping %s match outside the text at %s", raw.category, raw.range)
            continue
        try:
            result = project(checking.category, raw)
        except (TypeError, ValueError, AttributeError) as e:
            logger.debug("dropping malformed %s match at %s: %s", raw.category, raw.range, e)
            continue
        if result is None:
            continue
        candidates.append(Candidate(raw.range, checking, result))
    return MatcherOutcome(candidates)
