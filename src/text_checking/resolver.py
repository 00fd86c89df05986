"""Resolver — the main API.  Tiered: ranges, regexes, actions, content.

Usage:
    from text_checking import Resolver, Regex, DATE, LINK

    resolver = Resolver()        # reusable, thread-safe after init

    detections = resolver.resolve("Meet on 2024-01-01", [Regex(r"\\d{4}"), DATE])
    for rng, detection in detections.items():
        print(rng, detection.checking, detection.result)

No two keys of the returned map overlap.  Within a tier, earlier
candidates win; across tiers, lower tiers win (range > regex > action >
content detector categories).
"""

from __future__ import annotations
import bisect
import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, cast

from .kinds import category_of, ordered
from .patterns import (
    Candidate, ContentDetector, MatcherOutcome,
    match_actions, match_content, match_range, match_regex,
)
from .types import (
    DEFAULT_CHECKINGS, Action, AnnotatedText, Checking, Content, Detection,
    DetectionMap, Range, Regex, TextRange,
)

logger = logging.getLogger(__name__)


@dataclass
class ResolverConfig:
    """Configuration for the Resolver."""
    checkings: tuple[Checking, ...] = DEFAULT_CHECKINGS   # used when resolve() gets none
    use_detector: bool = True         # enable the Presidio content detector
    language: str = "en"
    score_threshold: float = 0.35     # minimum confidence for Presidio
    default_region: str = "US"        # phone number parsing region
    # Overrides the Presidio detector (e.g. a platform detector or a fake in tests)
    detector: ContentDetector | None = field(default=None, repr=False)


class _RangeIndex:
    """Accepted, mutually disjoint ranges sorted by location."""

    __slots__ = ("_starts", "_ends")

    def __init__(self) -> None:
        self._starts: list[int] = []
        self._ends: list[int] = []

    def overlaps(self, rng: TextRange) -> bool:
        # Only the last accepted range starting before rng.end can reach into it
        i = bisect.bisect_left(self._starts, rng.end) - 1
        return i >= 0 and self._ends[i] > rng.location

    def add(self, rng: TextRange) -> None:
        i = bisect.bisect_left(self._starts, rng.location)
        self._starts.insert(i, rng.location)
        self._ends.insert(i, rng.end)


# Marker for "use the default Presidio detector"; pass None to opt out
DEFAULT_DETECTOR: ContentDetector = cast(ContentDetector, object())


def default_detector() -> ContentDetector:
    """Presidio detector with default settings; the engine loads on first use."""
    from .presidio_layer import PresidioDetector
    return PresidioDetector()


def _matcher_outcomes(
    text: AnnotatedText,
    kinds: list[Checking],
    detector: ContentDetector | None,
) -> Iterator[tuple[Checking, MatcherOutcome]]:
    """Outcome per checking in tier order.

    Content checkings share a single detector pass, yielded once under the
    first of them with candidates for every requested category.
    """
    requested = {c for c in (category_of(k) for k in kinds) if c is not None}
    scanned_content = False
    for checking in kinds:
        match checking:
            case Range():
                yield checking, match_range(text, checking)
            case Regex():
                yield checking, match_regex(text, checking)
            case Action():
                yield checking, match_actions(text)
            case Content():
                if scanned_content:
                    continue
                scanned_content = True
                yield checking, match_content(text, detector, requested)


def resolve(
    text: str | AnnotatedText,
    checkings: Iterable[Checking],
    *,
    detector: ContentDetector | None = DEFAULT_DETECTOR,
) -> DetectionMap:
    """Map each detected range to its winning (checking, result) pair.

    Args:
        text: Plain string, or AnnotatedText carrying action markers.
        checkings: Requested kinds; duplicates are collapsed.
        detector: Content detector for the date/link/address/phone/transit
            kinds.  Defaults to the Presidio detector; None means those
            kinds find nothing.
    """
    if isinstance(text, str):
        text = AnnotatedText(text)
    kinds = ordered(checkings)
    if not kinds or not text.string:
        return {}
    if detector is DEFAULT_DETECTOR:
        detector = default_detector()

    result: DetectionMap = {}
    index = _RangeIndex()
    for checking, outcome in _matcher_outcomes(text, kinds, detector):
        if outcome.failed:
            logger.warning("%r contributed no detections: %s", checking, outcome.error)
            continue
        for candidate in outcome.candidates:
            _insert(result, index, candidate)
    return result


def _insert(result: DetectionMap, index: _RangeIndex, candidate: Candidate) -> bool:
    """Insert unless the range is taken or overlaps an accepted one."""
    rng = candidate.range
    if rng.length <= 0 or rng in result or index.overlaps(rng):
        return False
    result[rng] = Detection(candidate.checking, candidate.result)
    index.add(rng)
    return True


class Resolver:
    """Reusable resolver bound to a configuration and content detector."""

    def __init__(self, config: ResolverConfig | None = None) -> None:
        self.config = config or ResolverConfig()
        self._detector = self._build_detector()

    def _build_detector(self) -> ContentDetector | None:
        if self.config.detector is not None:
            return self.config.detector
        if not self.config.use_detector:
            return None
        from .presidio_layer import PresidioDetector
        return PresidioDetector(
            language=self.config.language,
            score_threshold=self.config.score_threshold,
            default_region=self.config.default_region,
        )

    @property
    def detector(self) -> ContentDetector | None:
        return self._detector

    def resolve(
        self,
        text: str | AnnotatedText,
        checkings: Iterable[Checking] | None = None,
    ) -> DetectionMap:
        """Resolve with explicit checkings, or the configured ones when None."""
        if checkings is None:
            checkings = self.config.checkings
        return resolve(text, checkings, detector=self._detector)

    def outcomes(
        self,
        text: str | AnnotatedText,
        checkings: Iterable[Checking] | None = None,
    ) -> dict[Checking, MatcherOutcome]:
        """Per-checking matcher outcomes, before conflict resolution.

        Lets callers see which checkings failed (bad pattern, detector
        unavailable) since resolve() only reports the merged map.
        """
        if isinstance(text, str):
            text = AnnotatedText(text)
        kinds = ordered(self.config.checkings if checkings is None else checkings)
        out: dict[Checking, MatcherOutcome] = {}
        for checking, outcome in _matcher_outcomes(text, kinds, self._detector):
            if not isinstance(checking, Content):
                out[checking] = outcome
                continue
            for kind in kinds:
                category = category_of(kind)
                if category is not None:
                    out[kind] = MatcherOutcome(
                        [c for c in outcome.candidates if category_of(c.checking) is category],
                        outcome.error,
                    )
        return out
