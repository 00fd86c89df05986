"""Default content detector — Presidio NER plus a few pattern recognizers.

Covers the five content categories in a single ``analyze`` call: dates
(spaCy DATE_TIME), links (URL, EMAIL_ADDRESS), phone numbers
(PHONE_NUMBER, normalized through ``phonenumbers``), street addresses and
flight numbers (custom pattern recognizers registered on the engine).
"""

from __future__ import annotations
import logging
import re
import threading
from datetime import datetime
from typing import TYPE_CHECKING, Any

from .types import Category, RawMatch, TextRange

if TYPE_CHECKING:
    from presidio_analyzer import AnalyzerEngine

logger = logging.getLogger(__name__)

# Lazy per-language singletons — don't load spaCy until first use
_engines: dict[str, AnalyzerEngine] = {}
_engines_lock = threading.Lock()

STREET_ADDRESS = "STREET_ADDRESS"
FLIGHT = "FLIGHT"

_STREET_ADDRESS_RE = re.compile(
    r"\b(?P<street>\d{1,6}\s+(?:[A-Z][a-z]+\s+){1,4}"
    r"(?:Street|St|Avenue|Ave|Road|Rd|Boulevard|Blvd|Lane|Ln|Drive|Dr|Way|Court|Ct|Place|Pl)\.?)"
    r"(?:,\s*(?P<city>[A-Z][a-z]+(?:\s[A-Z][a-z]+)*))?"
    r"(?:,\s*(?P<state>[A-Z]{2}))?"
    r"(?:\s+(?P<zip>\d{5}(?:-\d{4})?))?"
)

_FLIGHT_RE = re.compile(r"\b(?P<airline>[A-Z]{2}|[A-Z]\d|\d[A-Z])\s?(?P<flight>\d{1,4})\b")

# IATA designators for the carriers we name; others keep the code
AIRLINES = {
    "AA": "American Airlines",
    "AC": "Air Canada",
    "AF": "Air France",
    "BA": "British Airways",
    "DL": "Delta Air Lines",
    "EK": "Emirates",
    "LH": "Lufthansa",
    "QF": "Qantas",
    "UA": "United Airlines",
    "VA": "Virgin Australia",
}

# Presidio entity → detector category tag
ENTITY_CATEGORIES = {
    "DATE_TIME": Category.DATE,
    "URL": Category.LINK,
    "EMAIL_ADDRESS": Category.LINK,
    "PHONE_NUMBER": Category.PHONE_NUMBER,
    STREET_ADDRESS: Category.ADDRESS,
    FLIGHT: Category.TRANSIT_INFORMATION,
}

_SECONDS = {"day": 86400.0, "week": 7 * 86400.0, "month": 30 * 86400.0, "year": 365 * 86400.0}
_SPAN_WORD = re.compile(r"\b(day|week|month|year)s?\b", re.IGNORECASE)
_DATE_FORMATS = ("%B %d, %Y", "%b %d, %Y", "%d %B %Y", "%d %b %Y", "%m/%d/%Y")


def _custom_recognizers(language: str) -> list:
    import phonenumbers
    from presidio_analyzer import Pattern, PatternRecognizer
    from presidio_analyzer.predefined_recognizers import PhoneRecognizer

    return [
        # POSSIBLE leniency also finds local-only numbers such as 555-1234
        PhoneRecognizer(supported_language=language, leniency=phonenumbers.Leniency.POSSIBLE),
        PatternRecognizer(
            supported_entity=STREET_ADDRESS,
            supported_language=language,
            patterns=[Pattern("street_address", _STREET_ADDRESS_RE.pattern, 0.6)],
            global_regex_flags=re.MULTILINE,
        ),
        PatternRecognizer(
            supported_entity=FLIGHT,
            supported_language=language,
            patterns=[Pattern("flight_number", _FLIGHT_RE.pattern, 0.3)],
            context=["flight", "flying", "airline", "depart", "arrive", "boarding"],
            global_regex_flags=re.MULTILINE,
        ),
    ]


def _build_engine(language: str) -> AnalyzerEngine:
    from presidio_analyzer import AnalyzerEngine
    from presidio_analyzer.nlp_engine import NlpEngineProvider

    logger.info("Loading Presidio analyzer for language '%s'...", language)
    provider = NlpEngineProvider(nlp_configuration={
        "nlp_engine_name": "spacy",
        "models": [{"lang_code": language, "model_name": f"{language}_core_web_sm"}],
    })
    nlp_engine = provider.create_engine()
    engine = AnalyzerEngine(nlp_engine=nlp_engine, supported_languages=[language])
    engine.registry.remove_recognizer("PhoneRecognizer")
    for recognizer in _custom_recognizers(language):
        engine.registry.add_recognizer(recognizer)
    return engine


def _get_engine(language: str = "en") -> AnalyzerEngine:
    """Lazy-init the Presidio analyzer engine for a language."""
    with _engines_lock:
        engine = _engines.get(language)
        if engine is None:
            engine = _engines[language] = _build_engine(language)
    return engine


def parse_date(span: str) -> dict[str, Any]:
    """Best-effort date payload: absolute instant when parseable, else a duration."""
    date: datetime | None = None
    try:
        date = datetime.fromisoformat(span.strip())
    except ValueError:
        for fmt in _DATE_FORMATS:
            try:
                date = datetime.strptime(span.strip(), fmt)
                break
            except ValueError:
                continue

    duration = 0.0
    m = _SPAN_WORD.search(span)
    if date is None and m:
        duration = _SECONDS[m.group(1).lower()]

    time_zone = None
    if date is not None and date.tzinfo is not None:
        time_zone = date.tzname()
    return {"date": date, "duration": duration, "time_zone": time_zone}


def normalize_phone(span: str, default_region: str = "US") -> str:
    """E.164 form for valid numbers, else the stripped span as detected."""
    import phonenumbers

    try:
        number = phonenumbers.parse(span, default_region)
    except phonenumbers.NumberParseException:
        return span.strip()
    if not phonenumbers.is_valid_number(number):
        return span.strip()
    return phonenumbers.format_number(number, phonenumbers.PhoneNumberFormat.E164)


def address_components(span: str) -> dict[str, str | None]:
    m = _STREET_ADDRESS_RE.search(span)
    if m is None:
        return {}
    return {k: v for k, v in m.groupdict().items() if v}


def flight_components(span: str) -> dict[str, str | None]:
    m = _FLIGHT_RE.search(span)
    if m is None:
        return {}
    code = m.group("airline")
    return {
        "airline": AIRLINES.get(code, code),
        "flight": f"{code}{m.group('flight')}",
    }


class PresidioDetector:
    """ContentDetector backed by a shared Presidio analyzer engine."""

    def __init__(
        self,
        *,
        language: str = "en",
        score_threshold: float = 0.35,
        default_region: str = "US",
    ) -> None:
        self.language = language
        self.score_threshold = score_threshold
        self.default_region = default_region

    def detect(self, text: str) -> list[RawMatch]:
        """Scan text once for every supported category, ordered by position."""
        engine = _get_engine(self.language)
        results = engine.analyze(
            text=text,
            language=self.language,
            entities=list(ENTITY_CATEGORIES),
            score_threshold=self.score_threshold,
        )

        matches: list[RawMatch] = []
        for r in sorted(results, key=lambda r: (r.start, -(r.end - r.start))):
            category = ENTITY_CATEGORIES.get(r.entity_type)
            if category is None:
                continue
            span = text[r.start:r.end]
            matches.append(RawMatch(
                category=category.value,
                range=TextRange.from_span(r.start, r.end),
                payload=self._payload(category, span),
            ))
        return matches

    def _payload(self, category: Category, span: str) -> dict[str, Any]:
        if category is Category.DATE:
            return parse_date(span)
        if category is Category.LINK:
            return {"url": span}
        if category is Category.PHONE_NUMBER:
            return {"phone_number": normalize_phone(span, self.default_region)}
        if category is Category.ADDRESS:
            return {"components": address_components(span)}
        return {"components": flight_components(span)}
