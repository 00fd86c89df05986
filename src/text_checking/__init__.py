"""text-checking — deterministic, conflict-free text detections."""

from .resolver import DEFAULT_DETECTOR, Resolver, ResolverConfig, resolve
from .styling import add_attributes, set_attributes
from .config import ConfigError, create_resolver, load_config, load_from_yaml
from .patterns import ContentDetector, MatcherOutcome
from .types import (
    ACTION, ADDRESS, DATE, DEFAULT_CHECKINGS, EMPTY_CHECKINGS, LINK,
    PHONE_NUMBER, TRANSIT_INFORMATION,
    Action, ActionMarker, ActionResult, AddressResult, AnnotatedText,
    Category, Checking, Content, DateResult, Detection, DetectionMap,
    LinkResult, PhoneNumberResult, RangeResult, RawMatch, Range, Regex,
    RegexResult, Result, StyleRun, TextRange, TransitInformationResult,
)

__all__ = [
    "DEFAULT_DETECTOR", "Resolver", "ResolverConfig", "resolve",
    "add_attributes", "set_attributes",
    "ConfigError", "create_resolver", "load_config", "load_from_yaml",
    "ContentDetector", "MatcherOutcome",
    "ACTION", "ADDRESS", "DATE", "DEFAULT_CHECKINGS", "EMPTY_CHECKINGS",
    "LINK", "PHONE_NUMBER", "TRANSIT_INFORMATION",
    "Action", "ActionMarker", "ActionResult", "AddressResult", "AnnotatedText",
    "Category", "Checking", "Content", "DateResult", "Detection", "DetectionMap",
    "LinkResult", "PhoneNumberResult", "RangeResult", "RawMatch", "Range", "Regex",
    "RegexResult", "Result", "StyleRun", "TextRange", "TransitInformationResult",
]
__version__ = "0.1.0"
