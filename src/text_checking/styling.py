"""Styling glue — apply attributes to every detected range.

Usage:
    text = AnnotatedText("Call 555-1234")
    styled = add_attributes(text, [{"color": "blue"}], [PHONE_NUMBER], detector=detector)
    styled.attributes_at(5)      # {"color": "blue"}

``add_attributes`` merges into whatever styling a range already has;
``set_attributes`` replaces it.  Both return a new AnnotatedText.  Content
categories use the Presidio detector unless another (or None) is passed.
"""

from __future__ import annotations
from dataclasses import replace
from typing import Any, Iterable, Mapping

from .patterns import ContentDetector
from .resolver import DEFAULT_DETECTOR, resolve
from .types import DEFAULT_CHECKINGS, AnnotatedText, Checking, StyleRun, TextRange


def _merge(attributes: Iterable[Mapping[str, Any]]) -> dict[str, Any]:
    merged: dict[str, Any] = {}
    for attrs in attributes:
        merged.update(attrs)
    return merged


def _clip(run: StyleRun, rng: TextRange) -> list[StyleRun]:
    """Parts of ``run`` left outside ``rng``."""
    if not run.range.overlaps(rng):
        return [run]
    parts = []
    if run.range.location < rng.location:
        parts.append(StyleRun(TextRange.from_span(run.range.location, rng.location), run.attributes))
    if rng.end < run.range.end:
        parts.append(StyleRun(TextRange.from_span(rng.end, run.range.end), run.attributes))
    return parts


def add_attributes(
    text: AnnotatedText,
    attributes: Iterable[Mapping[str, Any]],
    checkings: Iterable[Checking] = DEFAULT_CHECKINGS,
    *,
    detector: ContentDetector | None = DEFAULT_DETECTOR,
) -> AnnotatedText:
    """Merge attributes into the styling of every detected range."""
    merged = _merge(attributes)
    checkings = list(checkings)
    if not merged or not checkings:
        return text
    detections = resolve(text, checkings, detector=detector)
    runs = list(text.styles)
    runs.extend(StyleRun(rng, merged) for rng in sorted(detections))
    return replace(text, styles=tuple(runs))


def set_attributes(
    text: AnnotatedText,
    attributes: Iterable[Mapping[str, Any]],
    checkings: Iterable[Checking] = DEFAULT_CHECKINGS,
    *,
    detector: ContentDetector | None = DEFAULT_DETECTOR,
) -> AnnotatedText:
    """Replace the styling of every detected range with the attributes."""
    merged = _merge(attributes)
    checkings = list(checkings)
    if not merged or not checkings:
        return text
    detections = resolve(text, checkings, detector=detector)
    runs = list(text.styles)
    for rng in sorted(detections):
        runs = [part for run in runs for part in _clip(run, rng)]
        runs.append(StyleRun(rng, merged))
    return replace(text, styles=tuple(runs))
