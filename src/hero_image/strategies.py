"""Search query strategies, most specific first."""

from __future__ import annotations

import logging

from .errors import InvalidDescriptorError
from .keywords import (
    QUERY_EXCLUDE_NOT_PHOTO,
    QUERY_EXCLUDE_PEOPLE,
    QUERY_EXCLUDE_SINGLE,
    QUERY_EXCLUDE_UNIVERSITY_GENERIC,
    QUERY_EXCLUDE_VISITORS,
)
from .logging_utils import get_logger
from .models import EntityDescriptor, SearchStrategy, SubjectKind

# (label, subject terms, extra exclusions)
UNIVERSITY_PLANS: tuple[tuple[str, str, tuple[str, ...]], ...] = (
    (
        "Distinctive campus building",
        "campus building distinctive architecture exterior daylight photo",
        ("crest", "map", "vintage", "drawing", "plan", "diagram", "student"),
    ),
    (
        "Iconic main building",
        "main building iconic architecture campus exterior photo",
        ("sports", "football", "stadium", "student", "group"),
    ),
    (
        "Campus architecture building",
        "campus architecture building exterior daylight photo",
        ("interior", "books"),
    ),
    (
        "University building exterior",
        "university building exterior architecture photo",
        ("crest", "portrait", "indoor", "student", "group"),
    ),
    (
        "Campus view with building",
        "campus view building architecture photo",
        ("map", "layout", "plan", "diagram"),
    ),
)

CITY_PLANS: tuple[tuple[str, str, tuple[str, ...]], ...] = (
    (
        "Cityscape skyline",
        "city skyline many buildings cityscape photo",
        ("map", "weather", "radar", "walking", "standing"),
    ),
    (
        "Waterfront cityscape",
        "waterfront cityscape buildings skyline photo",
        ("map", "aerial", "walking"),
    ),
    (
        "Urban cityscape",
        "urban cityscape many buildings city view daylight photo",
        ("traffic", "map", "walking"),
    ),
    (
        "Landmark with city buildings",
        "landmark cityscape buildings urban view photo",
        ("map", "plan"),
    ),
    (
        "Downtown cityscape",
        "downtown cityscape buildings architecture photo",
        ("map", "weather"),
    ),
)


def _quoted(value: str) -> str:
    return '"' + value.replace('"', "") + '"'


def _exclusions(*groups: tuple[str, ...]) -> str:
    seen: list[str] = []
    for group in groups:
        for term in group:
            if term not in seen:
                seen.append(term)
    return " ".join(f"-{term}" for term in seen)


def _university_strategies(descriptor: EntityDescriptor) -> list[SearchStrategy]:
    subject = _quoted(descriptor.name)
    strategies: list[SearchStrategy] = []
    for label, terms, extra in UNIVERSITY_PLANS:
        excluded = _exclusions(
            QUERY_EXCLUDE_UNIVERSITY_GENERIC,
            extra,
            QUERY_EXCLUDE_PEOPLE,
            QUERY_EXCLUDE_NOT_PHOTO,
        )
        strategies.append(SearchStrategy(label=label, query=f"{subject} {terms} {excluded}"))
    return strategies


def _city_strategies(
    descriptor: EntityDescriptor, logger: logging.Logger
) -> list[SearchStrategy]:
    subject = _quoted(descriptor.name)
    if descriptor.country:
        subject = f"{subject} {_quoted(descriptor.country)}"
    else:
        logger.warning(
            "No country provided for %s; city image search may be less accurate.",
            descriptor.name,
        )
    strategies: list[SearchStrategy] = []
    for label, terms, extra in CITY_PLANS:
        excluded = _exclusions(
            extra,
            QUERY_EXCLUDE_PEOPLE,
            QUERY_EXCLUDE_VISITORS,
            QUERY_EXCLUDE_SINGLE,
            QUERY_EXCLUDE_NOT_PHOTO,
        )
        strategies.append(SearchStrategy(label=label, query=f"{subject} {terms} {excluded}"))
    return strategies


def build_strategies(
    descriptor: EntityDescriptor, *, logger: logging.Logger | None = None
) -> list[SearchStrategy]:
    """Build the ordered query variants for one entity."""
    if not descriptor.name.strip():
        raise InvalidDescriptorError("Cannot build search strategies for a blank name.")
    logger = logger or get_logger("strategies")
    if descriptor.subject_kind is SubjectKind.UNIVERSITY:
        return _university_strategies(descriptor)
    return _city_strategies(descriptor, logger)
