"""Candidate acceptability rules.

Each ``check_*`` function is one stage: it returns a rejecting
``AcceptanceDecision`` or ``None`` to let the candidate through. ``evaluate``
runs the stages in ``FILTER_STAGES`` order and stops at the first rejection,
then asks the URL classifier for the final direct-image confirmation.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from .keywords import (
    CAMPUS_KEYWORDS,
    CITYSCAPE_KEYWORDS,
    COUNTRY_ALIASES,
    FORBIDDEN_DOMAINS,
    FORBIDDEN_EXTENSIONS,
    GENERIC_STOCK_KEYWORDS,
    NON_PHOTOGRAPH_MARKERS,
    PEOPLE_MARKERS,
    SINGLE_BUILDING_KEYWORDS,
    UNIVERSITY_UNWANTED_MARKERS,
    UNWANTED_CONTENT_MARKERS,
    WRONG_COUNTRY_MARKERS,
)
from .models import (
    ACCEPTED,
    AcceptanceDecision,
    Candidate,
    EntityDescriptor,
    RejectReason,
    SubjectKind,
)
from .validation import url_host, url_path

MIN_ASPECT_RATIO = 1.2
MAX_ASPECT_RATIO = 2.5
MIN_NAME_WORD_LENGTH = 4

Stage = Callable[[Candidate, EntityDescriptor], AcceptanceDecision | None]
DirectImageCheck = Callable[[str], bool]


def find_token(text: str, tokens: Iterable[str]) -> str | None:
    """Return the first token (in sorted order) contained in text."""
    for token in sorted(tokens):
        if token in text:
            return token
    return None


def check_forbidden_source(
    candidate: Candidate, descriptor: EntityDescriptor
) -> AcceptanceDecision | None:
    host = url_host(candidate.image_url)
    for domain in sorted(FORBIDDEN_DOMAINS):
        if host == domain or host.endswith(f".{domain}"):
            return AcceptanceDecision.reject(RejectReason.FORBIDDEN_DOMAIN, domain)
    path = url_path(candidate.image_url)
    for ext in sorted(FORBIDDEN_EXTENSIONS):
        if path.endswith(ext):
            return AcceptanceDecision.reject(RejectReason.FORBIDDEN_EXTENSION, ext)
    return None


def check_unwanted_content(
    candidate: Candidate, descriptor: EntityDescriptor
) -> AcceptanceDecision | None:
    # URL slug only; titles mention people far too often to be useful here.
    url = candidate.image_url.lower()
    markers = UNWANTED_CONTENT_MARKERS | PEOPLE_MARKERS
    if descriptor.subject_kind is SubjectKind.UNIVERSITY:
        markers = markers | UNIVERSITY_UNWANTED_MARKERS
    token = find_token(url, markers)
    if token:
        return AcceptanceDecision.reject(RejectReason.UNWANTED_CONTENT, token)
    return None


def check_photograph_markers(
    candidate: Candidate, descriptor: EntityDescriptor
) -> AcceptanceDecision | None:
    token = find_token(candidate.text, NON_PHOTOGRAPH_MARKERS)
    if token:
        return AcceptanceDecision.reject(RejectReason.NON_PHOTOGRAPH, token)
    return None


def significant_name_words(name: str) -> list[str]:
    """Name words long enough to identify the subject ("of", "the" are not)."""
    return [word.lower() for word in name.split() if len(word) >= MIN_NAME_WORD_LENGTH]


def country_tokens(country: str) -> frozenset[str]:
    key = country.strip().lower()
    return COUNTRY_ALIASES.get(key, frozenset({key}))


def wrong_country_marker(text: str, country: str) -> str | None:
    """Return a marker of a commonly confused country, ignoring the target country."""
    own = country_tokens(country)
    for key in sorted(WRONG_COUNTRY_MARKERS):
        markers = WRONG_COUNTRY_MARKERS[key]
        if key in own or markers & own:
            continue
        token = find_token(text, markers)
        if token:
            return token
    return None


def check_subject_match(
    candidate: Candidate, descriptor: EntityDescriptor
) -> AcceptanceDecision | None:
    text = candidate.text
    if descriptor.subject_kind is SubjectKind.UNIVERSITY:
        words = significant_name_words(descriptor.name) or [descriptor.name.lower()]
        if not any(word in text for word in words):
            return AcceptanceDecision.reject(RejectReason.SUBJECT_MISMATCH, descriptor.name)
        return None

    if descriptor.name.lower() not in text:
        return AcceptanceDecision.reject(RejectReason.SUBJECT_MISMATCH, descriptor.name)
    if descriptor.country:
        has_country = find_token(text, country_tokens(descriptor.country)) is not None
        if not has_country:
            wrong = wrong_country_marker(text, descriptor.country)
            if wrong:
                return AcceptanceDecision.reject(RejectReason.WRONG_COUNTRY, wrong)
    return None


def keyword_score(candidate: Candidate, descriptor: EntityDescriptor) -> int:
    """Count positive subject keywords in the candidate text. Advisory only."""
    keywords = (
        CAMPUS_KEYWORDS if descriptor.subject_kind is SubjectKind.UNIVERSITY else CITYSCAPE_KEYWORDS
    )
    text = candidate.text
    return sum(1 for keyword in keywords if keyword in text)


def check_subject_keywords(
    candidate: Candidate, descriptor: EntityDescriptor
) -> AcceptanceDecision | None:
    text = candidate.text
    if descriptor.subject_kind is SubjectKind.UNIVERSITY:
        token = find_token(text, GENERIC_STOCK_KEYWORDS)
        if token:
            return AcceptanceDecision.reject(RejectReason.GENERIC_STOCK, token)
        return None

    token = find_token(text, SINGLE_BUILDING_KEYWORDS)
    if token and keyword_score(candidate, descriptor) == 0:
        return AcceptanceDecision.reject(RejectReason.SINGLE_BUILDING, token)
    return None


def aspect_ratio(candidate: Candidate) -> float | None:
    if not candidate.width or not candidate.height:
        return None
    if candidate.width <= 0 or candidate.height <= 0:
        return None
    return candidate.width / candidate.height


def check_aspect_ratio(
    candidate: Candidate, descriptor: EntityDescriptor
) -> AcceptanceDecision | None:
    ratio = aspect_ratio(candidate)
    if ratio is None:
        return None
    if ratio < MIN_ASPECT_RATIO or ratio > MAX_ASPECT_RATIO:
        return AcceptanceDecision.reject(RejectReason.BAD_ASPECT_RATIO, f"{ratio:.2f}")
    return None


FILTER_STAGES: tuple[Stage, ...] = (
    check_forbidden_source,
    check_unwanted_content,
    check_photograph_markers,
    check_subject_match,
    check_subject_keywords,
    check_aspect_ratio,
)


def evaluate(
    candidate: Candidate,
    descriptor: EntityDescriptor,
    *,
    is_direct_image: DirectImageCheck,
    logger: logging.Logger | None = None,
) -> AcceptanceDecision:
    """Run every stage in order; the classifier is consulted last."""
    for stage in FILTER_STAGES:
        decision = stage(candidate, descriptor)
        if decision is not None:
            return decision

    if logger is not None:
        logger.debug(
            "Keyword score %d for %s", keyword_score(candidate, descriptor), candidate.image_url
        )
    if not is_direct_image(candidate.image_url):
        return AcceptanceDecision.reject(RejectReason.NOT_DIRECT_IMAGE)
    return ACCEPTED
