"""Protocols and lightweight model types."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

from .errors import InvalidDescriptorError


class SubjectKind(str, Enum):
    """Category of entity being illustrated."""

    UNIVERSITY = "university"
    CITY = "city"


class RejectReason(str, Enum):
    """Why a candidate was turned down by the filter chain."""

    FORBIDDEN_DOMAIN = "forbidden_domain"
    FORBIDDEN_EXTENSION = "forbidden_extension"
    UNWANTED_CONTENT = "unwanted_content"
    NON_PHOTOGRAPH = "non_photograph"
    SUBJECT_MISMATCH = "subject_mismatch"
    WRONG_COUNTRY = "wrong_country"
    GENERIC_STOCK = "generic_stock"
    SINGLE_BUILDING = "single_building"
    BAD_ASPECT_RATIO = "bad_aspect_ratio"
    NOT_DIRECT_IMAGE = "not_direct_image"


def _clean_optional(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


@dataclass(frozen=True)
class EntityDescriptor:
    """Immutable input to image discovery."""

    name: str
    subject_kind: SubjectKind
    region: str | None = None
    country: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidDescriptorError("Entity name must be a non-empty string.")
        if not isinstance(self.subject_kind, SubjectKind):
            raise InvalidDescriptorError(
                f"Unknown subject kind {self.subject_kind!r}; expected university or city."
            )
        object.__setattr__(self, "name", self.name.strip())
        object.__setattr__(self, "region", _clean_optional(self.region))
        object.__setattr__(self, "country", _clean_optional(self.country))


@dataclass(frozen=True)
class SearchStrategy:
    """One query formulation, tried in priority order."""

    label: str
    query: str


@dataclass(frozen=True)
class Candidate:
    """One image result returned by a search provider, not yet judged."""

    image_url: str
    source_page_url: str | None = None
    title: str = ""
    width: int | None = None
    height: int | None = None

    @property
    def text(self) -> str:
        """Lower-cased URL, source page and title combined for keyword checks."""
        return f"{self.image_url} {self.source_page_url or ''} {self.title}".lower()


@dataclass(frozen=True)
class AcceptanceDecision:
    """Outcome of running a candidate through the filter chain."""

    reason: RejectReason | None = None
    detail: str = ""

    @property
    def accepted(self) -> bool:
        return self.reason is None

    @classmethod
    def reject(cls, reason: RejectReason, detail: str = "") -> AcceptanceDecision:
        return cls(reason=reason, detail=detail)


ACCEPTED = AcceptanceDecision()


@dataclass(frozen=True)
class DiscoveryResult:
    """Terminal output of one discovery call: a URL, or nothing."""

    url: str | None = None
    strategy: str | None = field(default=None, compare=False)

    @property
    def found(self) -> bool:
        return self.url is not None


NOT_FOUND = DiscoveryResult()


class ImageSearchBackend(Protocol):
    """Contract for image search providers."""

    def search(self, query: str, num: int) -> list[Candidate]:
        """Return candidates in provider relevance order, or [] on failure."""


class ContentTypeProbe(Protocol):
    """Contract for header-only URL probes."""

    def content_type(self, url: str) -> str | None:
        """Return the declared content type, or None when the URL is unreachable."""


class RecordProducer(Protocol):
    """Contract for the structured record producer (generative extraction)."""

    def produce(self, descriptor: EntityDescriptor) -> dict[str, Any]:
        """Return a structured record for the entity."""
