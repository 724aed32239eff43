"""Runtime configuration model."""

from __future__ import annotations

from dataclasses import dataclass

from .models import SubjectKind
from .validation import validate_runtime_constraints

DEFAULT_USER_AGENT = "HeroImageFinder/1.0 (+https://github.com/hero-image-finder)"
DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_WORKERS = 4
DEFAULT_RESULTS_PER_QUERY = 5
DEFAULT_OUTPUT = "hero_images.csv"


@dataclass(frozen=True)
class DiscoveryConfig:
    """Validated configuration used by the discovery pipeline."""

    names: tuple[str, ...]
    subject_kind: SubjectKind
    output: str = DEFAULT_OUTPUT
    region: str | None = None
    country: str | None = None
    cse_key: str | None = None
    cse_id: str | None = None
    serpapi_key: str | None = None
    bing_key: str | None = None
    workers: int = DEFAULT_WORKERS
    results_per_query: int = DEFAULT_RESULTS_PER_QUERY
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    discover_timeout: float | None = None
    user_agent: str = DEFAULT_USER_AGENT
    show_progress: bool = True

    def __post_init__(self) -> None:
        validate_runtime_constraints(
            names=self.names,
            workers=self.workers,
            results_per_query=self.results_per_query,
            request_timeout=self.request_timeout,
            discover_timeout=self.discover_timeout,
        )

    @property
    def has_search_provider(self) -> bool:
        """True when at least one image search provider has credentials."""
        return bool((self.cse_key and self.cse_id) or self.serpapi_key or self.bing_key)
