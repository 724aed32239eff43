"""Hero image discovery: the search, filter, accept loop."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError

from .classifier import RequestsContentTypeProbe, UrlClassifier, make_retry_session
from .config import DiscoveryConfig
from .errors import ConfigError, InvalidDescriptorError
from .filters import evaluate
from .models import (
    NOT_FOUND,
    DiscoveryResult,
    EntityDescriptor,
    ImageSearchBackend,
    SearchStrategy,
)
from .search_backends import FallbackImageSearchBackend
from .strategies import build_strategies

DEFAULT_RESULTS_PER_QUERY = 5


class ImageDiscoveryService:
    """Find one verified hero image URL for an entity.

    Strategies are tried in priority order and candidates in provider order;
    the first candidate that passes every filter stage is returned and nothing
    else is queried. Provider and probe failures never escape ``discover``;
    only an invalid descriptor raises.
    """

    def __init__(
        self,
        *,
        search_backend: ImageSearchBackend,
        classifier: UrlClassifier,
        logger: logging.Logger,
        results_per_query: int = DEFAULT_RESULTS_PER_QUERY,
    ) -> None:
        self._search_backend = search_backend
        self._classifier = classifier
        self._logger = logger
        self._results_per_query = results_per_query

    @property
    def classifier(self) -> UrlClassifier:
        return self._classifier

    def discover(self, descriptor: EntityDescriptor) -> DiscoveryResult:
        if not isinstance(descriptor, EntityDescriptor):
            raise InvalidDescriptorError("discover() expects an EntityDescriptor.")
        kind = descriptor.subject_kind.value
        self._logger.info("Searching hero image for %s %s", kind, descriptor.name)

        for strategy in build_strategies(descriptor, logger=self._logger):
            url = self._try_strategy(strategy, descriptor)
            if url:
                self._logger.info("Found acceptable %s image: %s", kind, url)
                return DiscoveryResult(url=url, strategy=strategy.label)

        self._logger.info("No suitable %s image found after all strategies.", kind)
        return NOT_FOUND

    def _try_strategy(self, strategy: SearchStrategy, descriptor: EntityDescriptor) -> str | None:
        self._logger.info("Trying strategy: %s", strategy.label)
        try:
            candidates = self._search_backend.search(strategy.query, self._results_per_query)
        except Exception as exc:
            self._logger.warning("Strategy %r failed: %s", strategy.label, exc)
            return None
        self._logger.info(" --> %d candidate images", len(candidates))

        for candidate in candidates:
            decision = evaluate(
                candidate,
                descriptor,
                is_direct_image=self._classifier.is_direct_image,
                logger=self._logger,
            )
            if decision.accepted:
                if candidate.source_page_url:
                    self._logger.debug("Image source: %s", candidate.source_page_url)
                return candidate.image_url
            self._logger.debug(
                "Skipping %s: %s %s",
                candidate.image_url,
                decision.reason.value if decision.reason else "",
                decision.detail,
            )
        return None

    def discover_within(self, descriptor: EntityDescriptor, timeout: float) -> DiscoveryResult:
        """Run ``discover`` with a wall-clock limit; a timeout counts as not found.

        The worker thread is abandoned, not interrupted; its result is discarded.
        """
        if not isinstance(descriptor, EntityDescriptor):
            raise InvalidDescriptorError("discover_within() expects an EntityDescriptor.")
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="hero-image-discover")
        future = executor.submit(self.discover, descriptor)
        try:
            return future.result(timeout=timeout)
        except FutureTimeoutError:
            self._logger.warning(
                "Discovery for %s timed out after %.1fs", descriptor.name, timeout
            )
            return NOT_FOUND
        finally:
            executor.shutdown(wait=False)


def build_classifier(
    *, user_agent: str, timeout: float, logger: logging.Logger
) -> UrlClassifier:
    """Build the URL classifier backed by a retrying requests session."""
    session = make_retry_session(user_agent)
    probe = RequestsContentTypeProbe(session=session, timeout=timeout, logger=logger)
    return UrlClassifier(probe=probe, logger=logger)


def build_discovery_service(
    config: DiscoveryConfig, *, logger: logging.Logger
) -> ImageDiscoveryService:
    """Build concrete collaborators for a configuration."""
    if not config.has_search_provider:
        raise ConfigError(
            "No image search provider configured. Set GOOGLE_CSE_API_KEY and GOOGLE_CSE_ID, "
            "SERPAPI_KEY, or BING_API_KEY."
        )
    session = make_retry_session(config.user_agent)
    search_backend = FallbackImageSearchBackend(
        session=session,
        timeout=config.request_timeout,
        cse_key=config.cse_key,
        cse_id=config.cse_id,
        serpapi_key=config.serpapi_key,
        bing_key=config.bing_key,
        logger=logger,
    )
    classifier = UrlClassifier(
        probe=RequestsContentTypeProbe(
            session=session, timeout=config.request_timeout, logger=logger
        ),
        logger=logger,
    )
    return ImageDiscoveryService(
        search_backend=search_backend,
        classifier=classifier,
        logger=logger,
        results_per_query=config.results_per_query,
    )
