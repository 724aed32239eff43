"""Batch orchestration: discover hero images for many entities."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed

from tqdm import tqdm

from .config import DiscoveryConfig
from .discovery import ImageDiscoveryService, build_discovery_service
from .io_csv import result_to_row, write_rows
from .models import NOT_FOUND, DiscoveryResult, EntityDescriptor


def build_descriptors(config: DiscoveryConfig) -> list[EntityDescriptor]:
    """One descriptor per configured name, sharing kind, region and country."""
    return [
        EntityDescriptor(
            name=name,
            subject_kind=config.subject_kind,
            region=config.region,
            country=config.country,
        )
        for name in config.names
    ]


def _discover_one(
    service: ImageDiscoveryService, descriptor: EntityDescriptor, timeout: float | None
) -> DiscoveryResult:
    if timeout is None:
        return service.discover(descriptor)
    return service.discover_within(descriptor, timeout)


def discover_many(
    descriptors: Sequence[EntityDescriptor],
    *,
    service: ImageDiscoveryService,
    workers: int,
    logger: logging.Logger,
    timeout: float | None = None,
    show_progress: bool = False,
) -> list[tuple[EntityDescriptor, DiscoveryResult]]:
    """Run independent discoveries concurrently; output keeps input order."""
    results: list[DiscoveryResult] = [NOT_FOUND] * len(descriptors)
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {
            executor.submit(_discover_one, service, descriptor, timeout): index
            for index, descriptor in enumerate(descriptors)
        }
        iterator = as_completed(futures)
        if show_progress:
            iterator = tqdm(iterator, total=len(futures), desc="discovering images")
        for future in iterator:
            index = futures[future]
            try:
                results[index] = future.result()
            except Exception as exc:  # pragma: no cover
                logger.error("Discovery failed for %s: %s", descriptors[index].name, exc)
    return list(zip(descriptors, results))


def run_pipeline(config: DiscoveryConfig, *, logger: logging.Logger) -> str:
    """Build concrete dependencies, execute discovery, and write the CSV report."""
    service = build_discovery_service(config, logger=logger)
    descriptors = build_descriptors(config)
    logger.info("Entities to resolve: %d", len(descriptors))

    outcomes = discover_many(
        descriptors,
        service=service,
        workers=config.workers,
        logger=logger,
        timeout=config.discover_timeout,
        show_progress=config.show_progress,
    )
    found = sum(1 for _, result in outcomes if result.found)
    logger.info("Hero images found: %d of %d", found, len(outcomes))

    rows = [result_to_row(descriptor, result) for descriptor, result in outcomes]
    write_rows(config.output, rows)
    return config.output
