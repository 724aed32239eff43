"""Attach a verified hero image to a structured record.

When an image search provider is configured the image comes from discovery.
Otherwise the URL the record producer supplied is kept only if it is confirmed
to serve image bytes; rejected or missing URLs become an empty field.
"""

from __future__ import annotations

import logging
from typing import Any

from .classifier import UrlClassifier
from .discovery import ImageDiscoveryService
from .errors import ProducerError
from .models import EntityDescriptor, RecordProducer


def validate_standalone_url(
    url: str | None, *, classifier: UrlClassifier, logger: logging.Logger
) -> str | None:
    """Return the URL when it is a direct image, else None."""
    if not url or not isinstance(url, str):
        return None
    candidate = url.strip()
    if classifier.is_direct_image(candidate):
        return candidate
    logger.info("Supplied image URL is not a direct image, dropping it: %s", candidate)
    return None


def resolve_hero_image(
    descriptor: EntityDescriptor,
    *,
    supplied_url: str | None,
    discovery_service: ImageDiscoveryService | None,
    classifier: UrlClassifier,
    logger: logging.Logger,
) -> str | None:
    if discovery_service is not None:
        result = discovery_service.discover(descriptor)
        return result.url
    return validate_standalone_url(supplied_url, classifier=classifier, logger=logger)


def enrich_record(
    descriptor: EntityDescriptor,
    *,
    producer: RecordProducer,
    image_field: str,
    discovery_service: ImageDiscoveryService | None,
    classifier: UrlClassifier,
    logger: logging.Logger,
) -> dict[str, Any]:
    """Produce a record for the entity and replace its image with a verified one."""
    try:
        record = dict(producer.produce(descriptor))
    except Exception as exc:
        raise ProducerError(f"Record extraction failed for {descriptor.name}: {exc}") from exc

    supplied = record.get(image_field)
    image_url = resolve_hero_image(
        descriptor,
        supplied_url=supplied if isinstance(supplied, str) else None,
        discovery_service=discovery_service,
        classifier=classifier,
        logger=logger,
    )
    if image_url is None:
        logger.info("No verified %s for %s; leaving it empty.", image_field, descriptor.name)
    record[image_field] = image_url or ""
    return record
