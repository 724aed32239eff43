import logging
from typing import Any

import pytest

from hero_image.classifier import UrlClassifier
from hero_image.discovery import ImageDiscoveryService
from hero_image.enrichment import enrich_record, resolve_hero_image, validate_standalone_url
from hero_image.errors import ProducerError
from hero_image.models import Candidate, EntityDescriptor, SubjectKind

CITY = EntityDescriptor(name="Lakeside", subject_kind=SubjectKind.CITY, country="Canada")


class FakeProbe:
    def __init__(self, content_types: dict[str, str | None] | None = None) -> None:
        self._content_types = content_types or {}
        self.calls: list[str] = []

    def content_type(self, url: str) -> str | None:
        self.calls.append(url)
        return self._content_types.get(url)


class StaticProducer:
    def __init__(self, record: dict[str, Any]) -> None:
        self._record = record
        self.calls: list[EntityDescriptor] = []

    def produce(self, descriptor: EntityDescriptor) -> dict[str, Any]:
        self.calls.append(descriptor)
        return self._record


class FailingProducer:
    def produce(self, descriptor: EntityDescriptor) -> dict[str, Any]:
        raise RuntimeError("model unavailable")


class OneShotBackend:
    def __init__(self, candidates: list[Candidate]) -> None:
        self._candidates = candidates

    def search(self, query: str, num: int) -> list[Candidate]:
        candidates, self._candidates = self._candidates, []
        return candidates


def _classifier(probe: FakeProbe | None = None) -> UrlClassifier:
    return UrlClassifier(probe=probe or FakeProbe(), logger=logging.getLogger("test"))


def test_standalone_validator_keeps_direct_images() -> None:
    classifier = _classifier()
    url = validate_standalone_url(
        " https://cdn.example.org/lakeside.jpg ", classifier=classifier, logger=logging.getLogger("test")
    )
    assert url == "https://cdn.example.org/lakeside.jpg"


def test_standalone_validator_drops_pages_and_missing_values() -> None:
    probe = FakeProbe({"https://example.org/lakeside": "text/html"})
    classifier = _classifier(probe)
    logger = logging.getLogger("test")
    assert validate_standalone_url("https://example.org/lakeside", classifier=classifier, logger=logger) is None
    assert validate_standalone_url(None, classifier=classifier, logger=logger) is None
    assert validate_standalone_url("", classifier=classifier, logger=logger) is None


def test_enrich_record_without_search_validates_supplied_url() -> None:
    producer = StaticProducer({"city": "Lakeside", "city_image": "https://example.org/lakeside"})
    probe = FakeProbe({"https://example.org/lakeside": "text/html"})
    record = enrich_record(
        CITY,
        producer=producer,
        image_field="city_image",
        discovery_service=None,
        classifier=_classifier(probe),
        logger=logging.getLogger("test"),
    )
    assert record == {"city": "Lakeside", "city_image": ""}
    assert producer.calls == [CITY]


def test_enrich_record_prefers_discovered_image() -> None:
    logger = logging.getLogger("test")
    discovered = Candidate(
        image_url="https://cdn.example.org/lakeside-canada-skyline.jpg",
        title="Lakeside Canada skyline",
        width=1600,
        height=900,
    )
    service = ImageDiscoveryService(
        search_backend=OneShotBackend([discovered]),
        classifier=_classifier(),
        logger=logger,
    )
    producer = StaticProducer({"city_image": "https://cdn.example.org/supplied.jpg"})
    record = enrich_record(
        CITY,
        producer=producer,
        image_field="city_image",
        discovery_service=service,
        classifier=service.classifier,
        logger=logger,
    )
    assert record["city_image"] == discovered.image_url


def test_not_found_means_image_absent() -> None:
    logger = logging.getLogger("test")
    service = ImageDiscoveryService(
        search_backend=OneShotBackend([]), classifier=_classifier(), logger=logger
    )
    url = resolve_hero_image(
        CITY,
        supplied_url="https://cdn.example.org/supplied.jpg",
        discovery_service=service,
        classifier=service.classifier,
        logger=logger,
    )
    assert url is None


def test_producer_failures_are_wrapped() -> None:
    with pytest.raises(ProducerError):
        enrich_record(
            CITY,
            producer=FailingProducer(),
            image_field="city_image",
            discovery_service=None,
            classifier=_classifier(),
            logger=logging.getLogger("test"),
        )


def test_standalone_validator_drops_malformed_urls() -> None:
    probe = FakeProbe()
    url = validate_standalone_url(
        "http://[bad/a.jpg", classifier=_classifier(probe), logger=logging.getLogger("test")
    )
    assert url is None
    assert probe.calls == []
