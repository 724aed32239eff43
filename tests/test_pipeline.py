import logging

from hero_image.classifier import UrlClassifier
from hero_image.config import DiscoveryConfig
from hero_image.discovery import ImageDiscoveryService
from hero_image.models import Candidate, EntityDescriptor, SubjectKind
from hero_image.pipeline import build_descriptors, discover_many, run_pipeline


class NameEchoBackend:
    """Returns a skyline photo whose title names the entity in the quoted query."""

    def search(self, query: str, num: int) -> list[Candidate]:
        name = query.split('"')[1]
        if name == "Nowhere":
            return []
        slug = name.lower().replace(" ", "-")
        return [
            Candidate(
                image_url=f"https://cdn.example.org/{slug}-skyline.jpg",
                title=f"{name} Canada skyline",
                width=1600,
                height=900,
            )
        ][:num]


class NoProbe:
    def content_type(self, url: str) -> str | None:
        raise AssertionError("extension URLs must not be probed")


def _service() -> ImageDiscoveryService:
    logger = logging.getLogger("test")
    return ImageDiscoveryService(
        search_backend=NameEchoBackend(),
        classifier=UrlClassifier(probe=NoProbe(), logger=logger),
        logger=logger,
    )


def test_build_descriptors_shares_kind_and_location() -> None:
    config = DiscoveryConfig(
        names=("Lakeside", "Hillview"),
        subject_kind=SubjectKind.CITY,
        region="Ontario",
        country="Canada",
    )
    descriptors = build_descriptors(config)
    assert [descriptor.name for descriptor in descriptors] == ["Lakeside", "Hillview"]
    assert all(descriptor.country == "Canada" for descriptor in descriptors)
    assert all(descriptor.region == "Ontario" for descriptor in descriptors)


def test_discover_many_keeps_input_order() -> None:
    descriptors = [
        EntityDescriptor(name=name, subject_kind=SubjectKind.CITY, country="Canada")
        for name in ("Lakeside", "Nowhere", "Hillview", "Port Royal")
    ]
    outcomes = discover_many(
        descriptors, service=_service(), workers=3, logger=logging.getLogger("test")
    )

    assert [descriptor.name for descriptor, _ in outcomes] == [
        "Lakeside",
        "Nowhere",
        "Hillview",
        "Port Royal",
    ]
    assert [result.found for _, result in outcomes] == [True, False, True, True]
    assert outcomes[3][1].url == "https://cdn.example.org/port-royal-skyline.jpg"


def test_discover_many_with_timeout() -> None:
    descriptors = [EntityDescriptor(name="Lakeside", subject_kind=SubjectKind.CITY, country="Canada")]
    outcomes = discover_many(
        descriptors,
        service=_service(),
        workers=1,
        logger=logging.getLogger("test"),
        timeout=5.0,
    )
    assert outcomes[0][1].found is True


def test_run_pipeline_writes_rows(monkeypatch) -> None:
    config = DiscoveryConfig(
        names=("Lakeside",),
        subject_kind=SubjectKind.CITY,
        country="Canada",
        output="out.csv",
        show_progress=False,
    )
    captured: dict[str, object] = {}

    def fake_write_rows(path: str, rows: list[dict[str, str]]) -> None:
        captured["path"] = path
        captured["rows"] = rows

    monkeypatch.setattr(
        "hero_image.pipeline.build_discovery_service", lambda config, logger: _service()
    )
    monkeypatch.setattr("hero_image.pipeline.write_rows", fake_write_rows)

    output = run_pipeline(config, logger=logging.getLogger("test"))
    assert output == "out.csv"
    assert captured["path"] == "out.csv"
    rows = captured["rows"]
    assert isinstance(rows, list)
    assert rows[0]["status"] == "found"
    assert rows[0]["image_url"] == "https://cdn.example.org/lakeside-skyline.jpg"
    assert rows[0]["strategy"] == "Cityscape skyline"
