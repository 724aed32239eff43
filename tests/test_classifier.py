import logging
from typing import Any

import pytest
import requests

from hero_image.classifier import (
    RequestsContentTypeProbe,
    UrlClassifier,
    has_image_extension,
    make_retry_session,
)


class FakeProbe:
    def __init__(self, content_type: str | None) -> None:
        self._content_type = content_type
        self.calls: list[str] = []

    def content_type(self, url: str) -> str | None:
        self.calls.append(url)
        return self._content_type


class FakeResponse:
    def __init__(self, *, status_code: int = 200, headers: dict[str, str] | None = None) -> None:
        self.status_code = status_code
        self.headers = headers or {}

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.RequestException(f"http error {self.status_code}")


class FakeSession:
    def __init__(self, response: FakeResponse | None = None, raise_error: bool = False) -> None:
        self._response = response or FakeResponse()
        self._raise_error = raise_error
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def head(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append((url, kwargs))
        if self._raise_error:
            raise requests.ConnectionError("network down")
        return self._response


def _classifier(probe: FakeProbe) -> UrlClassifier:
    return UrlClassifier(probe=probe, logger=logging.getLogger("test"))


@pytest.mark.parametrize(
    "url",
    [
        "https://cdn.example.org/photos/campus.jpg",
        "https://cdn.example.org/photos/campus.PNG",
        "https://cdn.example.org/photos/campus.webp?w=1600",
    ],
)
def test_image_extension_accepted_without_probe(url: str) -> None:
    probe = FakeProbe("text/html")
    assert _classifier(probe).is_direct_image(url) is True
    assert probe.calls == []


def test_vector_extension_rejected_without_probe() -> None:
    probe = FakeProbe("image/svg+xml")
    assert _classifier(probe).is_direct_image("https://example.org/skyline.svg") is False
    assert probe.calls == []


def test_extension_must_end_the_path() -> None:
    assert has_image_extension("https://example.org/photo.jpg/view") is False
    assert has_image_extension("https://example.org/photo.jpeg#top") is True


def test_html_content_type_is_rejected() -> None:
    probe = FakeProbe("text/html; charset=utf-8")
    assert _classifier(probe).is_direct_image("https://example.org/gallery/123") is False
    assert probe.calls == ["https://example.org/gallery/123"]


def test_application_content_type_is_rejected() -> None:
    probe = FakeProbe("application/octet-stream")
    assert _classifier(probe).is_direct_image("https://example.org/download?id=9") is False


def test_image_content_type_is_accepted() -> None:
    probe = FakeProbe("image/jpeg")
    assert _classifier(probe).is_direct_image("https://example.org/media/123") is True


def test_svg_content_type_and_unknown_types_are_rejected() -> None:
    assert _classifier(FakeProbe("image/svg+xml")).is_direct_image("https://e.org/a") is False
    assert _classifier(FakeProbe("video/mp4")).is_direct_image("https://e.org/b") is False
    assert _classifier(FakeProbe("")).is_direct_image("https://e.org/c") is False


def test_unreachable_url_is_rejected() -> None:
    assert _classifier(FakeProbe(None)).is_direct_image("https://example.org/media/1") is False


def test_unsupported_urls_are_rejected_without_probe() -> None:
    probe = FakeProbe("image/jpeg")
    classifier = _classifier(probe)
    assert classifier.is_direct_image("") is False
    assert classifier.is_direct_image("ftp://example.org/a.jpg") is False
    assert probe.calls == []


def test_requests_probe_returns_lowercased_content_type() -> None:
    session = FakeSession(FakeResponse(headers={"Content-Type": "Image/JPEG"}))
    probe = RequestsContentTypeProbe(
        session=session,  # type: ignore[arg-type]
        timeout=5.0,
        logger=logging.getLogger("test"),
    )
    assert probe.content_type("https://example.org/a") == "image/jpeg"
    url, kwargs = session.calls[0]
    assert url == "https://example.org/a"
    assert kwargs["allow_redirects"] is True
    assert kwargs["timeout"] == 5.0


def test_requests_probe_degrades_to_none_on_failures() -> None:
    failing = RequestsContentTypeProbe(
        session=FakeSession(raise_error=True),  # type: ignore[arg-type]
        timeout=5.0,
        logger=logging.getLogger("test"),
    )
    missing = RequestsContentTypeProbe(
        session=FakeSession(FakeResponse(status_code=404)),  # type: ignore[arg-type]
        timeout=5.0,
        logger=logging.getLogger("test"),
    )
    assert failing.content_type("https://example.org/a") is None
    assert missing.content_type("https://example.org/a") is None


def test_make_retry_session_sets_user_agent_and_retries_head() -> None:
    session = make_retry_session("my-agent")
    assert session.headers["User-Agent"] == "my-agent"
    retry = session.get_adapter("https://example.org").max_retries
    assert "HEAD" in retry.allowed_methods


def test_malformed_urls_are_rejected_without_probe() -> None:
    probe = FakeProbe("image/jpeg")
    classifier = _classifier(probe)
    assert classifier.is_direct_image("http://[bad/a.jpg") is False
    assert classifier.is_direct_image("https://[example/springfield") is False
    assert probe.calls == []
