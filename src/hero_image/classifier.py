"""Direct-image URL classification and the HEAD probe behind it."""

from __future__ import annotations

import logging

from requests import Session
from requests.adapters import HTTPAdapter
from requests.exceptions import RequestException
from urllib3.util.retry import Retry

from .keywords import (
    DIRECT_IMAGE_EXTENSIONS,
    PAGE_CONTENT_TYPES,
    VECTOR_CONTENT_TYPES,
    VECTOR_EXTENSIONS,
)
from .models import ContentTypeProbe
from .validation import is_supported_url, url_path


def make_retry_session(user_agent: str) -> Session:
    """Create requests session with retry/backoff defaults."""
    session = Session()
    session.headers.update({"User-Agent": user_agent})
    retry = Retry(
        total=2,
        backoff_factor=0.5,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=frozenset({"GET", "HEAD"}),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


def has_vector_extension(url: str) -> bool:
    path = url_path(url)
    return any(path.endswith(ext) for ext in VECTOR_EXTENSIONS)


def has_image_extension(url: str) -> bool:
    """Return True when the URL path ends in a raster image extension."""
    path = url_path(url)
    return any(path.endswith(ext) for ext in DIRECT_IMAGE_EXTENSIONS)


class RequestsContentTypeProbe:
    """Header-only probe: HEAD the URL and report its declared content type."""

    def __init__(self, *, session: Session, timeout: float, logger: logging.Logger) -> None:
        self._session = session
        self._timeout = timeout
        self._logger = logger

    def content_type(self, url: str) -> str | None:
        try:
            response = self._session.head(url, allow_redirects=True, timeout=self._timeout)
            response.raise_for_status()
        except RequestException as exc:
            self._logger.debug("HEAD probe failed for %s: %s", url, exc)
            return None
        return str(response.headers.get("Content-Type", "")).strip().lower()


class UrlClassifier:
    """Decide whether a URL serves image bytes rather than an HTML page.

    Anything that cannot be verified is treated as not an image.
    """

    def __init__(self, *, probe: ContentTypeProbe, logger: logging.Logger) -> None:
        self._probe = probe
        self._logger = logger

    def is_direct_image(self, url: str) -> bool:
        if not url or not is_supported_url(url):
            return False
        if has_vector_extension(url):
            self._logger.debug("Vector image is not a hero photo: %s", url)
            return False
        if has_image_extension(url):
            return True

        content_type = self._probe.content_type(url)
        if content_type is None:
            self._logger.info("Could not validate image URL: %s", url)
            return False
        media_type = content_type.split(";", maxsplit=1)[0].strip()
        if media_type.startswith("image/") and media_type not in VECTOR_CONTENT_TYPES:
            return True
        if any(marker in media_type for marker in PAGE_CONTENT_TYPES):
            self._logger.info("URL is a page, not an image (content-type: %s): %s", media_type, url)
            return False
        self._logger.info(
            "URL does not appear to be a direct image (content-type: %s): %s",
            media_type or "<none>",
            url,
        )
        return False
