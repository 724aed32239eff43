"""Image search backend implementations."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from requests import Session
from requests.exceptions import RequestException

from .errors import ProviderError
from .models import Candidate
from .validation import is_supported_url

GOOGLE_CSE_ENDPOINT = "https://www.googleapis.com/customsearch/v1"
SERPAPI_ENDPOINT = "https://serpapi.com/search.json"
BING_IMAGES_ENDPOINT = "https://api.bing.microsoft.com/v7.0/images/search"


def _as_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


def _as_text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _make_candidate(
    image_url: Any, source_page_url: Any, title: Any, width: Any, height: Any
) -> Candidate | None:
    if not isinstance(image_url, str) or not is_supported_url(image_url):
        return None
    return Candidate(
        image_url=image_url.strip(),
        source_page_url=_as_text(source_page_url) or None,
        title=_as_text(title),
        width=_as_int(width),
        height=_as_int(height),
    )


class FallbackImageSearchBackend:
    """Google CSE -> SerpApi Google Images -> Bing Image Search fallback backend.

    Every provider is asked for large, photographic, safe-search results.
    A provider failure is logged and the next configured provider is tried.
    An empty answer yields no candidates; ProviderError is raised only when
    every configured provider failed.
    """

    def __init__(
        self,
        session: Session,
        *,
        timeout: float,
        cse_key: str | None,
        cse_id: str | None,
        serpapi_key: str | None,
        bing_key: str | None,
        logger: logging.Logger,
    ) -> None:
        self._session = session
        self._timeout = timeout
        self._cse_key = cse_key
        self._cse_id = cse_id
        self._serpapi_key = serpapi_key
        self._bing_key = bing_key
        self._logger = logger

    @property
    def configured(self) -> bool:
        return bool((self._cse_key and self._cse_id) or self._serpapi_key or self._bing_key)

    def _providers(self) -> list[Callable[[str, int], list[Candidate]]]:
        providers: list[Callable[[str, int], list[Candidate]]] = []
        if self._cse_key and self._cse_id:
            providers.append(self._search_google_cse)
        if self._serpapi_key:
            providers.append(self._search_serpapi)
        if self._bing_key:
            providers.append(self._search_bing)
        return providers

    def search(self, query: str, num: int) -> list[Candidate]:
        providers = self._providers()
        failures = 0
        for search_provider in providers:
            try:
                candidates = search_provider(query, num)
            except ProviderError as exc:
                self._logger.warning("%s", exc)
                failures += 1
                continue
            if candidates:
                return candidates[:num]
        if providers and failures == len(providers):
            raise ProviderError(f"All image search providers failed for query: {query}")
        return []

    def _get_json(self, provider: str, url: str, **kwargs: Any) -> dict[str, Any]:
        try:
            response = self._session.get(url, timeout=self._timeout, **kwargs)
            response.raise_for_status()
            payload = response.json()
        except (RequestException, ValueError) as exc:
            raise ProviderError(f"{provider} image search failed: {exc}") from exc
        if not isinstance(payload, dict):
            raise ProviderError(f"{provider} image search returned an unexpected payload.")
        return payload

    def _search_google_cse(self, query: str, num: int) -> list[Candidate]:
        payload = self._get_json(
            "Google CSE",
            GOOGLE_CSE_ENDPOINT,
            params={
                "key": self._cse_key,
                "cx": self._cse_id,
                "q": query,
                "searchType": "image",
                "num": num,
                "imgSize": "large",
                "imgType": "photo",
                "safe": "active",
            },
        )
        output: list[Candidate] = []
        for item in payload.get("items") or []:
            if not isinstance(item, dict):
                continue
            image = item.get("image")
            if not isinstance(image, dict):
                image = {}
            candidate = _make_candidate(
                item.get("link"),
                image.get("contextLink"),
                item.get("title"),
                image.get("width"),
                image.get("height"),
            )
            if candidate:
                output.append(candidate)
        return output

    def _search_serpapi(self, query: str, num: int) -> list[Candidate]:
        payload = self._get_json(
            "SerpApi",
            SERPAPI_ENDPOINT,
            params={
                "engine": "google_images",
                "q": query,
                "tbs": "isz:l,itp:photo",
                "safe": "active",
                "api_key": self._serpapi_key,
            },
        )
        output: list[Candidate] = []
        for item in payload.get("images_results") or []:
            if not isinstance(item, dict):
                continue
            candidate = _make_candidate(
                item.get("original"),
                item.get("link"),
                item.get("title"),
                item.get("original_width"),
                item.get("original_height"),
            )
            if candidate:
                output.append(candidate)
            if len(output) >= num:
                break
        return output

    def _search_bing(self, query: str, num: int) -> list[Candidate]:
        payload = self._get_json(
            "Bing",
            BING_IMAGES_ENDPOINT,
            params={
                "q": query,
                "count": num,
                "size": "Large",
                "imageType": "Photo",
                "safeSearch": "Strict",
            },
            headers={"Ocp-Apim-Subscription-Key": self._bing_key},
        )
        output: list[Candidate] = []
        for item in payload.get("value") or []:
            if not isinstance(item, dict):
                continue
            candidate = _make_candidate(
                item.get("contentUrl"),
                item.get("hostPageUrl"),
                item.get("name"),
                item.get("width"),
                item.get("height"),
            )
            if candidate:
                output.append(candidate)
        return output
