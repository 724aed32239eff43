"""Validation and runtime guardrails."""

from __future__ import annotations

from pathlib import Path
from urllib.parse import urlparse

from .errors import ConfigError, InvalidDescriptorError
from .models import SubjectKind

MAX_RESULTS_PER_QUERY = 10


def _split_url(url: str) -> tuple[str, str, str, str] | None:
    """Return (scheme, netloc, hostname, path), or None when the URL cannot be parsed."""
    try:
        parsed = urlparse(url.strip())
        hostname = parsed.hostname or ""
    except ValueError:
        return None
    return parsed.scheme, parsed.netloc, hostname, parsed.path


def is_supported_url(url: str) -> bool:
    """Allow only absolute HTTP(S) URLs with a hostname."""
    if not isinstance(url, str):
        return False
    parts = _split_url(url)
    if parts is None:
        return False
    scheme, netloc, _, _ = parts
    return scheme in {"http", "https"} and bool(netloc)


def url_host(url: str) -> str:
    """Extract lowercase hostname from URL; malformed URLs yield ""."""
    parts = _split_url(url)
    return parts[2].lower() if parts else ""


def url_path(url: str) -> str:
    """Lowercase URL path without query string or fragment; malformed URLs yield ""."""
    parts = _split_url(url)
    return parts[3].lower() if parts else ""


def parse_subject_kind(value: str | SubjectKind) -> SubjectKind:
    """Map user input such as ``"City"`` onto a SubjectKind."""
    if isinstance(value, SubjectKind):
        return value
    try:
        return SubjectKind(str(value).strip().lower())
    except ValueError as exc:
        raise InvalidDescriptorError(
            f"Unknown subject kind {value!r}; expected university or city."
        ) from exc


def load_lines_from_file(path: str) -> list[str]:
    """Load non-empty lines from a UTF-8 text file."""
    content = Path(path).read_text(encoding="utf-8")
    return [line.strip() for line in content.splitlines() if line.strip()]


def validate_runtime_constraints(
    *,
    names: tuple[str, ...],
    workers: int,
    results_per_query: int,
    request_timeout: float,
    discover_timeout: float | None,
) -> None:
    """Validate CLI/runtime configuration and raise ConfigError on invalid values."""
    if not names:
        raise ConfigError("Provide --names or --names-file.")
    if any(not name.strip() for name in names):
        raise ConfigError("Entity names must not be blank.")
    if workers < 1:
        raise ConfigError("--workers must be >= 1.")
    if not 1 <= results_per_query <= MAX_RESULTS_PER_QUERY:
        raise ConfigError(f"--results-per-query must be between 1 and {MAX_RESULTS_PER_QUERY}.")
    if request_timeout <= 0:
        raise ConfigError("--timeout must be > 0.")
    if discover_timeout is not None and discover_timeout <= 0:
        raise ConfigError("--discover-timeout must be > 0.")
