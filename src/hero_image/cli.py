"""CLI entrypoint for hero-image."""

from __future__ import annotations

import argparse
import os
from collections.abc import Sequence

from .config import (
    DEFAULT_OUTPUT,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_RESULTS_PER_QUERY,
    DEFAULT_USER_AGENT,
    DEFAULT_WORKERS,
    DiscoveryConfig,
)
from .discovery import build_classifier
from .enrichment import validate_standalone_url
from .errors import ConfigError, InvalidDescriptorError
from .logging_utils import configure_logging, get_logger
from .models import SubjectKind
from .pipeline import run_pipeline
from .validation import load_lines_from_file, parse_subject_kind


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser."""
    parser = argparse.ArgumentParser(
        description="Hero Image Finder - discover verified photographs of universities and cities."
    )
    source_group = parser.add_mutually_exclusive_group(required=False)
    source_group.add_argument("--names", nargs="+", help="Entity names to resolve.")
    source_group.add_argument("--names-file", help="Path to entity file (one name per line).")
    source_group.add_argument(
        "--validate-url",
        help="Only check that this URL serves image bytes (no search provider needed).",
    )
    parser.add_argument(
        "--kind",
        choices=[kind.value for kind in SubjectKind],
        help="Subject kind of the named entities.",
    )
    parser.add_argument("--country", help="Country of the entities (strongly advised for cities).")
    parser.add_argument("--region", help="State, province or region of the entities.")
    parser.add_argument("--cse-key", help="Google Custom Search API key (or GOOGLE_CSE_API_KEY).")
    parser.add_argument("--cse-id", help="Google Custom Search engine id (or GOOGLE_CSE_ID).")
    parser.add_argument("--serpapi-key", help="SerpApi key (or SERPAPI_KEY).")
    parser.add_argument("--bing-key", help="Bing Image Search key (or BING_API_KEY).")
    parser.add_argument("--output", default=DEFAULT_OUTPUT, help="Output CSV path.")
    parser.add_argument(
        "--workers", type=int, default=DEFAULT_WORKERS, help="Entities resolved in parallel."
    )
    parser.add_argument(
        "--results-per-query",
        type=int,
        default=DEFAULT_RESULTS_PER_QUERY,
        help="Candidates requested per search strategy.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_REQUEST_TIMEOUT,
        help="Per-request network timeout in seconds.",
    )
    parser.add_argument(
        "--discover-timeout",
        type=float,
        default=None,
        help="Wall-clock limit per entity; exceeding it counts as no image found.",
    )
    parser.add_argument("--no-progress", action="store_true", help="Disable tqdm progress bars.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse and pre-validate CLI input."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if not (args.names or args.names_file or args.validate_url):
        parser.error("Provide --names, --names-file, or --validate-url.")
    if (args.names or args.names_file) and not args.kind:
        parser.error("--kind is required with --names or --names-file.")
    return args


def _materialize_names(args: argparse.Namespace) -> tuple[str, ...]:
    if args.names:
        return tuple(args.names)
    if args.names_file:
        return tuple(load_lines_from_file(args.names_file))
    return tuple()


def namespace_to_config(args: argparse.Namespace) -> DiscoveryConfig:
    """Convert CLI args to validated DiscoveryConfig."""
    logger = get_logger()
    subject_kind = parse_subject_kind(args.kind)
    if subject_kind is SubjectKind.CITY and not args.country:
        logger.warning("--country was not provided; city names shared across countries may mix.")
    return DiscoveryConfig(
        names=_materialize_names(args),
        subject_kind=subject_kind,
        output=args.output,
        region=args.region,
        country=args.country,
        cse_key=args.cse_key or os.getenv("GOOGLE_CSE_API_KEY"),
        cse_id=args.cse_id or os.getenv("GOOGLE_CSE_ID"),
        serpapi_key=args.serpapi_key or os.getenv("SERPAPI_KEY"),
        bing_key=args.bing_key or os.getenv("BING_API_KEY"),
        workers=args.workers,
        results_per_query=args.results_per_query,
        request_timeout=args.timeout,
        discover_timeout=args.discover_timeout,
        show_progress=not args.no_progress,
    )


def _run_validate_url(args: argparse.Namespace) -> int:
    logger = get_logger()
    if args.timeout <= 0:
        logger.error("Invalid configuration: --timeout must be > 0.")
        return 2
    classifier = build_classifier(
        user_agent=DEFAULT_USER_AGENT, timeout=args.timeout, logger=logger
    )
    url = validate_standalone_url(args.validate_url, classifier=classifier, logger=logger)
    if url is None:
        logger.info("Rejected: %s", args.validate_url)
        return 1
    logger.info("Direct image: %s", url)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entrypoint."""
    args = parse_args(argv)
    configure_logging(args.verbose)
    logger = get_logger()
    if args.validate_url:
        return _run_validate_url(args)

    try:
        config = namespace_to_config(args)
        output = run_pipeline(config, logger=logger)
    except (ConfigError, InvalidDescriptorError) as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    logger.info("Wrote results to %s", output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
