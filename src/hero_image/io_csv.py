"""CSV report of discovery results."""

from __future__ import annotations

import csv
from datetime import datetime, timezone
from pathlib import Path

from .models import DiscoveryResult, EntityDescriptor

CSV_FIELDS = [
    "name",
    "subject_kind",
    "region",
    "country",
    "status",
    "image_url",
    "strategy",
    "date_resolved_utc",
]


def result_to_row(descriptor: EntityDescriptor, result: DiscoveryResult) -> dict[str, str]:
    """Flatten one discovery outcome into a CSV row."""
    return {
        "name": descriptor.name,
        "subject_kind": descriptor.subject_kind.value,
        "region": descriptor.region or "",
        "country": descriptor.country or "",
        "status": "found" if result.found else "not_found",
        "image_url": result.url or "",
        "strategy": result.strategy or "",
        "date_resolved_utc": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    }


def write_rows(path: str, rows: list[dict[str, str]]) -> None:
    """Write report rows to CSV with stable schema."""
    output_path = Path(path)
    with output_path.open("w", newline="", encoding="utf-8") as file_obj:
        writer = csv.DictWriter(file_obj, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)
