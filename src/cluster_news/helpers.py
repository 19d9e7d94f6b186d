"""Helper functions for cluster_news CLI."""

from __future__ import annotations

import argparse
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Iterable

from common.cli_helpers import parse_csv_list, parse_iso_datetime
from common.datetime import parse_timestamp
from common.local_io import read_jsonl_local
from common.serialization import serialize_dataclass
from cluster_news.models import NewsItem, SectionData

logger = logging.getLogger(__name__)


def parse_cluster_news_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for cluster_news."""

    parser = argparse.ArgumentParser(description="Cluster feed items into ranked stories per section.")

    # Input options
    parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="JSONL file of feed items, one item per line",
    )
    parser.add_argument(
        "--sections",
        type=parse_csv_list,
        default=["global"],
        help="Comma-separated sections to build (default: global)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Config name under cluster_news/configs (default: $CLUSTER_CONFIG_ENV or prod)",
    )
    parser.add_argument(
        "--now",
        type=lambda v: parse_iso_datetime(v, "now"),
        default=None,
        help="Reference time for the freshness window (default: current UTC time)",
    )

    # Output options
    parser.add_argument("--load-s3", action="store_true", help="Upload results to S3")
    parser.add_argument("--load-local", action="store_true", help="Save results to local file")
    parser.add_argument("--output-dir", default="output", help="Directory for --load-local")

    args = parser.parse_args(argv)
    if not args.sections:
        parser.error("--sections must name at least one section")
    return args


def load_section_items(path: str | Path, sections: Iterable[str]) -> dict[str, list[NewsItem]]:
    """Read items from JSONL and bucket them by section.

    Records with a ``section`` field go to that section only. Records
    without one are shared by every requested section. Records missing a
    title or URL, or whose ``section`` is not a string, are skipped.
    """
    wanted = list(sections)
    buckets: dict[str, list[NewsItem]] = {section: [] for section in wanted}
    skipped = 0

    for record in read_jsonl_local(path):
        if not record.get("title") or not record.get("url"):
            skipped += 1
            continue
        section = record.get("section")
        if section is not None and not isinstance(section, str):
            logger.warning("Skipping record with non-string section %r: %s", section, record.get("url"))
            skipped += 1
            continue
        item = NewsItem.from_dict(record)
        if section is None:
            for bucket in buckets.values():
                bucket.append(item)
        elif section in buckets:
            buckets[section].append(item)

    if skipped:
        logger.warning("Skipped %d malformed records", skipped)
    for section, items in buckets.items():
        logger.info("Loaded %d items for section %s", len(items), section)
    return buckets


def filter_recent_items(
    items: list[NewsItem],
    max_age_hours: int,
    now: datetime | None = None,
) -> list[NewsItem]:
    """Keep items published within the window; undated items are dropped."""
    now = now or datetime.now(timezone.utc)
    cutoff = (now - timedelta(hours=max_age_hours)).timestamp()

    recent = []
    for item in items:
        timestamp = parse_timestamp(item.published_at)
        if timestamp is not None and timestamp >= cutoff:
            recent.append(item)

    if len(recent) < len(items):
        logger.info("Dropped %d items older than %dh", len(items) - len(recent), max_age_hours)
    return recent


def serialize_sections(sections: dict[str, SectionData]) -> dict[str, Any]:
    """Section name -> JSON-ready section payload."""
    return {name: serialize_dataclass(data) for name, data in sections.items()}
