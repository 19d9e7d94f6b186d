"""CLI for clustering feed items into ranked section output."""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone

from dotenv import load_dotenv

from common.aws import build_s3_key, upload_json_to_s3
from common.cli_helpers import setup_logging
from common.local_io import save_json_local
from cluster_news.cluster_news import cluster_news_items
from cluster_news.config import ClusteringConfig, get_config, load_config
from cluster_news.helpers import (
    filter_recent_items,
    load_section_items,
    parse_cluster_news_args,
    serialize_sections,
)
from cluster_news.models import NewsItem, SectionData
from rank_clusters.rank_clusters import rank_section

logger = logging.getLogger(__name__)


def build_section(
    section: str,
    items: list[NewsItem],
    config: ClusteringConfig,
    now: datetime,
) -> SectionData:
    """Cluster and rank one section's items."""
    recent = filter_recent_items(items, config.max_age_hours, now)
    clusters = cluster_news_items(recent, config.options_for(section))
    ranked = rank_section(clusters, section, config, now)
    logger.info("Section %s: %d clusters ranked from %d items", section, len(ranked), len(recent))
    return SectionData(updated_at=now.isoformat(), clusters=ranked)


def main(argv: list[str] | None = None) -> None:
    setup_logging()
    args = parse_cluster_news_args(argv)

    load_dotenv()

    config = load_config(args.config) if args.config else get_config()
    now = args.now or datetime.now(timezone.utc)

    items_by_section = load_section_items(args.input, args.sections)
    sections = {
        section: build_section(section, items, config, now)
        for section, items in items_by_section.items()
    }
    document = serialize_sections(sections)

    total = sum(len(data.clusters) for data in sections.values())
    if total == 0:
        logger.warning("No clusters produced")

    if args.load_s3:
        bucket = os.environ["S3_BUCKET_NAME"]
        key = build_s3_key(
            "clusters",
            now,
            f"clusters_{now.strftime('%Y_%m_%d_%H_%M')}.json",
        )
        upload_json_to_s3(document, bucket, key)

    if args.load_local:
        save_json_local(document, "clusters", now, output_dir=args.output_dir)

    if not args.load_s3 and not args.load_local:
        for section, data in sections.items():
            for cluster in data.clusters[:10]:
                logger.info(
                    "[%s] coverage=%d score=%.1f %s",
                    section,
                    cluster.coverage,
                    cluster.popularity_score or 0.0,
                    cluster.neutral_headline,
                )


if __name__ == "__main__":
    main()
