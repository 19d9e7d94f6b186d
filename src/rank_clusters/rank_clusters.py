"""Popularity scoring and per-section ranking of clusters."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from common.datetime import parse_timestamp
from cluster_news.config import ClusteringConfig
from cluster_news.models import Cluster

logger = logging.getLogger(__name__)

MULTI_SOURCE_WEIGHT = 1000
SINGLE_SOURCE_BASE = 100
TRUSTED_SOURCE_BONUS = 30
MAX_RECENCY_BONUS = 20.0

# (keywords, bonus): a title containing any keyword earns the bonus once.
SECTION_KEYWORDS: dict[str, tuple[tuple[tuple[str, ...], int], ...]] = {
    "technology": (
        (("ai", "artificial intelligence", "chatgpt", "gpt"), 15),
        (("apple", "iphone", "google", "microsoft"), 12),
        (("security", "privacy", "hack"), 10),
        (("climate", "space", "mars"), 8),
        (("bitcoin", "crypto", "blockchain"), 8),
        (("tesla", "electric", "ev"), 6),
        (("review", "test"), 5),
        (("breaking", "exclusive"), 8),
    ),
    "australia": (
        (("election", "politics", "government"), 12),
        (("economy", "housing", "interest rate"), 10),
        (("climate", "bushfire", "flood"), 8),
        (("sydney", "melbourne", "brisbane"), 6),
        (("sport", "afl", "nrl"), 5),
        (("breaking", "live", "urgent"), 10),
        (("exclusive", "investigation"), 8),
    ),
}

LOW_INTEREST_KEYWORDS = ("weather", "traffic")


def _keyword_bonus(title: str, section: str) -> int:
    bonus = 0
    for keywords, points in SECTION_KEYWORDS.get(section, ()):
        if any(keyword in title for keyword in keywords):
            bonus += points
    return bonus


def _recency_bonus(updated_at: str, now: datetime) -> float:
    timestamp = parse_timestamp(updated_at)
    if timestamp is None:
        return 0.0
    hours_old = (now.timestamp() - timestamp) / 3600
    return max(0.0, MAX_RECENCY_BONUS - hours_old)


def calculate_popularity_score(
    cluster: Cluster,
    section: str,
    trusted_sources: list[str] | None = None,
    now: datetime | None = None,
) -> float:
    """Score a cluster for presentation order within a section.

    Multi-source clusters get ``coverage * 1000`` so they always outrank
    single-source ones. Single-source clusters are separated by feed
    position, trusted source, title keywords and title length. Every
    cluster gets up to 20 points for recency.
    """
    now = now or datetime.now(timezone.utc)
    trusted_sources = trusted_sources or []

    if cluster.coverage >= 2:
        score = float(cluster.coverage * MULTI_SOURCE_WEIGHT)
    else:
        score = float(SINGLE_SOURCE_BASE)

    if cluster.coverage == 1 and cluster.items:
        item = cluster.items[0]

        if item.feed_position is not None and item.feed_position < 10:
            score += 200 - item.feed_position * 10

        if item.source in trusted_sources:
            score += TRUSTED_SOURCE_BONUS

        title = (item.title or "").lower()
        score += _keyword_bonus(title, section)

        if 50 < len(title) < 120:
            score += 3
        if any(keyword in title for keyword in LOW_INTEREST_KEYWORDS):
            score -= 5
        if "sport" in title and section != "australia":
            score -= 3

    return score + _recency_bonus(cluster.updated_at, now)


def filter_section_clusters(
    clusters: list[Cluster],
    section: str,
    config: ClusteringConfig,
) -> list[Cluster]:
    """Hide single-source clusters from untrusted sources in strict sections."""
    if section not in config.single_source_sections:
        return list(clusters)

    trusted = set(config.trusted_for(section))
    kept = [
        cluster
        for cluster in clusters
        if cluster.coverage >= 2 or any(item.source in trusted for item in cluster.items)
    ]
    logger.info(
        "Section %s: kept %d of %d clusters after single-source filter",
        section,
        len(kept),
        len(clusters),
    )
    return kept


def rank_section(
    clusters: list[Cluster],
    section: str,
    config: ClusteringConfig,
    now: datetime | None = None,
) -> list[Cluster]:
    """
    Filter, score and order clusters for one section.

    Args:
        clusters: Output of the clustering engine for the section.
        section: Section name (e.g. "global", "technology").
        config: Ranking rules (trusted sources, cluster cap).
        now: Reference time for recency; defaults to current UTC time.

    Returns:
        At most ``config.max_clusters`` clusters with ``popularity_score``
        set, highest score first.
    """
    now = now or datetime.now(timezone.utc)
    trusted = config.trusted_for(section)

    filtered = filter_section_clusters(clusters, section, config)
    for cluster in filtered:
        cluster.popularity_score = calculate_popularity_score(cluster, section, trusted, now)

    ranked = sorted(filtered, key=lambda c: c.popularity_score or 0.0, reverse=True)
    return ranked[: config.max_clusters]
