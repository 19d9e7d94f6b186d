"""Cluster news items into stories with shingle fingerprints and union-find."""

from __future__ import annotations

import logging
from typing import Sequence

from common.datetime import parse_timestamp
from cluster_news.headlines import select_best_headline
from cluster_news.models import Cluster, ClusterOptions, NewsItem
from cluster_news.text import build_fingerprint, jaccard_similarity
from cluster_news.union_find import UnionFind
from cluster_news.urls import is_same_article, item_hostname

logger = logging.getLogger(__name__)

_OLDEST = float("-inf")


def _published_key(item: NewsItem) -> float:
    """Sort key for publish time; unparseable timestamps sort as oldest."""
    timestamp = parse_timestamp(item.published_at)
    return _OLDEST if timestamp is None else timestamp


def _pair_key(id1: str, id2: str) -> tuple[str, str]:
    return (id1, id2) if id1 < id2 else (id2, id1)


def _resolve_options(options: ClusterOptions | float | None) -> ClusterOptions:
    if options is None:
        return ClusterOptions()
    if isinstance(options, ClusterOptions):
        return options
    return ClusterOptions(similarity_threshold=float(options))


def deduplicate_items(items: Sequence[NewsItem]) -> dict[str, NewsItem]:
    """Drop exact duplicates, keyed by ordinal id in input order.

    When two items are the same article the one with longer ``content`` is
    kept in the earlier item's slot; ties keep the earlier item.
    """
    unique: dict[str, NewsItem] = {}
    for index, item in enumerate(items):
        duplicate_of = None
        for existing_id, existing in unique.items():
            if is_same_article(item, existing):
                duplicate_of = existing_id
                break

        if duplicate_of is None:
            unique[f"item_{index}"] = item
            continue

        existing = unique[duplicate_of]
        if len(item.content or "") > len(existing.content or ""):
            unique[duplicate_of] = item
        logger.debug("Dropped duplicate of %s: %s", duplicate_of, item.url)

    return unique


def _is_cohesive(
    member_ids: list[str],
    similarities: dict[tuple[str, str], float],
    min_pair_similarity: float,
) -> bool:
    """Every pair in the group must reach min_pair_similarity."""
    for i, id1 in enumerate(member_ids):
        for id2 in member_ids[i + 1 :]:
            if similarities.get(_pair_key(id1, id2), 0.0) < min_pair_similarity:
                return False
    return True


def build_cluster(cluster_id: str, members: Sequence[NewsItem]) -> Cluster:
    """Assemble a cluster record from its member items."""
    ordered = sorted(members, key=_published_key, reverse=True)
    newest = ordered[0]
    return Cluster(
        id=cluster_id,
        coverage=len({item_hostname(item) for item in ordered}),
        updated_at=newest.published_at,
        title=newest.title,
        neutral_headline=select_best_headline(ordered),
        items=ordered,
        featured_image=next((item.image_url for item in ordered if item.image_url), None),
    )


def sort_clusters(clusters: list[Cluster]) -> list[Cluster]:
    """Order by coverage, then by most recent update, both descending."""
    return sorted(
        clusters,
        key=lambda c: (c.coverage, _published_key(c.items[0])),
        reverse=True,
    )


def cluster_news_items(
    items: Sequence[NewsItem],
    options: ClusterOptions | float | None = None,
) -> list[Cluster]:
    """
    Deduplicate items and group them into ranked story clusters.

    Args:
        items: Feed items for one section.
        options: ClusterOptions, or a bare similarity threshold.

    Returns:
        Clusters sorted by coverage then recency. Every deduplicated item
        appears in exactly one cluster.
    """
    if not items:
        return []

    opts = _resolve_options(options)
    unique = deduplicate_items(items)
    item_ids = list(unique)
    logger.info(
        "Clustering %d unique items (%d duplicates dropped, threshold=%.2f)",
        len(item_ids),
        len(items) - len(item_ids),
        opts.similarity_threshold,
    )

    fingerprints = {
        item_id: build_fingerprint(f"{item.title} {item.standfirst or ''}")
        for item_id, item in unique.items()
    }

    uf = UnionFind()
    for item_id in item_ids:
        uf.make_set(item_id)

    similarities: dict[tuple[str, str], float] = {}
    for i, id1 in enumerate(item_ids):
        for id2 in item_ids[i + 1 :]:
            similarity = jaccard_similarity(fingerprints[id1], fingerprints[id2])
            similarities[_pair_key(id1, id2)] = similarity
            if similarity >= opts.similarity_threshold:
                uf.union(id1, id2)

    groups: list[list[str]] = []
    split = 0
    for member_ids in uf.get_clusters().values():
        if (
            len(member_ids) > 1
            and opts.min_pair_similarity > 0
            and not _is_cohesive(member_ids, similarities, opts.min_pair_similarity)
        ):
            # Transitive chain joined unrelated items; keep them apart.
            split += 1
            groups.extend([member_id] for member_id in member_ids)
            continue
        groups.append(member_ids)

    if split:
        logger.info("Split %d clusters below min pair similarity %.2f", split, opts.min_pair_similarity)

    clusters = [
        build_cluster(f"cluster_{index}", [unique[member_id] for member_id in member_ids])
        for index, member_ids in enumerate(groups)
    ]

    logger.info("Built %d clusters from %d items", len(clusters), len(item_ids))
    return sort_clusters(clusters)
