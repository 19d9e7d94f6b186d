"""Data models for cluster_news pipeline stage."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _optional_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class NewsItem:
    """Normalized feed item handed to the clustering engine."""

    source: str
    url: str
    published_at: str
    title: str
    standfirst: str | None = None
    content: str | None = None
    canonical_url: str | None = None
    feed_position: int | None = None  # rank within its origin feed, 0 = top
    image_url: str | None = None

    @classmethod
    def from_dict(cls, record: dict[str, Any]) -> NewsItem:
        """Build an item from a JSON record.

        Missing optional fields default to None. ``summary`` and
        ``description`` are accepted as aliases for ``standfirst``.
        """
        standfirst = record.get("standfirst")
        if standfirst is None:
            standfirst = record.get("summary") or record.get("description")
        return cls(
            source=str(record.get("source") or ""),
            url=str(record.get("url") or ""),
            published_at=str(record.get("published_at") or ""),
            title=str(record.get("title") or ""),
            standfirst=_optional_str(standfirst),
            content=_optional_str(record.get("content")),
            canonical_url=_optional_str(record.get("canonical_url")),
            feed_position=_optional_int(record.get("feed_position")),
            image_url=_optional_str(record.get("image_url")),
        )


@dataclass
class Cluster:
    """Group of items judged to report the same underlying story."""

    id: str
    coverage: int  # distinct hostnames among items
    updated_at: str
    title: str
    neutral_headline: str
    items: list[NewsItem] = field(default_factory=list)
    featured_image: str | None = None
    popularity_score: float | None = None


@dataclass(frozen=True)
class ClusterOptions:
    """Thresholds for one clustering run."""

    similarity_threshold: float = 0.18
    min_pair_similarity: float = 0.0

    def __post_init__(self) -> None:
        for name in ("similarity_threshold", "min_pair_similarity"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be between 0 and 1, got {value}")


@dataclass
class SectionData:
    """Ranked clusters for one frontend section."""

    updated_at: str
    clusters: list[Cluster] = field(default_factory=list)
