"""Tests for cluster_news.cluster_news module."""

from __future__ import annotations

from cluster_news.cluster_news import (
    build_cluster,
    cluster_news_items,
    deduplicate_items,
    sort_clusters,
)
from cluster_news.models import ClusterOptions, NewsItem
from cluster_news.urls import item_hostname


def _item(
    title: str,
    url: str,
    source: str = "wire",
    published_at: str = "2024-01-01T12:00:00Z",
    **kwargs,
) -> NewsItem:
    return NewsItem(source=source, url=url, published_at=published_at, title=title, **kwargs)


def _mixed_items() -> list[NewsItem]:
    return [
        _item("iPhone 16 launch", "https://techcrunch.com/iphone", "TechCrunch", "2024-01-01T10:00:00Z"),
        _item("Apple launches iPhone 16", "https://www.nytimes.com/apple", "NYTimes", "2024-01-01T11:00:00Z"),
        _item("Climate report warns of rising seas", "https://bbc.co.uk/climate", "BBC World", "2024-01-01T09:00:00Z"),
        _item("Apple launches iPhone 16", "https://www.nytimes.com/apple?utm_source=rss", "NYTimes", "2024-01-01T11:00:00Z"),
        _item("Central bank holds interest rates", "https://ft.com/rates", "FT", "2024-01-01T08:00:00Z"),
        _item("Central bank holds interest rates steady", "https://wsj.com/rates", "WSJ", "2024-01-01T12:30:00Z"),
        _item("Local election results announced", "https://abc.net.au/vote", "ABC", "2024-01-01T13:00:00Z"),
    ]


class TestDeduplicateItems:
    def test_assigns_ordinal_ids(self) -> None:
        items = [_item("A story", "https://a.com/1"), _item("B story", "https://b.com/2")]
        assert list(deduplicate_items(items)) == ["item_0", "item_1"]

    def test_keeps_longer_content_in_earlier_slot(self) -> None:
        first = _item("Story", "https://a.com/1", content="short")
        second = _item("Story", "https://a.com/1?utm_source=x", content="much longer body")
        unique = deduplicate_items([first, second])
        assert unique == {"item_0": second}

    def test_tie_keeps_earlier(self) -> None:
        first = _item("First", "https://a.com/1", content="same")
        second = _item("Second", "https://a.com/1", content="same")
        assert deduplicate_items([first, second]) == {"item_0": first}

    def test_missing_content_counts_as_empty(self) -> None:
        first = _item("First", "https://a.com/1")
        second = _item("Second", "https://a.com/1", content="x")
        assert deduplicate_items([first, second]) == {"item_0": second}


class TestBuildCluster:
    def test_orders_members_newest_first(self) -> None:
        older = _item("Older", "https://a.com/1", published_at="2024-01-01T08:00:00Z")
        newer = _item("Newer", "https://b.com/1", published_at="2024-01-01T09:00:00+00:00")
        cluster = build_cluster("cluster_0", [older, newer])

        assert cluster.items == [newer, older]
        assert cluster.updated_at == newer.published_at
        assert cluster.title == "Newer"

    def test_mixed_timezone_offsets_compare_by_instant(self) -> None:
        utc = _item("UTC", "https://a.com/1", published_at="2024-01-01T10:00:00Z")
        sydney = _item("Sydney", "https://b.com/1", published_at="2024-01-01T20:30:00+11:00")
        cluster = build_cluster("cluster_0", [sydney, utc])
        assert cluster.items == [utc, sydney]

    def test_unparseable_date_sorts_last(self) -> None:
        undated = _item("Undated", "https://a.com/1", published_at="yesterday")
        dated = _item("Dated", "https://b.com/1")
        cluster = build_cluster("cluster_0", [undated, dated])
        assert cluster.items == [dated, undated]

    def test_featured_image_is_first_member_with_image(self) -> None:
        newest = _item("A", "https://a.com/1", published_at="2024-01-01T12:00:00Z")
        middle = _item("B", "https://b.com/1", published_at="2024-01-01T11:00:00Z", image_url="https://img/b.jpg")
        oldest = _item("C", "https://c.com/1", published_at="2024-01-01T10:00:00Z", image_url="https://img/c.jpg")
        cluster = build_cluster("cluster_0", [oldest, newest, middle])
        assert cluster.featured_image == "https://img/b.jpg"

    def test_no_image(self) -> None:
        assert build_cluster("cluster_0", [_item("A", "https://a.com/1")]).featured_image is None

    def test_coverage_falls_back_to_source_label(self) -> None:
        items = [
            _item("Same story", "not-a-url-1", source="Reuters"),
            _item("Same story", "not-a-url-2", source="AP"),
            _item("Same story", "https://reuters.com/x", source="Reuters"),
        ]
        assert build_cluster("cluster_0", items).coverage == 3

    def test_popularity_unset(self) -> None:
        assert build_cluster("cluster_0", [_item("A", "https://a.com/1")]).popularity_score is None


class TestClusterNewsItems:
    def test_empty_input(self) -> None:
        assert cluster_news_items([], 0.18) == []

    def test_single_item(self) -> None:
        clusters = cluster_news_items([_item("Lone story", "https://a.com/1")], 0.18)
        assert len(clusters) == 1
        assert clusters[0].coverage == 1
        assert clusters[0].id == "cluster_0"

    def test_identical_titles_from_two_outlets(self) -> None:
        items = [
            _item("Apple Unveils iPhone 16", "https://techcrunch.com/apple-iphone", "TechCrunch"),
            _item("Apple Unveils iPhone 16", "https://www.nytimes.com/iphone", "NYTimes"),
        ]
        clusters = cluster_news_items(items, 0.5)
        assert len(clusters) == 1
        assert clusters[0].coverage == 2

    def test_same_hostname_counts_once(self) -> None:
        items = [
            _item("Apple Unveils iPhone 16", "https://example.com/a", "Wire A", canonical_url="https://example.com/c1"),
            _item("Apple Unveils iPhone 16", "https://example.com/b", "Wire B", canonical_url="https://example.com/c2"),
        ]
        clusters = cluster_news_items(items, 0.5)
        assert len(clusters) == 1
        assert len(clusters[0].items) == 2
        assert clusters[0].coverage == 1

    def test_exact_duplicate_collapses(self) -> None:
        item = _item("Apple Unveils iPhone 16", "https://techcrunch.com/apple-iphone")
        clusters = cluster_news_items([item, item], 0.5)
        assert len(clusters) == 1
        assert clusters[0].items == [item]

    def test_related_and_unrelated_items(self) -> None:
        items = [
            _item("iPhone 16 launch", "https://techcrunch.com/iphone", "TechCrunch"),
            _item("Apple launches iPhone 16", "https://www.nytimes.com/apple", "NYTimes"),
            _item("Climate report warns of rising seas", "https://bbc.co.uk/climate", "BBC World"),
        ]
        clusters = cluster_news_items(items, 0.18)

        assert [c.coverage for c in clusters] == [2, 1]
        assert {i.title for i in clusters[0].items} == {"iPhone 16 launch", "Apple launches iPhone 16"}
        assert clusters[1].items[0].title == "Climate report warns of rising seas"

    def test_threshold_one_only_merges_identical_fingerprints(self) -> None:
        items = [
            _item("Apple Unveils iPhone 16", "https://a.com/1"),
            _item("Apple Unveils iPhone 16", "https://b.com/1"),
            _item("Apple Unveils the iPhone 16 today", "https://c.com/1"),
        ]
        clusters = cluster_news_items(items, 1.0)
        assert sorted(len(c.items) for c in clusters) == [1, 2]

    def test_accepts_cluster_options(self) -> None:
        items = [
            _item("Apple Unveils iPhone 16", "https://a.com/1"),
            _item("Apple Unveils iPhone 16", "https://b.com/1"),
        ]
        clusters = cluster_news_items(items, ClusterOptions(similarity_threshold=0.5))
        assert len(clusters) == 1

    def test_default_options(self) -> None:
        items = [
            _item("Apple Unveils iPhone 16", "https://a.com/1"),
            _item("Apple Unveils iPhone 16", "https://b.com/1"),
        ]
        assert len(cluster_news_items(items)) == 1

    def test_standfirst_contributes_to_fingerprint(self) -> None:
        shared = "Negotiators agree ceasefire terms after overnight talks in Cairo"
        items = [
            _item("Talks end", "https://a.com/1", standfirst=shared),
            _item("Deal struck", "https://b.com/1", standfirst=shared),
        ]
        assert len(cluster_news_items(items, 0.5)) == 1

    def test_chained_cluster_split_by_min_pair_similarity(self) -> None:
        items = [
            _item("alpha bravo charlie", "https://a.com/1"),
            _item("alpha bravo charlie delta echo foxtrot", "https://b.com/1"),
            _item("delta echo foxtrot", "https://c.com/1"),
        ]

        chained = cluster_news_items(items, ClusterOptions(similarity_threshold=0.3))
        assert len(chained) == 1
        assert chained[0].coverage == 3

        split = cluster_news_items(
            items, ClusterOptions(similarity_threshold=0.3, min_pair_similarity=0.1)
        )
        assert len(split) == 3
        assert all(len(c.items) == 1 for c in split)

    def test_every_unique_item_in_exactly_one_cluster(self) -> None:
        items = _mixed_items()
        unique = list(deduplicate_items(items).values())
        clusters = cluster_news_items(items, 0.18)

        members = [item for cluster in clusters for item in cluster.items]
        assert len(members) == len(unique)
        assert set(members) == set(unique)

    def test_coverage_matches_hostnames(self) -> None:
        for cluster in cluster_news_items(_mixed_items(), 0.18):
            assert cluster.coverage == len({item_hostname(i) for i in cluster.items})
            assert cluster.coverage >= 1

    def test_member_and_cluster_ordering(self) -> None:
        clusters = cluster_news_items(_mixed_items(), 0.18)

        for cluster in clusters:
            stamps = [i.published_at for i in cluster.items]
            assert stamps == sorted(stamps, reverse=True)
            assert cluster.updated_at == cluster.items[0].published_at

        keys = [(c.coverage, c.updated_at) for c in clusters]
        assert keys == sorted(keys, reverse=True)

    def test_cluster_ids_unique(self) -> None:
        clusters = cluster_news_items(_mixed_items(), 0.18)
        assert len({c.id for c in clusters}) == len(clusters)


class TestSortClusters:
    def test_coverage_then_recency(self) -> None:
        old_single = build_cluster("c0", [_item("A", "https://a.com/1", published_at="2024-01-01T08:00:00Z")])
        new_single = build_cluster("c1", [_item("B", "https://b.com/1", published_at="2024-01-01T09:00:00Z")])
        pair = build_cluster(
            "c2",
            [
                _item("C", "https://c.com/1", published_at="2024-01-01T07:00:00Z"),
                _item("C", "https://d.com/1", published_at="2024-01-01T06:00:00Z"),
            ],
        )
        assert [c.id for c in sort_clusters([old_single, new_single, pair])] == ["c2", "c1", "c0"]
