"""URL cleanup and exact same-article detection."""

import logging
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit, SplitResult

from cluster_news.models import NewsItem

logger = logging.getLogger(__name__)

TRACKING_PARAMS = frozenset(
    {"utm_source", "utm_medium", "utm_campaign", "utm_term", "utm_content", "ref", "src"}
)


def _parse_url(url: str | None) -> SplitResult:
    """Split an absolute URL; raise ValueError when it has no scheme or host."""
    parsed = urlsplit(url or "")
    if not parsed.scheme or not parsed.netloc:
        raise ValueError(f"Not an absolute URL: {url!r}")
    return parsed


def clean_url(url: str) -> str:
    """Remove tracking query parameters; unparseable URLs come back unchanged."""
    try:
        parsed = _parse_url(url)
        params = parse_qsl(parsed.query, keep_blank_values=True)
    except ValueError:
        return url

    kept = [(key, value) for key, value in params if key not in TRACKING_PARAMS]
    if len(kept) == len(params):
        return url
    return urlunsplit(parsed._replace(query=urlencode(kept)))


def is_same_article(a: NewsItem, b: NewsItem) -> bool:
    """Decide whether two items are the same underlying article.

    Canonical URLs decide when both items carry one. Otherwise cleaned URLs
    are compared, then hostname plus path. Parse failures mean "different".
    """
    if a.canonical_url and b.canonical_url:
        return a.canonical_url == b.canonical_url

    url_a = clean_url(a.url)
    url_b = clean_url(b.url)
    if url_a == url_b:
        return True

    try:
        parsed_a = _parse_url(url_a)
        parsed_b = _parse_url(url_b)
        return parsed_a.hostname == parsed_b.hostname and parsed_a.path == parsed_b.path
    except ValueError:
        return False


def item_hostname(item: NewsItem) -> str:
    """Hostname of the item's URL, or its source label when the URL won't parse."""
    try:
        hostname = _parse_url(item.url).hostname
    except ValueError:
        hostname = None
    if not hostname:
        logger.debug("Falling back to source label for coverage: %s", item.url)
        return item.source
    return hostname
