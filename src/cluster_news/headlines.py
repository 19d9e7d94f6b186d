"""Headline cleanup and best-headline selection for clusters."""

import re

from cluster_news.models import NewsItem

MAX_HEADLINE_LENGTH = 85

NEUTRAL_SOURCES = frozenset({"Guardian World", "BBC World", "Al Jazeera"})

_REMOVALS = [
    re.compile(r"you won't believe", re.IGNORECASE),
    re.compile(r"shocking", re.IGNORECASE),
    re.compile(r"brutal", re.IGNORECASE),
    re.compile(r"destroyed", re.IGNORECASE),
]
_SOFTENED_VERBS = re.compile(r"slammed|blasted", re.IGNORECASE)
_TRAILING_QUESTION = re.compile(r"\?$")
_EXCLAMATIONS = re.compile(r"!+")
_LEADING_MARKERS = re.compile(r"^(?:breaking|exclusive|just in):\s*", re.IGNORECASE)
_HYPE_ADJECTIVES = re.compile(
    r"\b(?:amazing|incredible|unbelievable|insane|crazy|wild)\b", re.IGNORECASE
)
_WHITESPACE = re.compile(r"\s+")

_EDITORIAL_PREFIX = re.compile(
    r"^(?:The Papers?:|Breaking:|Exclusive:|Just In:|Live:|Update:)", re.IGNORECASE
)
_HEAVY_PUNCTUATION = re.compile(r"[!?:;]")
_QUOTES = re.compile(r"['\"]")


def _truncate(text: str, limit: int = MAX_HEADLINE_LENGTH) -> str:
    if len(text) <= limit:
        return text
    cut = text[: limit - 3]
    if " " in cut:
        cut = cut.rsplit(" ", 1)[0]
    return cut.rstrip(" ,;:-") + "..."


def generate_neutral_headline(title: str | None) -> str:
    """Strip clickbait phrasing from a headline and cap its length."""
    neutral = title or ""
    for pattern in _REMOVALS:
        neutral = pattern.sub("", neutral)
    neutral = _SOFTENED_VERBS.sub("criticized", neutral)
    neutral = _TRAILING_QUESTION.sub("", neutral)
    neutral = _EXCLAMATIONS.sub(".", neutral)
    neutral = _LEADING_MARKERS.sub("", neutral)
    neutral = _HYPE_ADJECTIVES.sub("", neutral)
    neutral = _WHITESPACE.sub(" ", neutral).strip()

    neutral = _truncate(neutral)
    return neutral[:1].upper() + neutral[1:]


def score_headline(item: NewsItem) -> int:
    """Score a member headline; higher reads more neutral and direct."""
    title = item.title or ""
    score = 0

    if 20 <= len(title) <= 80:
        score += 3
    elif len(title) <= 100:
        score += 1

    if not _EDITORIAL_PREFIX.match(title):
        score += 2
    if len(_HEAVY_PUNCTUATION.findall(title)) <= 1:
        score += 2
    if item.source in NEUTRAL_SOURCES:
        score += 1
    if len(_QUOTES.findall(title)) <= 2:
        score += 1

    return score


def select_best_headline(items: list[NewsItem]) -> str:
    """Pick the best-scoring member title (first wins ties) and neutralize it."""
    if not items:
        return ""
    if len(items) == 1:
        return generate_neutral_headline(items[0].title)

    best = max(items, key=score_headline)
    return generate_neutral_headline(best.title)
