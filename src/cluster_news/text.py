"""Text normalization, character shingling and Jaccard similarity."""

import re
from typing import Iterable

SHINGLE_SIZES = (3, 4, 5)

STOPWORDS = frozenset(
    "a an and are as at be by for from has he in is it its of on that the to was"
    " will with this but they have had what when where who which why how been"
    " being their then there these those than them".split()
)

_NON_WORD_RE = re.compile(r"[^\w\s]")


def normalize_text(text: str | None) -> str:
    """Lowercase, strip punctuation, drop short tokens and stopwords.

    Tokens of two characters or fewer are discarded. The result is
    idempotent: normalizing normalized text returns it unchanged.
    """
    if not text:
        return ""
    tokens = _NON_WORD_RE.sub(" ", text.lower()).split()
    return " ".join(t for t in tokens if len(t) > 2 and t not in STOPWORDS)


def extract_shingles(text: str | None, k: int = 3) -> set[str]:
    """Return every contiguous k-character substring of the normalized text."""
    normalized = normalize_text(text)
    if k <= 0:
        return set()
    return {normalized[i : i + k] for i in range(len(normalized) - k + 1)}


def build_fingerprint(text: str | None, sizes: Iterable[int] = SHINGLE_SIZES) -> set[str]:
    """Union of shingle sets across several sizes."""
    fingerprint: set[str] = set()
    for k in sizes:
        fingerprint |= extract_shingles(text, k)
    return fingerprint


def jaccard_similarity(a: set[str], b: set[str]) -> float:
    """|a & b| / |a | b|, with two empty sets scoring 0."""
    union_size = len(a | b)
    if union_size == 0:
        return 0.0
    return len(a & b) / union_size
