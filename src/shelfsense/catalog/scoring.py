# ABOUTME: Text-matching primitives shared by the resolver and the post-processor.
# ABOUTME: Title normalization, token-set (Jaccard) similarity, and seed/entry match scoring.

import re

from shelfsense.catalog.types import CatalogEntry, Seed

# Match weights
_WEIGHT_TITLE = 0.75
_AUTHOR_BONUS = 0.2
_ISBN_BONUS = 0.5

# Brackets, separators, dashes, quotes and sentence punctuation in both
# ASCII and full-width forms.
_TITLE_PUNCT_RE = re.compile(r"[【】［］\[\]()（）,:：;・\-–—'’\"“”!！?？]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_title(title: str | None) -> str:
    """Lower-case a title, turn punctuation into spaces, and collapse whitespace.

    >>> normalize_title("Clean  Code!")
    'clean code'
    """
    if not title:
        return ""
    text = _TITLE_PUNCT_RE.sub(" ", title.lower())
    return _WHITESPACE_RE.sub(" ", text).strip()


def title_similarity(a: str, b: str) -> float:
    """Jaccard similarity of the whitespace tokens of two normalized titles.

    Two empty titles share nothing, so they score 0.0 rather than 1.0.
    """
    tokens_a = set(a.split())
    tokens_b = set(b.split())
    union = tokens_a | tokens_b
    if not union:
        return 0.0
    return len(tokens_a & tokens_b) / len(union)


def score_match(seed: Seed, entry: CatalogEntry) -> float:
    """Score how well a catalog entry matches a seed.

    title similarity * 0.75, plus 0.2 when the seed's primary author is a
    case-insensitive substring of the entry's primary author, plus 0.5 when
    the seed ISBN is a substring of the entry's isbn13. Not clamped: an exact
    title, author and ISBN match scores 1.45.
    """
    score = _WEIGHT_TITLE * title_similarity(
        normalize_title(seed.title), normalize_title(entry.title)
    )

    seed_author = seed.primary_author.lower()
    if seed_author and seed_author in entry.primary_author.lower():
        score += _AUTHOR_BONUS

    if seed.isbn and entry.isbn13 and seed.isbn in entry.isbn13:
        score += _ISBN_BONUS

    return score
