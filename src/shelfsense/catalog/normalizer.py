# ABOUTME: Cleanup of noisy OCR/vision text lines into usable search seeds.
# ABOUTME: Splits mangled spine text like "CleanCode-RobertMartin" and detects "Title by Author".

import re

import wordninja

from shelfsense.catalog.types import Seed

# Minimum length for a spaceless string to be considered "concatenated" and worth splitting.
# Shorter strings (e.g. "Dune", "1984") are left alone.
_MIN_CONCAT_LENGTH = 8

# Seeds taken from a free-text fallback are capped so a noisy shelf photo
# cannot fan out into dozens of catalog queries.
MAX_TEXT_SEEDS = 12

_CAMEL_CASE_RE = re.compile(r"[a-z][A-Z]")
_CAMEL_LOWER_UPPER_RE = re.compile(r"([a-z\d])([A-Z])")
_CAMEL_UPPER_SEQUENCE_RE = re.compile(r"([A-Z]+)([A-Z][a-z])")
_LETTER_DIGIT_RE = re.compile(r"([a-zA-Z])(\d)")
_DIGIT_LETTER_RE = re.compile(r"(\d)([a-zA-Z])")
_SEPARATOR_RE = re.compile(r"[-_]")
_BULLET_RE = re.compile(r"^\s*(?:[-*•・]|\d+[.)])\s*")
_ISBN_RE = re.compile(r"^(?:97[89])?\d{9}[\dXx]$")

# "Title by Author": author must be 2-3 capitalized words
_TITLE_BY_AUTHOR_RE = re.compile(
    r"^(?P<title>.+?)\s+by\s+(?P<author>[A-Z][a-z.]*(?:\s+[A-Z][a-z.]*){1,2})$"
)
# "Title / Author" as produced by list-style OCR output
_TITLE_SLASH_AUTHOR_RE = re.compile(r"^(?P<title>.+?)\s+/\s+(?P<author>.+)$")


def _needs_normalization(text: str) -> bool:
    """Check whether a line looks mangled and needs splitting.

    Returns True for CamelCase-joined words, underscore-joined words,
    or long spaceless ASCII strings that are likely concatenated.
    """
    text = text.strip()
    if not text or not text.isascii():
        return False

    if "_" in text:
        return True

    if _CAMEL_CASE_RE.search(text):
        return True

    segments = text.split("-") if "-" in text else [text]
    return any(" " not in seg and len(seg) >= _MIN_CONCAT_LENGTH for seg in segments)


def _split_camel_case(text: str) -> list[str]:
    """Split a CamelCase string into individual words.

    Handles boundaries between:
    - lowercase -> uppercase ("codeR" -> "code", "R")
    - uppercase sequence -> uppercase+lowercase ("HTMLParser" -> "HTML", "Parser")
    - letter -> digit and digit -> letter ("Fahrenheit451" -> "Fahrenheit", "451")
    """
    result = _CAMEL_LOWER_UPPER_RE.sub(r"\1_SPLIT_\2", text)
    result = _CAMEL_UPPER_SEQUENCE_RE.sub(r"\1_SPLIT_\2", result)
    result = _LETTER_DIGIT_RE.sub(r"\1_SPLIT_\2", result)
    result = _DIGIT_LETTER_RE.sub(r"\1_SPLIT_\2", result)

    parts = [p for p in result.split("_SPLIT_") if p]
    return parts if parts else [text]


def split_concatenated(text: str) -> str:
    """Split a concatenated/mangled string into space-separated words.

    Non-ASCII text (e.g. Japanese spines) is returned untouched: word
    splitting there needs a different model than wordninja's English unigrams.
    """
    if not _needs_normalization(text):
        return text

    words: list[str] = []
    for segment in _SEPARATOR_RE.split(text):
        segment = segment.strip()
        if not segment:
            continue
        for part in _split_camel_case(segment):
            if part.islower() and len(part) >= _MIN_CONCAT_LENGTH:
                words.extend(wordninja.split(part) or [part])
            else:
                words.append(part)

    return " ".join(words)


def seed_from_line(line: str) -> Seed | None:
    """Turn one line of OCR or model free text into a Seed.

    Strips list bullets, recognizes bare ISBNs, splits mangled words, and
    peels off "by Author" / "/ Author" suffixes. Returns None for blank lines.
    """
    text = _BULLET_RE.sub("", line).strip()
    if not text:
        return None

    compact = text.replace("-", "").replace(" ", "")
    if _ISBN_RE.match(compact):
        return Seed(isbn=compact.upper())

    for pattern in (_TITLE_SLASH_AUTHOR_RE, _TITLE_BY_AUTHOR_RE):
        m = pattern.match(text)
        if m:
            title = split_concatenated(m.group("title").strip())
            authors = tuple(a.strip() for a in m.group("author").split(",") if a.strip())
            return Seed(title=title, authors=authors)

    return Seed(title=split_concatenated(text))


def seeds_from_text(text: str, limit: int = MAX_TEXT_SEEDS) -> list[Seed]:
    """Split free text into at most ``limit`` seeds, one per non-empty line."""
    seeds: list[Seed] = []
    for line in text.splitlines():
        seed = seed_from_line(line)
        if seed is None:
            continue
        seeds.append(seed)
        if len(seeds) >= limit:
            break
    return seeds
