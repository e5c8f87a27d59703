# ABOUTME: Prompt text builders for the recommendation and seed-extraction calls.
# ABOUTME: Renders seed and candidate lists the same way for the structured and fallback paths.

from collections.abc import Sequence

from shelfsense.catalog.types import CatalogEntry
from shelfsense.core.resolver import ResolvedSeed

EMPTY_PLACEHOLDER = "(empty)"
_DESCRIPTION_EXCERPT = 160

ATTENTION = (
    "Do not recommend any of the reference books themselves (same title or same ISBN). "
    "Rank candidates related to several reference books first; push down candidates "
    "strongly tied to a single reference book so the list stays diverse. "
    "Each reason should be 3-5 sentences and 80-200 characters. "
    "Fill relatedTo with the titles of every reference book the recommendation relates to."
)

FALLBACK_FORMAT = (
    "Reply with JSON only (no code fences): "
    '{"recommendations": [{"title": string, "authors"?: string[], "reason": string, '
    '"confidence"?: number, "relatedTo"?: string[]}]}.'
)

EXTRACTION_INSTRUCTION = (
    "The following text was captured by OCR from book spines and covers. It contains "
    "noise, broken vertical text and arbitrary ordering. Extract up to 10 plausible books "
    "as {title, authors[], isbn?, confidence(0-1)}. Skip series names and blurbs; list "
    "multiple authors separately. Text may mix Japanese and English."
)


def _line(title: str | None, authors: Sequence[str], year: int | None) -> str:
    text = title or ""
    if authors:
        text += f" / {', '.join(authors)}"
    if year:
        text += f" ({year})"
    return text


def format_seed_text(seeds: Sequence[ResolvedSeed]) -> str:
    """One ``- title / authors (year)`` line per reference book."""
    lines = []
    for resolved in seeds:
        if not resolved.title:
            continue
        year = resolved.entry.published_year if resolved.entry else None
        lines.append(f"- {_line(resolved.title, resolved.authors, year)}")
    return "\n".join(lines)


def format_candidate_text(pool: Sequence[CatalogEntry]) -> str:
    """Numbered candidate lines with a short description excerpt under each."""
    blocks = []
    for i, entry in enumerate(pool, start=1):
        block = f"{i}. {_line(entry.title, entry.authors, entry.published_year)}\n"
        if entry.description:
            block += f"   {entry.description[:_DESCRIPTION_EXCERPT]}…\n"
        blocks.append(block)
    return "\n".join(blocks)


def recommendation_instruction(target_count: int, language: str, hardness: str) -> str:
    return (
        f"Using the reference books below as clues, recommend {target_count} books from the "
        f"candidate list. Difficulty: {hardness}. Language: {language}. {ATTENTION}"
    )


def seed_section(seed_text: str) -> str:
    return f"[Reference books]\n{seed_text or EMPTY_PLACEHOLDER}"


def candidate_section(candidate_text: str) -> str:
    return f"[Candidates]\n{candidate_text or EMPTY_PLACEHOLDER}"
