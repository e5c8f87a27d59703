# ABOUTME: Unit tests for the pydantic schemas at the LLM boundary.
# ABOUTME: Validates aliasing, bounds checking, and conversion into domain types.

import pytest
from pydantic import ValidationError

from shelfsense.catalog.types import Seed
from shelfsense.llm.schemas import (
    ExtractedSeed,
    RecommendationDraft,
    RecommendationList,
    SeedExtraction,
)


class TestRecommendationDraft:
    """Tests for RecommendationDraft."""

    def test_accepts_wire_alias(self) -> None:
        draft = RecommendationDraft.model_validate(
            {"title": "Refactoring", "relatedTo": ["Clean Code"], "confidence": 0.7}
        )
        assert draft.related_to == ["Clean Code"]

    def test_accepts_field_name(self) -> None:
        draft = RecommendationDraft(title="Refactoring", related_to=["Clean Code"])
        assert draft.related_to == ["Clean Code"]

    def test_confidence_bounds(self) -> None:
        with pytest.raises(ValidationError):
            RecommendationDraft(title="X", confidence=1.2)

    def test_empty_title_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RecommendationDraft(title="")

    def test_to_recommendation(self) -> None:
        draft = RecommendationDraft(
            title=" Refactoring ",
            authors=["Martin Fowler", ""],
            reason="Pairs well.",
            related_to=["Clean Code"],
        )
        rec = draft.to_recommendation()
        assert rec.title == "Refactoring"
        assert rec.authors == ("Martin Fowler",)
        assert rec.related_to == ("Clean Code",)
        assert rec.confidence is None
        assert rec.source is None

    def test_schema_uses_wire_names(self) -> None:
        schema = RecommendationList.model_json_schema(by_alias=True)
        draft_schema = schema["$defs"]["RecommendationDraft"]
        assert "relatedTo" in draft_schema["properties"]


class TestSeedExtraction:
    """Tests for the OCR extraction schema."""

    def test_to_seed_coerces(self) -> None:
        item = ExtractedSeed(title=" Clean Code ", authors=["Robert C. Martin"], isbn="978-0132350884")
        assert item.to_seed() == Seed(
            title="Clean Code", authors=("Robert C. Martin",), isbn="9780132350884"
        )

    def test_parses_items(self) -> None:
        extraction = SeedExtraction.model_validate_json(
            '{"items": [{"title": "Dune", "authors": [], "confidence": 0.9}]}'
        )
        assert extraction.items[0].to_seed() == Seed(title="Dune", confidence=0.9)
