# ABOUTME: Pydantic schemas for structured LLM output (recommendations and seed extraction).
# ABOUTME: Validates and coerces model JSON at the boundary before it reaches the pipeline.

from pydantic import BaseModel, ConfigDict, Field

from shelfsense.catalog.types import Seed
from shelfsense.core.recommendation import Recommendation


class RecommendationDraft(BaseModel):
    """One recommendation as the model returns it."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1, description="Title of the recommended book")
    authors: list[str] = Field(default_factory=list, description="Author names")
    reason: str = Field("", description="Why this book fits the reader (80-200 characters)")
    confidence: float | None = Field(None, ge=0.0, le=1.0, description="Confidence 0-1")
    related_to: list[str] = Field(
        default_factory=list,
        alias="relatedTo",
        description="Titles of the reference books this recommendation relates to",
    )

    def to_recommendation(self) -> Recommendation:
        return Recommendation(
            title=self.title.strip(),
            authors=tuple(a for a in self.authors if a),
            reason=self.reason,
            confidence=self.confidence,
            related_to=tuple(self.related_to),
        )


class RecommendationList(BaseModel):
    """Top-level container so the model output is always predictable."""

    recommendations: list[RecommendationDraft] = Field(default_factory=list)


class ExtractedSeed(BaseModel):
    """A book spotted in OCR text or a shelf photo."""

    title: str | None = None
    authors: list[str] = Field(default_factory=list)
    isbn: str | None = None
    confidence: float | None = Field(None, ge=0.0, le=1.0)

    def to_seed(self) -> Seed:
        return Seed.from_dict(self.model_dump())


class SeedExtraction(BaseModel):
    items: list[ExtractedSeed] = Field(default_factory=list)
