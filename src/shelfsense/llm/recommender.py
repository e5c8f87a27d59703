# ABOUTME: Recommender protocol: the contract between the pipeline and any LLM backend.
# ABOUTME: Also defines the request object carrying the rendered seed and candidate lists.

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from shelfsense.core.recommendation import Recommendation


class LLMOutputError(Exception):
    """Raised when a model reply is missing or cannot be used."""


@dataclass(frozen=True)
class RecommendationRequest:
    """Everything a recommender needs to pick books from the candidate pool."""

    seed_text: str
    candidate_text: str
    target_count: int = 5
    language: str = "ja"
    hardness: str = "auto"


@runtime_checkable
class Recommender(Protocol):
    """Protocol for recommendation backends.

    Implementations must not raise for model faults; an empty list is the
    safe answer when nothing usable came back.
    """

    async def recommend(self, request: RecommendationRequest) -> list[Recommendation]: ...
