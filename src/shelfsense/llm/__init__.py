# ABOUTME: LLM collaborator package: recommender protocol, output schemas, prompts, OpenAI backend.
# ABOUTME: The pipeline depends only on the Recommender protocol defined here.

from shelfsense.llm.recommender import LLMOutputError, RecommendationRequest, Recommender
from shelfsense.llm.schemas import RecommendationDraft, RecommendationList, SeedExtraction

__all__ = [
    "LLMOutputError",
    "RecommendationDraft",
    "RecommendationList",
    "RecommendationRequest",
    "Recommender",
    "SeedExtraction",
]
