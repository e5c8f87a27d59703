# ABOUTME: OpenAI-backed recommender and OCR seed extractor.
# ABOUTME: Tries a JSON-schema structured call first, then a JSON-only free-text fallback.

import logging
import re
from typing import Any

import openai
from openai import AsyncOpenAI
from pydantic import BaseModel, ValidationError

from shelfsense.catalog.normalizer import seeds_from_text
from shelfsense.catalog.types import Seed
from shelfsense.config import ShelfsenseConfig
from shelfsense.core.recommendation import Recommendation
from shelfsense.llm.prompts import (
    ATTENTION,
    EXTRACTION_INSTRUCTION,
    FALLBACK_FORMAT,
    candidate_section,
    recommendation_instruction,
    seed_section,
)
from shelfsense.llm.recommender import LLMOutputError, RecommendationRequest
from shelfsense.llm.schemas import RecommendationList, SeedExtraction

logger = logging.getLogger(__name__)

_CODE_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$")
_MAX_EXTRACTED_SEEDS = 10
_LLM_TIMEOUT_SECONDS = 60.0


def _response_format(name: str, model: type[BaseModel]) -> dict[str, Any]:
    return {
        "type": "json_schema",
        "json_schema": {"name": name, "schema": model.model_json_schema(by_alias=True)},
    }


def parse_recommendations(text: str) -> list[Recommendation]:
    """Parse free-text model output into recommendations.

    Tolerates a surrounding code fence. Anything that does not validate as
    ``{"recommendations": [...]}`` yields an empty list.
    """
    cleaned = _CODE_FENCE_RE.sub("", text.strip())
    try:
        parsed = RecommendationList.model_validate_json(cleaned)
    except ValidationError as exc:
        logger.warning("Discarding unparseable recommendation text: %s", exc.errors()[:1])
        return []
    return [draft.to_recommendation() for draft in parsed.recommendations]


class OpenAIRecommender:
    """Recommender backed by the OpenAI chat completions API.

    The structured call asks for a JSON-schema response built from the
    pydantic models; any API error or schema violation falls through to a
    plain-text call with a JSON-only instruction.
    """

    def __init__(
        self,
        client: AsyncOpenAI,
        *,
        model: str = "gpt-4o-mini",
        fallback_model: str = "gpt-4o",
    ) -> None:
        self._client = client
        self._model = model
        self._fallback_model = fallback_model

    @classmethod
    def from_config(cls, config: ShelfsenseConfig) -> "OpenAIRecommender":
        client = AsyncOpenAI(api_key=config.openai_api_key, timeout=_LLM_TIMEOUT_SECONDS)
        return cls(client, model=config.openai_model, fallback_model=config.openai_fallback_model)

    async def _complete(
        self, model: str, prompt: str, response_format: dict[str, Any] | None = None
    ) -> str:
        kwargs: dict[str, Any] = {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
        }
        if response_format is not None:
            kwargs["response_format"] = response_format
        response = await self._client.chat.completions.create(**kwargs)
        if not response.choices or not response.choices[0].message.content:
            raise LLMOutputError(f"Empty reply from {model}")
        return response.choices[0].message.content

    async def recommend(self, request: RecommendationRequest) -> list[Recommendation]:
        """Ask the model for recommendations; never raises for model faults."""
        sections = [seed_section(request.seed_text), candidate_section(request.candidate_text)]
        prompt = "\n\n".join(
            [
                recommendation_instruction(
                    request.target_count, request.language, request.hardness
                ),
                *sections,
            ]
        )
        try:
            content = await self._complete(
                self._model, prompt, _response_format("recommendations", RecommendationList)
            )
            parsed = RecommendationList.model_validate_json(content)
            return [draft.to_recommendation() for draft in parsed.recommendations]
        except (openai.OpenAIError, ValidationError, LLMOutputError) as exc:
            logger.warning("Structured recommendation call failed, falling back: %s", exc)

        fallback_prompt = "\n\n".join([f"{FALLBACK_FORMAT} {ATTENTION}", *sections])
        try:
            text = await self._complete(self._fallback_model, fallback_prompt)
        except (openai.OpenAIError, LLMOutputError) as exc:
            logger.warning("Fallback recommendation call failed: %s", exc)
            return []
        return parse_recommendations(text)

    async def extract_seeds(self, text: str) -> list[Seed]:
        """Extract book seeds from OCR text.

        Falls back to one seed per cleaned-up text line when the structured
        extraction fails.
        """
        if not text.strip():
            return []
        prompt = f"{EXTRACTION_INSTRUCTION}\n\n{text}"
        try:
            content = await self._complete(
                self._model, prompt, _response_format("extraction", SeedExtraction)
            )
            extraction = SeedExtraction.model_validate_json(content)
        except (openai.OpenAIError, ValidationError, LLMOutputError) as exc:
            logger.warning("Seed extraction failed, using raw text lines: %s", exc)
            return seeds_from_text(text)

        seeds = [item.to_seed() for item in extraction.items[:_MAX_EXTRACTED_SEEDS]]
        return [seed for seed in seeds if seed.is_usable]
