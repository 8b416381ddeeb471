"""
AI Services Module for the resume analyzer.
Two passes against Groq: a JSON rubric score, then a separately prompted cover letter.
"""
import json
import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from .config import Settings
from .errors import MalformedUpstreamOutput, UpstreamError
from .fallback import AllAttemptsFailed, AttemptFailed, first_success
from .llm_client import ChatResult, GroqClient
from .prompts import COVER_LETTER_SYSTEM, SCORING_SYSTEM, cover_letter_prompt, scoring_prompt
from .schemas import StrictAnalysisResult, repair_analysis

logger = logging.getLogger(__name__)

COVER_LETTER_FALLBACK = "Cover letter generation failed. Please try again."


class AnalysisService:
    """Scores a resume against a job description and drafts a cover letter."""

    def __init__(
        self,
        client: GroqClient,
        scoring_model: str,
        cover_letter_models: List[str],
        schema_policy: str = "passthrough",
    ):
        self.client = client
        self.scoring_model = scoring_model
        self.cover_letter_models = list(cover_letter_models)
        self.schema_policy = schema_policy

    async def analyze(self, resume_text: str, job_description: str) -> Dict[str, Any]:
        result = await self.score(resume_text, job_description)
        draft = await self.cover_letter(resume_text, job_description)

        cover = result.get("coverLetter")
        if not isinstance(cover, dict):
            cover = {}
        cover["draft"] = draft
        result["coverLetter"] = cover
        return result

    # ----- Pass 1: JSON analysis -----
    async def score(self, resume_text: str, job_description: str) -> Dict[str, Any]:
        body = {
            "model": self.scoring_model,
            "temperature": 0.2,
            "max_tokens": 1400,
            "response_format": {"type": "json_object"},
            "messages": [
                {"role": "system", "content": SCORING_SYSTEM},
                {"role": "user", "content": scoring_prompt(resume_text, job_description)},
            ],
        }
        result = await self.client.chat(body)
        if not result.ok:
            logger.error("Groq scoring call failed: status=%s body=%s", result.status, result.text[:1500])
            raise UpstreamError(result.status, result.text)

        content = result.content() or "{}"
        try:
            parsed = json.loads(content)
        except json.JSONDecodeError:
            logger.error("Groq scoring content is not JSON: %s", content[:1500])
            raise MalformedUpstreamOutput(result.status, content[:1500])
        if not isinstance(parsed, dict):
            raise MalformedUpstreamOutput(result.status, content[:1500])

        return self._apply_schema_policy(parsed, result.status)

    def _apply_schema_policy(self, parsed: Dict[str, Any], status: int) -> Dict[str, Any]:
        if self.schema_policy == "reject":
            try:
                StrictAnalysisResult.model_validate(parsed)
            except ValidationError as e:
                raise UpstreamError(
                    status,
                    e.errors(include_url=False, include_context=False),
                    message="Groq analysis did not match the expected schema",
                )
            return parsed
        if self.schema_policy == "repair":
            return repair_analysis(parsed).model_dump()
        return parsed

    # ----- Pass 2: cover letter -----
    async def cover_letter(self, resume_text: str, job_description: str) -> str:
        user = cover_letter_prompt(resume_text, job_description)

        async def attempt(model: str) -> str:
            body = {
                "model": model,
                "temperature": 0.35,
                "max_tokens": 900,
                "messages": [
                    {"role": "system", "content": COVER_LETTER_SYSTEM},
                    {"role": "user", "content": user},
                ],
            }
            try:
                result: ChatResult = await self.client.chat(body)
            except httpx.HTTPError as e:
                logger.warning("Cover letter model failed: %s transport error: %r", model, e)
                raise AttemptFailed(f"transport error: {e!r}") from e
            if not result.ok:
                logger.warning(
                    "Cover letter model failed: %s status=%s body=%s", model, result.status, result.text[:600]
                )
                raise AttemptFailed(f"status {result.status}")
            try:
                draft = result.content().strip()
            except json.JSONDecodeError as e:
                logger.warning("Cover letter model %s returned unparseable body: %s", model, result.text[:600])
                raise AttemptFailed("unparseable body") from e
            if not draft:
                logger.warning("Cover letter model %s returned no text: %s", model, result.text[:600])
                raise AttemptFailed("empty content")
            return draft

        try:
            model, draft = await first_success(self.cover_letter_models, attempt)
        except AllAttemptsFailed as e:
            logger.warning(f"Cover letter generation degraded, using fallback text ({e})")
            return COVER_LETTER_FALLBACK
        logger.info("Cover letter generated with %s", model)
        return draft


def get_ai_service(settings: Settings, client: Optional[GroqClient] = None) -> AnalysisService:
    """Build an analysis service from explicit settings"""
    return AnalysisService(
        client=client or GroqClient.from_settings(settings),
        scoring_model=settings.scoring_model,
        cover_letter_models=settings.cover_letter_models,
        schema_policy=settings.schema_policy,
    )
