"""
Recommendation Agent: cache check, profile fetch, resume OCR, prompt, model call,
response repair, persistence, and fallback to the default recommendations.

Every stage after "we have a user id" degrades to the static defaults instead
of failing; only a missing user id raises.
"""

import asyncio
from typing import Any, Awaitable, Callable, Dict, List, Optional

from pydantic import ValidationError

from career_match_ai.agents.prompt_assembler import assemble_prompt
from career_match_ai.agents.response_parser import parse_recommendations
from career_match_ai.config import MISTRAL_API_KEY, RECOMMENDATION_COUNT
from career_match_ai.errors import (
    CareerMatchError,
    ExtractionError,
    GenerationError,
    ParseError,
    PersistenceError,
    PreconditionError,
)
from career_match_ai.schemas.defaults import DEFAULT_RECOMMENDATIONS
from career_match_ai.schemas.profile import ProfileSnapshot
from career_match_ai.schemas.recommendation import (
    PipelineRequest,
    PipelineResponse,
    RecommendationRecord,
)
from career_match_ai.services.completion_service import CompletionService
from career_match_ai.services.ocr_service import extract_resume_text
from career_match_ai.services.recommendation_store import RecommendationStore, StoredProfile
from career_match_ai.utils.logger import get_logger

logger = get_logger(__name__)

Extractor = Callable[[str, str], Awaitable[str]]


def _default_response() -> PipelineResponse:
    return PipelineResponse(recommendations=list(DEFAULT_RECOMMENDATIONS), source="default")


class RecommendationAgent:
    """Runs one recommendation request end to end. Holds no per-run state."""

    def __init__(
        self,
        store: RecommendationStore,
        completion: CompletionService,
        extractor: Extractor = extract_resume_text,
        ocr_api_key: str = MISTRAL_API_KEY,
    ):
        self.store = store
        self.completion = completion
        self.extractor = extractor
        self.ocr_api_key = ocr_api_key

    async def run(self, request: PipelineRequest) -> PipelineResponse:
        user_id = (request.user_id or "").strip()
        if not user_id:
            raise PreconditionError("Missing userId in request")

        if not request.force_refresh:
            cached = await self._cached(user_id)
            if cached:
                logger.info("Using %s existing recommendation(s) for user %s", len(cached), user_id)
                return PipelineResponse(recommendations=cached, source="cached")

        stored = await self._fetch_profile(user_id)
        resume_text = ""
        resume_url = request.resume_url or stored.resume_link
        if resume_url:
            resume_text = await self._extract(user_id, resume_url)
        if not resume_text.strip() and stored.resume_text:
            logger.info("Using previously extracted resume text for user %s", user_id)
            resume_text = stored.resume_text
        profile = ProfileSnapshot.from_discovery_data(stored.discovery_data, resume_text=resume_text or None)

        if not profile.has_discovery_data and not profile.has_resume_text:
            logger.info("No discovery data or resume for user %s, returning default recommendations", user_id)
            return _default_response()

        try:
            raw = await self.completion.complete(assemble_prompt(profile))
        except GenerationError as e:
            logger.warning("Generation failed for user %s, using defaults: %s", user_id, e)
            return _default_response()

        try:
            records = parse_recommendations(raw)
        except ParseError as e:
            logger.warning("Could not parse model output for user %s, using defaults: %s", user_id, e)
            logger.warning("Response content: %s", e.raw_text)
            return _default_response()
        if not records:
            logger.warning("Model returned no recommendations for user %s, using defaults", user_id)
            return _default_response()
        if len(records) != RECOMMENDATION_COUNT:
            logger.info("Model returned %s recommendation(s) instead of %s", len(records), RECOMMENDATION_COUNT)

        await self._persist(user_id, records)
        return PipelineResponse(recommendations=records, source="generated")

    async def _cached(self, user_id: str) -> List[RecommendationRecord]:
        try:
            return await asyncio.to_thread(self.store.get_recent_recommendations, user_id, RECOMMENDATION_COUNT)
        except PersistenceError as e:
            logger.warning("Cache lookup failed for user %s: %s", user_id, e)
            return []

    async def _fetch_profile(self, user_id: str) -> StoredProfile:
        try:
            return await asyncio.to_thread(self.store.get_profile, user_id)
        except PersistenceError as e:
            logger.error("Error fetching profile data for user %s: %s", user_id, e)
            return StoredProfile()

    async def _extract(self, user_id: str, resume_url: str) -> str:
        """OCR the resume; any failure yields an empty string."""
        try:
            logger.info("Extracting text from resume for user %s", user_id)
            text = await self.extractor(resume_url, self.ocr_api_key)
        except (ExtractionError, PreconditionError) as e:
            logger.warning("Resume extraction failed for user %s, continuing without it: %s", user_id, e)
            return ""

        if text and text.strip():
            try:
                await asyncio.to_thread(self.store.save_resume_text, user_id, text)
            except PersistenceError as e:
                logger.warning("Could not store resume text for user %s: %s", user_id, e)
        return text or ""

    async def _persist(self, user_id: str, records: List[RecommendationRecord]) -> None:
        saved = 0
        for record in records:
            try:
                await asyncio.to_thread(self.store.insert_recommendation, user_id, record)
                saved += 1
            except PersistenceError as e:
                logger.error("Failed to store recommendation '%s' for user %s: %s", record.role_title, user_id, e)
        logger.info("Stored %s/%s recommendation(s) for user %s", saved, len(records), user_id)


def build_agent() -> RecommendationAgent:
    """Agent wired to the configured Supabase project and model deployment."""
    return RecommendationAgent(store=RecommendationStore.from_settings(), completion=CompletionService())


async def handle_recommendation_request(
    payload: Dict[str, Any],
    agent: Optional[RecommendationAgent] = None,
) -> Dict[str, Any]:
    """
    Wire-level entry point: {userId, resumeUrl?, forceRefresh?} -> {recommendations: [...]}.
    Raises PreconditionError when userId is missing or the payload is malformed.
    """
    try:
        request = PipelineRequest.model_validate(payload or {})
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err.get("loc"))
        raise PreconditionError(f"Invalid recommendation request: {fields}") from e
    if not request.user_id.strip():
        raise PreconditionError("Missing userId in request")
    agent = agent or build_agent()
    try:
        response = await agent.run(request)
    except PreconditionError:
        raise
    except CareerMatchError as e:
        logger.exception("Recommendation run failed for user %s: %s", request.user_id, e)
        response = _default_response()
    return {"recommendations": [r.model_dump() for r in response.recommendations]}


def get_recommendations(
    user_id: str,
    force_refresh: bool = False,
    resume_url: Optional[str] = None,
    agent: Optional[RecommendationAgent] = None,
) -> PipelineResponse:
    """
    Run the Recommendation Agent synchronously (e.g. from Streamlit).
    Uses its own event loop, like the CV pipeline wrapper.
    """
    request = PipelineRequest(user_id=user_id, resume_url=resume_url, force_refresh=force_refresh)
    agent = agent or build_agent()
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(agent.run(request))
    finally:
        loop.close()
