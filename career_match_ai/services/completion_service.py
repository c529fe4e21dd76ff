"""Chat-completion client for the recommendation model deployment."""

from typing import Optional

from openai import AsyncOpenAI, OpenAIError

from career_match_ai.config import (
    COMPLETION_API_KEY,
    COMPLETION_ENDPOINT,
    DEPLOYMENT_NAME,
    HTTP_TIMEOUT_SECONDS,
    MAX_COMPLETION_TOKENS,
)
from career_match_ai.errors import GenerationError
from career_match_ai.schemas.prompt import PromptPayload
from career_match_ai.utils.logger import get_logger

logger = get_logger(__name__)


class CompletionService:
    """Invoke the remote completion endpoint with a fixed output budget."""

    def __init__(
        self,
        endpoint: str = COMPLETION_ENDPOINT,
        api_key: str = COMPLETION_API_KEY,
        model: str = DEPLOYMENT_NAME,
        max_tokens: int = MAX_COMPLETION_TOKENS,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.endpoint = endpoint
        self.api_key = api_key
        self.model = model
        self.max_tokens = max_tokens
        self._client = client

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            if not self.endpoint or not self.api_key:
                raise GenerationError("Completion endpoint or API key is not set")
            self._client = AsyncOpenAI(
                base_url=self.endpoint,
                api_key=self.api_key,
                timeout=HTTP_TIMEOUT_SECONDS,
                max_retries=0,
            )
        return self._client

    async def complete(self, payload: PromptPayload) -> str:
        """Return the first choice's text, or raise GenerationError."""
        client = self._get_client()
        try:
            response = await client.chat.completions.create(
                model=self.model,
                messages=payload.to_messages(),
                max_tokens=self.max_tokens,
            )
        except OpenAIError as e:
            raise GenerationError(f"Completion request failed: {e}") from e

        choice = response.choices[0] if response.choices else None
        if not choice or not choice.message or not choice.message.content:
            raise GenerationError("Completion returned no content")
        content = choice.message.content
        logger.debug("Raw completion output: %s", content)
        return content
