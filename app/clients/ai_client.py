# app/clients/ai_client.py

from logging import getLogger
from typing import NoReturn

from google.genai import Client
from google.genai.client import AsyncClient
from google.genai.errors import APIError, ServerError
from google.genai.types import GenerateContentConfig
from httpx import RemoteProtocolError, TimeoutException, TransportError

from app.configs.settings import file_logger, settings
from app.decorators import with_retry
from app.errors import (
    AiAuthenticationError,
    AiError,
    AIGenerationError,
    AiNetworkError,
    AiQuotaExceededError,
)
from app.managers.circuit_breaker import ai_circuit_breaker

logger = file_logger(getLogger(__name__))

# Network-related exceptions that should be caught and converted
NETWORK_EXCEPTIONS = (
    RemoteProtocolError,
    TimeoutException,
    TransportError,
    ConnectionError,
)

RETRIABLE_EXCEPTIONS = (
    ServerError,
    TransportError,
    AIGenerationError,
)


class AiClient:
    """
    Async client for Google's Gemini API.

    Calls go through the shared AI circuit breaker and are retried on
    server errors, dropped connections and empty completions. Failures
    reach the caller as ``AiError`` subclasses.
    """

    def __init__(self, api_key: str | None = None, model: str | None = None) -> None:
        """
        Initialize the client.

        Args:
            api_key: Gemini API key; defaults to ``GEMINI_API_KEY``.
            model: Model name; defaults to ``GEMINI_MODEL``.

        Raises:
            AiAuthenticationError: If no API key is available.
        """
        api_key = api_key or settings.GEMINI_API_KEY
        if not api_key:
            raise AiAuthenticationError(detail="GEMINI_API_KEY is not configured")

        self._model = model or settings.GEMINI_MODEL
        self._circuit_breaker = ai_circuit_breaker
        self._client = Client(api_key=api_key).aio
        logger.info(f"AiClient initialized with model: {self._model}")

    @property
    def client(self) -> AsyncClient:
        return self._client

    @property
    def model(self) -> str:
        return self._model

    @with_retry(
        max_retries=settings.AI_MAX_RETRIES,
        base_delay=settings.AI_RETRY_DELAY,
        max_delay=settings.AI_REQUEST_TIMEOUT,
        exec_retry=RETRIABLE_EXCEPTIONS,
    )
    async def _generate_content(self, prompt: str, config: GenerateContentConfig) -> str:
        response = await self._client.models.generate_content(
            model=self._model,
            contents=prompt,
            config=config,
        )

        text = response.text if response else None
        if not text:
            msg = "Empty response from Gemini API"
            raise AIGenerationError(detail=msg)
        return text

    async def complete(
        self,
        prompt: str,
        system_instruction: str,
        temperature: float | None = None,
    ) -> str:
        """
        Send a prompt and return the raw completion text.

        Args:
            prompt: User prompt.
            system_instruction: Instruction pinning the model's role and output format.
            temperature: Sampling temperature; defaults to ``AI_TEMPERATURE``.

        Returns:
            The completion text, unparsed.

        Raises:
            CircuitBreakerError: If the AI circuit is open.
            AiError: If the request fails.
        """
        config = GenerateContentConfig(
            system_instruction=system_instruction,
            temperature=settings.AI_TEMPERATURE if temperature is None else temperature,
            max_output_tokens=settings.AI_MAX_OUTPUT_TOKENS,
            response_mime_type="application/json",
        )

        try:
            return await self._circuit_breaker.call(self._generate_content, prompt, config)
        except NETWORK_EXCEPTIONS as e:
            logger.exception("AI network error")
            detail = f"AI service temporarily unavailable: {e}"
            raise AiNetworkError(detail=detail) from e
        except AiError:
            raise
        except APIError as e:
            self._handle_exception(e)

    def _handle_exception(self, e: APIError) -> NoReturn:
        """Map a Gemini API error to the matching AiError."""
        error_msg = str(e)
        logger.error(f"AI Error: {error_msg}")

        if e.code in (401, 403) or "unauthenticated" in error_msg.lower():
            raise AiAuthenticationError(detail=f"Authentication failed: {error_msg}") from e
        if e.code == 429 or "quota" in error_msg.lower():
            raise AiQuotaExceededError(detail=f"Quota exceeded: {error_msg}") from e
        raise AiError(detail=f"An unexpected error occurred: {error_msg}") from e

    async def close(self) -> None:
        try:
            await self._client.aclose()
        except Exception:
            logger.exception("Failed to close AI client")
        else:
            logger.info("AI client closed successfully")
