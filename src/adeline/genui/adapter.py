"""Gemini adapter for the GenUI orchestrator.

Wraps Gemini's OpenAI-compatible endpoint so the orchestrator only sees
``generate_content(prompt) -> str``. The adapter can be built without an
API key; calls then fail with AdapterError so the caller's fallback path
takes over.
"""

import asyncio
import logging
import time
from typing import AsyncIterator, Optional, Protocol

from openai import AsyncOpenAI, OpenAI, OpenAIError

from adeline.core.config import Settings, get_settings
from adeline.genui.schema import GenUIError

logger = logging.getLogger(__name__)

_STREAM_END = object()


class AdapterError(GenUIError):
    """The AI service could not produce a response."""


class ContentGenerator(Protocol):
    """Anything the orchestrator can ask for raw text."""

    async def generate_content(self, prompt: str) -> str: ...


class GeminiAdapter:
    """Generates raw text from Gemini.

    Example:
        adapter = GeminiAdapter(api_key="...")
        text = await adapter.generate_content("Compose a Journal Page ...")
    """

    MODEL = "gemini-2.0-flash"
    BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"
    TEMPERATURE = 0.7

    def __init__(
        self,
        model: Optional[str] = None,
        *,
        client: OpenAI | AsyncOpenAI | None = None,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        temperature: Optional[float] = None,
    ):
        """Initialize the adapter.

        Args:
            model: Gemini model name (default: gemini-2.0-flash)
            client: Pre-built OpenAI-compatible client (sync or async)
            api_key: Gemini API key, used when no client is given
            base_url: Endpoint override, used when no client is given
            temperature: Sampling temperature (default: 0.7)
        """
        self._model = model or self.MODEL
        self.temperature = self.TEMPERATURE if temperature is None else temperature

        # Only build a client if a key is available
        if client is None and api_key:
            client = AsyncOpenAI(api_key=api_key, base_url=base_url or self.BASE_URL)
        self.client = client

    @property
    def model_name(self) -> str:
        return self._model

    def _require_client(self) -> OpenAI | AsyncOpenAI:
        if self.client is None:
            raise AdapterError("Gemini API key not configured")
        return self.client

    async def generate_content(self, prompt: str) -> str:
        """Send a single prompt and return the raw response text.

        Raises:
            AdapterError: If the key is missing, the call fails, or the
                response is empty
        """
        client = self._require_client()
        messages = [{"role": "user", "content": prompt}]
        start_time = time.time()

        try:
            if isinstance(client, AsyncOpenAI):
                response = await client.chat.completions.create(
                    model=self._model,
                    messages=messages,
                    temperature=self.temperature,
                )
            else:
                # Sync clients run in a worker thread to keep the event loop free
                response = await asyncio.to_thread(
                    client.chat.completions.create,
                    model=self._model,
                    messages=messages,
                    temperature=self.temperature,
                )
        except OpenAIError as e:
            elapsed = (time.time() - start_time) * 1000
            logger.error(f"Gemini call failed after {elapsed:.0f}ms: {e}")
            raise AdapterError(f"Gemini request failed: {e}") from e

        elapsed = (time.time() - start_time) * 1000
        logger.info(f"Gemini generation completed in {elapsed:.0f}ms")

        content = response.choices[0].message.content
        if not content:
            raise AdapterError("Empty response from Gemini")
        return content

    async def stream_generate_content(self, prompt: str) -> AsyncIterator[str]:
        """Stream the response text chunk by chunk.

        Raises:
            AdapterError: If the key is missing or the call fails
        """
        client = self._require_client()
        messages = [{"role": "user", "content": prompt}]

        try:
            if isinstance(client, AsyncOpenAI):
                stream = await client.chat.completions.create(
                    model=self._model,
                    messages=messages,
                    temperature=self.temperature,
                    stream=True,
                )
                async for chunk in stream:
                    if chunk.choices and chunk.choices[0].delta.content:
                        yield chunk.choices[0].delta.content
            else:
                stream = await asyncio.to_thread(
                    client.chat.completions.create,
                    model=self._model,
                    messages=messages,
                    temperature=self.temperature,
                    stream=True,
                )
                chunks = iter(stream)
                while True:
                    chunk = await asyncio.to_thread(next, chunks, _STREAM_END)
                    if chunk is _STREAM_END:
                        break
                    if chunk.choices and chunk.choices[0].delta.content:
                        yield chunk.choices[0].delta.content
        except OpenAIError as e:
            raise AdapterError(f"Gemini stream failed: {e}") from e


def create_gemini_adapter(settings: Optional[Settings] = None) -> GeminiAdapter:
    """Create a Gemini adapter from application settings.

    Args:
        settings: Settings to use (default: cached environment settings)

    Returns:
        Configured GeminiAdapter
    """
    settings = settings or get_settings()
    return GeminiAdapter(
        settings.gemini_model,
        api_key=settings.gemini_api_key or None,
        base_url=settings.gemini_base_url,
        temperature=settings.gemini_temperature,
    )
