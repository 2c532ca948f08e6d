"""Tests for the Gemini adapter."""

import threading
from unittest.mock import AsyncMock, MagicMock

import pytest
from openai import APIConnectionError, AsyncOpenAI

from adeline.core.config import Settings
from adeline.genui.adapter import AdapterError, GeminiAdapter, create_gemini_adapter


def make_completion(content: str | None) -> MagicMock:
    """Create a mock chat completion response."""
    mock_response = MagicMock()
    mock_response.choices = [MagicMock(message=MagicMock(content=content))]
    return mock_response


def make_chunk(content: str | None) -> MagicMock:
    """Create a mock streaming chunk."""
    chunk = MagicMock()
    chunk.choices = [MagicMock(delta=MagicMock(content=content))]
    return chunk


class TestGeminiAdapterInit:
    """Test GeminiAdapter construction."""

    def test_defaults(self):
        """Test default model and temperature."""
        adapter = GeminiAdapter()
        assert adapter.model_name == "gemini-2.0-flash"
        assert adapter.temperature == 0.7
        assert adapter.client is None

    def test_builds_async_client_with_key(self):
        """Test a key produces an async OpenAI-compatible client."""
        adapter = GeminiAdapter("gemini-1.5-pro", api_key="test-key")
        assert adapter.model_name == "gemini-1.5-pro"
        assert isinstance(adapter.client, AsyncOpenAI)

    def test_zero_temperature_is_kept(self):
        """Test an explicit 0.0 temperature is not replaced by the default."""
        adapter = GeminiAdapter(temperature=0.0)
        assert adapter.temperature == 0.0

    def test_create_from_settings(self):
        """Test factory reads model and key from settings."""
        settings = Settings(GOOGLE_API_KEY="test-key", GEMINI_MODEL="gemini-test")
        adapter = create_gemini_adapter(settings)
        assert adapter.model_name == "gemini-test"
        assert adapter.client is not None

    def test_create_without_key(self):
        """Test factory without a key builds a client-less adapter."""
        adapter = create_gemini_adapter(Settings(GOOGLE_API_KEY=""))
        assert adapter.client is None


@pytest.mark.asyncio
class TestGenerateContent:
    """Test GeminiAdapter.generate_content."""

    async def test_missing_key_raises(self):
        """Test calls without a key fail loudly."""
        with pytest.raises(AdapterError, match="not configured"):
            await GeminiAdapter().generate_content("Hello")

    async def test_async_client(self):
        """Test generation through an AsyncOpenAI client."""
        client = MagicMock(spec=AsyncOpenAI)
        client.chat.completions.create = AsyncMock(return_value=make_completion('{"a": 1}'))

        adapter = GeminiAdapter("gemini-test", client=client)
        text = await adapter.generate_content("Compose a page")

        assert text == '{"a": 1}'
        client.chat.completions.create.assert_awaited_once()
        kwargs = client.chat.completions.create.await_args.kwargs
        assert kwargs["model"] == "gemini-test"
        assert kwargs["messages"] == [{"role": "user", "content": "Compose a page"}]

    async def test_sync_client(self):
        """Test generation through a sync client."""
        client = MagicMock()
        client.chat.completions.create.return_value = make_completion("raw text")

        text = await GeminiAdapter(client=client).generate_content("Hello")

        assert text == "raw text"

    async def test_sync_client_runs_off_event_loop(self):
        """Test a blocking client call is made from a worker thread."""
        caller_threads = []

        def create(**kwargs):
            caller_threads.append(threading.get_ident())
            return make_completion("raw text")

        client = MagicMock()
        client.chat.completions.create.side_effect = create

        await GeminiAdapter(client=client).generate_content("Hello")

        assert caller_threads and caller_threads[0] != threading.get_ident()

    async def test_empty_response_raises(self):
        """Test empty content is an adapter failure."""
        client = MagicMock()
        client.chat.completions.create.return_value = make_completion(None)

        with pytest.raises(AdapterError, match="Empty response"):
            await GeminiAdapter(client=client).generate_content("Hello")

    async def test_sdk_error_is_wrapped(self):
        """Test OpenAI SDK errors become AdapterError."""
        client = MagicMock()
        client.chat.completions.create.side_effect = APIConnectionError(request=MagicMock())

        with pytest.raises(AdapterError, match="request failed"):
            await GeminiAdapter(client=client).generate_content("Hello")


@pytest.mark.asyncio
class TestStreamGenerateContent:
    """Test GeminiAdapter.stream_generate_content."""

    async def test_sync_stream(self):
        """Test chunks are yielded in order, skipping empty deltas."""
        client = MagicMock()
        client.chat.completions.create.return_value = iter([
            make_chunk('{"dia'),
            make_chunk(None),
            make_chunk('logue": "Hi"}'),
        ])

        chunks = [c async for c in GeminiAdapter(client=client).stream_generate_content("Hi")]

        assert chunks == ['{"dia', 'logue": "Hi"}']
        assert client.chat.completions.create.call_args.kwargs["stream"] is True

    async def test_missing_key_raises(self):
        """Test streaming without a key fails loudly."""
        with pytest.raises(AdapterError):
            async for _ in GeminiAdapter().stream_generate_content("Hello"):
                pass
