"""Tests for text generator backends (mocked API calls)."""

import sys
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from platmaison.menus.config import load_config
from platmaison.menus.extraction import TextGenerator, create_generator
from platmaison.menus.extraction.claude import ClaudeTextGenerator
from platmaison.menus.extraction.gemini import GeminiTextGenerator
from platmaison.menus.extraction.prompts import build_pull_recipe_prompt, is_url


class TestCreateGenerator:
    def test_create_gemini_generator(self):
        config = load_config()
        generator = create_generator(config)
        assert isinstance(generator, GeminiTextGenerator)
        assert isinstance(generator, TextGenerator)

    def test_create_claude_generator(self):
        config = load_config()
        config.generator.backend = "claude"
        generator = create_generator(config)
        assert isinstance(generator, ClaudeTextGenerator)

    def test_create_unknown_generator(self):
        config = load_config()
        config.generator.backend = "unknown"
        with pytest.raises(ValueError, match="Unknown text generator backend"):
            create_generator(config)


class TestClaudeTextGenerator:
    @pytest.mark.asyncio
    async def test_generate_requires_api_key(self):
        generator = ClaudeTextGenerator(api_key="")
        with pytest.raises(ValueError, match="API key"):
            await generator.generate("parse this")

    @pytest.mark.asyncio
    async def test_generate_mocked(self):
        mock_response = MagicMock()
        mock_response.content = [MagicMock(text='{"name": "Cookies"}')]

        mock_client = AsyncMock()
        mock_client.messages.create = AsyncMock(return_value=mock_response)

        mock_anthropic = MagicMock()
        mock_anthropic.AsyncAnthropic.return_value = mock_client

        with patch.dict(sys.modules, {"anthropic": mock_anthropic}):
            generator = ClaudeTextGenerator(api_key="test-key", model="test-model")
            result = await generator.generate("parse this")

        assert result == '{"name": "Cookies"}'
        mock_anthropic.AsyncAnthropic.assert_called_once_with(api_key="test-key")
        kwargs = mock_client.messages.create.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["messages"] == [{"role": "user", "content": "parse this"}]


class TestGeminiTextGenerator:
    @pytest.mark.asyncio
    async def test_generate_requires_api_key(self):
        generator = GeminiTextGenerator(api_key="")
        with pytest.raises(ValueError, match="API key"):
            await generator.generate("parse this")

    @pytest.mark.asyncio
    async def test_generate_mocked(self):
        mock_model = MagicMock()
        mock_model.generate_content_async = AsyncMock(
            return_value=MagicMock(text='{"name": "Cookies"}')
        )
        mock_genai = MagicMock()
        mock_genai.GenerativeModel.return_value = mock_model
        mock_google = MagicMock()
        mock_google.generativeai = mock_genai

        with patch.dict(
            sys.modules,
            {"google": mock_google, "google.generativeai": mock_genai},
        ):
            generator = GeminiTextGenerator(api_key="test-key")
            result = await generator.generate("parse this")

        assert result == '{"name": "Cookies"}'
        mock_genai.configure.assert_called_once_with(api_key="test-key")
        mock_genai.GenerativeModel.assert_called_once_with("gemini-2.0-flash")
        mock_model.generate_content_async.assert_awaited_once_with("parse this")


class TestPrompts:
    def test_is_url(self):
        assert is_url("https://example.com/recipe")
        assert is_url("  HTTP://example.com ")
        assert not is_url("2 cups flour")

    def test_url_prompt(self):
        prompt = build_pull_recipe_prompt("https://example.com/cookies")
        assert "URL to parse: https://example.com/cookies" in prompt
        assert '"servingQuantity"' in prompt

    def test_text_prompt(self):
        prompt = build_pull_recipe_prompt("Cookies\n2 cups flour\nBake.")
        assert "URL to parse" not in prompt
        assert "2 cups flour" in prompt
        assert '"ingredients"' in prompt
