"""
Tests for the script generator and script providers.
"""
import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from reelgen.providers.exceptions import (
    EmptyContentError,
    GenerationError,
    ProviderUnavailable,
)
from reelgen.providers.script import LocalScriptProvider, OpenAIScriptProvider
from reelgen.services.script_generator import (
    MAX_SCRIPT_TOKENS,
    SYSTEM_PROMPT,
    ScriptGenerator,
)


class TestScriptGenerator:

    def test_builds_prompt_and_trims(self, fakes):
        provider = fakes.Script("  Pelé scored over a thousand goals.  ")
        generator = ScriptGenerator(provider)

        script = asyncio.run(generator.generate_script("Pelé"))

        assert script.text == "Pelé scored over a thousand goals."
        assert script.subject_name == "Pelé"
        call = provider.calls[0]
        assert call["system"] == SYSTEM_PROMPT
        assert "sports celebrity Pelé" in call["user"]
        assert "Do not mention that this is AI-generated" in call["user"]
        assert call["max_tokens"] <= MAX_SCRIPT_TOKENS
        assert call["temperature"] == 0.8

    def test_blank_subject_rejected_before_call(self, script_provider):
        generator = ScriptGenerator(script_provider)

        with pytest.raises(GenerationError):
            asyncio.run(generator.generate_script("   "))
        assert script_provider.calls == []

    def test_empty_completion_raises(self, fakes):
        generator = ScriptGenerator(fakes.Script(""))

        with pytest.raises(EmptyContentError):
            asyncio.run(generator.generate_script("Pelé"))

    def test_forbidden_sentences_are_removed(self, fakes):
        provider = fakes.Script(
            "Pelé won three World Cups. As an AI, I find that remarkable. He inspired millions."
        )
        generator = ScriptGenerator(provider)

        script = asyncio.run(generator.generate_script("Pelé"))

        assert script.text == "Pelé won three World Cups. He inspired millions."
        assert not generator.contains_forbidden(script.text)

    def test_only_forbidden_content_is_empty(self, fakes):
        generator = ScriptGenerator(fakes.Script("This AI-generated script is about Pelé."))

        with pytest.raises(EmptyContentError):
            asyncio.run(generator.generate_script("Pelé"))

    def test_unexpected_provider_error_is_wrapped(self, fakes):
        provider = fakes.Script()
        provider.complete = AsyncMock(side_effect=RuntimeError("boom"))

        with pytest.raises(GenerationError):
            asyncio.run(ScriptGenerator(provider).generate_script("Pelé"))

    def test_local_provider_produces_clean_script(self):
        generator = ScriptGenerator(LocalScriptProvider())

        script = asyncio.run(generator.generate_script("Pelé"))

        assert "Pelé" in script.text
        assert not generator.contains_forbidden(script.text)


class TestOpenAIScriptProvider:

    def make_client(self, content):
        client = MagicMock()
        message = SimpleNamespace(content=content)
        response = SimpleNamespace(choices=[SimpleNamespace(message=message)])
        client.chat.completions.create = AsyncMock(return_value=response)
        return client

    def test_complete_returns_content(self):
        client = self.make_client("Serena dominated for two decades.")
        provider = OpenAIScriptProvider("sk-test", client=client)

        text = asyncio.run(provider.complete("system", "user", max_tokens=50))

        assert text == "Serena dominated for two decades."
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "deepseek-chat"
        assert kwargs["max_tokens"] == 50
        assert kwargs["messages"][0] == {"role": "system", "content": "system"}

    def test_missing_key_is_unavailable(self):
        provider = OpenAIScriptProvider(None)

        assert provider.is_available is False
        with pytest.raises(ProviderUnavailable):
            asyncio.run(provider.complete("system", "user"))

    def test_sdk_error_becomes_generation_error(self):
        client = MagicMock()
        client.chat.completions.create = AsyncMock(side_effect=RuntimeError("503"))
        provider = OpenAIScriptProvider("sk-test", client=client)

        with pytest.raises(GenerationError):
            asyncio.run(provider.complete("system", "user"))


class TestScriptProviderFactory:

    def test_local_without_keys(self):
        from reelgen.config import AIConfig
        from reelgen.providers.script import get_script_provider

        assert isinstance(get_script_provider(AIConfig()), LocalScriptProvider)

    def test_remote_with_deepseek_key(self):
        from reelgen.config import AIConfig
        from reelgen.providers.script import get_script_provider

        provider = get_script_provider(AIConfig(deepseek_api_key="sk-deepseek"))

        assert isinstance(provider, OpenAIScriptProvider)
        assert provider.model == "deepseek-chat"
