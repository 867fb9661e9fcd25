"""
Script provider factory.
"""
import logging
from typing import Literal

from reelgen.config import AIConfig

from .base import BaseScriptProvider
from .openai_compat import OpenAIScriptProvider
from .local import LocalScriptProvider

logger = logging.getLogger(__name__)


ProviderType = Literal["auto", "openai", "local"]


class ScriptProviderFactory:
    """Factory for creating script providers."""

    @classmethod
    def create(cls, ai_config: AIConfig, provider: ProviderType = "auto") -> BaseScriptProvider:
        if provider == "local":
            return LocalScriptProvider()

        remote = OpenAIScriptProvider(
            api_key=ai_config.script_api_key,
            model=ai_config.script_model,
            base_url=ai_config.script_base_url,
        )
        if provider == "openai" or remote.is_available:
            return remote

        logger.warning("[SCRIPT] No LLM configured - using local template scripts")
        return LocalScriptProvider()


def get_script_provider(ai_config: AIConfig, provider: ProviderType = "auto") -> BaseScriptProvider:
    """Get a script provider for the given configuration."""
    return ScriptProviderFactory.create(ai_config, provider)
