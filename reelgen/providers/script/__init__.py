"""
Script (text completion) providers.
"""
from .base import BaseScriptProvider
from .openai_compat import OpenAIScriptProvider
from .local import LocalScriptProvider
from .factory import ScriptProviderFactory, get_script_provider

__all__ = [
    "BaseScriptProvider",
    "OpenAIScriptProvider",
    "LocalScriptProvider",
    "ScriptProviderFactory",
    "get_script_provider",
]
