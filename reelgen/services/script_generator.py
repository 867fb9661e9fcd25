"""
Script Generator - short voiceover narration about a sports celebrity.
"""
import logging
import re
from typing import Iterable, Optional

from reelgen.config import DEFAULT_FORBIDDEN_PHRASES
from reelgen.providers.exceptions import EmptyContentError, GenerationError, ReelError
from reelgen.providers.script import BaseScriptProvider

from .models import GenerationRequest, Script

logger = logging.getLogger(__name__)


SYSTEM_PROMPT = "You are a creative scriptwriter for sports videos."

SCRIPT_PROMPT = (
    "Write a short, engaging video script (about 10 seconds) about the sports "
    "celebrity {subject_name}, focusing on their achievements, unique qualities, "
    "and what makes them inspiring. Do not mention that this is AI-generated."
)

MAX_SCRIPT_TOKENS = 100
SCRIPT_TEMPERATURE = 0.8

_SENTENCE_SPLIT = re.compile(r"(?<=[.!?])\s+")


class ScriptGenerator:
    """Turns a subject name into a trimmed narration script."""

    def __init__(
        self,
        provider: BaseScriptProvider,
        forbidden_phrases: Optional[Iterable[str]] = None,
        max_tokens: int = MAX_SCRIPT_TOKENS,
    ):
        self.provider = provider
        phrases = DEFAULT_FORBIDDEN_PHRASES if forbidden_phrases is None else forbidden_phrases
        self.forbidden_phrases = tuple(p.lower() for p in phrases)
        self.max_tokens = max_tokens

    async def generate_script(self, subject_name: str) -> Script:
        """
        Generate narration for one reel.

        Raises:
            GenerationError: blank subject or upstream failure
            EmptyContentError: upstream returned nothing usable
        """
        request = GenerationRequest(subject_name)
        prompt = SCRIPT_PROMPT.format(subject_name=request.subject_name)

        try:
            raw = await self.provider.complete(
                SYSTEM_PROMPT,
                prompt,
                max_tokens=self.max_tokens,
                temperature=SCRIPT_TEMPERATURE,
            )
        except ReelError:
            raise
        except Exception as e:
            raise GenerationError(self.provider.name, f"Script request failed: {e}") from e

        text = self._clean(raw or "")
        if not text:
            raise EmptyContentError(self.provider.name, f"Empty script for {request.subject_name}")

        logger.info(f"[SCRIPT] Generated {len(text)} chars for {request.subject_name}")
        return Script(text=text, subject_name=request.subject_name)

    def _clean(self, raw: str) -> str:
        text = raw.strip()
        if len(text) >= 2 and text[0] == text[-1] == '"':
            text = text[1:-1].strip()
        if not self.forbidden_phrases:
            return text

        kept = [s for s in _SENTENCE_SPLIT.split(text) if not self.contains_forbidden(s)]
        if len(kept) != len(_SENTENCE_SPLIT.split(text)):
            logger.warning("[SCRIPT] Removed sentences with disclosure boilerplate")
        return " ".join(kept).strip()

    def contains_forbidden(self, text: str) -> bool:
        lowered = text.lower()
        return any(phrase in lowered for phrase in self.forbidden_phrases)
