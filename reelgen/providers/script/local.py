"""
Local script provider - templated narration, no network.
"""
import re

from .base import BaseScriptProvider

TEMPLATE = (
    "{name} rewrote what greatness looks like. Years of relentless work, "
    "fearless competition and unforgettable wins turned {name} into a legend "
    "who still inspires athletes everywhere."
)


class LocalScriptProvider(BaseScriptProvider):
    """Fills a fixed template with the subject name found in the prompt."""

    SUBJECT_PATTERN = re.compile(r"sports celebrity (?P<name>.+?), focusing")

    @property
    def name(self) -> str:
        return "local"

    @property
    def is_available(self) -> bool:
        return True

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int = 100,
        temperature: float = 0.8,
    ) -> str:
        match = self.SUBJECT_PATTERN.search(user_prompt)
        subject = match.group("name") if match else "This champion"
        return TEMPLATE.format(name=subject)
