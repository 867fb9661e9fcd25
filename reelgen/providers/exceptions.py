"""
Provider exceptions.

Every failure raised by the reel pipeline carries the name of the provider
(or pipeline stage) that produced it, so logs and API error details can
point at the failing collaborator.
"""
from enum import Enum
from typing import Optional


class ReelError(Exception):
    """Base exception for reel pipeline errors."""

    def __init__(self, provider: str, message: str):
        self.provider = provider
        self.message = message
        super().__init__(f"[{provider}] {message}")


class ConfigError(ReelError):
    """Required endpoint, credential or bucket configuration is missing."""

    def __init__(self, setting: str, provider: str = "config"):
        super().__init__(provider, f"Missing required configuration: {setting}")
        self.setting = setting


class ProviderUnavailable(ConfigError):
    """Provider is not available (missing API key, SDK not installed, etc.)."""

    def __init__(self, provider: str, reason: str = "unavailable"):
        ReelError.__init__(self, provider, f"Provider unavailable: {reason}")
        self.setting = reason
        self.reason = reason


class GenerationError(ReelError):
    """Upstream content generation failed or returned unusable output."""
    pass


class EmptyContentError(GenerationError):
    """Upstream content generation returned nothing usable."""

    def __init__(self, provider: str, message: str = "Upstream returned empty content"):
        super().__init__(provider, message)


class SynthesisError(ReelError):
    """Speech or video synthesis failed."""
    pass


class VideoTimeoutError(ReelError, TimeoutError):
    """Video synthesis did not reach a terminal state in time."""

    def __init__(self, provider: str, task_id: str, attempts: int, waited_seconds: float):
        self.task_id = task_id
        self.attempts = attempts
        self.waited_seconds = waited_seconds
        super().__init__(
            provider,
            f"Task {task_id} not finished after {attempts} polls ({waited_seconds:.0f}s)",
        )


class StorageError(ReelError):
    """Object store operation failed."""

    def __init__(self, provider: str, message: str, key: Optional[str] = None):
        super().__init__(provider, message)
        self.key = key


class AudioProcessingCause(str, Enum):
    """Why an audio merge failed."""
    MISSING_BUCKET = "missing_bucket"
    FETCH_FAILED = "fetch_failed"
    TOOL_FAILED = "tool_failed"
    EMPTY_OUTPUT = "empty_output"


class AudioProcessingError(ReelError):
    """
    Audio/video merge failed.

    Recoverable: the orchestrator continues with the silent video when it
    sees this error, so it must stay outside the fatal error kinds above.
    """

    def __init__(
        self,
        message: str,
        cause: AudioProcessingCause = AudioProcessingCause.TOOL_FAILED,
        original_error: Optional[BaseException] = None,
    ):
        super().__init__("transcoder", message)
        self.cause = cause
        self.original_error = original_error
