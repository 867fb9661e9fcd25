"""
Base class for asynchronous image-to-video providers.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional

SUCCEEDED = "SUCCEEDED"
FAILED = "FAILED"
CANCELLED = "CANCELLED"
TERMINAL_STATUSES = frozenset({SUCCEEDED, FAILED, CANCELLED})


@dataclass
class VideoTask:
    """Status snapshot of one video generation task."""
    task_id: str
    status: str
    output: List[str] = field(default_factory=list)
    failure: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES


class BaseVideoProvider(ABC):
    """Abstract base class for task-based image-to-video providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name."""
        pass

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """Check if provider is available."""
        pass

    @abstractmethod
    async def submit(self, image_url: str, prompt_text: str) -> str:
        """Start an image-to-video task. Returns the task id."""
        pass

    @abstractmethod
    async def get_task(self, task_id: str) -> VideoTask:
        """Fetch the current status of a task."""
        pass

    async def close(self) -> None:
        """Release held connections. Nothing to release by default."""
        return None
