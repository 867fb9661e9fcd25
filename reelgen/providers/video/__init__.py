"""
Image-to-video providers.
"""
from .base import (
    BaseVideoProvider,
    VideoTask,
    SUCCEEDED,
    FAILED,
    CANCELLED,
    TERMINAL_STATUSES,
)
from .runway import RunwayVideoProvider

__all__ = [
    "BaseVideoProvider",
    "VideoTask",
    "SUCCEEDED",
    "FAILED",
    "CANCELLED",
    "TERMINAL_STATUSES",
    "RunwayVideoProvider",
]
