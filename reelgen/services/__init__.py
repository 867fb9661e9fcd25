"""
Services Layer.

The reel pipeline components and the feed, each built from providers
handed in by the composition root.
"""
from .models import (
    GenerationRequest,
    Script,
    AudioAsset,
    GeneratedImage,
    ImageSet,
    SilentVideo,
    CombinedVideo,
    StoredReel,
    ReelFeedItem,
    FeedPage,
    REELS_PREFIX,
    IMAGE_PREFIX,
    AUDIO_PREFIX,
)
from .script_generator import ScriptGenerator
from .speech_synthesizer import SpeechSynthesizer
from .image_generator import ImageGenerator
from .video_synthesizer import VideoSynthesizer
from .media_transcoder import MediaTranscoder
from .reel_orchestrator import ReelOrchestrator
from .feed_provider import FeedProvider

__all__ = [
    # Models
    "GenerationRequest",
    "Script",
    "AudioAsset",
    "GeneratedImage",
    "ImageSet",
    "SilentVideo",
    "CombinedVideo",
    "StoredReel",
    "ReelFeedItem",
    "FeedPage",
    "REELS_PREFIX",
    "IMAGE_PREFIX",
    "AUDIO_PREFIX",

    # Pipeline
    "ScriptGenerator",
    "SpeechSynthesizer",
    "ImageGenerator",
    "VideoSynthesizer",
    "MediaTranscoder",
    "ReelOrchestrator",

    # Feed
    "FeedProvider",
]
