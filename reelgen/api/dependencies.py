"""
Shared dependencies for API routes.

This is the composition root: the only place that reads the application
config and wires providers into the pipeline components.
"""
import logging
from functools import lru_cache

from reelgen.config import AppConfig, get_config
from reelgen.providers.images import get_image_provider
from reelgen.providers.script import get_script_provider
from reelgen.providers.storage import BaseStorageGateway, get_storage_gateway
from reelgen.providers.video import RunwayVideoProvider
from reelgen.providers.voice import get_voice_provider
from reelgen.services import (
    FeedProvider,
    ImageGenerator,
    MediaTranscoder,
    ReelOrchestrator,
    ScriptGenerator,
    SpeechSynthesizer,
    VideoSynthesizer,
)

logger = logging.getLogger(__name__)


@lru_cache()
def get_storage() -> BaseStorageGateway:
    """Get cached storage gateway."""
    config = get_config()
    return get_storage_gateway(config.storage, config.storage_backend)


def build_orchestrator(config: AppConfig, storage: BaseStorageGateway) -> ReelOrchestrator:
    """Wire a ReelOrchestrator from configuration."""
    pipeline = config.pipeline

    script_generator = ScriptGenerator(
        get_script_provider(config.ai),
        forbidden_phrases=pipeline.forbidden_phrases,
    )
    speech = SpeechSynthesizer(get_voice_provider(config), storage)
    images = ImageGenerator(
        get_image_provider(config.ai),
        storage,
        count=pipeline.image_count,
        url_ttl=pipeline.image_url_ttl,
    )
    video = VideoSynthesizer(
        RunwayVideoProvider(config.ai.runway_api_key),
        poll_interval=pipeline.video_poll_interval,
        max_poll_attempts=pipeline.video_max_poll_attempts,
    )
    transcoder = MediaTranscoder(
        storage,
        ffmpeg_path=config.paths.ffmpeg_path,
        scratch_dir=config.paths.scratch_dir,
        timeout=pipeline.ffmpeg_timeout,
    )

    logger.info(
        f"Reel pipeline wired: script={script_generator.provider.name}, "
        f"voice={speech.voice.name}, images={images.provider.name}, storage={storage.name}"
    )

    return ReelOrchestrator(
        script_generator,
        speech,
        images,
        video,
        transcoder,
        storage,
        concurrent=pipeline.concurrent_steps,
    )


@lru_cache()
def get_orchestrator() -> ReelOrchestrator:
    """Get cached ReelOrchestrator instance."""
    return build_orchestrator(get_config(), get_storage())


@lru_cache()
def get_feed_provider() -> FeedProvider:
    """Get cached FeedProvider instance."""
    pipeline = get_config().pipeline
    return FeedProvider(
        get_storage(),
        url_ttl=pipeline.feed_url_ttl,
        presign_attempts=pipeline.presign_attempts,
        presign_backoff=pipeline.presign_backoff,
    )
