"""
Providers Layer.

Capability interfaces for every external collaborator of the reel pipeline:
- Storage (object listing, presigned URLs, upload/download)
- Script (text completion)
- Voice (TTS)
- Images (generation / search)
- Video (image-to-video tasks)

Each capability has a real implementation and a factory; storage and
script also ship local implementations for development and tests.
"""
from .exceptions import (
    ReelError,
    ConfigError,
    ProviderUnavailable,
    GenerationError,
    EmptyContentError,
    SynthesisError,
    VideoTimeoutError,
    StorageError,
    AudioProcessingCause,
    AudioProcessingError,
)

from .storage import (
    BaseStorageGateway,
    S3StorageGateway,
    InMemoryStorageGateway,
    get_storage_gateway,
)

from .script import (
    BaseScriptProvider,
    OpenAIScriptProvider,
    LocalScriptProvider,
    get_script_provider,
)

from .voice import (
    BaseVoiceProvider,
    PollyVoiceProvider,
    EdgeVoiceProvider,
    get_voice_provider,
)

from .images import (
    BaseImageProvider,
    OpenAIImageProvider,
    BingImageProvider,
    get_image_provider,
)

from .video import (
    BaseVideoProvider,
    VideoTask,
    RunwayVideoProvider,
)

__all__ = [
    # Exceptions
    "ReelError",
    "ConfigError",
    "ProviderUnavailable",
    "GenerationError",
    "EmptyContentError",
    "SynthesisError",
    "VideoTimeoutError",
    "StorageError",
    "AudioProcessingCause",
    "AudioProcessingError",

    # Storage
    "BaseStorageGateway",
    "S3StorageGateway",
    "InMemoryStorageGateway",
    "get_storage_gateway",

    # Script
    "BaseScriptProvider",
    "OpenAIScriptProvider",
    "LocalScriptProvider",
    "get_script_provider",

    # Voice
    "BaseVoiceProvider",
    "PollyVoiceProvider",
    "EdgeVoiceProvider",
    "get_voice_provider",

    # Images
    "BaseImageProvider",
    "OpenAIImageProvider",
    "BingImageProvider",
    "get_image_provider",

    # Video
    "BaseVideoProvider",
    "VideoTask",
    "RunwayVideoProvider",
]
