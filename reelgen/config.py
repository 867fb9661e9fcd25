"""
Application Configuration - Environment Variable Management.
Loads and validates configuration from .env file.

Components never read the environment themselves: the API composition root
calls get_config() once and hands the relevant dataclass to each component.
"""
import os
import logging
import tempfile
from functools import lru_cache
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional, Tuple

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load .env from project root
PROJECT_ROOT = Path(__file__).parent.parent
ENV_FILE = PROJECT_ROOT / ".env"

if ENV_FILE.exists():
    load_dotenv(ENV_FILE)
    logger.info(f"Loaded environment from {ENV_FILE}")
else:
    logger.debug(f".env file not found at {ENV_FILE}")


DEFAULT_FORBIDDEN_PHRASES = (
    "as an ai",
    "ai-generated",
    "ai generated",
    "language model",
)


def _is_set(value: Optional[str]) -> bool:
    return bool(value and not value.startswith("PASTE_"))


@dataclass
class AIConfig:
    """AI provider configuration (script, images, video)."""
    openai_api_key: Optional[str] = None
    deepseek_api_key: Optional[str] = None
    runway_api_key: Optional[str] = None
    bing_search_key: Optional[str] = None
    script_base_url: str = "https://api.deepseek.com"
    script_model: str = "deepseek-chat"
    image_model: str = "gpt-image-1"

    @property
    def has_openai(self) -> bool:
        return _is_set(self.openai_api_key)

    @property
    def has_deepseek(self) -> bool:
        return _is_set(self.deepseek_api_key)

    @property
    def has_runway(self) -> bool:
        return _is_set(self.runway_api_key)

    @property
    def has_bing(self) -> bool:
        return _is_set(self.bing_search_key)

    @property
    def script_api_key(self) -> Optional[str]:
        """Key for the OpenAI-compatible script endpoint."""
        if self.has_deepseek:
            return self.deepseek_api_key
        if self.has_openai:
            return self.openai_api_key
        return None


@dataclass
class StorageConfig:
    """Object storage configuration (one bucket holds reels, images and audio)."""
    bucket: Optional[str] = None
    region: str = "us-east-1"
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    endpoint_url: Optional[str] = None

    @property
    def has_bucket(self) -> bool:
        return bool(self.bucket and self.bucket.strip())

    def require_bucket(self) -> str:
        """Return the bucket name or raise ConfigError."""
        if not self.has_bucket:
            from reelgen.providers.exceptions import ConfigError
            raise ConfigError("AWS_S3_BUCKET", provider="storage")
        return self.bucket.strip()


@dataclass
class PipelineConfig:
    """Tunables for generation and feed retrieval."""
    image_count: int = 4
    image_url_ttl: int = 24 * 3600
    feed_url_ttl: int = 3600
    presign_attempts: int = 3
    presign_backoff: float = 0.5
    video_poll_interval: float = 10.0
    video_max_poll_attempts: int = 60
    ffmpeg_timeout: float = 300.0
    concurrent_steps: bool = False
    voice_id: str = "Joanna"
    forbidden_phrases: Tuple[str, ...] = field(default_factory=lambda: DEFAULT_FORBIDDEN_PHRASES)


@dataclass
class PathsConfig:
    """File system paths configuration."""
    scratch_dir: Path
    ffmpeg_path: str

    @classmethod
    def detect(cls) -> "PathsConfig":
        """Auto-detect paths based on environment and system."""
        scratch_dir = Path(os.getenv("SCRATCH_DIR", str(Path(tempfile.gettempdir()) / "reelgen")))
        scratch_dir.mkdir(parents=True, exist_ok=True)

        return cls(
            scratch_dir=scratch_dir,
            ffmpeg_path=cls._find_ffmpeg(),
        )

    @staticmethod
    def _find_ffmpeg() -> str:
        """Find FFmpeg executable."""
        # Check environment variable first
        env_path = os.getenv("FFMPEG_PATH")
        if env_path and os.path.exists(env_path):
            return env_path

        common_paths = [
            "/usr/bin/ffmpeg",
            "/usr/local/bin/ffmpeg",
            "/opt/homebrew/bin/ffmpeg",
        ]

        for path in common_paths:
            if os.path.exists(path):
                return path

        # Try imageio-ffmpeg
        try:
            import imageio_ffmpeg
            return imageio_ffmpeg.get_ffmpeg_exe()
        except (ImportError, RuntimeError):
            pass

        # Fallback to system PATH
        return "ffmpeg"


@dataclass
class AppConfig:
    """Main Application Configuration."""
    ai: AIConfig
    storage: StorageConfig
    pipeline: PipelineConfig
    paths: PathsConfig
    storage_backend: str = "auto"
    debug: bool = False

    def __post_init__(self):
        """Validate critical configuration."""
        if not self.storage.has_bucket and self.storage_backend != "memory":
            logger.warning("AWS_S3_BUCKET not set - storage falls back to in-memory objects")

    def validate(self) -> dict:
        """Validate configuration and return status."""
        return {
            "ai": {
                "script_configured": bool(self.ai.script_api_key),
                "openai_configured": self.ai.has_openai,
                "runway_configured": self.ai.has_runway,
                "bing_configured": self.ai.has_bing,
            },
            "storage": {
                "backend": self.storage_backend,
                "bucket_configured": self.storage.has_bucket,
                "region": self.storage.region,
            },
            "ready_for_generation": (
                bool(self.ai.script_api_key) and self.ai.has_runway and self.storage.has_bucket
            ),
        }

    def log_status(self):
        """Log configuration status (without exposing keys)."""
        status = self.validate()

        logger.info("=" * 50)
        logger.info("Configuration Status:")
        logger.info(f"  Script LLM: {'OK' if status['ai']['script_configured'] else 'NOT CONFIGURED'}")
        logger.info(f"  OpenAI Images: {'OK' if status['ai']['openai_configured'] else 'NOT CONFIGURED'}")
        logger.info(f"  Runway Video: {'OK' if status['ai']['runway_configured'] else 'NOT CONFIGURED'}")
        logger.info(f"  Storage: {status['storage']['backend']} (bucket {'OK' if status['storage']['bucket_configured'] else 'NOT SET'})")
        logger.info(f"  Scratch Dir: {self.paths.scratch_dir}")
        logger.info(f"  FFmpeg: {self.paths.ffmpeg_path}")
        logger.info("=" * 50)

        if not status["ready_for_generation"]:
            logger.warning("Reel generation is not fully configured - generate requests will fail")


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


def load_config() -> AppConfig:
    """Load configuration from environment variables."""
    ai_config = AIConfig(
        openai_api_key=os.getenv("OPENAI_API_KEY"),
        deepseek_api_key=os.getenv("DEEPSEEK_API_KEY"),
        runway_api_key=os.getenv("RUNWAYML_API_SECRET"),
        bing_search_key=os.getenv("BING_SEARCH_KEY"),
        script_base_url=os.getenv("SCRIPT_BASE_URL", "https://api.deepseek.com"),
        script_model=os.getenv("SCRIPT_MODEL", "deepseek-chat"),
        image_model=os.getenv("IMAGE_MODEL", "gpt-image-1"),
    )

    storage_config = StorageConfig(
        bucket=os.getenv("AWS_S3_BUCKET"),
        region=os.getenv("AWS_REGION", "us-east-1"),
        aws_access_key_id=os.getenv("AWS_ACCESS_KEY_ID"),
        aws_secret_access_key=os.getenv("AWS_SECRET_ACCESS_KEY"),
        endpoint_url=os.getenv("AWS_ENDPOINT_URL") or None,
    )

    pipeline_config = PipelineConfig(
        image_count=int(os.getenv("REEL_IMAGE_COUNT", "4")),
        video_poll_interval=float(os.getenv("VIDEO_POLL_INTERVAL", "10")),
        video_max_poll_attempts=int(os.getenv("VIDEO_MAX_POLL_ATTEMPTS", "60")),
        ffmpeg_timeout=float(os.getenv("FFMPEG_TIMEOUT", "300")),
        concurrent_steps=_env_bool("REEL_CONCURRENT_STEPS"),
        voice_id=os.getenv("POLLY_VOICE_ID", "Joanna"),
    )

    return AppConfig(
        ai=ai_config,
        storage=storage_config,
        pipeline=pipeline_config,
        paths=PathsConfig.detect(),
        storage_backend=os.getenv("STORAGE_BACKEND", "auto"),
        debug=_env_bool("DEBUG"),
    )


@lru_cache()
def get_config() -> AppConfig:
    """Get cached AppConfig instance."""
    return load_config()
