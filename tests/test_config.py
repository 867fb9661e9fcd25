"""
Tests for configuration management.
"""
import os

import pytest


class TestPathsConfig:
    """Tests for PathsConfig auto-detection."""

    def test_ffmpeg_path_detection(self):
        """FFmpeg path should be detected or fallback to 'ffmpeg'."""
        from reelgen.config import PathsConfig

        ffmpeg_path = PathsConfig._find_ffmpeg()
        assert ffmpeg_path  # Should not be None/empty
        assert ffmpeg_path == "ffmpeg" or os.path.exists(ffmpeg_path)

    def test_ffmpeg_path_from_env(self, temp_dir, monkeypatch):
        fake = temp_dir / "ffmpeg"
        fake.write_text("")
        monkeypatch.setenv("FFMPEG_PATH", str(fake))

        from reelgen.config import PathsConfig

        assert PathsConfig._find_ffmpeg() == str(fake)

    def test_custom_scratch_dir_from_env(self, temp_dir, monkeypatch):
        """SCRATCH_DIR env var should override default."""
        scratch = temp_dir / "scratch"
        monkeypatch.setenv("SCRATCH_DIR", str(scratch))

        from reelgen.config import PathsConfig

        config = PathsConfig.detect()
        assert config.scratch_dir == scratch
        assert scratch.exists()


class TestAIConfig:
    """Tests for AIConfig key detection."""

    def test_ai_config_properties(self):
        from reelgen.config import AIConfig

        config = AIConfig(openai_api_key="sk-valid-key", runway_api_key=None)

        assert config.has_openai is True
        assert config.has_runway is False
        assert config.has_deepseek is False

    def test_ai_config_rejects_placeholder_keys(self):
        """Placeholder keys starting with PASTE_ should not count as configured."""
        from reelgen.config import AIConfig

        config = AIConfig(openai_api_key="PASTE_YOUR_KEY_HERE", deepseek_api_key="PASTE_ME")

        assert config.has_openai is False
        assert config.script_api_key is None

    def test_script_key_prefers_deepseek(self):
        from reelgen.config import AIConfig

        config = AIConfig(openai_api_key="sk-openai", deepseek_api_key="sk-deepseek")
        assert config.script_api_key == "sk-deepseek"

        config = AIConfig(openai_api_key="sk-openai")
        assert config.script_api_key == "sk-openai"


class TestStorageConfig:

    def test_require_bucket_raises_config_error(self):
        from reelgen.config import StorageConfig
        from reelgen.providers.exceptions import ConfigError

        with pytest.raises(ConfigError) as exc_info:
            StorageConfig(bucket="  ").require_bucket()

        assert exc_info.value.setting == "AWS_S3_BUCKET"

    def test_require_bucket_returns_name(self):
        from reelgen.config import StorageConfig

        assert StorageConfig(bucket="reels-bucket").require_bucket() == "reels-bucket"


class TestLoadConfig:
    """Tests for load_config() and the validate() summary."""

    def test_defaults(self, monkeypatch):
        for name in ("REEL_IMAGE_COUNT", "VIDEO_POLL_INTERVAL", "VIDEO_MAX_POLL_ATTEMPTS",
                     "REEL_CONCURRENT_STEPS", "POLLY_VOICE_ID", "AWS_REGION"):
            monkeypatch.delenv(name, raising=False)

        from reelgen.config import load_config

        config = load_config()

        assert config.pipeline.image_count == 4
        assert config.pipeline.video_poll_interval == 10.0
        assert config.pipeline.video_max_poll_attempts == 60
        assert config.pipeline.presign_attempts == 3
        assert config.pipeline.image_url_ttl >= 24 * 3600
        assert config.pipeline.concurrent_steps is False
        assert config.pipeline.voice_id == "Joanna"
        assert config.storage.region == "us-east-1"
        assert config.storage_backend == "memory"

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("AWS_S3_BUCKET", "my-reels")
        monkeypatch.setenv("REEL_IMAGE_COUNT", "2")
        monkeypatch.setenv("VIDEO_MAX_POLL_ATTEMPTS", "5")
        monkeypatch.setenv("REEL_CONCURRENT_STEPS", "true")

        from reelgen.config import load_config

        config = load_config()

        assert config.storage.bucket == "my-reels"
        assert config.pipeline.image_count == 2
        assert config.pipeline.video_max_poll_attempts == 5
        assert config.pipeline.concurrent_steps is True

    def test_validate_does_not_expose_keys(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-secret-value")

        from reelgen.config import load_config

        status = load_config().validate()

        assert status["ai"]["openai_configured"] is True
        assert "sk-secret-value" not in str(status)
        assert status["ready_for_generation"] is False
