"""Application configuration using pydantic-settings."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be configured via environment variables or a .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================================================
    # Application Settings
    # ========================================================================
    app_name: str = Field(default="Faceless Video Factory", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    log_level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)")
    log_file: Optional[str] = Field(default=None, description="Optional path to a rotating log file")
    output_dir: str = Field(default="output", description="Default directory for finished videos")

    # ========================================================================
    # Output Canvas
    # ========================================================================
    video_width: int = Field(default=1080, description="Video output width in pixels (vertical format)")
    video_height: int = Field(default=1920, description="Video output height in pixels (vertical format)")
    video_fps: int = Field(default=30, description="Output frame rate")
    pixel_format: str = Field(default="yuv420p", description="Pixel format of every encoded clip")
    image_hold_seconds: float = Field(
        default=5.0, description="How long a still image is held when converted to a clip"
    )
    normalize_preset: str = Field(default="ultrafast", description="x264 preset used for asset normalization")
    normalize_crf: int = Field(default=28, description="x264 CRF used for asset normalization")
    render_preset: str = Field(default="fast", description="x264 preset used for the caption burn-in pass")
    render_crf: int = Field(default=23, description="x264 CRF used for the caption burn-in pass")

    # ========================================================================
    # Transcoding Engine
    # ========================================================================
    ffmpeg_binary: Optional[str] = Field(
        default=None,
        description="Path to the ffmpeg binary (default: the binary MoviePy resolves via imageio-ffmpeg)",
    )
    ffmpeg_timeout_seconds: Optional[float] = Field(
        default=600.0,
        description="Timeout for a single ffmpeg invocation in seconds (unset to wait forever)",
    )

    # ========================================================================
    # TTS (Text-to-Speech) Settings
    # ========================================================================
    tts_provider: str = Field(
        default="auto",
        description="TTS provider: 'google', 'elevenlabs', 'none' or 'auto' (elevenlabs when a key is set)",
    )
    tts_language: str = Field(default="en", description="Narration language code")
    tts_max_chunk_chars: int = Field(
        default=200, description="Maximum characters sent to the TTS service per request"
    )
    tts_request_timeout: float = Field(default=30.0, description="TTS HTTP timeout in seconds")
    elevenlabs_api_key: Optional[str] = Field(default=None, description="ElevenLabs API key")
    elevenlabs_voice_id: Optional[str] = Field(default=None, description="ElevenLabs voice ID")
    tts_fallback_words_per_minute: int = Field(
        default=150, description="Speaking rate used to size the silent narration fallback"
    )
    tts_fallback_chars_per_word: int = Field(
        default=3, description="Average characters per word used to size the silent narration fallback"
    )
    tts_fallback_min_seconds: float = Field(default=10.0, description="Shortest silent narration fallback")
    tts_fallback_max_seconds: float = Field(default=45.0, description="Longest silent narration fallback")

    # ========================================================================
    # Background Music Settings
    # ========================================================================
    music_dir: str = Field(default="music", description="Folder searched for a user-supplied .mp3")
    default_music_urls: list[str] = Field(
        default=[
            "https://cdn.pixabay.com/download/audio/2022/03/10/audio_d1718ab41b.mp3",
            "https://cdn.pixabay.com/download/audio/2022/05/27/audio_1808fbf07a.mp3",
            "https://cdn.pixabay.com/download/audio/2021/08/04/audio_0625c1539c.mp3",
        ],
        description="Royalty-free tracks downloaded when no user music is present",
    )
    music_download_timeout: float = Field(default=30.0, description="Music download timeout in seconds")
    music_placeholder_seconds: float = Field(
        default=60.0, description="Length of the silent track used when no music can be obtained"
    )
    loop_music: bool = Field(
        default=True, description="Loop background music that is shorter than the narration"
    )

    # ========================================================================
    # Audio Mix Settings
    # ========================================================================
    narration_volume: float = Field(default=1.0, description="Linear narration gain (1.0 = 0 dB)")
    music_volume: float = Field(default=0.18, description="Linear music gain (0.18 = about -15 dB)")
    audio_bitrate: str = Field(default="192k", description="AAC bitrate of the final mix")
    audio_sample_rate: int = Field(default=44100, description="Sample rate of the final mix")

    # ========================================================================
    # Caption Overlay Settings
    # ========================================================================
    intro_text: str = Field(default="FACELESS VIDEO", description="Caption shown at the very start")
    outro_text: str = Field(default="FOLLOW FOR MORE", description="Caption shown at the very end")
    intro_outro_max_seconds: float = Field(
        default=2.5, description="Upper bound for the intro and outro caption windows"
    )
    title_font_size: int = Field(default=80, description="Font size for intro/outro captions")
    sentence_font_size: int = Field(default=72, description="Font size for sentence captions")
    caption_bottom_margin: int = Field(default=200, description="Distance of sentence captions from the bottom edge")
    caption_wrap_chars: int = Field(default=28, description="Sentence captions are wrapped at this many characters")
    caption_font_file: Optional[str] = Field(
        default=None, description="Optional TrueType font for captions (system default otherwise)"
    )


# Global settings instance
settings = Settings()
