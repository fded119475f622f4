"""TTS (Text-to-Speech) client abstraction for multiple providers."""

from pathlib import Path
from typing import Any, Optional

import requests

from faceless_video.core.config import Settings
from faceless_video.core.exceptions import TTSError

GOOGLE_TTS_URL = "https://translate.google.com/translate_tts"
ELEVENLABS_TTS_URL = "https://api.elevenlabs.io/v1/text-to-speech/{voice_id}"


class TTSClient:
    """TTS client supporting multiple providers. One call synthesizes one chunk."""

    def __init__(self, settings: Settings, logger: Any):
        """
        Initialize TTS client.

        Args:
            settings: Application settings
            logger: Logger instance
        """
        self.settings = settings
        self.logger = logger
        self.provider = self._detect_provider()

    def _detect_provider(self) -> str:
        """Resolve the configured provider, honouring 'auto'."""
        provider = (self.settings.tts_provider or "auto").lower()
        if provider != "auto":
            return provider
        if self.settings.elevenlabs_api_key:
            return "elevenlabs"
        return "google"

    def generate_speech(self, text: str, output_path: Path, voice_id: Optional[str] = None) -> None:
        """
        Generate speech from text and save to file.

        Args:
            text: Text to convert to speech
            output_path: Path to save audio file
            voice_id: Optional voice ID (provider-specific)

        Raises:
            TTSError: If generation fails
        """
        if not text or not text.strip():
            raise ValueError("Text cannot be empty")

        self.logger.debug(f"Generating speech using {self.provider} provider for {len(text)} characters...")

        if self.provider == "google":
            self._generate_google(text, output_path)
        elif self.provider == "elevenlabs":
            self._generate_elevenlabs(text, output_path, voice_id)
        elif self.provider == "none":
            raise TTSError("TTS provider disabled (tts_provider=none)")
        else:
            raise TTSError(f"Unknown TTS provider: {self.provider}")

    def _generate_google(self, text: str, output_path: Path) -> None:
        """Generate speech using the Google Translate TTS endpoint."""
        params = {
            "ie": "UTF-8",
            "q": text,
            "tl": self.settings.tts_language,
            "total": 1,
            "idx": 0,
            "textlen": len(text),
            "client": "tw-ob",
            "prev": "input",
            "ttsspeed": 1,
        }

        try:
            response = requests.get(GOOGLE_TTS_URL, params=params, timeout=self.settings.tts_request_timeout)
        except requests.exceptions.RequestException as e:
            raise TTSError(f"Network error calling Google TTS: {e}") from e

        if response.status_code != 200:
            raise TTSError(f"Google TTS returned status {response.status_code}")
        if not response.content:
            raise TTSError("Google TTS returned an empty body")

        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "wb") as f:
            f.write(response.content)

    def _generate_elevenlabs(self, text: str, output_path: Path, voice_id: Optional[str] = None) -> None:
        """Generate speech using ElevenLabs API."""
        if not self.settings.elevenlabs_api_key:
            raise TTSError("ElevenLabs API key not configured")

        voice_id = voice_id or self.settings.elevenlabs_voice_id
        if not voice_id:
            raise TTSError("ElevenLabs voice ID not configured")

        headers = {
            "Accept": "audio/mpeg",
            "Content-Type": "application/json",
            "xi-api-key": self.settings.elevenlabs_api_key,
        }

        data = {
            "text": text,
            "model_id": "eleven_turbo_v2",
            "voice_settings": {
                "stability": 0.5,
                "similarity_boost": 0.75,
            },
        }

        try:
            response = requests.post(
                ELEVENLABS_TTS_URL.format(voice_id=voice_id),
                json=data,
                headers=headers,
                timeout=self.settings.tts_request_timeout,
            )
        except requests.exceptions.RequestException as e:
            raise TTSError(f"Network error calling ElevenLabs API: {e}") from e

        if response.status_code != 200:
            raise TTSError(f"ElevenLabs API returned status {response.status_code}: {response.text}")

        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "wb") as f:
            f.write(response.content)
