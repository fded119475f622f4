"""Audio Mixer - mixes narration with background music and muxes the final video."""

from pathlib import Path
from typing import Any

from faceless_video.core.config import Settings
from faceless_video.core.exceptions import MixError, TranscodeError
from faceless_video.models.schemas import MusicTrack, NarrationTrack
from faceless_video.services.transcoder import TranscodingEngine


class AudioMixer:
    """Narration at reference gain, music attenuated and trimmed to the narration."""

    def __init__(self, settings: Settings, logger: Any, engine: TranscodingEngine):
        self.settings = settings
        self.logger = logger
        self.engine = engine

    def mix(self, video_path: Path, narration: NarrationTrack, music: MusicTrack, output_path: Path) -> Path:
        """
        Produce the final muxed file.

        Args:
            video_path: Captioned, silent video
            narration: Narration track (timing reference)
            music: Background music track
            output_path: Destination of the muxed video

        Raises:
            MixError: If the engine fails
        """
        self.logger.info(
            f"Mixing audio: narration gain {self.settings.narration_volume}, "
            f"music gain {self.settings.music_volume} ({music.source.value}), "
            f"duration {narration.duration:.2f}s"
        )

        try:
            self.engine.mix_audio(video_path, narration.path, music.path, output_path, narration.duration)
        except TranscodeError as e:
            raise MixError(f"Audio mix failed: {e}") from e

        self.logger.info("Audio mixed successfully")
        return output_path
