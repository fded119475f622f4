"""Narration Synthesizer - turns narration text into one continuous speech track."""

import shutil
from pathlib import Path
from typing import Any, Optional

from faceless_video.core.config import Settings
from faceless_video.services.transcoder import TranscodingEngine
from faceless_video.services.tts_client import TTSClient
from faceless_video.utils.error_handler import format_error_message, get_fallback_suggestion
from faceless_video.utils.text_utils import chunk_text, estimate_spoken_duration


class NarrationSynthesizer:
    """Chunks text to the TTS request limit, synthesizes each chunk and stitches them."""

    def __init__(
        self,
        settings: Settings,
        logger: Any,
        engine: TranscodingEngine,
        tts_client: Optional[TTSClient] = None,
    ):
        """
        Initialize the narration synthesizer.

        Args:
            settings: Application settings
            logger: Logger instance
            engine: Transcoding engine used to join chunks and create silence
            tts_client: Speech client (defaults to one built from settings)
        """
        self.settings = settings
        self.logger = logger
        self.engine = engine
        self.tts_client = tts_client or TTSClient(settings, logger)

    def synthesize(self, text: str, output_path: Path) -> tuple[bool, int]:
        """
        Write the narration for text to output_path.

        Speech service failures fall back to a silent track sized from the text
        length, so this only raises if even the silent track cannot be written.

        Args:
            text: Narration text
            output_path: Destination audio file

        Returns:
            Tuple of (synthesized, chunk_count); synthesized is False for the fallback
        """
        chunks = chunk_text(text, self.settings.tts_max_chunk_chars)
        self.logger.info(f"Split narration into {len(chunks)} TTS chunk(s)")

        try:
            self._synthesize_chunks(chunks, output_path)
            self.logger.info(f"TTS audio saved to: {output_path}")
            return True, len(chunks)
        except Exception as e:
            self.logger.warning(
                format_error_message(
                    "Generating TTS audio",
                    e,
                    context={"chunks": len(chunks)},
                    suggestion=get_fallback_suggestion("TTS", e),
                )
            )

        duration = self.estimate_fallback_duration(text)
        output_path.unlink(missing_ok=True)
        self.engine.generate_silence(output_path, duration)
        self.logger.info(f"Silent narration saved to: {output_path} ({duration:.1f}s)")
        return False, len(chunks)

    def estimate_fallback_duration(self, text: str) -> float:
        """Estimate narration length from text at the configured speaking rate."""
        return estimate_spoken_duration(
            text,
            words_per_minute=self.settings.tts_fallback_words_per_minute,
            chars_per_word=self.settings.tts_fallback_chars_per_word,
            min_seconds=self.settings.tts_fallback_min_seconds,
            max_seconds=self.settings.tts_fallback_max_seconds,
        )

    def _synthesize_chunks(self, chunks: list[str], output_path: Path) -> None:
        if not chunks:
            raise ValueError("Narration text is empty")

        work_dir = output_path.parent
        chunk_paths: list[Path] = []
        for index, chunk in enumerate(chunks):
            self.logger.info(f"Generating chunk {index + 1}/{len(chunks)}...")
            chunk_path = work_dir / f"tts-chunk-{index}.mp3"
            self.tts_client.generate_speech(chunk, chunk_path)
            chunk_paths.append(chunk_path)

        if len(chunk_paths) == 1:
            shutil.move(str(chunk_paths[0]), str(output_path))
            return

        self.logger.info(f"Concatenating {len(chunk_paths)} audio chunks...")
        list_path = work_dir / "tts-concat-list.txt"
        self.engine.concat(chunk_paths, output_path, list_path)

        for chunk_path in chunk_paths:
            chunk_path.unlink(missing_ok=True)
        list_path.unlink(missing_ok=True)
