"""Media Prober - measures media durations through the transcoding engine."""

from pathlib import Path
from typing import Any

from faceless_video.core.config import Settings
from faceless_video.services.transcoder import TranscodingEngine


class MediaProber:
    """Reports media durations. Never caches: files change between stages."""

    def __init__(self, settings: Settings, logger: Any, engine: TranscodingEngine):
        """
        Initialize the media prober.

        Args:
            settings: Application settings
            logger: Logger instance
            engine: Transcoding engine used to read container metadata
        """
        self.settings = settings
        self.logger = logger
        self.engine = engine

    def get_duration(self, path: Path) -> float:
        """
        Return the duration of a media file in seconds.

        Raises:
            ProbeError: If the file is unreadable or not a media container
        """
        duration = self.engine.probe(Path(path))
        self.logger.debug(f"Probed {Path(path).name}: {duration:.2f}s")
        return duration
