"""Music Resolver - picks the background track for a run."""

from pathlib import Path
from typing import Any, Optional

import requests

from faceless_video.core.config import Settings
from faceless_video.models.schemas import MusicSource, MusicTrack
from faceless_video.services.transcoder import TranscodingEngine
from faceless_video.utils.error_handler import format_error_message, get_fallback_suggestion
from faceless_video.utils.io_utils import first_file_with_suffix


class MusicResolver:
    """
    Resolves background music in priority order.

    1. First .mp3 in the user music folder
    2. Each default URL, downloaded into the workspace
    3. A silent placeholder, so a run never stalls on missing music
    """

    def __init__(self, settings: Settings, logger: Any, engine: TranscodingEngine):
        self.settings = settings
        self.logger = logger
        self.engine = engine

    def resolve(self, workspace: Path) -> MusicTrack:
        """Return a usable MusicTrack; never fails because of network errors."""
        user_track = first_file_with_suffix(Path(self.settings.music_dir), ".mp3")
        if user_track:
            self.logger.info(f"Using user-provided music: {user_track.name}")
            return MusicTrack(path=user_track, source=MusicSource.USER)

        self.logger.info("No user music found, attempting to download default track...")
        music_path = workspace / "background-music.mp3"
        for url in self.settings.default_music_urls:
            if self._download(url, music_path):
                return MusicTrack(path=music_path, source=MusicSource.DOWNLOAD)

        self.logger.warning("Music download unavailable, generating silent placeholder track")
        self.engine.generate_silence(music_path, self.settings.music_placeholder_seconds)
        return MusicTrack(path=music_path, source=MusicSource.PLACEHOLDER)

    def _download(self, url: str, output_path: Path) -> Optional[Path]:
        """Stream url to output_path; returns None (and cleans up) on failure."""
        self.logger.info(f"Downloading music from: {url}")
        try:
            with requests.get(url, stream=True, timeout=self.settings.music_download_timeout) as response:
                response.raise_for_status()
                output_path.parent.mkdir(parents=True, exist_ok=True)
                with open(output_path, "wb") as f:
                    for chunk in response.iter_content(chunk_size=1 << 16):
                        if chunk:
                            f.write(chunk)
        except (requests.exceptions.RequestException, OSError) as e:
            self.logger.warning(
                format_error_message(
                    "Downloading music",
                    e,
                    context={"url": url},
                    suggestion=get_fallback_suggestion("Music", e),
                )
            )
            output_path.unlink(missing_ok=True)
            return None

        if output_path.stat().st_size == 0:
            self.logger.warning(f"Downloaded music is empty: {url}")
            output_path.unlink(missing_ok=True)
            return None

        self.logger.info(f"Music downloaded to: {output_path}")
        return output_path
