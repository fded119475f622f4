"""Shared pytest fixtures and configuration."""

from pathlib import Path
from typing import Optional, Sequence

import pytest

from faceless_video.core.config import Settings
from faceless_video.core.exceptions import ProbeError, TranscodeError, TTSError
from faceless_video.core.logging_config import get_logger
from faceless_video.models.schemas import CaptionCue, MediaKind
from faceless_video.services.transcoder import TranscodingEngine


def write_media(path: Path, duration: float) -> Path:
    """Write a fake media file that carries its own duration."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"duration={duration:.6f}", encoding="utf-8")
    return path


def read_duration(path: Path) -> Optional[float]:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    if not text.startswith("duration="):
        return None
    return float(text.split("=", 1)[1])


class FakeEngine(TranscodingEngine):
    """
    In-memory stand-in for ffmpeg.

    Outputs are real files whose content records their duration, so copies and
    moves keep working and probe() reports what a deterministic engine would.
    """

    def __init__(
        self,
        image_hold_seconds: float = 5.0,
        fail_sources: Sequence[str] = (),
        fail_operations: Sequence[str] = (),
    ):
        self.image_hold_seconds = image_hold_seconds
        self.fail_sources = set(fail_sources)
        self.fail_operations = set(fail_operations)
        self.calls: list[tuple] = []
        self.cues: list[CaptionCue] = []
        self.concat_lists: list[list[Path]] = []

    def _check(self, operation: str, source: Optional[Path] = None) -> None:
        if operation in self.fail_operations:
            raise TranscodeError(f"{operation}: simulated failure")
        if source is not None and Path(source).name in self.fail_sources:
            raise TranscodeError(f"{operation}: cannot decode {Path(source).name}")

    def probe(self, path: Path) -> float:
        self.calls.append(("probe", Path(path)))
        duration = read_duration(path)
        if duration is None:
            raise ProbeError(f"Cannot probe {path}")
        return duration

    def scale_crop(self, source: Path, output: Path, kind: MediaKind) -> Path:
        self.calls.append(("scale_crop", Path(source), kind))
        self._check("scale_crop", source)
        if kind == MediaKind.IMAGE:
            duration = self.image_hold_seconds
        else:
            duration = read_duration(source)
            if duration is None:
                raise TranscodeError(f"scale_crop: invalid data in {Path(source).name}")
        return write_media(output, duration)

    def concat(self, inputs, output, list_path, duration=None) -> Path:
        self.calls.append(("concat", [Path(p) for p in inputs], duration))
        self._check("concat")
        self.concat_lists.append([Path(p) for p in inputs])
        list_path.write_text("\n".join(f"file '{p}'" for p in inputs), encoding="utf-8")
        total = sum(read_duration(p) or 0.0 for p in inputs)
        return write_media(output, min(total, duration) if duration is not None else total)

    def draw_text(self, source: Path, output: Path, cues) -> Path:
        self.calls.append(("draw_text", Path(source), len(cues)))
        self._check("draw_text")
        self.cues = list(cues)
        return write_media(output, read_duration(source) or 0.0)

    def mix_audio(self, video, narration, music, output, duration) -> Path:
        self.calls.append(("mix_audio", Path(video), Path(narration), Path(music), duration))
        self._check("mix_audio")
        return write_media(output, min(read_duration(video) or 0.0, read_duration(narration) or 0.0))

    def generate_silence(self, output: Path, duration: float) -> Path:
        self.calls.append(("generate_silence", Path(output), duration))
        self._check("generate_silence")
        return write_media(output, duration)

    def is_available(self) -> bool:
        return True

    def operations(self) -> list[str]:
        return [call[0] for call in self.calls]


class FakeTTSClient:
    """Speech client that produces fake audio proportional to chunk length."""

    def __init__(self, seconds_per_char: float = 0.05, fail: bool = False):
        self.seconds_per_char = seconds_per_char
        self.fail = fail
        self.chunks: list[str] = []

    def generate_speech(self, text: str, output_path: Path, voice_id: Optional[str] = None) -> None:
        if self.fail:
            raise TTSError("Network error calling Google TTS: connection refused")
        self.chunks.append(text)
        write_media(output_path, len(text) * self.seconds_per_char)


@pytest.fixture
def settings(tmp_path):
    """Create test settings instance with an empty music folder and no downloads."""
    return Settings(music_dir=str(tmp_path / "music"), default_music_urls=[], tts_provider="none")


@pytest.fixture
def logger():
    """Create test logger instance."""
    return get_logger(__name__)


@pytest.fixture
def engine():
    return FakeEngine()


@pytest.fixture
def engine_factory():
    """Build FakeEngine instances with custom failure behaviour."""
    return FakeEngine


@pytest.fixture
def tts_factory():
    return FakeTTSClient


@pytest.fixture
def make_media():
    """Write a fake media file carrying the given duration."""
    return write_media


@pytest.fixture
def media_duration():
    return read_duration
