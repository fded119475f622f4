"""Pydantic models and schemas for the video assembly pipeline."""

from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".webp"})
VIDEO_EXTENSIONS = frozenset({".mp4", ".mov", ".avi"})


# ============================================================================
# Enums
# ============================================================================


class MediaKind(str, Enum):
    """Kind of input asset, decided by file extension alone."""

    VIDEO = "video"
    IMAGE = "image"


class MusicSource(str, Enum):
    """Where the background music track came from."""

    USER = "user"
    DOWNLOAD = "download"
    PLACEHOLDER = "placeholder"


class CueRole(str, Enum):
    """Role of a caption cue; decides its on-screen style."""

    INTRO = "intro"
    SENTENCE = "sentence"
    OUTRO = "outro"


# ============================================================================
# Script Models
# ============================================================================


class ViralScript(BaseModel):
    """Narration script plus the side-file texts that ship with the video."""

    script: str = Field(..., description="Full spoken text for the video")
    caption: str = Field(default="", description="Short post description (under 150 characters)")
    hashtags: str = Field(default="", description="Space separated hashtags")


# ============================================================================
# Media Models
# ============================================================================


class MediaAsset(BaseModel):
    """An input clip or still image supplied by the asset-acquisition step."""

    path: Path = Field(..., description="Local path to the media file")
    kind: MediaKind = Field(..., description="video or image")

    @classmethod
    def from_path(cls, path: Path) -> "MediaAsset":
        """Classify a path as image or video by its extension."""
        path = Path(path)
        kind = MediaKind.IMAGE if path.suffix.lower() in IMAGE_EXTENSIONS else MediaKind.VIDEO
        return cls(path=path, kind=kind)


class NormalizedClip(BaseModel):
    """An asset converted to the fixed output canvas and frame rate."""

    source: MediaAsset = Field(..., description="Asset the clip was produced from")
    path: Path = Field(..., description="Path of the normalized clip inside the workspace")


class NarrationTrack(BaseModel):
    """The full narration audio and its measured duration."""

    path: Path = Field(..., description="Narration audio file")
    duration: float = Field(..., gt=0, description="Measured duration in seconds")
    synthesized: bool = Field(default=True, description="False when the silent fallback was used")
    chunk_count: int = Field(default=1, description="Number of TTS requests that produced the track")


class MusicTrack(BaseModel):
    """Background music for the mix."""

    path: Path = Field(..., description="Music audio file")
    source: MusicSource = Field(..., description="Where the track came from")


class Timeline(BaseModel):
    """Ordered clip plays whose raw duration covers the narration."""

    clips: list[NormalizedClip] = Field(..., description="Normalized clips in input order")
    clip_durations: list[float] = Field(..., description="Probed duration of each clip, same order")
    loops: int = Field(..., ge=1, description="How many times the full clip set is repeated")
    target_duration: float = Field(..., gt=0, description="Narration duration the output is trimmed to")

    @property
    def entries(self) -> list[NormalizedClip]:
        """Full play-list: the clip set repeated `loops` times."""
        return [clip for _ in range(self.loops) for clip in self.clips]

    @property
    def raw_duration(self) -> float:
        """Duration of the play-list before trimming."""
        return sum(self.clip_durations) * self.loops


class CaptionCue(BaseModel):
    """A caption shown during the half-open window [start, end)."""

    text: str = Field(..., description="Caption text (unescaped)")
    start: float = Field(..., ge=0, description="Start time in seconds")
    end: float = Field(..., description="End time in seconds")
    role: CueRole = Field(default=CueRole.SENTENCE, description="Intro, sentence or outro")

    @property
    def duration(self) -> float:
        return self.end - self.start


# ============================================================================
# Pipeline Models
# ============================================================================


class ShortRequest(BaseModel):
    """Everything needed to assemble one short video."""

    script: str = Field(..., description="Narration text")
    caption: str = Field(default="", description="Caption written to the caption side-file")
    hashtags: str = Field(default="", description="Hashtags written to the hashtags side-file")
    asset_paths: list[Path] = Field(default_factory=list, description="Ordered local media files")
    output_dir: Path = Field(default=Path("output"), description="Permanent output directory")
    niche: str = Field(default="short", description="Niche name used as the artifact file prefix")


class PipelineRun(BaseModel):
    """One video-creation run: its workspace and the artifacts it produced."""

    run_id: str = Field(..., description="Unique run identifier")
    niche: str = Field(..., description="Niche name used as the artifact file prefix")
    timestamp: str = Field(..., description="Run start time as YYYYMMDD_HHmmss")
    started_at: datetime = Field(default_factory=datetime.now, description="Run start time")
    output_dir: Path = Field(..., description="Permanent output directory")
    workspace: Optional[Path] = Field(default=None, description="Temporary workspace (removed at the end)")
    video_path: Optional[Path] = Field(default=None, description="Final muxed video")
    caption_path: Optional[Path] = Field(default=None, description="Caption side-file")
    hashtags_path: Optional[Path] = Field(default=None, description="Hashtags side-file")
    narration_duration: Optional[float] = Field(default=None, description="Measured narration duration")
    skipped_assets: list[Path] = Field(default_factory=list, description="Assets that failed normalization")

    @property
    def artifact_stem(self) -> str:
        return f"{self.niche}_{self.timestamp}"
