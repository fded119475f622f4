"""Transcoding engine - the boundary between the pipeline and ffmpeg."""

import re
import subprocess
import textwrap
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional, Sequence

from moviepy.config import FFMPEG_BINARY
from moviepy.video.io.ffmpeg_reader import ffmpeg_parse_infos

from faceless_video.core.config import Settings
from faceless_video.core.exceptions import ProbeError, TranscodeError
from faceless_video.models.schemas import CaptionCue, CueRole, MediaKind
from faceless_video.utils.io_utils import concat_list_line


class TranscodingEngine(ABC):
    """
    Capabilities the pipeline needs from a media engine.

    Every call blocks until the output file is complete. Implementations raise
    ProbeError from probe() and TranscodeError from every other operation.
    """

    @abstractmethod
    def probe(self, path: Path) -> float:
        """Return the duration of a media file in seconds."""

    @abstractmethod
    def scale_crop(self, source: Path, output: Path, kind: MediaKind) -> Path:
        """Fill-then-crop a clip or still image onto the output canvas."""

    @abstractmethod
    def concat(
        self,
        inputs: Sequence[Path],
        output: Path,
        list_path: Path,
        duration: Optional[float] = None,
    ) -> Path:
        """Join files by stream copy, optionally cutting the result at duration."""

    @abstractmethod
    def draw_text(self, source: Path, output: Path, cues: Sequence[CaptionCue]) -> Path:
        """Burn caption cues into the video."""

    @abstractmethod
    def mix_audio(
        self,
        video: Path,
        narration: Path,
        music: Path,
        output: Path,
        duration: float,
    ) -> Path:
        """Mix narration with attenuated music and mux with the video stream."""

    @abstractmethod
    def generate_silence(self, output: Path, duration: float) -> Path:
        """Write a silent stereo audio file of the given duration."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return True when the engine can be invoked."""


_OPTION_SPECIAL = re.compile(r"([\\':])")
_GRAPH_SPECIAL = re.compile(r"([\\'\[\],;])")


def escape_filter_value(value: str) -> str:
    """
    Escape a value for use as a filter option inside a -vf filtergraph.

    ffmpeg unescapes twice: once when splitting the graph into filters and once
    when splitting a filter's arguments into options.
    """
    option_level = _OPTION_SPECIAL.sub(r"\\\1", value)
    return _GRAPH_SPECIAL.sub(r"\\\1", option_level)


def caption_text(cue: CaptionCue, settings: Settings) -> str:
    """Text exactly as drawn for a cue; sentences are wrapped to the caption width."""
    if cue.role == CueRole.SENTENCE:
        return textwrap.fill(cue.text, width=settings.caption_wrap_chars)
    return cue.text


def build_drawtext_filter(cue: CaptionCue, settings: Settings, text_file: Path) -> str:
    """
    Build the drawtext filter for one caption cue.

    The text is read from text_file with expansion disabled, so colons, percent
    signs and quotes in captions reach the frame unchanged.
    """
    if cue.role == CueRole.SENTENCE:
        font_size = settings.sentence_font_size
        position = f"x=(w-text_w)/2:y=h-text_h-{settings.caption_bottom_margin}"
    else:
        font_size = settings.title_font_size
        position = "x=(w-text_w)/2:y=(h-text_h)/2"

    options = [f"textfile={escape_filter_value(str(text_file))}", "expansion=none"]
    if settings.caption_font_file:
        options.append(f"fontfile={escape_filter_value(settings.caption_font_file)}")
    options += [
        f"fontsize={font_size}",
        "fontcolor=white",
        "bordercolor=black",
        "borderw=3",
        position,
        f"enable='gte(t,{cue.start:.3f})*lt(t,{cue.end:.3f})'",
    ]
    return "drawtext=" + ":".join(options)


class FFmpegEngine(TranscodingEngine):
    """TranscodingEngine backed by the ffmpeg command line tool."""

    def __init__(self, settings: Settings, logger: Any):
        """
        Initialize the ffmpeg engine.

        Args:
            settings: Application settings
            logger: Logger instance
        """
        self.settings = settings
        self.logger = logger
        self.binary = settings.ffmpeg_binary or FFMPEG_BINARY
        self.timeout = settings.ffmpeg_timeout_seconds

    def probe(self, path: Path) -> float:
        path = Path(path)
        if not path.is_file():
            raise ProbeError(f"Cannot probe {path}: file not found")
        try:
            infos = ffmpeg_parse_infos(str(path))
        except (IOError, OSError, ValueError) as e:
            raise ProbeError(f"Cannot probe {path}: {e}") from e

        duration = infos.get("duration")
        if not duration or duration <= 0:
            raise ProbeError(f"Cannot probe {path}: no duration in container")
        return float(duration)

    def scale_crop(self, source: Path, output: Path, kind: MediaKind) -> Path:
        width, height = self.settings.video_width, self.settings.video_height
        video_filter = (
            f"scale={width}:{height}:force_original_aspect_ratio=increase,"
            f"crop={width}:{height},setsar=1"
        )

        if kind == MediaKind.IMAGE:
            inputs = ["-loop", "1", "-t", f"{self.settings.image_hold_seconds:g}", "-i", str(source)]
        else:
            inputs = ["-i", str(source)]

        args = inputs + [
            "-vf", video_filter,
            "-r", str(self.settings.video_fps),
            "-an",
            "-c:v", "libx264",
            "-pix_fmt", self.settings.pixel_format,
            "-preset", self.settings.normalize_preset,
            "-crf", str(self.settings.normalize_crf),
            str(output),
        ]
        self._run(args, f"scale_crop {Path(source).name}", output)
        return output

    def concat(
        self,
        inputs: Sequence[Path],
        output: Path,
        list_path: Path,
        duration: Optional[float] = None,
    ) -> Path:
        if not inputs:
            raise TranscodeError("concat: no inputs given")

        list_path.parent.mkdir(parents=True, exist_ok=True)
        list_path.write_text("\n".join(concat_list_line(Path(p)) for p in inputs) + "\n", encoding="utf-8")

        args = ["-f", "concat", "-safe", "0", "-i", str(list_path), "-c", "copy"]
        if duration is not None:
            args += ["-t", f"{duration:.3f}"]
        args.append(str(output))
        self._run(args, f"concat {len(inputs)} file(s)", output)
        return output

    def draw_text(self, source: Path, output: Path, cues: Sequence[CaptionCue]) -> Path:
        output = Path(output)
        output.parent.mkdir(parents=True, exist_ok=True)

        # One text file per cue, next to the output
        text_files = []
        for index, cue in enumerate(cues):
            text_file = output.parent / f"{output.stem}-cue-{index}.txt"
            text_file.write_text(caption_text(cue, self.settings), encoding="utf-8")
            text_files.append(text_file.resolve())

        filters = ",".join(
            build_drawtext_filter(cue, self.settings, text_file) for cue, text_file in zip(cues, text_files)
        )
        args = ["-i", str(source)]
        if filters:
            args += ["-vf", filters]
        args += [
            "-an",
            "-c:v", "libx264",
            "-preset", self.settings.render_preset,
            "-crf", str(self.settings.render_crf),
            "-pix_fmt", self.settings.pixel_format,
            str(output),
        ]
        try:
            self._run(args, f"drawtext {len(cues)} cue(s)", output)
        finally:
            for text_file in text_files:
                text_file.unlink(missing_ok=True)
        return output

    def mix_audio(
        self,
        video: Path,
        narration: Path,
        music: Path,
        output: Path,
        duration: float,
    ) -> Path:
        loop = self.settings.loop_music
        # Looped music is always as long as the narration, so "shortest" equals the narration length
        mix_duration = "shortest" if loop else "first"
        filter_graph = ";".join(
            [
                f"[1:a]volume={self.settings.narration_volume}[tts]",
                f"[2:a]volume={self.settings.music_volume},atrim=0:{duration:.3f},asetpts=PTS-STARTPTS[music]",
                f"[tts][music]amix=inputs=2:duration={mix_duration}:dropout_transition=0:normalize=0,"
                "aformat=channel_layouts=stereo[aout]",
            ]
        )

        args = ["-i", str(video), "-i", str(narration)]
        if loop:
            args += ["-stream_loop", "-1"]
        args += [
            "-i", str(music),
            "-filter_complex", filter_graph,
            "-map", "0:v",
            "-map", "[aout]",
            "-c:v", "copy",
            "-c:a", "aac",
            "-b:a", self.settings.audio_bitrate,
            "-ar", str(self.settings.audio_sample_rate),
            "-shortest",
            str(output),
        ]
        self._run(args, "mix_audio", output)
        return output

    def generate_silence(self, output: Path, duration: float) -> Path:
        args = [
            "-f", "lavfi",
            "-t", f"{duration:.3f}",
            "-i", f"anullsrc=channel_layout=stereo:sample_rate={self.settings.audio_sample_rate}",
            "-c:a", "libmp3lame",
            "-b:a", "128k",
            str(output),
        ]
        self._run(args, f"silence {duration:.1f}s", output)
        return output

    def is_available(self) -> bool:
        try:
            result = subprocess.run(
                [self.binary, "-version"], capture_output=True, text=True, timeout=30
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            self.logger.error(f"ffmpeg not usable ({self.binary}): {e}")
            return False
        return result.returncode == 0

    def _run(self, args: list[str], operation: str, output: Path) -> None:
        """Run one ffmpeg invocation and raise TranscodeError on failure."""
        Path(output).parent.mkdir(parents=True, exist_ok=True)
        command = [self.binary, "-hide_banner", "-loglevel", "error", "-y", *args]
        self.logger.debug(f"ffmpeg {operation}: {' '.join(command)}")

        try:
            result = subprocess.run(command, capture_output=True, text=True, timeout=self.timeout)
        except FileNotFoundError as e:
            raise TranscodeError(f"{operation}: ffmpeg binary not found ({self.binary})", command) from e
        except subprocess.TimeoutExpired as e:
            raise TranscodeError(f"{operation}: ffmpeg timed out after {self.timeout}s", command) from e

        if result.returncode != 0:
            stderr_tail = (result.stderr or "").strip()[-2000:]
            raise TranscodeError(
                f"{operation}: ffmpeg exited with status {result.returncode}: {stderr_tail}",
                command,
                stderr_tail,
            )
