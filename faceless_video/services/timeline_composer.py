"""Timeline Composer - loops normalized clips to cover the narration exactly."""

import math
import shutil
from pathlib import Path
from typing import Any, Sequence

from faceless_video.core.config import Settings
from faceless_video.core.exceptions import ProbeError, TimelineError, TranscodeError
from faceless_video.models.schemas import NormalizedClip, Timeline
from faceless_video.services.media_prober import MediaProber


def compute_loops(target_duration: float, total_clip_duration: float) -> int:
    """Number of full passes over the clip set needed to reach target_duration."""
    if total_clip_duration <= 0:
        raise TimelineError("Normalized clips have no duration")
    return max(1, math.ceil(target_duration / total_clip_duration))


class TimelineComposer:
    """Builds the looped play-list and renders it trimmed to the narration length."""

    def __init__(self, settings: Settings, logger: Any, prober: MediaProber):
        """
        Initialize the timeline composer.

        Args:
            settings: Application settings
            logger: Logger instance
            prober: Media prober used to measure normalized clips
        """
        self.settings = settings
        self.logger = logger
        self.prober = prober
        self.engine = prober.engine

    def plan(self, clips: Sequence[NormalizedClip], target_duration: float) -> Timeline:
        """Probe every clip once and decide how many loops are needed."""
        if not clips:
            raise TimelineError("No clips to compose")

        durations = [self.prober.get_duration(clip.path) for clip in clips]
        loops = compute_loops(target_duration, sum(durations))
        timeline = Timeline(
            clips=list(clips),
            clip_durations=durations,
            loops=loops,
            target_duration=target_duration,
        )
        self.logger.info(
            f"Timeline: {len(clips)} clip(s), {sum(durations):.2f}s of footage, "
            f"{loops} loop(s), {len(timeline.entries)} play(s) → {target_duration:.2f}s"
        )
        return timeline

    def compose(
        self, clips: Sequence[NormalizedClip], target_duration: float, workspace: Path
    ) -> Path:
        """
        Concatenate the clips (looping as needed) and hard-trim to target_duration.

        Returns:
            Path to the composed, uncaptioned video

        Raises:
            TimelineError: If probing or concatenation fails
        """
        try:
            timeline = self.plan(clips, target_duration)
        except ProbeError as e:
            raise TimelineError(f"Could not measure normalized clips: {e}") from e

        output_path = workspace / "concatenated.mp4"
        entries = timeline.entries
        frame = 1.0 / self.settings.video_fps

        # A single play that already matches the target needs neither concat nor trim
        if len(entries) == 1 and timeline.clip_durations[0] - target_duration <= frame:
            shutil.copyfile(entries[0].path, output_path)
            self.logger.info(f"Single clip copied to: {output_path}")
            return output_path

        try:
            self.engine.concat(
                [entry.path for entry in entries],
                output_path,
                workspace / "concat-list.txt",
                duration=target_duration,
            )
        except TranscodeError as e:
            raise TimelineError(f"Concatenation failed: {e}") from e

        self.logger.info(f"Videos concatenated: {output_path.name}")
        return output_path
