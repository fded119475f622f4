"""Overlay Scheduler - times intro, sentence and outro captions and burns them in."""

from pathlib import Path
from typing import Any, Sequence

from faceless_video.core.config import Settings
from faceless_video.core.exceptions import OverlayError, TranscodeError
from faceless_video.models.schemas import CaptionCue, CueRole
from faceless_video.services.transcoder import TranscodingEngine


def compute_slots(duration: float, sentence_count: int) -> list[tuple[float, float]]:
    """
    Partition [0, duration] into sentence_count + 2 equal, contiguous slots.

    The first and last slot belong to the intro and outro captions.
    """
    if duration <= 0:
        raise ValueError("Duration must be positive")
    slot_count = sentence_count + 2
    width = duration / slot_count
    # The last boundary is pinned to duration so the slots sum exactly
    bounds = [width * i for i in range(slot_count)] + [duration]
    return [(bounds[i], bounds[i + 1]) for i in range(slot_count)]


def schedule_cues(
    duration: float,
    sentences: Sequence[str],
    intro_text: str = "FACELESS VIDEO",
    outro_text: str = "FOLLOW FOR MORE",
    intro_outro_max: float = 2.5,
) -> list[CaptionCue]:
    """
    Build caption cues for a narration of the given duration.

    The intro starts at 0 and the outro ends at duration, each lasting
    min(intro_outro_max, slot width). Sentence cues fill the interior slots.
    """
    slots = compute_slots(duration, len(sentences))
    edge_width = min(intro_outro_max, slots[0][1] - slots[0][0])

    cues = [CaptionCue(text=intro_text, start=0.0, end=edge_width, role=CueRole.INTRO)]
    for sentence, (start, end) in zip(sentences, slots[1:-1]):
        cues.append(CaptionCue(text=sentence, start=start, end=end, role=CueRole.SENTENCE))
    cues.append(CaptionCue(text=outro_text, start=duration - edge_width, end=duration, role=CueRole.OUTRO))
    return cues


class OverlayScheduler:
    """Schedules caption cues and burns them into the composed video."""

    def __init__(self, settings: Settings, logger: Any, engine: TranscodingEngine):
        self.settings = settings
        self.logger = logger
        self.engine = engine

    def schedule(self, duration: float, sentences: Sequence[str]) -> list[CaptionCue]:
        return schedule_cues(
            duration,
            sentences,
            intro_text=self.settings.intro_text,
            outro_text=self.settings.outro_text,
            intro_outro_max=self.settings.intro_outro_max_seconds,
        )

    def apply(self, video_path: Path, duration: float, sentences: Sequence[str], output_path: Path) -> Path:
        """
        Burn captions into video_path.

        Raises:
            OverlayError: If the engine fails; there is no partial-success mode
        """
        cues = self.schedule(duration, sentences)
        self.logger.info(f"Adding {len(cues)} text overlay(s) ({len(sentences)} sentence(s))")
        for cue in cues:
            self.logger.debug(f"{cue.role.value} cue {cue.start:.2f}s +{cue.duration:.2f}s: {cue.text}")

        try:
            self.engine.draw_text(video_path, output_path, cues)
        except TranscodeError as e:
            raise OverlayError(f"Text overlay failed: {e}") from e

        self.logger.info("Text overlays added")
        return output_path
