"""Exception hierarchy for the video assembly pipeline."""

from typing import Optional, Sequence


class PipelineError(Exception):
    """Base class for every error raised by the pipeline."""


class InputValidationError(PipelineError):
    """Raised when a request is rejected before any work starts."""


class ProbeError(PipelineError):
    """Raised when a media file cannot be read or has no duration."""


class TranscodeError(PipelineError):
    """Raised when a transcoding engine invocation fails."""

    def __init__(self, message: str, command: Optional[Sequence[str]] = None, stderr: str = ""):
        super().__init__(message)
        self.command = list(command) if command else []
        self.stderr = stderr


class TTSError(PipelineError):
    """Raised when the speech-synthesis service cannot produce audio."""


class NormalizationError(PipelineError):
    """Raised when not a single asset could be normalized."""


class TimelineError(PipelineError):
    """Raised when normalized clips cannot be composed into a timeline."""


class OverlayError(PipelineError):
    """Raised when captions cannot be burned into the composed video."""


class MixError(PipelineError):
    """Raised when narration, music and video cannot be muxed."""
