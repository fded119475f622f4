"""Script Parser - extracts narration, caption and hashtags from generated script text."""

import re

from faceless_video.models.schemas import ViralScript

MAX_CAPTION_CHARS = 150
DEFAULT_HASHTAGS = "#viral #shorts"

_SCRIPT_RE = re.compile(r"SCRIPT:\s*\n([\s\S]*?)(?=\n\s*CAPTION:|$)", re.IGNORECASE)
_CAPTION_RE = re.compile(r"CAPTION:\s*\n([\s\S]*?)(?=\n\s*HASHTAGS:|$)", re.IGNORECASE)
_HASHTAGS_RE = re.compile(r"HASHTAGS:\s*\n([\s\S]*?)$", re.IGNORECASE)


def _truncate_caption(caption: str) -> str:
    if len(caption) > MAX_CAPTION_CHARS:
        return caption[: MAX_CAPTION_CHARS - 3] + "..."
    return caption


def parse_viral_script(script_text: str) -> ViralScript:
    """
    Parse SCRIPT:/CAPTION:/HASHTAGS: marker sections.

    Text without a SCRIPT: section is used whole as the narration, with a
    caption cut from its start and default hashtags.

    Args:
        script_text: Raw text returned by the script generator

    Returns:
        Parsed ViralScript
    """
    script_match = _SCRIPT_RE.search(script_text)
    script = script_match.group(1).strip() if script_match else ""

    if not script:
        return ViralScript(
            script=script_text,
            caption=script_text[: MAX_CAPTION_CHARS - 3] + "...",
            hashtags=DEFAULT_HASHTAGS,
        )

    caption_match = _CAPTION_RE.search(script_text)
    hashtags_match = _HASHTAGS_RE.search(script_text)

    return ViralScript(
        script=script,
        caption=_truncate_caption(caption_match.group(1).strip()) if caption_match else "",
        hashtags=hashtags_match.group(1).strip() if hashtags_match else "",
    )
