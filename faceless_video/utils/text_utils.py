"""Text utility functions for narration processing."""

import re

# A sentence is a run of non-terminators followed by terminators or end of text
_SENTENCE_RE = re.compile(r"[^.!?]+(?:[.!?]+|$)")
_TERMINATORS_RE = re.compile(r"[.!?]+")


def split_sentences(script: str) -> list[str]:
    """
    Split a script into caption sentences.

    Splits on runs of '.', '!' and '?', trims whitespace and drops empty pieces.
    Terminators are not kept.

    Args:
        script: Full script text.

    Returns:
        Sentences in original order.
    """
    return [part.strip() for part in _TERMINATORS_RE.split(script) if part.strip()]


def chunk_text(text: str, max_chars: int = 200) -> list[str]:
    """
    Split text into chunks no longer than max_chars, breaking only between sentences.

    A single sentence longer than max_chars becomes its own (oversized) chunk.

    Args:
        text: Narration text.
        max_chars: Maximum characters per chunk.

    Returns:
        Chunks in original order.
    """
    text = text.strip()
    if len(text) <= max_chars:
        return [text] if text else []

    sentences = [match.group(0) for match in _SENTENCE_RE.finditer(text) if match.group(0).strip()]
    chunks: list[str] = []
    current = ""

    for sentence in sentences:
        if len(current + sentence) <= max_chars:
            current += sentence
        else:
            if current.strip():
                chunks.append(current.strip())
            current = sentence

    if current.strip():
        chunks.append(current.strip())

    return chunks


def estimate_spoken_duration(
    text: str,
    words_per_minute: int = 150,
    chars_per_word: int = 3,
    min_seconds: float = 10.0,
    max_seconds: float = 45.0,
) -> float:
    """
    Estimate the spoken duration of text from its length.

    Args:
        text: Text to estimate duration for.
        words_per_minute: Average speaking rate (default 150 WPM).
        chars_per_word: Average characters per word (default 3).
        min_seconds: Lower clamp.
        max_seconds: Upper clamp.

    Returns:
        Estimated duration in seconds, clamped to [min_seconds, max_seconds].
    """
    chars_per_minute = words_per_minute * chars_per_word
    seconds = len(text) / chars_per_minute * 60
    return max(min_seconds, min(max_seconds, seconds))
