"""I/O utility functions for file and directory operations."""

import re
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Optional


def slugify(text: str) -> str:
    """
    Convert text to a filesystem-safe slug.

    Args:
        text: Input text to slugify.

    Returns:
        Filesystem-safe slug string.
    """
    text = text.lower()
    text = re.sub(r"[^\w\s-]", "", text)
    text = re.sub(r"[-\s]+", "-", text)
    text = text.strip("-")
    if len(text) > 100:
        text = text[:100].rstrip("-")
    return text


def run_timestamp(moment: Optional[datetime] = None) -> str:
    """Format a run start time as YYYYMMDD_HHmmss."""
    return (moment or datetime.now()).strftime("%Y%m%d_%H%M%S")


def create_workspace(output_dir: Path, timestamp: str) -> Path:
    """
    Create a uniquely named temporary workspace under the output directory.

    Args:
        output_dir: Permanent output directory (created if missing).
        timestamp: Run timestamp used as the directory prefix.

    Returns:
        Path to the created directory.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    return Path(tempfile.mkdtemp(prefix=f"temp-{timestamp}-", dir=output_dir))


def first_file_with_suffix(directory: Path, suffix: str) -> Optional[Path]:
    """Return the alphabetically first file in directory with the given suffix, if any."""
    if not directory.is_dir():
        return None
    matches = sorted(p for p in directory.iterdir() if p.is_file() and p.suffix.lower() == suffix)
    return matches[0] if matches else None


def concat_list_line(path: Path) -> str:
    """Format one entry of an ffmpeg concat list file."""
    escaped = str(path.resolve()).replace("'", "'\\''")
    return f"file '{escaped}'"
