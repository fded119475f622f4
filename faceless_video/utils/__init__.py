"""Utility functions for the Faceless Video Factory."""

from faceless_video.utils.io_utils import create_workspace, run_timestamp, slugify
from faceless_video.utils.text_utils import chunk_text, estimate_spoken_duration, split_sentences

__all__ = [
    "create_workspace",
    "run_timestamp",
    "slugify",
    "chunk_text",
    "estimate_spoken_duration",
    "split_sentences",
]
