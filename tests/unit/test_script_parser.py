"""Tests for the script parser."""

from faceless_video.services.script_parser import parse_viral_script


def test_parse_all_sections():
    text = """SCRIPT:
Did you know octopuses have three hearts? Stay tuned.

CAPTION:
Ocean facts you never knew

HASHTAGS:
#ocean #facts #shorts
"""
    parsed = parse_viral_script(text)

    assert parsed.script == "Did you know octopuses have three hearts? Stay tuned."
    assert parsed.caption == "Ocean facts you never knew"
    assert parsed.hashtags == "#ocean #facts #shorts"


def test_markers_are_case_insensitive():
    parsed = parse_viral_script("script:\nHello there.\ncaption:\nHi\nhashtags:\n#a")

    assert parsed.script == "Hello there."
    assert parsed.caption == "Hi"
    assert parsed.hashtags == "#a"


def test_long_caption_is_truncated():
    caption = "c" * 200
    parsed = parse_viral_script(f"SCRIPT:\nBody.\nCAPTION:\n{caption}\nHASHTAGS:\n#x")

    assert len(parsed.caption) == 150
    assert parsed.caption.endswith("...")


def test_missing_script_marker_uses_whole_text():
    text = "Just some free-form text the model returned."
    parsed = parse_viral_script(text)

    assert parsed.script == text
    assert parsed.caption == text + "..."
    assert parsed.hashtags == "#viral #shorts"


def test_script_without_side_sections():
    parsed = parse_viral_script("SCRIPT:\nOnly narration here.")

    assert parsed.script == "Only narration here."
    assert parsed.caption == ""
    assert parsed.hashtags == ""
