"""Tests for the Narration Synthesizer."""

import pytest

from faceless_video.services.media_prober import MediaProber
from faceless_video.services.narration_synthesizer import NarrationSynthesizer


def _long_text(sentences: int) -> str:
    return " ".join(f"Fact number {i} is surprisingly interesting." for i in range(sentences))


def test_single_chunk_becomes_output(settings, logger, engine, tts_factory, media_duration, tmp_path):
    tts = tts_factory(seconds_per_char=0.1)
    synthesizer = NarrationSynthesizer(settings, logger, engine, tts_client=tts)
    output = tmp_path / "tts-narration.mp3"

    synthesized, chunk_count = synthesizer.synthesize("Hello world. Short script.", output)

    assert (synthesized, chunk_count) == (True, 1)
    assert "concat" not in engine.operations()
    assert media_duration(output) == pytest.approx(len("Hello world. Short script.") * 0.1)
    assert not (tmp_path / "tts-chunk-0.mp3").exists()


def test_long_text_is_chunked_and_joined_in_order(settings, logger, engine, tts_factory, media_duration, tmp_path):
    """Test joined narration lasts as long as its chunks combined."""
    tts = tts_factory(seconds_per_char=0.05)
    synthesizer = NarrationSynthesizer(settings, logger, engine, tts_client=tts)
    output = tmp_path / "tts-narration.mp3"
    text = _long_text(12)

    synthesized, chunk_count = synthesizer.synthesize(text, output)

    assert synthesized is True
    assert chunk_count == len(tts.chunks) > 1
    assert all(len(chunk) <= settings.tts_max_chunk_chars for chunk in tts.chunks)
    assert " ".join(tts.chunks) == text

    concat_inputs = engine.concat_lists[-1]
    assert [p.name for p in concat_inputs] == [f"tts-chunk-{i}.mp3" for i in range(chunk_count)]
    assert media_duration(output) == pytest.approx(sum(len(c) for c in tts.chunks) * 0.05)
    # Chunk files and list file are cleaned up after joining
    assert sorted(p.name for p in tmp_path.iterdir()) == ["tts-narration.mp3"]


def test_more_text_never_shortens_narration(settings, logger, engine, tts_factory, tmp_path):
    prober = MediaProber(settings, logger, engine)
    durations = []
    for sentences in (2, 6, 14):
        synthesizer = NarrationSynthesizer(settings, logger, engine, tts_client=tts_factory())
        output = tmp_path / f"narration-{sentences}" / "tts-narration.mp3"
        output.parent.mkdir()
        synthesizer.synthesize(_long_text(sentences), output)
        durations.append(prober.get_duration(output))

    assert durations == sorted(durations)


def test_tts_failure_falls_back_to_silence(settings, logger, engine, tts_factory, media_duration, tmp_path):
    """Test an unreachable TTS service yields a silent track sized from the text."""
    synthesizer = NarrationSynthesizer(settings, logger, engine, tts_client=tts_factory(fail=True))
    output = tmp_path / "tts-narration.mp3"
    text = "x" * 90

    synthesized, _ = synthesizer.synthesize(text, output)

    assert synthesized is False
    assert media_duration(output) == pytest.approx(12.0)


def test_fallback_duration_is_clamped(settings, logger, engine, tts_factory, media_duration, tmp_path):
    synthesizer = NarrationSynthesizer(settings, logger, engine, tts_client=tts_factory(fail=True))

    synthesizer.synthesize("Hi.", tmp_path / "short.mp3")
    synthesizer.synthesize("word " * 500, tmp_path / "long.mp3")

    assert media_duration(tmp_path / "short.mp3") == pytest.approx(settings.tts_fallback_min_seconds)
    assert media_duration(tmp_path / "long.mp3") == pytest.approx(settings.tts_fallback_max_seconds)


def test_failed_join_falls_back_to_silence(settings, logger, engine_factory, tts_factory, media_duration, tmp_path):
    engine = engine_factory(fail_operations=["concat"])
    synthesizer = NarrationSynthesizer(settings, logger, engine, tts_client=tts_factory())

    synthesized, _ = synthesizer.synthesize(_long_text(12), tmp_path / "tts-narration.mp3")

    assert synthesized is False
    assert "generate_silence" in engine.operations()


def test_disabled_provider_falls_back(settings, logger, engine, media_duration, tmp_path):
    # settings fixture uses tts_provider="none"
    synthesizer = NarrationSynthesizer(settings, logger, engine)

    synthesized, _ = synthesizer.synthesize("Offline run. No network here.", tmp_path / "tts-narration.mp3")

    assert synthesized is False
    assert media_duration(tmp_path / "tts-narration.mp3") == pytest.approx(10.0)
