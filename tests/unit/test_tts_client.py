"""Tests for the TTS client."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from faceless_video.core.config import Settings
from faceless_video.core.exceptions import TTSError
from faceless_video.services.tts_client import TTSClient


def test_auto_provider_detection(logger):
    assert TTSClient(Settings(tts_provider="auto", elevenlabs_api_key=None), logger).provider == "google"
    assert TTSClient(Settings(tts_provider="auto", elevenlabs_api_key="key"), logger).provider == "elevenlabs"
    assert TTSClient(Settings(tts_provider="none"), logger).provider == "none"


@patch("faceless_video.services.tts_client.requests.get")
def test_google_tts_writes_audio(mock_get, logger, tmp_path):
    mock_get.return_value = MagicMock(status_code=200, content=b"ID3 speech")
    client = TTSClient(Settings(tts_provider="google"), logger)
    output = tmp_path / "chunk.mp3"

    client.generate_speech("Hello world.", output)

    assert output.read_bytes() == b"ID3 speech"
    params = mock_get.call_args.kwargs["params"]
    assert params["q"] == "Hello world."
    assert params["tl"] == "en"
    assert params["textlen"] == len("Hello world.")


@patch("faceless_video.services.tts_client.requests.get")
def test_google_tts_network_error(mock_get, logger, tmp_path):
    mock_get.side_effect = requests.exceptions.ConnectionError("no route to host")
    client = TTSClient(Settings(tts_provider="google"), logger)

    with pytest.raises(TTSError, match="Network error"):
        client.generate_speech("Hello.", tmp_path / "chunk.mp3")


@patch("faceless_video.services.tts_client.requests.get")
def test_google_tts_bad_status(mock_get, logger, tmp_path):
    mock_get.return_value = MagicMock(status_code=429, content=b"")
    client = TTSClient(Settings(tts_provider="google"), logger)

    with pytest.raises(TTSError, match="429"):
        client.generate_speech("Hello.", tmp_path / "chunk.mp3")


@patch("faceless_video.services.tts_client.requests.post")
def test_elevenlabs_requires_voice(mock_post, logger, tmp_path):
    client = TTSClient(Settings(tts_provider="elevenlabs", elevenlabs_api_key="key", elevenlabs_voice_id=None), logger)

    with pytest.raises(TTSError, match="voice ID"):
        client.generate_speech("Hello.", tmp_path / "chunk.mp3")
    mock_post.assert_not_called()


def test_empty_text_rejected(logger, tmp_path):
    with pytest.raises(ValueError):
        TTSClient(Settings(tts_provider="google"), logger).generate_speech("   ", tmp_path / "chunk.mp3")
