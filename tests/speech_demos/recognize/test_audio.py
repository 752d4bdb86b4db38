# SPDX-FileCopyrightText: Copyright (C) ARDUINO SRL (http://www.arduino.cc)
#
# SPDX-License-Identifier: MPL-2.0

from unittest.mock import MagicMock, patch

import pytest
import requests

from speech_demos.recognize import AudioReadError, AudioRequest
from speech_demos.recognize.audio import create_audio_request, load_audio
from conftest import FLAC_BYTES


@pytest.fixture
def mock_get():
    """Fixture for mocking requests.get."""
    with patch("speech_demos.recognize.audio.requests.get") as get:
        response = MagicMock()
        response.content = FLAC_BYTES
        response.raise_for_status.return_value = None
        get.return_value = response
        yield get


def test_load_audio_from_plain_path(audio_file):
    result = load_audio(str(audio_file))

    assert result.ok
    assert result.value.content == FLAC_BYTES
    assert result.value.uri == str(audio_file)
    assert result.value.remote_uri is None
    assert result.value.size == len(FLAC_BYTES)


def test_load_audio_from_file_uri(audio_file):
    result = load_audio(audio_file.as_uri())

    assert result.ok
    assert result.value.content == FLAC_BYTES


def test_load_audio_missing_file_is_an_error(tmp_path):
    result = load_audio(str(tmp_path / "nope.flac"))

    assert not result.ok
    assert result.value is None
    assert result.error.kind == "audio_read"
    assert "nope.flac" in result.error.message


def test_load_audio_directory_is_an_error(tmp_path):
    result = load_audio(str(tmp_path))

    assert result.error.kind == "audio_read"


def test_file_uri_with_remote_host_is_rejected():
    with pytest.raises(AudioReadError, match="Remote file host"):
        create_audio_request("file://fileserver/share/audio.flac")


def test_load_audio_over_http(mock_get):
    result = load_audio("https://example.com/audio.flac", timeout=3)

    assert result.ok
    assert result.value.content == FLAC_BYTES
    mock_get.assert_called_once_with("https://example.com/audio.flac", timeout=3)


def test_load_audio_http_error_is_an_error(mock_get):
    mock_get.return_value.raise_for_status.side_effect = requests.HTTPError("404 Client Error")

    result = load_audio("http://example.com/missing.flac")

    assert result.error.kind == "audio_read"
    assert "404" in result.error.message


def test_load_audio_connection_error_is_an_error(mock_get):
    mock_get.side_effect = requests.ConnectionError("refused")

    result = load_audio("http://example.com/audio.flac")

    assert result.error.kind == "audio_read"


def test_load_audio_gcs_reference_is_not_read():
    result = load_audio("gs://bucket/path/audio.flac")

    assert result.ok
    assert result.value.content is None
    assert result.value.remote_uri == "gs://bucket/path/audio.flac"
    assert result.value.size == 0


def test_load_audio_gcs_without_bucket_is_an_error():
    result = load_audio("gs:///audio.flac")

    assert result.error.kind == "audio_read"


@pytest.mark.parametrize("uri", ["http://[bad/audio.flac", "http://[bad", "file://[::1/audio.flac"])
def test_load_audio_malformed_uri_is_an_error(uri, mock_get):
    result = load_audio(uri)

    assert not result.ok
    assert result.error.kind == "audio_read"
    assert "Cannot resolve audio uri" in result.error.message
    mock_get.assert_not_called()


def test_load_audio_path_with_nul_byte_is_an_error(tmp_path):
    result = load_audio(str(tmp_path / "bad\x00name.flac"))

    assert result.error.kind == "audio_read"


def test_load_audio_unsupported_scheme():
    result = load_audio("ftp://example.com/audio.flac")

    assert result.error.kind == "audio_read"
    assert "Unsupported" in result.error.message


def test_audio_request_requires_one_source():
    with pytest.raises(ValueError):
        AudioRequest(uri="x")
    with pytest.raises(ValueError):
        AudioRequest(uri="x", content=b"a", remote_uri="gs://b/x")


def test_audio_request_is_immutable():
    audio = AudioRequest(uri="x", content=b"a")

    with pytest.raises(AttributeError):
        audio.content = b"b"
