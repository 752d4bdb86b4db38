# SPDX-FileCopyrightText: Copyright (C) ARDUINO SRL (http://www.arduino.cc)
#
# SPDX-License-Identifier: MPL-2.0

"""
Pytest configuration for the recognize client tests.

Channel and stub are replaced by in-memory fakes so no network access or
application default credentials are needed.
"""

from __future__ import annotations

import threading
from unittest.mock import MagicMock

import pytest
from google.cloud.speech import RecognizeResponse, SpeechRecognitionAlternative, SpeechRecognitionResult

from speech_demos.recognize import RecognizeClient

HOST = "speech.example.com"
PORT = 443
FLAC_BYTES = b"fLaC\x00\x00\x00\x22" + b"\x01" * 64


class FakeChannel:
    """Channel stub counting close() calls, optionally blocking inside close()."""

    def __init__(self, release: threading.Event | None = None):
        self.close_calls = 0
        self._release = release

    def close(self):
        self.close_calls += 1
        if self._release is not None:
            self._release.wait()


class FakeStub:
    """Speech stub recording requests and returning a canned response or raising."""

    def __init__(self, response=None, error: Exception | None = None):
        self.response = response if response is not None else RecognizeResponse()
        self.error = error
        self.requests = []
        self.call_kwargs = []

    def recognize(self, request=None, **kwargs):
        self.requests.append(request)
        self.call_kwargs.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


def make_response(*transcripts: str) -> RecognizeResponse:
    return RecognizeResponse(
        results=[
            SpeechRecognitionResult(alternatives=[SpeechRecognitionAlternative(transcript=text, confidence=0.9)])
            for text in transcripts
        ]
    )


@pytest.fixture
def audio_file(tmp_path):
    path = tmp_path / "audio.flac"
    path.write_bytes(FLAC_BYTES)
    return path


@pytest.fixture
def fake_channel():
    return FakeChannel()


@pytest.fixture
def fake_stub():
    return FakeStub(response=make_response("こんにちは"))


@pytest.fixture
def mock_logger():
    return MagicMock()


@pytest.fixture
def make_client(fake_channel, fake_stub, mock_logger):
    def _factory(uri, sampling_rate: int = 16000, channel=None, stub=None, logger=None):
        return RecognizeClient(
            host=HOST,
            port=PORT,
            uri=str(uri),
            sampling_rate=sampling_rate,
            credentials=MagicMock(),
            logger=logger if logger is not None else mock_logger,
            channel_factory=lambda host, port, credentials: channel or fake_channel,
            stub_factory=lambda ch, host, port: stub or fake_stub,
        )

    return _factory


def warnings_of(mock_logger) -> list[str]:
    return [call.args[0] for call in mock_logger.warning.call_args_list]


def infos_of(mock_logger) -> list[str]:
    return [call.args[0] for call in mock_logger.info.call_args_list]
