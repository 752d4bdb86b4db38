# SPDX-FileCopyrightText: Copyright (C) ARDUINO SRL (http://www.arduino.cc)
#
# SPDX-License-Identifier: MPL-2.0

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Optional, Union

import grpc
from google.api_core.exceptions import GoogleAPICallError
from google.auth.credentials import Credentials
from google.cloud.speech import RecognizeRequest, RecognizeResponse
from google.protobuf import text_format

from speech_demos.app_utils import Logger

from .audio import load_audio
from .channel import acquire_credentials, build_channel, build_stub
from .errors import CredentialsError
from .types import AudioRequest, RecognitionParams, Result

DEFAULT_LANGUAGE = "ja-JP"
SHUTDOWN_TIMEOUT = 5.0

LoggerLike = Union[Logger, logging.Logger]


def build_request(audio: AudioRequest, params: RecognitionParams) -> RecognizeRequest:
    return RecognizeRequest(
        config=params.to_config(),
        audio=audio.to_recognition_audio(),
    )


def format_response(response: RecognizeResponse) -> str:
    """Render a response in protobuf text format."""
    return text_format.MessageToString(RecognizeResponse.pb(response), as_utf8=True)


def best_transcripts(response: RecognizeResponse) -> list[str]:
    transcripts = []
    for result in response.results:
        if not result.alternatives:
            continue
        # First alternative is the most probable one
        transcript = (result.alternatives[0].transcript or "").strip()
        if transcript:
            transcripts.append(transcript)
    return transcripts


def _status_of(exc: GoogleAPICallError) -> str:
    code = exc.grpc_status_code
    if code is not None:
        return f"{code.name}: {exc.message}"
    return f"{exc.code}: {exc.message}"


class RecognizeClient:
    """
    Client that sends audio to Cloud Speech Recognize and logs the transcript.

    The channel is built once in the constructor and owned by the client until
    shutdown() releases it. Use the client as a context manager so the channel
    is closed on every exit path.

    Args:
        host (str): Cloud Speech endpoint, e.g. speech.googleapis.com.
        port (int): TLS port, usually 443.
        uri (str): Audio uri input (local path, file://, http(s):// or gs://).
        sampling_rate (int): Sample rate of the audio in Hz.
        credentials (Credentials): Scoped application default credentials.
        language_code (str): BCP-47 language tag of the speech.
        logger (Logger | logging.Logger | None): Logger receiving the client output.
        channel_factory (Callable): Builds the authorized channel.
        stub_factory (Callable): Builds the Speech stub on top of the channel.
    """

    def __init__(
        self,
        host: str,
        port: int,
        uri: str,
        sampling_rate: int,
        credentials: Credentials,
        language_code: str = DEFAULT_LANGUAGE,
        logger: Optional[LoggerLike] = None,
        channel_factory: Callable[[str, int, Credentials], grpc.Channel] = build_channel,
        stub_factory: Callable[[grpc.Channel, str, int], Any] = build_stub,
    ):
        self.host = host
        self.port = port
        self.uri = uri
        self.params = RecognitionParams(sample_rate=sampling_rate, language_code=language_code)
        self._logger = logger if logger is not None else Logger(__name__)

        self._channel = channel_factory(host, port, credentials)
        self._stub = stub_factory(self._channel, host, port)
        self._shutdown_lock = threading.Lock()
        self._closed = False
        self._logger.info(f"Created stub for {host}:{port}")

    @classmethod
    def from_environment(cls, host: str, port: int, uri: str, sampling_rate: int, **kwargs) -> RecognizeClient:
        """Build a client using application default credentials.

        Raises:
            CredentialsError: If no credentials can be found in the environment.
        """
        credentials = acquire_credentials()
        if not credentials.ok:
            raise CredentialsError(credentials.error.message)
        return cls(host, port, uri, sampling_rate, credentials=credentials.value, **kwargs)

    @property
    def closed(self) -> bool:
        return self._closed

    def recognize(self) -> Result[RecognizeResponse]:
        """Send one recognize request to the server.

        Audio read and RPC failures are logged as warnings and returned as
        errors; nothing is retried.

        Returns:
            Result[RecognizeResponse]: The response, or the failure that stopped the call.
        """
        if self._closed:
            raise RuntimeError("RecognizeClient is shut down.")

        audio = load_audio(self.uri)
        if not audio.ok:
            self._logger.warning(f"Failed to read audio uri input: {self.uri}")
            return Result(error=audio.error)

        if audio.value.remote_uri is not None:
            self._logger.info(f"Sending audio uri reference: {audio.value.remote_uri}")
        else:
            self._logger.info(f"Sending {audio.value.size} bytes from audio uri input: {self.uri}")

        request = build_request(audio.value, self.params)
        try:
            response = self._stub.recognize(request=request, retry=None, timeout=None)
        except GoogleAPICallError as exc:
            status = _status_of(exc)
            self._logger.warning(f"RPC failed: {status}")
            return Result.failure("rpc", exc.message, status=status)

        self._logger.info(f"Received response: {format_response(response)}")
        return Result.success(response)

    def shutdown(self, timeout: float = SHUTDOWN_TIMEOUT) -> bool:
        """Close the channel, waiting at most `timeout` seconds.

        Returns:
            bool: False if the close did not complete in time.
        """
        with self._shutdown_lock:
            if self._closed:
                return True
            self._closed = True

        closer = threading.Thread(target=self._channel.close, daemon=True)
        closer.start()
        closer.join(timeout=timeout)
        if closer.is_alive():
            self._logger.warning(f"Channel to {self.host}:{self.port} not closed after {timeout}s, proceeding.")
            return False
        self._logger.info(f"Channel to {self.host}:{self.port} closed.")
        return True

    def __enter__(self) -> RecognizeClient:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.shutdown()
