# SPDX-FileCopyrightText: Copyright (C) ARDUINO SRL (http://www.arduino.cc)
#
# SPDX-License-Identifier: MPL-2.0

from __future__ import annotations

from pathlib import Path
from urllib.parse import urlparse
from urllib.request import url2pathname

import requests

from speech_demos.app_utils import Logger

from .errors import AudioReadError
from .types import AudioRequest, Result

logger = Logger(__name__)

HTTP_TIMEOUT = 30.0
LOCAL_SCHEMES = ("", "file")
HTTP_SCHEMES = ("http", "https")
GCS_SCHEME = "gs"


def _read_local(uri: str) -> bytes:
    parsed = urlparse(uri)
    if parsed.scheme == "file":
        if parsed.netloc not in ("", "localhost"):
            raise AudioReadError(f"Remote file host not supported: {parsed.netloc}")
        path = Path(url2pathname(parsed.path))
    else:
        path = Path(uri).expanduser()

    try:
        return path.read_bytes()
    except OSError as exc:
        raise AudioReadError(f"Cannot read {path}: {exc}") from exc


def _read_http(uri: str, timeout: float) -> bytes:
    try:
        response = requests.get(uri, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise AudioReadError(f"Cannot download {uri}: {exc}") from exc
    return response.content


def create_audio_request(uri: str, timeout: float = HTTP_TIMEOUT) -> AudioRequest:
    """Resolve an audio uri input into an AudioRequest.

    Local paths and ``file://`` URIs are read from disk, ``http(s)://`` URIs are
    downloaded, and ``gs://`` URIs are passed through for the service to fetch.

    Raises:
        AudioReadError: If the uri cannot be resolved or read.
    """
    try:
        return _resolve(uri, timeout)
    except (ValueError, RuntimeError) as exc:
        # Malformed URIs, unresolvable home directories and NUL bytes in paths
        raise AudioReadError(f"Cannot resolve audio uri {uri!r}: {exc}") from exc


def _resolve(uri: str, timeout: float) -> AudioRequest:
    scheme = urlparse(uri).scheme.lower()
    # Single letters are Windows drive letters, not schemes
    if len(scheme) == 1:
        scheme = ""

    if scheme in LOCAL_SCHEMES:
        return AudioRequest(uri=uri, content=_read_local(uri))
    if scheme in HTTP_SCHEMES:
        return AudioRequest(uri=uri, content=_read_http(uri, timeout))
    if scheme == GCS_SCHEME:
        if not urlparse(uri).netloc:
            raise AudioReadError(f"Missing bucket in Cloud Storage uri: {uri}")
        return AudioRequest(uri=uri, remote_uri=uri)
    raise AudioReadError(f"Unsupported audio uri scheme: {scheme}")


def load_audio(uri: str, timeout: float = HTTP_TIMEOUT) -> Result[AudioRequest]:
    """Load the audio uri input, returning the read failure instead of raising it."""
    try:
        audio = create_audio_request(uri, timeout=timeout)
    except AudioReadError as exc:
        logger.debug(f"Audio read error: {exc}")
        return Result.failure("audio_read", str(exc))
    return Result.success(audio)
