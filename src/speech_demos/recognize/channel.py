# SPDX-FileCopyrightText: Copyright (C) ARDUINO SRL (http://www.arduino.cc)
#
# SPDX-License-Identifier: MPL-2.0

from __future__ import annotations

from typing import Sequence

import google.auth
import grpc
from google.auth.credentials import Credentials
from google.auth.exceptions import DefaultCredentialsError
from google.auth.transport.grpc import secure_authorized_channel
from google.auth.transport.requests import Request
from google.cloud.speech import SpeechClient
from google.cloud.speech_v1.services.speech.transports import SpeechGrpcTransport

from .types import Result

OAUTH2_SCOPES = ["https://www.googleapis.com/auth/cloud-platform"]


def acquire_credentials(scopes: Sequence[str] = OAUTH2_SCOPES) -> Result[Credentials]:
    """Obtain application default credentials scoped for Cloud Speech.

    Credentials are discovered from the environment, conventionally through
    the GOOGLE_APPLICATION_CREDENTIALS variable pointing to a service account key.
    """
    try:
        credentials, _ = google.auth.default(scopes=list(scopes))
    except DefaultCredentialsError as exc:
        return Result.failure("credentials", f"Failed to obtain application default credentials: {exc}")
    return Result.success(credentials)


def build_channel(host: str, port: int, credentials: Credentials) -> grpc.Channel:
    """Create a TLS channel that attaches a bearer token to every call."""
    return secure_authorized_channel(
        credentials,
        Request(),
        f"{host}:{port}",
        ssl_credentials=grpc.ssl_channel_credentials(),
    )


def build_stub(channel: grpc.Channel, host: str, port: int) -> SpeechClient:
    """Bind a Cloud Speech client to an already authorized channel."""
    transport = SpeechGrpcTransport(host=f"{host}:{port}", channel=channel)
    return SpeechClient(transport=transport)
