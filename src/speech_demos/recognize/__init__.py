# SPDX-FileCopyrightText: Copyright (C) ARDUINO SRL (http://www.arduino.cc)
#
# SPDX-License-Identifier: MPL-2.0

from .recognize_client import RecognizeClient, best_transcripts
from .errors import RecognizeClientError, CredentialsError, AudioReadError
from .types import AudioRequest, RecognitionParams, RecognizeError, Result

__all__ = [
    "AudioReadError",
    "AudioRequest",
    "CredentialsError",
    "RecognitionParams",
    "RecognizeClient",
    "RecognizeClientError",
    "RecognizeError",
    "Result",
    "best_transcripts",
]
