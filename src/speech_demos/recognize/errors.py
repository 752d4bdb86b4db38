# SPDX-FileCopyrightText: Copyright (C) ARDUINO SRL (http://www.arduino.cc)
#
# SPDX-License-Identifier: MPL-2.0


class RecognizeClientError(Exception):
    """Base exception for recognize client errors."""

    pass


class CredentialsError(RecognizeClientError):
    """Exception raised when application default credentials cannot be obtained."""

    pass


class AudioReadError(RecognizeClientError):
    """Exception raised when the audio uri input cannot be resolved or read."""

    pass
