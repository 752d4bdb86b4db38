# SPDX-FileCopyrightText: Copyright (C) ARDUINO SRL (http://www.arduino.cc)
#
# SPDX-License-Identifier: MPL-2.0

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Literal, TypeVar

from google.cloud.speech import RecognitionAudio, RecognitionConfig

RecognizeErrorKind = Literal[
    "usage",
    "credentials",
    "audio_read",
    "rpc",
]

T = TypeVar("T")


@dataclass(frozen=True)
class RecognizeError:
    kind: RecognizeErrorKind
    message: str
    status: str | None = None

    def __str__(self) -> str:
        if self.status:
            return f"{self.kind}: {self.message} ({self.status})"
        return f"{self.kind}: {self.message}"


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a value or a RecognizeError, never both."""

    value: T | None = None
    error: RecognizeError | None = None

    def __post_init__(self):
        if self.value is not None and self.error is not None:
            raise ValueError("Result cannot carry both a value and an error.")

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> Result[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, kind: RecognizeErrorKind, message: str, status: str | None = None) -> Result[T]:
        return cls(error=RecognizeError(kind=kind, message=message, status=status))


@dataclass(frozen=True)
class AudioRequest:
    """Audio payload to transcribe.

    Attributes:
        uri: The audio uri input as given by the caller.
        content: Raw encoded audio bytes, for sources read locally.
        remote_uri: Cloud Storage reference the service reads by itself.
    """

    uri: str
    content: bytes | None = None
    remote_uri: str | None = None

    def __post_init__(self):
        if (self.content is None) == (self.remote_uri is None):
            raise ValueError("AudioRequest needs exactly one of content or remote_uri.")

    @property
    def size(self) -> int:
        return len(self.content) if self.content is not None else 0

    def to_recognition_audio(self) -> RecognitionAudio:
        if self.remote_uri is not None:
            return RecognitionAudio(uri=self.remote_uri)
        return RecognitionAudio(content=self.content)


@dataclass(frozen=True)
class RecognitionParams:
    sample_rate: int
    language_code: str = "ja-JP"
    encoding: RecognitionConfig.AudioEncoding = RecognitionConfig.AudioEncoding.FLAC

    def to_config(self) -> RecognitionConfig:
        return RecognitionConfig(
            encoding=self.encoding,
            sample_rate_hertz=self.sample_rate,
            language_code=self.language_code,
        )
