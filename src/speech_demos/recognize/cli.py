# SPDX-FileCopyrightText: Copyright (C) ARDUINO SRL (http://www.arduino.cc)
#
# SPDX-License-Identifier: MPL-2.0

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import Callable, NoReturn, Optional, Sequence

from speech_demos.app_utils import Logger

from .channel import acquire_credentials
from .recognize_client import RecognizeClient

logger = Logger(__name__)

USAGE_EXIT_CODE = 1
MAX_PORT = 65535
# Largest value the int32 sample_rate_hertz field accepts
MAX_SAMPLE_RATE = 2**31 - 1

# Checked in this order; the message names the purpose of the missing option.
REQUIRED_OPTIONS = (
    ("uri", "An Audio uri must be specified (e.g. file:///foo/baz.raw)."),
    ("host", "An API endpoint must be specified (typically speech.googleapis.com)."),
    ("port", "An SSL port must be specified (typically 443)."),
    ("sampling", "An Audio sampling rate must be specified."),
)


@dataclass(frozen=True)
class RecognizeArgs:
    uri: str
    host: str
    port: int
    sampling: int


class ArgumentParser(argparse.ArgumentParser):
    """argparse parser that reports usage errors with exit code 1."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(USAGE_EXIT_CODE, f"{self.prog}: error: {message}\n")


def _bounded_integer(low: int, high: int) -> Callable[[str], int]:
    def _parse(value: str) -> int:
        try:
            number = int(value)
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from None
        if not low <= number <= high:
            raise argparse.ArgumentTypeError(f"value out of range [{low}, {high}]: {value!r}")
        return number

    return _parse


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="nonstreaming-recognize",
        description="Send audio to Cloud Speech Recognize and log the transcription.",
    )
    parser.add_argument("--uri", metavar="FILE_PATH", help="path to audio uri")
    parser.add_argument("--host", metavar="ENDPOINT", help="endpoint for api, e.g. speech.googleapis.com")
    parser.add_argument("--port", metavar="PORT", type=_bounded_integer(1, MAX_PORT), help="SSL port, usually 443")
    parser.add_argument("--sampling", metavar="RATE", type=_bounded_integer(1, MAX_SAMPLE_RATE), help="Sampling Rate, i.e. 16000")
    return parser


def resolve_arguments(argv: Optional[Sequence[str]] = None) -> RecognizeArgs:
    """Parse the command line, exiting with code 1 on any usage error."""
    parser = build_parser()
    namespace = parser.parse_args(argv)
    for name, purpose in REQUIRED_OPTIONS:
        if getattr(namespace, name) is None:
            parser.error(purpose)
    return RecognizeArgs(
        uri=namespace.uri,
        host=namespace.host,
        port=namespace.port,
        sampling=namespace.sampling,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = resolve_arguments(argv)

    credentials = acquire_credentials()
    if not credentials.ok:
        logger.error(str(credentials.error))
        return 1

    with RecognizeClient(
        host=args.host,
        port=args.port,
        uri=args.uri,
        sampling_rate=args.sampling,
        credentials=credentials.value,
        logger=logger,
    ) as client:
        client.recognize()
    return 0
