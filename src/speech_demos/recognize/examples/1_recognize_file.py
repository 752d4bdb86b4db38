# SPDX-FileCopyrightText: Copyright (C) ARDUINO SRL (http://www.arduino.cc)
#
# SPDX-License-Identifier: MPL-2.0

# EXAMPLE_NAME = "Transcribe a FLAC file"
# EXAMPLE_REQUIRES = "Requires GOOGLE_APPLICATION_CREDENTIALS pointing to a service account key."
from speech_demos.recognize import RecognizeClient, best_transcripts

with RecognizeClient.from_environment(
    host="speech.googleapis.com",
    port=443,
    uri="file:///tmp/audio.flac",  # Replace with your audio file
    sampling_rate=16000,
) as client:
    result = client.recognize()

if result.ok:
    for text in best_transcripts(result.value):
        print(f"Detected speech: {text}")
else:
    print(f"Recognition failed: {result.error}")
