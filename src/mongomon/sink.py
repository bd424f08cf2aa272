"""Line output for metric reports."""

import sys
from typing import TextIO


class StreamSink:
    """Writes each report to a text stream in a single write."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so a replaced sys.stdout is honoured.
        return self._stream if self._stream is not None else sys.stdout

    def __call__(self, text: str) -> None:
        if not text:
            return
        self.stream.write(text)
        self.stream.flush()
