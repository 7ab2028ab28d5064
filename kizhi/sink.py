"""Line sinks — destinations for every line of debugger output."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TextIO

from . import constants


class LineSink(ABC):
    """Receives output one record at a time."""

    @abstractmethod
    def write_line(self, text: str) -> None: ...


class StreamSink(LineSink):
    """Writes each line to a text stream followed by a line terminator.

    Text-mode streams translate ``"\\n"`` to the host's native terminator.
    """

    def __init__(
        self, stream: TextIO, terminator: str = constants.DEFAULT_LINE_TERMINATOR
    ):
        self._stream = stream
        self._terminator = terminator

    def write_line(self, text: str) -> None:
        self._stream.write(text + self._terminator)


class BufferSink(LineSink):
    """Collects lines in memory."""

    def __init__(self):
        self.lines: list[str] = []

    def write_line(self, text: str) -> None:
        self.lines.append(text)
