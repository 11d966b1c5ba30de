"""Fillers that turn input text into request values."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Iterator, Optional, TextIO

_JSON_WHITESPACE = " \t\n\r"


class CodecMismatchError(ValueError):
    """The input cannot be interpreted with the expected codec."""

    def __init__(self, message: str = "unsupported codec") -> None:
        super().__init__(message)


@dataclass
class InteractiveFillerOpts:
    """Options for interactive filling."""

    # Ask whether to dig down when a message field is encountered.
    dig_manually: bool = False
    # Treat bytes input as a path to a file whose contents are used.
    bytes_from_file: bool = False
    # Ask whether to add another value when a repeated field is encountered.
    add_repeated_manually: bool = False


class SilentFiller:
    """Reads successive JSON values from a stream without any interaction."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._buffer: Optional[str] = None
        self._pos = 0
        self._decoder = json.JSONDecoder()

    def _load(self) -> str:
        if self._buffer is None:
            data = self._stream.read()
            if isinstance(data, (bytes, bytearray)):
                data = bytes(data).decode("utf-8")
            self._buffer = data
        return self._buffer

    def fill(self) -> Any:
        """Return the next JSON value.

        Raises EOFError at the end of input and CodecMismatchError when the
        input is not valid JSON.
        """
        text = self._load()
        pos = self._pos
        while pos < len(text) and text[pos] in _JSON_WHITESPACE:
            pos += 1
        self._pos = pos
        if pos >= len(text):
            raise EOFError("end of input")
        try:
            value, end = self._decoder.raw_decode(text, pos)
        except json.JSONDecodeError as exc:
            if exc.pos >= len(text):
                raise ValueError("failed to read input as JSON: unexpected end of input") from exc
            raise CodecMismatchError() from exc
        self._pos = end
        return value

    def __iter__(self) -> Iterator[Any]:
        while True:
            try:
                yield self.fill()
            except EOFError:
                return