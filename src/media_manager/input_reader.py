"""Tokenizer for the interactive command loop.

Input is consumed as a character stream, so several commands may share a line
and a command's arguments may continue on following lines, except titles,
which always take the rest of the current line.
"""

from __future__ import annotations

import re
from typing import TextIO

from .domain.result import InputError, RecoveryHint, Result, failure, success
from .domain.value_objects import normalize_title

COMMAND_LENGTH = 2

MSG_UNREADABLE_INTEGER = "Could not read an integer value!"
MSG_UNREADABLE_TITLE = "Could not read a title!"

_INTEGER_PREFIX = re.compile(r"[+-]?[0-9]*")


class InputReader:
    """Reads commands, words, integers and titles from a text stream."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._line = ""
        self._pos = 0

    def _fill(self) -> bool:
        """Make sure unread characters are buffered; False at end of input."""
        while self._pos >= len(self._line):
            line = self._stream.readline()
            if not line:
                return False
            self._line, self._pos = line, 0
        return True

    def skip_whitespace(self) -> None:
        while self._fill():
            if not self._line[self._pos].isspace():
                return
            self._pos += 1

    def read_command(self) -> str:
        """Read two non-whitespace characters.

        Raises:
            EOFError: If input ends first.
        """
        chars = []
        for _ in range(COMMAND_LENGTH):
            self.skip_whitespace()
            if not self._fill():
                raise EOFError("end of input while reading a command")
            chars.append(self._line[self._pos])
            self._pos += 1
        return "".join(chars)

    def read_word(self) -> str:
        """Read a whitespace-delimited word.

        Raises:
            EOFError: If input ends before any character is read.
        """
        self.skip_whitespace()
        if not self._fill():
            raise EOFError("end of input while reading a word")

        start = self._pos
        while self._pos < len(self._line) and not self._line[self._pos].isspace():
            self._pos += 1
        return self._line[start:self._pos]

    def read_int(self) -> Result[int, InputError]:
        """Read an optionally signed integer, stopping at the first non-digit."""
        self.skip_whitespace()
        if not self._fill():
            return failure(InputError(MSG_UNREADABLE_INTEGER))

        match = _INTEGER_PREFIX.match(self._line, self._pos)
        token = match.group(0)
        if not token:
            # the offending character is consumed, like any other read
            self._pos += 1
            return failure(InputError(MSG_UNREADABLE_INTEGER))

        self._pos = match.end()
        if token in ("+", "-"):
            return failure(InputError(MSG_UNREADABLE_INTEGER))
        return success(int(token))

    def read_title(self) -> Result[str, InputError]:
        """Consume the rest of the line as a title with whitespace normalized."""
        title = normalize_title(self.read_line())
        if not title:
            return failure(InputError(MSG_UNREADABLE_TITLE, RecoveryHint.KEEP_LINE))
        return success(title)

    def read_line(self) -> str:
        """Consume and return everything up to and including the next newline."""
        if not self._fill():
            return ""

        rest = self._line[self._pos:]
        self._pos = len(self._line)
        return rest.removesuffix("\n")

    def skip_line(self) -> None:
        self.read_line()
