"""Terminal prompts and messages for the interactive client."""

from __future__ import annotations

import sys
from collections import deque
from typing import TextIO


class Console:
    """Reads answers from *stdin* and writes to *stdout* and *stderr*."""

    def __init__(
        self,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stderr = stderr if stderr is not None else sys.stderr
        self._words: deque[str] = deque()

    def _read_line(self) -> str:
        line = self.stdin.readline()
        if line == "":
            raise EOFError("no more input")
        return line

    def ask(self, prompt: str) -> str:
        """Show *prompt* and return the next input line without its newline.

        Words left over from ``ask_word`` are discarded. Raises EOFError at the
        end of input.
        """
        self.say(prompt)
        self._words.clear()
        line = self._read_line()
        return line[:-1] if line.endswith("\n") else line

    def ask_word(self, prompt: str) -> str:
        """Show *prompt* and return the next whitespace-separated word.

        Blank lines are skipped; further words on the same line are kept for
        the next call. Raises EOFError at the end of input.
        """
        self.say(prompt)
        while not self._words:
            self._words.extend(self._read_line().split())
        return self._words.popleft()

    def say(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def warn(self, text: str) -> None:
        self.stderr.write(text)
        self.stderr.flush()