"""Interactive input sources.

The wallet manager never reads stdin directly: it asks an input source.
``ConsoleInput`` reads the terminal, ``ScriptedInput`` replays fixed answers.
"""

from __future__ import annotations

import collections
import sys
from typing import Iterable, Protocol

import walletswap.errors


class InputSource(Protocol):
    def ask(self, message: str) -> str: ...


class ConsoleInput:
    """Read answers from stdin, printing each question to stdout."""

    def ask(self, message: str) -> str:
        sys.stdout.write(message)
        sys.stdout.flush()
        line = sys.stdin.readline()
        if not line:
            raise walletswap.errors.InputClosed()
        return line.rstrip("\r\n")


class ScriptedInput:
    """Replay a fixed sequence of answers.

    Every question asked is kept in ``asked`` so callers can check what
    was prompted.
    """

    def __init__(self, answers: Iterable[str] = ()) -> None:
        self._answers = collections.deque(answers)
        self.asked: list[str] = []

    @property
    def remaining(self) -> int:
        return len(self._answers)

    def ask(self, message: str) -> str:
        self.asked.append(message)
        if not self._answers:
            raise walletswap.errors.InputClosed()
        return self._answers.popleft()


def ask_default(source: InputSource, message: str, default: str) -> str:
    """Ask *message*; an empty answer keeps *default*."""
    answer = source.ask(message)
    return answer if answer else default
