"""Exceptions raised by the wallet manager, the record store and prompts."""

from __future__ import annotations


class WalletError(Exception):
    """Base class for recoverable wallet operation failures."""


class WalletNotFound(WalletError):
    def __init__(self, name: str) -> None:
        super().__init__(f'no wallet "{name}" present')
        self.name = name


class AlreadyActive(WalletError):
    def __init__(self, name: str) -> None:
        super().__init__(f'already switched to wallet "{name}"')
        self.name = name


class AlreadyTracked(WalletError):
    def __init__(self, name: str) -> None:
        super().__init__(f'wallet "{name}" is already known')
        self.name = name


class NotADirectory(WalletError):
    def __init__(self, path: str) -> None:
        super().__init__(f'"{path}" is not a directory')
        self.path = path


class NotAWalletDirectory(WalletError):
    def __init__(self, path: str) -> None:
        super().__init__(f'"{path}" is not a wallet directory')
        self.path = path


class Aborted(WalletError):
    """Raised when a destructive operation was not confirmed."""

    def __init__(self, message: str = "aborted") -> None:
        super().__init__(message)


# ---------------------------------------------------------------------------
# Record store
# ---------------------------------------------------------------------------


class RecordError(Exception):
    """Base class for failures reading the persisted record."""


class RecordNotFound(RecordError):
    pass


class RecordParseError(RecordError):
    pass


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------


class InputClosed(Exception):
    """Raised when interactive input ends before an answer was read."""

    def __init__(self) -> None:
        super().__init__("failed to scan line")
