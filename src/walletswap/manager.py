"""Wallet state machine: rename wallet directories in and out of the active slot.

Only one wallet can be used by the wallet application at a time: the one
whose directory sits at the active slot, ``data``. Every other
wallet lives in a sibling directory named after it::

    TON Wallet/
        data/        <- the active wallet ("main" in the record)
        cold/
        trading/

``WalletManager`` mutates the in-memory ``Record`` and the filesystem in
step. It never saves the record; the caller persists it once an operation
has returned successfully, so a failure halfway leaves the file untouched.
"""

from __future__ import annotations

import logging
import pathlib
import shutil

import walletswap.errors
import walletswap.layout
import walletswap.prompt
import walletswap.store

logger = logging.getLogger("walletswap.manager")

_SLOT = walletswap.layout.ACTIVE_SLOT
_MARKER = walletswap.layout.MARKER_FILE


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------

def is_wallet_dir(root: pathlib.Path, name: str, marker_file: str) -> bool:
    """Return True if ``root/name`` holds the wallet marker file."""
    marker = root / name / marker_file
    return marker.exists() and not marker.is_dir()


def list_wallet_directories(root: pathlib.Path, marker_file: str) -> list[str]:
    """Return the names of all wallet directories directly under *root*.

    Names are sorted so that prompting order is stable between runs.
    """
    return sorted(
        entry.name
        for entry in root.iterdir()
        if is_wallet_dir(root, entry.name, marker_file)
    )


def count_label(count: int) -> str:
    noun = "wallet" if count == 1 else "wallets"
    return f"{count} {noun}"


# ---------------------------------------------------------------------------
# Manager
# ---------------------------------------------------------------------------

class WalletManager:
    """Operations over a wallet record and its wallets directory."""

    def __init__(
        self,
        record: walletswap.store.Record,
        source: walletswap.prompt.InputSource,
    ) -> None:
        self.record = record
        self.source = source

    @property
    def root(self) -> pathlib.Path:
        return pathlib.Path(self.record.wallets_root)

    def _path(self, name: str) -> pathlib.Path:
        return self.root / name

    def _display(self, name: str) -> str:
        return str(pathlib.PurePath(self.root.name, name))

    def _rename(self, src: str, dst: str) -> None:
        self._path(src).rename(self._path(dst))
        logger.debug("Renamed %s -> %s", self._display(src), self._display(dst))

    # -- prompting -----------------------------------------------------------

    def _valid_name(self, name: str, keep: str) -> bool:
        if not name or name == _SLOT or name in (".", ".."):
            return False
        if pathlib.PurePath(name).name != name or "/" in name:
            return False
        if name == keep:
            return True
        return name not in self.record.wallets and not self._path(name).exists()

    def _ask_name(self, message: str, default: str, keep: str) -> str:
        while True:
            name = walletswap.prompt.ask_default(self.source, message, default)
            if self._valid_name(name, keep):
                return name
            logger.error("wallet name invalid")

    def _register(self, dir_name: str, *, exists: bool) -> str:
        """Name and describe the wallet found (or to be created) at *dir_name*."""
        if dir_name == _SLOT:
            name = self._ask_name(
                f'Enter name for the "{dir_name}" wallet '
                f'(can\'t be "{_SLOT}"): ',
                default="",
                keep="",
            )
        else:
            name = self._ask_name(
                f'Enter name for the "{dir_name}" wallet '
                f'(can\'t be "{_SLOT}"; leave empty to keep the name): ',
                default=dir_name,
                keep=dir_name,
            )
            if exists and name != dir_name:
                self._rename(dir_name, name)

        description = self.source.ask(f'Enter description for the "{name}" wallet: ')
        self.record.wallets[name] = description
        return name

    def _activate_first(self) -> None:
        """Activate the lexicographically smallest wallet, if any."""
        if self.record.wallets:
            self.switch(min(self.record.wallets))

    # -- operations ----------------------------------------------------------

    def init(self) -> None:
        """Rebuild the wallet set from the directories on disk."""
        found = list_wallet_directories(self.root, _MARKER)
        logger.info("%s located", count_label(len(found)))

        self.record.wallets = {}
        self.record.active_wallet = ""
        for dir_name in found:
            name = self._register(dir_name, exists=True)
            if dir_name == _SLOT:
                self.record.active_wallet = name

        if not self.record.active_wallet:
            self._activate_first()

    def switch(self, name: str) -> None:
        """Move the active wallet out of the slot and *name* into it."""
        record = self.record
        if name == record.active_wallet:
            raise walletswap.errors.AlreadyActive(name)
        if name not in record.wallets:
            raise walletswap.errors.WalletNotFound(name)

        if record.active_wallet:
            self._rename(_SLOT, record.active_wallet)
        try:
            self._rename(name, _SLOT)
        except FileNotFoundError:
            # A wallet that was never materialized on disk
            logger.debug("No directory for %s, nothing to move", name)
        record.active_wallet = name
        logger.info('Switched to wallet "%s"', name)

    def edit(self, name: str) -> None:
        """Rename and/or redescribe wallet *name*."""
        record = self.record
        if name not in record.wallets:
            raise walletswap.errors.WalletNotFound(name)

        new_name = self._ask_name(
            f'Enter new name for the "{name}" wallet '
            f'(can\'t be "{_SLOT}"; leave empty to keep the name): ',
            default=name,
            keep=name,
        )
        description = walletswap.prompt.ask_default(
            self.source,
            f'Enter description for the "{name}" ("{new_name}") wallet '
            "(leave empty to keep the description): ",
            record.wallets[name],
        )

        if record.active_wallet == name:
            record.active_wallet = new_name
        elif new_name != name:
            self._rename(name, new_name)

        record.wallets[new_name] = description
        if new_name != name:
            del record.wallets[name]

    def add(self, dir_name: str) -> str:
        """Track the wallet directory *dir_name* (or a new one) and activate it.

        Returns the name the wallet was registered under.
        """
        record = self.record
        if dir_name in record.wallets or (
            dir_name == _SLOT and record.active_wallet
        ):
            raise walletswap.errors.AlreadyTracked(dir_name)
        if not dir_name or pathlib.PurePath(dir_name).name != dir_name:
            raise walletswap.errors.NotAWalletDirectory(dir_name)

        path = self._path(dir_name)
        exists = path.exists()
        if exists:
            if not path.is_dir():
                raise walletswap.errors.NotADirectory(self._display(dir_name))
            if not is_wallet_dir(self.root, dir_name, _MARKER):
                raise walletswap.errors.NotAWalletDirectory(self._display(dir_name))

        name = self._register(dir_name, exists=exists)
        if dir_name == _SLOT:
            # Already sitting in the slot, only the record was missing it
            record.active_wallet = name
        else:
            self.switch(name)

        if not exists:
            self._path(_SLOT).mkdir(exist_ok=True)
            logger.info('Created empty directory for new wallet "%s"', name)
        return name

    def forget(self, name: str) -> None:
        """Stop tracking *name*; its directory stays on disk."""
        record = self.record
        if name not in record.wallets:
            raise walletswap.errors.WalletNotFound(name)

        if name != record.active_wallet:
            del record.wallets[name]
            return

        try:
            self._rename(_SLOT, name)
        except FileNotFoundError:
            logger.debug("Active slot missing while forgetting %s", name)
        del record.wallets[name]
        record.active_wallet = ""
        self._activate_first()

    def remove(self, name: str) -> None:
        """Forget *name* and delete its directory after confirmation."""
        if name not in self.record.wallets:
            raise walletswap.errors.WalletNotFound(name)

        answer = self.source.ask(
            f'This deletes "{self._display(name)}" for good. '
            'Type "yes" to remove it: '
        )
        if answer != "yes":
            raise walletswap.errors.Aborted(f'wallet "{name}" was not removed')

        self.forget(name)
        try:
            shutil.rmtree(self._path(name))
        except FileNotFoundError:
            logger.debug("Directory for %s already gone", name)
        logger.info('Removed wallet "%s"', name)

    def status(self) -> str:
        """Return a listing of all wallets, marking the active one."""
        record = self.record
        lines = [f"{count_label(len(record.wallets))}:"]
        for name in sorted(record.wallets):
            description = record.wallets[name]
            if name == record.active_wallet:
                description += " (current)"
            lines.append(f"{name}: {description}")
        return "\n".join(lines)

    def problems(self) -> list[str]:
        """Describe every mismatch between the record and the disk."""
        record = self.record
        marker = _MARKER
        found: list[str] = []

        if not self.root.is_dir():
            return [f'wallets directory "{self.root}" does not exist']

        if record.active_wallet and record.active_wallet not in record.wallets:
            found.append(f'current wallet "{record.active_wallet}" is not known')
        if _SLOT in record.wallets:
            found.append(f'"{_SLOT}" is used as a wallet name')

        slot_exists = self._path(_SLOT).is_dir()
        if record.active_wallet and not slot_exists:
            found.append(
                f'current wallet "{record.active_wallet}" has no '
                f'"{self._display(_SLOT)}" directory'
            )
        if not record.active_wallet and slot_exists:
            found.append(f'"{self._display(_SLOT)}" exists but no wallet is current')

        for name in sorted(record.wallets):
            if name == record.active_wallet:
                continue
            if not self._path(name).is_dir():
                found.append(f'"{self._display(name)}" is missing')
            elif not is_wallet_dir(self.root, name, marker):
                found.append(f'"{self._display(name)}" is not a wallet directory')

        for dir_name in list_wallet_directories(self.root, marker):
            if dir_name != _SLOT and dir_name not in record.wallets:
                found.append(f'"{self._display(dir_name)}" is not tracked')
        return found
