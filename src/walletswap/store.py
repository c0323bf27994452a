"""Persisted wallet record.

The record lives in a tab-indented JSON file::

    {
    	"wallet-directory": "/home/me/.local/share/TON Wallet",
    	"current-wallet": "main",
    	"wallets": {"main": "daily use", "cold": "savings"}
    }

This module only (de)serializes and locates the file. All state
transitions belong to ``walletswap.manager``.
"""

from __future__ import annotations

import dataclasses
import json
import logging
import os
import pathlib

import walletswap.config
import walletswap.errors
import walletswap.layout

logger = logging.getLogger("walletswap.store")

RECORD_FILE = pathlib.PurePosixPath(
    walletswap.config.APP_DIR_NAME, "ton-wallet-switcher.json"
)
_FILE_MODE = 0o660


@dataclasses.dataclass
class Record:
    wallets_root: str = ""
    active_wallet: str = ""
    wallets: dict[str, str] = dataclasses.field(default_factory=dict)
    # Where the record is read from and written to; not persisted.
    path: pathlib.Path | None = dataclasses.field(default=None, compare=False)

    def to_dict(self) -> dict:
        return {
            "wallet-directory": self.wallets_root,
            "current-wallet": self.active_wallet,
            "wallets": dict(self.wallets),
        }


def config_file_path() -> pathlib.Path:
    """Return the record path, creating its directory if needed.

    An existing record under $XDG_CONFIG_HOME wins, then one found in
    $XDG_CONFIG_DIRS. Otherwise the $XDG_CONFIG_HOME location is returned
    (the file itself is created on first save).

    Raises ``OSError`` when the directory cannot be created.
    """
    user_path = walletswap.config.config_home() / RECORD_FILE
    if user_path.is_file():
        return user_path
    for base in walletswap.config.config_dirs():
        candidate = base / RECORD_FILE
        if candidate.is_file():
            return candidate
    user_path.parent.mkdir(parents=True, exist_ok=True)
    return user_path


def find_wallets_root(dir_name: str) -> pathlib.Path | None:
    """Search XDG data directories for the wallet application's directory."""
    for base in [walletswap.config.data_home(), *walletswap.config.data_dirs()]:
        candidate = base / dir_name
        if candidate.is_dir():
            return candidate
    return None


def _or_default(value, default):
    return default if value is None else value


def _parse(raw: str, path: pathlib.Path) -> Record:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise walletswap.errors.RecordParseError(f"{path}: {exc}") from exc
    if not isinstance(data, dict):
        raise walletswap.errors.RecordParseError(
            f"{path}: expected an object, got {type(data).__name__}"
        )

    # null reads as the empty value
    root = _or_default(data.get("wallet-directory"), "")
    active = _or_default(data.get("current-wallet"), "")
    wallets = _or_default(data.get("wallets"), {})
    if not isinstance(root, str) or not isinstance(active, str):
        raise walletswap.errors.RecordParseError(
            f"{path}: wallet-directory and current-wallet must be strings"
        )
    if not isinstance(wallets, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in wallets.items()
    ):
        raise walletswap.errors.RecordParseError(
            f"{path}: wallets must map names to descriptions"
        )
    slot = walletswap.layout.ACTIVE_SLOT
    if slot in wallets:
        raise walletswap.errors.RecordParseError(
            f'{path}: "{slot}" cannot be a wallet name'
        )
    if active and active not in wallets:
        raise walletswap.errors.RecordParseError(
            f'{path}: current wallet "{active}" is not among the wallets'
        )
    return Record(
        wallets_root=root, active_wallet=active, wallets=dict(wallets), path=path
    )


def load(path: pathlib.Path) -> Record:
    """Read the record at *path*.

    Raises ``RecordNotFound`` if the file is absent and ``RecordParseError``
    if it cannot be decoded.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise walletswap.errors.RecordNotFound(
            f"{path}: no such file"
        ) from exc
    except UnicodeDecodeError as exc:
        raise walletswap.errors.RecordParseError(f"{path}: {exc}") from exc
    return _parse(raw, path)


def save(record: Record) -> None:
    """Overwrite the record file with *record*."""
    if record.path is None:
        raise ValueError("record has no file path")
    encoded = json.dumps(record.to_dict(), indent="\t", ensure_ascii=False)
    record.path.write_text(encoded + "\n", encoding="utf-8")
    os.chmod(record.path, _FILE_MODE)
    logger.debug("Wrote %d wallets to %s", len(record.wallets), record.path)
