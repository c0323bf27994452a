"""Shared test fixtures for walletswap tests."""

from __future__ import annotations

import pathlib

import pytest

import walletswap.layout
import walletswap.manager
import walletswap.prompt
import walletswap.store

MARKER = walletswap.layout.MARKER_FILE


@pytest.fixture(autouse=True)
def xdg_dirs(tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch) -> dict:
    """Point every XDG base directory into the test's tmp_path."""
    dirs = {
        "XDG_CONFIG_HOME": tmp_path / "xdg" / "config",
        "XDG_CONFIG_DIRS": tmp_path / "xdg" / "config-dirs",
        "XDG_DATA_HOME": tmp_path / "xdg" / "data",
        "XDG_DATA_DIRS": tmp_path / "xdg" / "data-dirs",
    }
    for var, path in dirs.items():
        monkeypatch.setenv(var, str(path))
    monkeypatch.delenv("WALLETSWAP_LOG", raising=False)
    return dirs


@pytest.fixture
def wallets_root(tmp_path: pathlib.Path) -> pathlib.Path:
    """Create an empty "TON Wallet" directory."""
    root = tmp_path / "TON Wallet"
    root.mkdir()
    return root


@pytest.fixture
def make_wallet(wallets_root: pathlib.Path):
    """Factory creating a wallet directory (with marker) under wallets_root."""

    def _create(name: str, content: str = "") -> pathlib.Path:
        path = wallets_root / name
        path.mkdir()
        (path / MARKER).write_text(content or f"salt of {name}")
        return path

    return _create


@pytest.fixture
def make_manager(wallets_root: pathlib.Path, tmp_path: pathlib.Path):
    """Factory building a WalletManager over wallets_root with scripted answers."""

    def _create(
        wallets: dict[str, str] | None = None,
        active: str = "",
        answers: list[str] | None = None,
    ) -> walletswap.manager.WalletManager:
        record = walletswap.store.Record(
            wallets_root=str(wallets_root),
            active_wallet=active,
            wallets=dict(wallets or {}),
            path=tmp_path / "record.json",
        )
        source = walletswap.prompt.ScriptedInput(answers or [])
        return walletswap.manager.WalletManager(record, source)

    return _create


@pytest.fixture
def snapshot(wallets_root: pathlib.Path):
    """Map every directory under wallets_root to its marker content ("" if none)."""

    def _take() -> dict[str, str]:
        result = {}
        for entry in sorted(wallets_root.iterdir()):
            marker = entry / MARKER
            result[entry.name] = marker.read_text() if marker.is_file() else ""
        return result

    return _take
