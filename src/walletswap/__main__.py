"""walletswap: keep several TON Wallet wallets and switch between them.

Usage:
    walletswap init              Find all wallets and ask to describe them
    walletswap status            List wallets
    walletswap switch WALLET     Switch to another wallet
    walletswap edit WALLET       Edit wallet name and description
    walletswap add WALLET        Add an existing wallet directory or create one
    walletswap forget WALLET     Forget about a wallet (its directory is kept)
    walletswap remove WALLET     Forget about a wallet and delete its directory
    walletswap check             Report differences between config and disk
    walletswap config            Print this utility's config path
    walletswap directory         Print the wallets directory path
    walletswap help              Print this help
"""

from __future__ import annotations

import logging
import os
import pathlib
import sys

import walletswap.config
import walletswap.errors
import walletswap.layout
import walletswap.manager
import walletswap.prompt
import walletswap.store

logger = logging.getLogger("walletswap")

_WALLET_COMMANDS = ("switch", "edit", "add", "forget", "remove")


def _setup_logging() -> None:
    level = os.environ.get("WALLETSWAP_LOG") or walletswap.config.log_level()
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def _usage_error(message: str) -> int:
    logger.error(message)
    print(__doc__)
    return 1


def _read_record(path: pathlib.Path) -> walletswap.store.Record | None:
    try:
        return walletswap.store.load(path)
    except walletswap.errors.RecordError:
        return None


def _locate_wallets_root(source: walletswap.prompt.InputSource) -> pathlib.Path:
    """Find the wallet application's directory, asking the user as a last resort."""
    dir_name = walletswap.layout.WALLETS_DIR_NAME
    found = walletswap.store.find_wallets_root(dir_name)
    if found is not None:
        return found

    logger.error('"%s" directory not found', dir_name)
    while True:
        answer = source.ask(f'Enter the path to "{dir_name}" directory: ')
        candidate = pathlib.Path(answer).expanduser()
        if answer and candidate.is_dir():
            return candidate.resolve()
        logger.error("path invalid")


def _ensure_root(record: walletswap.store.Record) -> None:
    root = pathlib.Path(record.wallets_root)
    if not root.is_dir():
        raise FileNotFoundError(f'wallets directory "{root}" does not exist')


def _open(
    source: walletswap.prompt.InputSource,
) -> tuple[walletswap.manager.WalletManager, bool]:
    """Load the record and build a manager.

    When the record is missing or unreadable, initialization runs and the
    fresh record is saved. The second item of the result tells whether that
    happened.
    """
    path = walletswap.store.config_file_path()
    error: walletswap.errors.RecordError | None = None
    try:
        record = walletswap.store.load(path)
    except walletswap.errors.RecordError as exc:
        record = walletswap.store.Record(path=path)
        error = exc

    if not record.wallets_root:
        record.wallets_root = str(_locate_wallets_root(source))
    _ensure_root(record)
    manager = walletswap.manager.WalletManager(record, source)

    if error is not None:
        logger.error("%s", error)
        logger.info("failed to read config file, performing initialization")
        manager.init()
        walletswap.store.save(record)
        return manager, True
    return manager, False


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def _cmd_init(source: walletswap.prompt.InputSource) -> int:
    path = walletswap.store.config_file_path()
    previous = _read_record(path)
    if previous is not None and previous.wallets_root:
        root = previous.wallets_root
    else:
        root = str(_locate_wallets_root(source))

    record = walletswap.store.Record(wallets_root=root, path=path)
    _ensure_root(record)
    walletswap.manager.WalletManager(record, source).init()
    walletswap.store.save(record)
    return 0


def _cmd_wallet(
    cmd: str, name: str, source: walletswap.prompt.InputSource
) -> int:
    manager, initialized = _open(source)
    if initialized:
        return 0

    operation = getattr(manager, cmd)
    try:
        operation(name)
    except walletswap.errors.WalletError as exc:
        logger.error("%s", exc)
        return 1

    walletswap.store.save(manager.record)
    return 0


def _cmd_status(source: walletswap.prompt.InputSource) -> int:
    manager, initialized = _open(source)
    if initialized:
        return 0
    print(manager.status())
    for problem in manager.problems():
        logger.warning("%s", problem)
    return 0


def _cmd_check(source: walletswap.prompt.InputSource) -> int:
    manager, initialized = _open(source)
    problems = manager.problems()
    if not problems:
        print("Config matches the wallets directory.")
        return 0
    for problem in problems:
        print(problem)
    return 0 if initialized else 1


def _cmd_config() -> int:
    print(walletswap.store.config_file_path())
    return 0


def _cmd_directory(source: walletswap.prompt.InputSource) -> int:
    record = _read_record(walletswap.store.config_file_path())
    if record is not None and record.wallets_root:
        print(record.wallets_root)
    else:
        print(_locate_wallets_root(source))
    return 0


def run(
    args: list[str],
    source: walletswap.prompt.InputSource | None = None,
) -> int:
    """Dispatch *args* (without the program name); return the exit code."""
    if not args:
        return _usage_error("no subcommand specified")
    if source is None:
        source = walletswap.prompt.ConsoleInput()

    cmd = args[0]
    rest = args[1:]

    if cmd in _WALLET_COMMANDS:
        if not rest:
            return _usage_error("no argument")
        return _cmd_wallet(cmd, " ".join(rest), source)
    if rest:
        return _usage_error("unknown subcommand")

    if cmd == "init":
        return _cmd_init(source)
    elif cmd == "status":
        return _cmd_status(source)
    elif cmd == "check":
        return _cmd_check(source)
    elif cmd == "config":
        return _cmd_config()
    elif cmd == "directory":
        return _cmd_directory(source)
    elif cmd == "help":
        print(__doc__)
        return 0
    else:
        return _usage_error("unknown subcommand")


def main() -> None:
    _setup_logging()
    try:
        rc = run(sys.argv[1:])
    except (OSError, walletswap.errors.InputClosed) as exc:
        logger.error("%s", exc)
        rc = 1
    sys.exit(rc)


if __name__ == "__main__":
    main()
