"""Fixed names of the wallet application's directory layout."""

from __future__ import annotations

# Directory the wallet application keeps its wallets in (searched in XDG data dirs)
WALLETS_DIR_NAME = "TON Wallet"

# Directory the wallet application reads; the active wallet lives here.
# Never a wallet name.
ACTIVE_SLOT = "data"

# File whose presence marks a directory as a wallet
MARKER_FILE = "salt"
