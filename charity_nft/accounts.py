# file: accounts.py
import json
import logging
from pathlib import Path

from eth_account import Account
from eth_utils import is_address

logger = logging.getLogger(__name__)

# Well-known local devnet keys (public test keys, never use with real funds)
DEVNET_KEYS = {
    "deployer": "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80",
    "wallet_1": "0x59c6995e998f97a5a0044966f0945389dc9e86dae88c7a8412f4603b6b78690d",
    "wallet_2": "0x5de4111afa1a4b94908f83103eb1f1706367c2e68ca870fc3fb9a804cdab365a",
    "wallet_3": "0x7c852118294e51e653712a81e05800f419141751be58f605c371e15141b007a6",
    "wallet_4": "0x47e179ec197488593b187f80a00eb0da91f1b9d0b13f8733639f19c30a34926a",
}


def is_valid_identity(value) -> bool:
    return isinstance(value, str) and is_address(value)


def build_accounts(account_keys=None):
    """Name -> LocalAccount for every configured private key."""
    keys = account_keys or DEVNET_KEYS
    return {name: Account.from_key(key) for name, key in keys.items()}


def import_keystore(keystore_path, password):
    """
    Decrypt a Geth keystore file and return the account it holds.

    Raises FileNotFoundError for a missing file and ValueError for a wrong
    password (from eth_account).
    """
    path = Path(keystore_path).expanduser().resolve()
    if not path.is_file():
        raise FileNotFoundError(f"Keystore not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        keystore_data = json.load(f)

    private_key = Account.decrypt(keystore_data, password)
    account = Account.from_key(private_key)
    logger.info(f"[Accounts] Imported keystore account {account.address}")
    return account
