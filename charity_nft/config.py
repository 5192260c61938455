# file: config.py
import json
import logging
import os
from dataclasses import dataclass, field, fields
from typing import Dict, Optional

from charity_nft.accounts import DEVNET_KEYS

CONFIG_ENV_VAR = "CHARITY_NFT_CONFIG"
ENV_PREFIX = "CHARITY_NFT_"

# Addresses of the metadata pinning backend (Flask + IPFS node)
METADATA_BACKEND_URL = "http://127.0.0.1:8000"
METADATA_VIEWER_URL = "http://127.0.0.1:8000/view/"


@dataclass
class ChainConfig:
    initial_balance: int = 100_000_000_000_000
    donation_percentage: int = 20
    account_keys: Dict[str, str] = field(default_factory=lambda: dict(DEVNET_KEYS))
    deployer: str = "deployer"
    # Account name receiving the charity share; None means the deployer
    charity_account: Optional[str] = None
    metadata_backend_url: str = METADATA_BACKEND_URL
    metadata_viewer_url: str = METADATA_VIEWER_URL
    api_host: str = "127.0.0.1"
    api_port: int = 5000
    log_level: str = "INFO"


def _coerce(value, current):
    if isinstance(current, int):
        return int(value)
    return value


def load_config(path=None, environ=None) -> ChainConfig:
    """
    Build a ChainConfig from defaults, an optional JSON file and the environment.

    The file path comes from the argument or CHARITY_NFT_CONFIG. Scalar fields
    can be overridden with CHARITY_NFT_<FIELD> variables, e.g.
    CHARITY_NFT_DONATION_PERCENTAGE=30.
    """
    environ = os.environ if environ is None else environ
    config = ChainConfig()

    path = path or environ.get(CONFIG_ENV_VAR)
    if path:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        known = {f.name for f in fields(ChainConfig)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        for key, value in data.items():
            setattr(config, key, value)

    for f in fields(ChainConfig):
        if f.name == "account_keys":
            continue
        env_value = environ.get(ENV_PREFIX + f.name.upper())
        if env_value is not None:
            setattr(config, f.name, _coerce(env_value, getattr(config, f.name)))

    if not 0 <= config.donation_percentage <= 100:
        raise ValueError(f"donation_percentage must be within 0..100, got {config.donation_percentage}")
    if config.deployer not in config.account_keys:
        raise ValueError(f"Deployer account '{config.deployer}' has no key configured")
    return config


def configure_logging(level="INFO"):
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
