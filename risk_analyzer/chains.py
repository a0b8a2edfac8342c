# risk_analyzer/chains.py
# Purpose: chain registry + optional web3 factory (Web3 v7). Analysis targets Ethereum mainnet.
from __future__ import annotations

from typing import TYPE_CHECKING

from web3 import Web3

if TYPE_CHECKING:
    from risk_analyzer.config import Settings

print("[CHAINS] module loaded (web3 v7)")

# One Etherscan V2 base works for multi-chain keys
EXPLORER_V2_BASE = "https://api.etherscan.io/v2/api"

DEFAULT_CHAIN = "eth"

CHAINS = {
    "eth": {
        "name": "eth",
        "chainid": 1,
        "rpc_env": "WEB3_PROVIDER_ETH",
    },
}


def get_w3(settings: "Settings") -> Web3:
    """HTTP web3 client for the configured RPC. Raises ValueError when none is set."""
    rpc = (settings.rpc_url or "").strip()
    if not rpc:
        raise ValueError(f"Missing RPC URL. Set {CHAINS[DEFAULT_CHAIN]['rpc_env']} in .env")

    print(f"[CHAINS] HTTPProvider -> {rpc}")
    return Web3(Web3.HTTPProvider(rpc, request_kwargs={"timeout": settings.http_timeout}))


__all__ = ["EXPLORER_V2_BASE", "CHAINS", "DEFAULT_CHAIN", "get_w3"]
