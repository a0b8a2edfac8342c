# risk_analyzer/config.py
# Purpose: explicit settings object for the collectors. Core modules never read os.environ.
from __future__ import annotations

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from risk_analyzer.chains import CHAINS, DEFAULT_CHAIN, EXPLORER_V2_BASE

GOPLUS_V1_BASE = "https://api.gopluslabs.io/api/v1"


class Settings(BaseModel):
    etherscan_api_key: str = ""
    explorer_base_url: str = EXPLORER_V2_BASE
    chain_id: int = CHAINS[DEFAULT_CHAIN]["chainid"]
    rpc_url: Optional[str] = None
    goplus_base_url: str = GOPLUS_V1_BASE
    explorer_qps: float = Field(default=4.0, gt=0)
    http_timeout: int = Field(default=15, gt=0)


def _clean(raw: Optional[str]) -> str:
    return (raw or "").strip().rstrip("\r")


def load_settings(dotenv: bool = True) -> Settings:
    """Build Settings from the process environment (after loading .env)."""
    if dotenv:
        loaded = load_dotenv()
        print(f"[CONFIG] .env loaded: {loaded}")

    rpc = _clean(os.getenv(CHAINS[DEFAULT_CHAIN]["rpc_env"]) or os.getenv("WEB3_PROVIDER"))
    if rpc in {"https://", "http://"}:
        rpc = ""

    settings = Settings(
        etherscan_api_key=_clean(os.getenv("ETHERSCAN_API_KEY")),
        explorer_base_url=_clean(os.getenv("EXPLORER_API_BASE")) or EXPLORER_V2_BASE,
        chain_id=int(_clean(os.getenv("CHAIN_ID")) or CHAINS[DEFAULT_CHAIN]["chainid"]),
        rpc_url=rpc or None,
        goplus_base_url=_clean(os.getenv("GOPLUS_API_BASE")) or GOPLUS_V1_BASE,
        explorer_qps=float(_clean(os.getenv("EXPLORER_QPS")) or 4.0),
        http_timeout=int(_clean(os.getenv("HTTP_TIMEOUT")) or 15),
    )
    print(f"[CONFIG] ENV presence -> RPC: {'yes' if settings.rpc_url else 'no'}, "
          f"ETHERSCAN_API_KEY: {'yes' if settings.etherscan_api_key else 'no'}, "
          f"chainid={settings.chain_id}")
    return settings
