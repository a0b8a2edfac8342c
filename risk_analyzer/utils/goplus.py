# risk_analyzer/utils/goplus.py
from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import requests

from risk_analyzer.config import Settings
from risk_analyzer.models import TokenSecurity
from risk_analyzer.utils.ratelimit import http_get_json

# Oracle keys that map 1:1 onto TokenSecurity booleans.
FLAG_FIELDS = (
    "is_honeypot",
    "is_blacklisted",
    "is_proxy",
    "is_mintable",
    "is_open_source",
    "is_whitelisted",
    "is_anti_whale",
    "is_trading_enabled",
    "cannot_sell_all",
    "is_scam",
    "is_high_risk",
)


def _flag(raw: Dict[str, Any], key: str) -> bool:
    return str(raw.get(key, "")) == "1"


def _tax(raw: Dict[str, Any], key: str) -> Tuple[float, str]:
    text = str(raw.get(key) or "0")
    try:
        value = float(text)
    except ValueError:
        value = 0.0
    if value != value:  # NaN
        value = 0.0
    return value, text


def parse_token_security(raw: Optional[Dict[str, Any]]) -> TokenSecurity:
    """Oracle strings ("1"/"0", "12.5") -> typed record. Missing keys mean not flagged."""
    raw = raw or {}
    flags = {key: _flag(raw, key) for key in FLAG_FIELDS}
    buy_tax, buy_text = _tax(raw, "buy_tax")
    sell_tax, sell_text = _tax(raw, "sell_tax")
    return TokenSecurity(
        **flags,
        buy_tax=buy_tax,
        sell_tax=sell_tax,
        buy_tax_text=buy_text,
        sell_tax_text=sell_text,
    )


class TokenSecurityClient:
    host_key = "goplus"

    def __init__(self, settings: Settings):
        self.settings = settings

    def get_token_security(self, address: str) -> Optional[TokenSecurity]:
        """Typed oracle record, or None when the oracle has nothing / is unreachable."""
        url = f"{self.settings.goplus_base_url.rstrip('/')}/token_security/{self.settings.chain_id}"
        try:
            data = http_get_json(self.host_key, url, {"contract_addresses": address},
                                 timeout=self.settings.http_timeout)
            result = (data or {}).get("result") or {}
            raw = result.get(address.lower())
            if not isinstance(raw, dict):
                print(f"[GOPLUS] no entry for {address} (code={data.get('code')})")
                return None
            print(f"[GOPLUS] token security OK keys={len(raw)}")
            return parse_token_security(raw)
        except (requests.RequestException, ValueError, TypeError, AttributeError) as e:
            print(f"[GOPLUS] token security FAIL: {e}")
            return None


__all__ = ["TokenSecurityClient", "parse_token_security"]
