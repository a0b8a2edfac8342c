# risk_analyzer/utils/explorer.py
# Purpose: block-explorer lookups (bytecode, nonce, verified source, creation time).
# Every call is best-effort: failures are logged and mapped to a documented default.
#
# Creation time order:
#   1) contract/getcontractcreation  (V2 returns a timestamp)
#   2) earliest account/txlist entry (sort=asc)
#   3) give up -> None (caller treats creation as "now")
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from web3 import Web3

from risk_analyzer.chains import get_w3
from risk_analyzer.config import Settings
from risk_analyzer.utils.ratelimit import http_get_json

print("[EXPLORER] module loaded")

EMPTY_CODE = ("", "0x", "0x0")

_COLLECTOR_ERRORS = (requests.RequestException, ValueError, KeyError, TypeError, IndexError)


@dataclass(frozen=True)
class SourceLookup:
    verified: bool
    source_code: str
    compiler_version: str
    optimization_enabled: bool
    contract_name: str


def flatten_source_code(raw: str) -> str:
    """
    Etherscan returns multi-file contracts as Solidity standard-JSON, sometimes
    wrapped in an extra pair of braces ({{ ... }}). Concatenate every
    sources[*].content so the text scanners see plain Solidity.
    """
    text = (raw or "").strip()
    if not text.startswith("{"):
        return raw or ""

    candidate = text[1:-1] if text.startswith("{{") and text.endswith("}}") else text
    try:
        doc = json.loads(candidate)
    except ValueError:
        return raw

    if not isinstance(doc, dict):
        return raw
    sources = doc.get("sources", doc)
    if not isinstance(sources, dict):
        return raw

    parts = []
    for name, entry in sources.items():
        if isinstance(entry, dict) and isinstance(entry.get("content"), str):
            parts.append(f"// File: {name}\n{entry['content']}")
    return "\n\n".join(parts) if parts else raw


class ExplorerClient:
    host_key = "etherscan_v2"

    def __init__(self, settings: Settings):
        self.settings = settings

    def _get(self, params: Dict[str, Any]) -> dict:
        full = {"chainid": self.settings.chain_id, **params, "apikey": self.settings.etherscan_api_key}
        return http_get_json(
            self.host_key,
            self.settings.explorer_base_url,
            full,
            max_qps=self.settings.explorer_qps,
            timeout=self.settings.http_timeout,
        )

    # ---------- bytecode / account ----------

    def get_code(self, address: str) -> Optional[str]:
        """Hex bytecode ('0x' for none), or None when the lookup itself failed."""
        if self.settings.rpc_url:
            try:
                w3 = get_w3(self.settings)
                code = Web3.to_hex(w3.eth.get_code(Web3.to_checksum_address(address)))
                print(f"[EXPLORER] RPC get_code len={len(code)}")
                return code
            except Exception as e:
                # RPC trouble is not fatal; the explorer proxy can still answer
                print(f"[EXPLORER] RPC get_code FAIL: {e} -> explorer proxy")

        try:
            data = self._get({"module": "proxy", "action": "eth_getCode",
                              "address": address, "tag": "latest"})
            code = data.get("result")
            if not isinstance(code, str) or not code.startswith("0x"):
                print(f"[EXPLORER] eth_getCode unexpected result: {data}")
                return None
            print(f"[EXPLORER] eth_getCode len={len(code)}")
            return code
        except _COLLECTOR_ERRORS as e:
            print(f"[EXPLORER] eth_getCode FAIL: {e}")
            return None

    def get_transaction_count(self, address: str) -> int:
        try:
            data = self._get({"module": "proxy", "action": "eth_getTransactionCount",
                              "address": address, "tag": "latest"})
            return int(data.get("result") or "0x0", 16)
        except _COLLECTOR_ERRORS as e:
            print(f"[EXPLORER] eth_getTransactionCount FAIL: {e}")
            return 0

    # ---------- verified source ----------

    def get_contract_source(self, address: str) -> SourceLookup:
        """Verified source + compiler metadata. Raises on transport/payload errors."""
        data = self._get({"module": "contract", "action": "getsourcecode", "address": address})
        if str(data.get("status")) != "1":
            raise ValueError(f"getsourcecode failed: {data.get('result') or data.get('message')}")

        item = data["result"][0]
        raw_source = item.get("SourceCode") or ""
        return SourceLookup(
            verified=raw_source != "",
            source_code=flatten_source_code(raw_source),
            compiler_version=item.get("CompilerVersion") or "",
            optimization_enabled=str(item.get("OptimizationUsed")) == "1",
            contract_name=item.get("ContractName") or "Contract",
        )

    # ---------- creation time ----------

    def _creation_via_getcontractcreation(self, address: str) -> Optional[int]:
        try:
            data = self._get({"module": "contract", "action": "getcontractcreation",
                              "contractaddresses": address})
            res = data.get("result") or []
            if isinstance(res, list) and res:
                ts = res[0].get("timestamp")
                if ts is not None:
                    print(f"[EXPLORER] getcontractcreation hit ts={ts}")
                    return int(ts)
            print(f"[EXPLORER] getcontractcreation miss: {data.get('message')}")
        except _COLLECTOR_ERRORS as e:
            print(f"[EXPLORER] getcontractcreation error: {e}")
        return None

    def _creation_via_txlist(self, address: str) -> Optional[int]:
        try:
            data = self._get({"module": "account", "action": "txlist", "address": address,
                              "startblock": 0, "endblock": 99999999,
                              "page": 1, "offset": 1, "sort": "asc"})
            res = data.get("result") or []
            if isinstance(res, list) and res:
                ts = res[0].get("timeStamp") or res[0].get("timestamp")
                if ts:
                    print(f"[EXPLORER] earliest tx timestamp = {ts}")
                    return int(ts)
            print(f"[EXPLORER] txlist miss: {data.get('message')}")
        except _COLLECTOR_ERRORS as e:
            print(f"[EXPLORER] txlist error: {e}")
        return None

    def get_creation_timestamp(self, address: str) -> Optional[int]:
        ts = self._creation_via_getcontractcreation(address)
        if ts is None:
            ts = self._creation_via_txlist(address)
        if ts is None:
            print("[EXPLORER] creation time unknown (all fallbacks failed)")
        return ts


__all__ = ["ExplorerClient", "SourceLookup", "flatten_source_code", "EMPTY_CODE"]
