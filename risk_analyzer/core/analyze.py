# risk_analyzer/core/analyze.py
from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

print("[ANALYZE] Module import start")

from risk_analyzer.config import Settings, load_settings
from risk_analyzer.core.classify import is_token_contract
from risk_analyzer.core.patterns import analysis_failed_findings, analyze_source
from risk_analyzer.core.score import compute_risk
from risk_analyzer.errors import NetworkNotSupportedError, NotAContractError
from risk_analyzer.models import ContractSourceRecord, RiskMetrics
from risk_analyzer.utils.addr import normalize_evm_address
from risk_analyzer.utils.explorer import EMPTY_CODE, ExplorerClient, SourceLookup
from risk_analyzer.utils.goplus import TokenSecurityClient

print("[ANALYZE] Imports OK")

SECONDS_PER_YEAR = 60 * 60 * 24 * 365


def _age_years(created_ts: Optional[int], now: Optional[float] = None) -> int:
    """Whole years since creation; unknown creation counts as 'just now'."""
    if created_ts is None:
        return 0
    now = time.time() if now is None else now
    return max(0, int((now - created_ts) // SECONDS_PER_YEAR))


def ensure_contract(explorer: ExplorerClient, address: str) -> str:
    """Return the bytecode or raise the matching UnsupportedTargetError."""
    code = explorer.get_code(address)
    if code is None:
        print(f"[ANALYZE] bytecode lookup failed for {address}")
        raise NetworkNotSupportedError(address)

    if code.lower() in EMPTY_CODE:
        nonce = explorer.get_transaction_count(address)
        print(f"[ANALYZE] no bytecode; nonce={nonce}")
        if nonce > 0:
            raise NotAContractError(address)
        raise NetworkNotSupportedError(address)
    return code


def analyze_address(
    address: str,
    settings: Optional[Settings] = None,
    explorer: Optional[ExplorerClient] = None,
    token_client: Optional[TokenSecurityClient] = None,
) -> RiskMetrics:
    print(f"[ANALYZE] analyze_address start addr={address}")

    # 1) Normalize address (InvalidAddressError propagates)
    token = normalize_evm_address(address)
    print(f"[ANALYZE] Address normalized: {token}")

    settings = settings or load_settings()
    explorer = explorer or ExplorerClient(settings)
    token_client = token_client or TokenSecurityClient(settings)

    # 2) Is this an Ethereum contract at all?
    ensure_contract(explorer, token)
    print("[ANALYZE] Bytecode present")

    # 3) Source + creation time, fetched side by side
    with ThreadPoolExecutor(max_workers=2) as ex:
        fut_source = ex.submit(explorer.get_contract_source, token)
        fut_created = ex.submit(explorer.get_creation_timestamp, token)

        source: Optional[SourceLookup] = None
        try:
            source = fut_source.result()
            print(f"[ANALYZE] Source OK verified={source.verified} name={source.contract_name}")
        except Exception as e:
            print(f"[ANALYZE] Source FAIL: {e}")

        created_ts = fut_created.result()

    record = ContractSourceRecord(
        verified=source.verified if source else False,
        source_code=source.source_code if source else "",
        compiler_version=source.compiler_version if source else "",
        optimization_enabled=source.optimization_enabled if source else False,
        protocol_age_years=_age_years(created_ts),
        contract_name=source.contract_name if source else "Contract",
    )
    print(f"[ANALYZE] Record built age_years={record.protocol_age_years}")

    # 4) Token classification; the oracle is only asked about tokens
    is_token = is_token_contract(record.source_code)
    print(f"[ANALYZE] Token classification: {is_token}")

    token_security = None
    if is_token:
        token_security = token_client.get_token_security(token)
        print(f"[ANALYZE] Token security {'present' if token_security else 'absent'}")

    # 5) Pattern scan
    findings = analyze_source(record.source_code) if source else analysis_failed_findings()
    print(f"[ANALYZE] Patterns: critical={len(findings.critical_vulnerabilities)} "
          f"major={len(findings.major_risks)} minor={len(findings.minor_risks)}")

    # 6) Score
    metrics = compute_risk(record, findings, token_security, is_token)
    print(f"[ANALYZE] analyze_address done addr={token} overall={metrics.overall_risk:.3f}")
    return metrics
