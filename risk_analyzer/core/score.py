# risk_analyzer/core/score.py
from __future__ import annotations

import re
from typing import List, Mapping, Optional, Tuple

from risk_analyzer.models import (
    ContractSourceRecord,
    PatternFindings,
    RiskDetails,
    RiskMetrics,
    TokenSecurity,
)

UNVERIFIED_NOTICE = "Contract not verified - source code unavailable for analysis"

# Markers in the critical list meaning "we could not look", not "we found something".
API_LIMITED_MARKERS = ("API access limited", "analysis failed")

TAX_THRESHOLD_PCT = 20.0

FIVE_FACTOR_WEIGHTS = {
    "contract": 0.25,
    "security": 0.25,
    "liquidity": 0.15,
    "market": 0.20,
    "governance": 0.15,
}

_VERSION_RE = re.compile(r"(\d+)\.(\d+)(?:\.(\d+))?")


def _clamp(x: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return max(lo, min(hi, x))


def _api_limited(findings: PatternFindings) -> bool:
    return any(
        marker in v for v in findings.critical_vulnerabilities for marker in API_LIMITED_MARKERS
    )


def calculate_contract_risk(record: ContractSourceRecord, findings: PatternFindings) -> float:
    """Verification penalty for unverified code, else a capped vulnerability tally."""
    score = 0.0

    if not record.verified:
        score += 0.2
        if _api_limited(findings):
            # unknown status, moderate penalty only
            return min(score + 0.3, 0.7)
        return _clamp(score + 0.4)

    score += min(len(findings.critical_vulnerabilities) * 0.2, 0.4)
    score += min(len(findings.major_risks) * 0.125, 0.25)
    score += min(len(findings.minor_risks) * 0.025, 0.05)
    return _clamp(score)


def _security_weights(
    findings: PatternFindings, token: Optional[TokenSecurity], is_token: bool
) -> List[Tuple[bool, float]]:
    weights = [
        (findings.has_self_destruct, 0.15),
        (findings.has_delegate_call, 0.12),
        (findings.has_unchecked_math, 0.08),
        (findings.has_reentrancy_risk, 0.2),
        (not findings.has_access_control, 0.1),
        (not findings.has_pausable, 0.05),
    ]
    if is_token and token is not None:
        weights += [
            (token.is_honeypot, 0.3),
            (token.is_blacklisted, 0.25),
            (token.is_scam, 0.3),
            (token.is_high_risk, 0.2),
            (token.cannot_sell_all, 0.15),
            (token.buy_tax > TAX_THRESHOLD_PCT, 0.1),
            (token.sell_tax > TAX_THRESHOLD_PCT, 0.1),
        ]
    return weights


def calculate_security_risk(
    findings: PatternFindings, token: Optional[TokenSecurity] = None, is_token: bool = False
) -> float:
    score = 0.0
    for hit, weight in _security_weights(findings, token, is_token):
        if hit:
            score += weight
    return _clamp(score)


def compiler_at_least(version: str, major: int = 0, minor: int = 8) -> bool:
    """`v0.8.19+commit.7dd6d404` -> True for the default 0.8 floor."""
    m = _VERSION_RE.search(version or "")
    if not m:
        return False
    return (int(m.group(1)), int(m.group(2))) >= (major, minor)


def calculate_code_quality(record: ContractSourceRecord, findings: PatternFindings) -> float:
    if not record.verified:
        return 0.1

    factors = [
        record.optimization_enabled,
        compiler_at_least(record.compiler_version),
        findings.has_access_control,
        findings.has_pausable,
        not findings.has_self_destruct,
        not findings.has_delegate_call,
    ]
    return max(0.4, sum(1 for f in factors if f) / len(factors))


def get_security_issues(
    record: ContractSourceRecord,
    findings: PatternFindings,
    token: Optional[TokenSecurity] = None,
    is_token: bool = False,
) -> List[str]:
    """Human-readable issues: unverified notice, critical, major, flags, token, minor."""
    issues: List[str] = []

    if not record.verified:
        issues.append(UNVERIFIED_NOTICE)

    issues.extend(findings.critical_vulnerabilities)
    issues.extend(findings.major_risks)

    if findings.has_self_destruct:
        issues.append("Contract contains selfdestruct functionality")
    if findings.has_delegate_call:
        issues.append("Contract uses delegatecall")
    if findings.has_reentrancy_risk:
        issues.append("Potential reentrancy vulnerability")
    if not findings.has_access_control:
        issues.append("No access control mechanisms found")

    if is_token and token is not None:
        if token.is_honeypot:
            issues.append("Token is a honeypot - cannot sell")
        if token.is_blacklisted:
            issues.append("Token is blacklisted")
        if token.is_scam:
            issues.append("Token is flagged as a scam")
        if token.is_high_risk:
            issues.append("Token is considered high risk")
        if token.cannot_sell_all:
            issues.append("Cannot sell all tokens at once")
        if token.buy_tax > TAX_THRESHOLD_PCT:
            issues.append(f"High buy tax: {token.buy_tax_text}%")
        if token.sell_tax > TAX_THRESHOLD_PCT:
            issues.append(f"High sell tax: {token.sell_tax_text}%")
        if token.is_proxy:
            issues.append("Contract is a proxy - can be upgraded")
        if token.is_mintable:
            issues.append("Token is mintable - supply can increase")

    issues.extend(findings.minor_risks)
    return issues


def compute_risk(
    record: ContractSourceRecord,
    findings: PatternFindings,
    token_security: Optional[TokenSecurity] = None,
    is_token: bool = False,
) -> RiskMetrics:
    """Two-factor risk metrics. Pure; an absent oracle record means no flags."""
    contract_risk = calculate_contract_risk(record, findings)
    security_risk = calculate_security_risk(findings, token_security, is_token)

    details = RiskDetails(
        contract_verified=record.verified,
        contract_name=record.contract_name,
        protocol_age=record.protocol_age_years,
        code_quality=calculate_code_quality(record, findings),
        security_issues=get_security_issues(record, findings, token_security, is_token),
        compiler_version=record.compiler_version or "unknown",
        optimization_enabled=record.optimization_enabled,
        is_token=is_token,
        patterns=findings,
        token_security=token_security if is_token else None,
    )
    return RiskMetrics(
        contract_risk=contract_risk,
        security_risk=security_risk,
        overall_risk=(contract_risk + security_risk) / 2,
        details=details,
    )


def five_factor_overall_risk(factors: Mapping[str, float]) -> float:
    """Alternative weighted profile over contract/security/liquidity/market/governance.

    Not used by the HTTP route. Missing factors count as 0.
    """
    total = 0.0
    for name, weight in FIVE_FACTOR_WEIGHTS.items():
        total += weight * _clamp(float(factors.get(name, 0.0) or 0.0))
    return _clamp(total)
