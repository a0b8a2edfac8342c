# risk_analyzer/models.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class ContractSourceRecord:
    """What the explorer told us about one contract, built once per request."""

    verified: bool = False
    source_code: str = ""
    compiler_version: str = ""
    optimization_enabled: bool = False
    protocol_age_years: int = 0
    contract_name: str = "Contract"


@dataclass(frozen=True)
class PatternFindings:
    has_self_destruct: bool = False
    has_delegate_call: bool = False
    has_unchecked_math: bool = False
    has_reentrancy_risk: bool = False
    has_access_control: bool = False
    has_pausable: bool = False
    critical_vulnerabilities: List[str] = field(default_factory=list)
    major_risks: List[str] = field(default_factory=list)
    minor_risks: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hasSelfDestruct": self.has_self_destruct,
            "hasDelegateCall": self.has_delegate_call,
            "hasUncheckedMath": self.has_unchecked_math,
            "hasReentrancyRisk": self.has_reentrancy_risk,
            "hasAccessControl": self.has_access_control,
            "hasPausable": self.has_pausable,
            "criticalVulnerabilities": list(self.critical_vulnerabilities),
            "majorRisks": list(self.major_risks),
            "minorRisks": list(self.minor_risks),
        }


@dataclass(frozen=True)
class TokenSecurity:
    """Token-security oracle flags, already converted to real booleans.

    ``buy_tax_text`` / ``sell_tax_text`` keep the oracle's literal strings so
    issue sentences can quote them unchanged.
    """

    is_honeypot: bool = False
    is_blacklisted: bool = False
    is_proxy: bool = False
    is_mintable: bool = False
    is_open_source: bool = False
    is_whitelisted: bool = False
    is_anti_whale: bool = False
    is_trading_enabled: bool = False
    cannot_sell_all: bool = False
    is_scam: bool = False
    is_high_risk: bool = False
    buy_tax: float = 0.0
    sell_tax: float = 0.0
    buy_tax_text: str = "0"
    sell_tax_text: str = "0"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isHoneypot": self.is_honeypot,
            "isBlacklisted": self.is_blacklisted,
            "isProxy": self.is_proxy,
            "isMintable": self.is_mintable,
            "isOpenSource": self.is_open_source,
            "isWhitelisted": self.is_whitelisted,
            "isAntiWhale": self.is_anti_whale,
            "isTradingEnabled": self.is_trading_enabled,
            "buyTax": self.buy_tax,
            "sellTax": self.sell_tax,
            "cannotSellAll": self.cannot_sell_all,
            "isScam": self.is_scam,
            "isHighRisk": self.is_high_risk,
        }


@dataclass(frozen=True)
class RiskDetails:
    contract_verified: bool
    contract_name: str
    protocol_age: int
    code_quality: float
    security_issues: List[str]
    compiler_version: str
    optimization_enabled: bool
    is_token: bool
    patterns: PatternFindings
    token_security: Optional[TokenSecurity] = None
    is_contract: bool = True

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "contractVerified": self.contract_verified,
            "contractName": self.contract_name,
            "protocolAge": self.protocol_age,
            "codeQuality": self.code_quality,
            "securityIssues": list(self.security_issues),
            "compilerVersion": self.compiler_version,
            "optimizationEnabled": self.optimization_enabled,
            "isContract": self.is_contract,
            "isToken": self.is_token,
        }
        out.update(self.patterns.to_dict())
        if self.token_security is not None:
            out["tokenSecurity"] = self.token_security.to_dict()
        return out


@dataclass(frozen=True)
class RiskMetrics:
    contract_risk: float
    security_risk: float
    overall_risk: float
    details: RiskDetails

    def to_dict(self) -> Dict[str, Any]:
        """JSON wire shape of the risk-analyzer endpoint."""
        return {
            "contractRisk": self.contract_risk,
            "securityRisk": self.security_risk,
            "overallRisk": self.overall_risk,
            "details": self.details.to_dict(),
        }


__all__ = [
    "ContractSourceRecord",
    "PatternFindings",
    "TokenSecurity",
    "RiskDetails",
    "RiskMetrics",
]
