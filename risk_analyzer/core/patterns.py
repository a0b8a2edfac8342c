# risk_analyzer/core/patterns.py
# Text-pattern heuristics over raw Solidity source. No parsing, no I/O.
from __future__ import annotations

import re
from typing import List

from risk_analyzer.models import PatternFindings

# --- flag patterns
SELFDESTRUCT_RE = re.compile(r"\bselfdestruct\s*\(|\bsuicide\s*\(")
DELEGATECALL_RE = re.compile(r"\.delegatecall\s*[({]|\bdelegatecall\s*\(")
UNCHECKED_RE = re.compile(r"\bunchecked\s*\{")
VALUE_CALL_RE = re.compile(r"\.call\s*\{[^}]*\bvalue\s*:|\.call\.value\s*\(")
REENTRANCY_GUARD_RE = re.compile(r"nonReentrant|ReentrancyGuard|mutex")
ACCESS_CONTROL_RE = re.compile(
    r"\bonly(?:Owner|Admin|Role|Governance|Operator)\b"
    r"|\bAccessControl\w*"
    r"|require\s*\(\s*(?:msg\.sender|_?msgSender\(\))\s*==",
)
PAUSABLE_RE = re.compile(r"(?i:pausable)|\b_?pause\s*\(\s*\)|\b_?unpause\s*\(|\bwhenNotPaused\b")

# --- critical
LOW_LEVEL_CALL_RE = re.compile(r"\.call\s*(?:\{[^}]*\}\s*)?\(")
TX_ORIGIN_RE = re.compile(r"tx\.origin\s*==|==\s*tx\.origin")

# --- major
HIDDEN_MINT_RE = re.compile(r"function\s+\w*[mM]int\w*\s*\([^)]*\)\s+(?:private|internal)\b")
OWNER_MINT_RE = re.compile(r"onlyOwner[^\n]*\{[^}]*(?:_mint\s*\(|_?transfer\s*\()")
UPGRADE_RE = re.compile(r"\bupgradeTo\s*\(|\bupgradeToAndCall\s*\(")
BLACKLIST_MAP_RE = re.compile(
    r"mapping\s*\([^;]*?\)\s+(?:(?:public|private|internal)\s+)?\w*[bB]lack[lL]ist"
)

# --- minor
OUTDATED_PRAGMA_RE = re.compile(r"pragma\s+solidity\s+\^?0\.[0-7]\.")
ASSEMBLY_RE = re.compile(r"\bassembly\s*(?:\(\s*\"memory-safe\"\s*\)\s*)?\{")

# A statement prefix that consumes the call result.
_CONSUMED_RE = re.compile(r"=|\brequire\s*\(|\bassert\s*\(|\bif\s*\(|\breturn\b")

UNCHECKED_CALL = "Unchecked low-level call - return value not verified"
TX_ORIGIN_AUTH = "Using tx.origin for authorization (phishing vulnerability)"
REENTRANCY = "Potential reentrancy vulnerability in external calls"
HIDDEN_MINT = "Hidden mint function detected"
OWNER_MINT = "Admin can mint tokens or transfer user funds"
UPGRADEABLE = "Upgradeable contract - admin can change logic"
BLACKLIST = "Contract can blacklist addresses"
OUTDATED_COMPILER = "Using outdated Solidity version"
INLINE_ASSEMBLY = "Uses inline assembly - increased complexity"

ANALYSIS_FAILED = "Source analysis failed - API access limited"


def _has_unchecked_call(source: str) -> bool:
    """Any `.call(...)` whose statement neither assigns nor tests the result."""
    for m in LOW_LEVEL_CALL_RE.finditer(source):
        start = max(source.rfind(";", 0, m.start()),
                    source.rfind("{", 0, m.start()),
                    source.rfind("}", 0, m.start()))
        prefix = source[start + 1:m.start()]
        if not _CONSUMED_RE.search(prefix):
            return True
    return False


def analyze_source(source: str) -> PatternFindings:
    if not source or not source.strip():
        return PatternFindings()

    has_reentrancy = bool(VALUE_CALL_RE.search(source)) and not REENTRANCY_GUARD_RE.search(source)

    critical: List[str] = []
    major: List[str] = []
    minor: List[str] = []

    if _has_unchecked_call(source):
        critical.append(UNCHECKED_CALL)
    if TX_ORIGIN_RE.search(source):
        critical.append(TX_ORIGIN_AUTH)
    if has_reentrancy:
        critical.append(REENTRANCY)

    if HIDDEN_MINT_RE.search(source):
        major.append(HIDDEN_MINT)
    if OWNER_MINT_RE.search(source):
        major.append(OWNER_MINT)
    if UPGRADE_RE.search(source):
        major.append(UPGRADEABLE)
    if BLACKLIST_MAP_RE.search(source):
        major.append(BLACKLIST)

    if OUTDATED_PRAGMA_RE.search(source):
        minor.append(OUTDATED_COMPILER)
    if ASSEMBLY_RE.search(source):
        minor.append(INLINE_ASSEMBLY)

    return PatternFindings(
        has_self_destruct=bool(SELFDESTRUCT_RE.search(source)),
        has_delegate_call=bool(DELEGATECALL_RE.search(source)),
        has_unchecked_math=bool(UNCHECKED_RE.search(source)),
        has_reentrancy_risk=has_reentrancy,
        has_access_control=bool(ACCESS_CONTROL_RE.search(source)),
        has_pausable=bool(PAUSABLE_RE.search(source)),
        critical_vulnerabilities=critical,
        major_risks=major,
        minor_risks=minor,
    )


def analysis_failed_findings() -> PatternFindings:
    """Findings used when the source could not be fetched at all."""
    return PatternFindings(critical_vulnerabilities=[ANALYSIS_FAILED])
