# risk_analyzer/core/classify.py
from __future__ import annotations

import re

# Comments and string literals in one pass so "//" inside a string survives.
_NOISE_RE = re.compile(
    r'//[^\n]*'
    r'|/\*.*?\*/'
    r'|"(?:\\.|[^"\\\n])*"'
    r"|'(?:\\.|[^'\\\n])*'",
    re.DOTALL,
)

_TOKEN_IFACE = r"I?ERC(?:20|721|777|1155)\w*"

# Declares a token interface, or inherits from one.
_TOKEN_DECL_RE = re.compile(
    rf"\b(?:interface|contract|abstract\s+contract)\s+{_TOKEN_IFACE}\b"
    rf"|\b(?:interface|contract)\s+\w+\s+is\s+[^{{;]*\b{_TOKEN_IFACE}\b",
    re.IGNORECASE,
)

TOKEN_FUNCTIONS = ("transfer", "transferFrom", "balanceOf", "approve", "allowance", "totalSupply")
TOKEN_EVENTS = ("Transfer", "Approval")

_FUNCTION_RES = [
    re.compile(rf"\bfunction\s+{name}\s*\([^)]*\)[^{{;]*[{{;]") for name in TOKEN_FUNCTIONS
]
_EVENT_RES = [re.compile(rf"\bevent\s+{name}\s*\(") for name in TOKEN_EVENTS]

MIN_FUNCTIONS = 4
MIN_EVENTS = 1


def strip_comments_and_strings(source: str) -> str:
    """Blank out comments and string literals, keeping line structure."""

    def _blank(m: re.Match) -> str:
        text = m.group(0)
        if text.startswith(('"', "'")):
            return '""'
        return "\n" * text.count("\n") or " "

    return _NOISE_RE.sub(_blank, source or "")


def is_token_contract(source: str) -> bool:
    """True when the source looks like a fungible or NFT token.

    A declared/inherited ERC token interface is enough on its own. Otherwise
    at least 4 of the 6 ERC-20 functions plus one of the two events must be
    present.
    """
    if not source or not source.strip():
        return False

    code = strip_comments_and_strings(source)

    if _TOKEN_DECL_RE.search(code):
        return True

    functions = sum(1 for rx in _FUNCTION_RES if rx.search(code))
    events = sum(1 for rx in _EVENT_RES if rx.search(code))
    return functions >= MIN_FUNCTIONS and events >= MIN_EVENTS
