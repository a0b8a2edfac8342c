# risk_analyzer/errors.py
from __future__ import annotations

from typing import Dict


class InvalidAddressError(ValueError):
    """Address parameter missing or not a 0x-prefixed 20-byte hex string."""


class UnsupportedTargetError(Exception):
    """The address cannot be analyzed. Carries its own explanatory payload."""

    status_code = 400
    error = "Unsupported target"
    message = ""
    details = ""

    def __init__(self, address: str = ""):
        self.address = address
        super().__init__(self.message or self.error)

    def to_payload(self) -> Dict[str, str]:
        return {"error": self.error, "message": self.message, "details": self.details}


class NetworkNotSupportedError(UnsupportedTargetError):
    # reported as 200: the request was fine, the address just isn't on Ethereum
    status_code = 200
    error = "Network not supported"
    message = (
        "This tool only works with Ethereum mainnet contracts. "
        "The provided address was not found on Ethereum."
    )
    details = "Please provide a valid Ethereum mainnet contract address."


class NotAContractError(UnsupportedTargetError):
    status_code = 400
    error = "This tool only works with smart contracts"
    message = (
        "The provided address is not a smart contract. Please provide a valid "
        "smart contract address to analyze its risk metrics."
    )
    details = (
        "Smart contracts are programs that run on the Ethereum blockchain. "
        "Regular wallet addresses cannot be analyzed by this tool."
    )


__all__ = [
    "InvalidAddressError",
    "UnsupportedTargetError",
    "NetworkNotSupportedError",
    "NotAContractError",
]
