# risk_analyzer/utils/addr.py
from web3 import Web3

from risk_analyzer.errors import InvalidAddressError


def normalize_evm_address(raw: str) -> str:
    """Strictly validate & checksum an EVM address."""
    s = (raw or "").strip()
    if not s:
        raise InvalidAddressError("Address parameter is required")
    if "..." in s:
        raise InvalidAddressError("Ellipses ('...') are not allowed. Provide the full 42-char 0x address.")
    if not s.startswith("0x") or len(s) != 42:
        raise InvalidAddressError("Invalid address: must be 0x-prefixed and 42 characters long (0x + 40 hex).")
    try:
        return Web3.to_checksum_address(s)
    except (ValueError, TypeError) as e:
        raise InvalidAddressError("Invalid address: not a valid hex string.") from e
