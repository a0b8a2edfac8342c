from __future__ import annotations

import pytest

from risk_analyzer.errors import InvalidAddressError
from risk_analyzer.utils.addr import normalize_evm_address


def test_checksums_lowercase_input():
    out = normalize_evm_address("  0xdac17f958d2ee523a2206206994597c13d831ec7 ")
    assert out == "0xdAC17F958D2ee523a2206206994597C13D831ec7"


@pytest.mark.parametrize("raw", [
    "",
    "   ",
    None,
    "0x1234",
    "dac17f958d2ee523a2206206994597c13d831ec7",
    "0xdac17f...831ec7",
    "0xZZc17f958d2ee523a2206206994597c13d831ec7",
])
def test_rejects_malformed(raw):
    with pytest.raises(InvalidAddressError):
        normalize_evm_address(raw)


def test_missing_message():
    with pytest.raises(InvalidAddressError, match="required"):
        normalize_evm_address("")


def test_bad_hex_keeps_cause():
    with pytest.raises(InvalidAddressError, match="not a valid hex") as err:
        normalize_evm_address("0xZZc17f958d2ee523a2206206994597c13d831ec7")
    assert err.value.__cause__ is not None
