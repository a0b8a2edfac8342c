from __future__ import annotations

from typing import Any, Dict, Optional

from risk_analyzer.config import Settings
from risk_analyzer.utils.explorer import SourceLookup

# Bare ERC-20 shape with no interface names, so only the signature count decides.
PLAIN_TOKEN = """
pragma solidity ^0.8.19;

contract Thing {
    event Transfer(address indexed from, address indexed to, uint256 value);
    event Approval(address indexed owner, address indexed spender, uint256 value);

    function totalSupply() public view returns (uint256) { return _supply; }
    function balanceOf(address who) public view returns (uint256) { return _bal[who]; }
    function transfer(address to, uint256 amount) public returns (bool) { return true; }
    function transferFrom(address from, address to, uint256 amount) public returns (bool) { return true; }
    function approve(address spender, uint256 amount) external returns (bool) { return true; }
    function allowance(address o, address s) external view returns (uint256) { return 0; }
}
"""

THREE_FUNCTIONS = """
pragma solidity ^0.8.19;

contract Ledger {
    event Transfer(address indexed from, address indexed to, uint256 value);

    function totalSupply() public view returns (uint256) { return 0; }
    function balanceOf(address who) public view returns (uint256) { return 0; }
    function transfer(address to, uint256 amount) public returns (bool) { return true; }
}
"""

OZ_STYLE_TOKEN = """
// SPDX-License-Identifier: MIT
pragma solidity ^0.8.20;

import "@openzeppelin/contracts/token/ERC20/ERC20.sol";

contract MyToken is ERC20, Ownable {
    constructor() ERC20("My", "MY") {}
}
"""

SELFDESTRUCT_PAUSABLE = """
pragma solidity ^0.8.19;

contract Vault {
    address payable public beneficiary;
    bool public paused;

    modifier whenNotPaused() { require(!paused, "paused"); _; }

    function close() public whenNotPaused {
        selfdestruct(beneficiary);
    }
}
"""

GUARDED_VAULT = """
pragma solidity ^0.8.19;

contract Vault is ReentrancyGuard, Pausable {
    address public owner;

    modifier onlyOwner() { require(msg.sender == owner, "not owner"); _; }

    function withdraw(uint256 amount) external nonReentrant whenNotPaused {
        (bool ok, ) = payable(msg.sender).call{value: amount}("");
        require(ok, "send failed");
    }

    function pause() external onlyOwner { _pause(); }
}
"""

RISKY_VAULT = """
pragma solidity ^0.6.12;

contract Risky {
    address owner;
    mapping(address => bool) public isBlacklisted;

    function withdraw(uint256 amount) external {
        require(tx.origin == owner);
        msg.sender.call{value: amount}("");
    }

    function _mintHidden(address to, uint256 amount) internal {
        balances[to] += amount;
    }

    function upgradeTo(address impl) external {
        assembly { sstore(0, impl) }
        implementation.delegatecall(abi.encodeWithSignature("init()"));
    }

    function bump(uint256 x) external returns (uint256) {
        unchecked { return x + 1; }
    }
}
"""

COMMENTED_OUT_TOKEN = """
pragma solidity ^0.8.19;

contract Plain {
    // function transfer(address to, uint256 amount) public returns (bool) {}
    // function transferFrom(address a, address b, uint256 c) public returns (bool) {}
    // function approve(address s, uint256 a) public returns (bool) {}
    // function allowance(address o, address s) public view returns (uint256) {}
    string constant NOTE = "event Transfer(address from, address to, uint256 v);";
    function ping() external {}
}
"""


def make_settings(**overrides: Any) -> Settings:
    base = dict(etherscan_api_key="test-key", rpc_url=None, explorer_qps=1000.0, http_timeout=5)
    base.update(overrides)
    return Settings(**base)


class StubExplorer:
    """In-memory ExplorerClient stand-in for orchestration/API tests."""

    def __init__(
        self,
        code: Optional[str] = "0x6080",
        nonce: int = 0,
        source: Optional[SourceLookup] = None,
        source_error: Optional[Exception] = None,
        created_ts: Optional[int] = None,
    ):
        self.code = code
        self.nonce = nonce
        self.source = source
        self.source_error = source_error
        self.created_ts = created_ts
        self.calls: Dict[str, int] = {}

    def _hit(self, name: str) -> None:
        self.calls[name] = self.calls.get(name, 0) + 1

    def get_code(self, address):
        self._hit("get_code")
        return self.code

    def get_transaction_count(self, address):
        self._hit("get_transaction_count")
        return self.nonce

    def get_contract_source(self, address):
        self._hit("get_contract_source")
        if self.source_error is not None:
            raise self.source_error
        return self.source

    def get_creation_timestamp(self, address):
        self._hit("get_creation_timestamp")
        return self.created_ts


class StubTokenClient:
    def __init__(self, record=None):
        self.record = record
        self.calls = 0

    def get_token_security(self, address):
        self.calls += 1
        return self.record


def verified_source(code: str, compiler: str = "v0.8.19+commit.7dd6d404", optimized: bool = True,
                    name: str = "Thing") -> SourceLookup:
    return SourceLookup(
        verified=True,
        source_code=code,
        compiler_version=compiler,
        optimization_enabled=optimized,
        contract_name=name,
    )


UNVERIFIED_SOURCE = SourceLookup(
    verified=False,
    source_code="",
    compiler_version="",
    optimization_enabled=False,
    contract_name="Contract",
)
