from __future__ import annotations

from risk_analyzer.core.classify import is_token_contract, strip_comments_and_strings
from .fixtures import COMMENTED_OUT_TOKEN, OZ_STYLE_TOKEN, PLAIN_TOKEN, THREE_FUNCTIONS


def test_canonical_erc20_shape_is_token():
    assert is_token_contract(PLAIN_TOKEN) is True


def test_three_of_six_functions_is_not_token():
    assert is_token_contract(THREE_FUNCTIONS) is False


def test_four_functions_need_an_event():
    src = """
    contract Quiet {
        function transfer(address to, uint256 a) public returns (bool) {}
        function transferFrom(address f, address t, uint256 a) public returns (bool) {}
        function balanceOf(address w) public view returns (uint256) {}
        function approve(address s, uint256 a) public returns (bool) {}
    }
    """
    assert is_token_contract(src) is False
    assert is_token_contract(src + "\nevent Approval(address o, address s, uint256 v);") is True


def test_inherited_interface_short_circuits():
    assert is_token_contract(OZ_STYLE_TOKEN) is True


def test_declared_interface_case_insensitive():
    assert is_token_contract("interface IERC721 { }") is True
    assert is_token_contract("interface ierc1155receiver { }") is True
    assert is_token_contract("contract Market is Ownable, IERC721Receiver { }") is True


def test_matches_inside_comments_and_strings_are_ignored():
    assert is_token_contract(COMMENTED_OUT_TOKEN) is False
    assert is_token_contract('string s = "interface IERC20";') is False
    assert is_token_contract("/* contract Foo is ERC20 { } */ contract Bar {}") is False


def test_empty_input_fails_closed():
    assert is_token_contract("") is False
    assert is_token_contract("   \n\t") is False
    assert is_token_contract(None) is False


def test_strip_keeps_line_count():
    src = 'a // note\n/* one\ntwo */ b = "x // y";\n'
    out = strip_comments_and_strings(src)
    assert out.count("\n") == src.count("\n")
    assert "note" not in out and "two" not in out and "x // y" not in out
    assert "b = " in out
