"""
Tests for hex quantity helpers and contract address classification
"""
import pytest

from cfx_gas.address import address_type, is_contract_address, is_valid_hex_address
from cfx_gas.hex_utils import (
    add_hex_prefix,
    hex_multiply_by_fraction,
    hex_to_int,
    int_to_hex,
    is_empty_hex_data,
    multiply_by_fraction,
)


class TestHexUtils:
    def test_hex_to_int(self):
        assert hex_to_int("0x5208") == 21000
        assert hex_to_int("5208") == 21000
        assert hex_to_int("0X5208") == 21000
        assert hex_to_int("0x") == 0
        assert hex_to_int(7) == 7

    def test_hex_to_int_rejects_negative(self):
        with pytest.raises(ValueError):
            hex_to_int(-1)

    def test_int_to_hex(self):
        assert int_to_hex(0) == "0x0"
        assert int_to_hex(21000) == "0x5208"
        with pytest.raises(ValueError):
            int_to_hex(-5)

    def test_add_hex_prefix(self):
        assert add_hex_prefix("5208") == "0x5208"
        assert add_hex_prefix("0x5208") == "0x5208"
        assert add_hex_prefix("0X5208") == "0x5208"
        assert add_hex_prefix(None) is None

    def test_multiply_by_fraction_truncates(self):
        assert multiply_by_fraction(100000, 19, 20) == 95000
        assert multiply_by_fraction(99999, 19, 20) == 94999
        with pytest.raises(ZeroDivisionError):
            multiply_by_fraction(1, 1, 0)

    def test_fraction_of_large_block_limit_is_exact(self):
        block_gas_limit = 10**30 + 1
        assert hex_to_int(hex_multiply_by_fraction(hex(block_gas_limit), 19, 20)) == (
            (10**30 + 1) * 19 // 20
        )

    def test_is_empty_hex_data(self):
        assert is_empty_hex_data(None)
        assert is_empty_hex_data("")
        assert is_empty_hex_data("0x")
        assert not is_empty_hex_data("0x00")


class TestAddress:
    def test_contract_address(self):
        assert is_contract_address("0x8" + "0" * 39)
        assert is_contract_address("0x86" + "ab" * 19)

    def test_user_and_builtin_addresses_are_not_contracts(self):
        assert not is_contract_address("0x1" + "0" * 39)
        assert not is_contract_address("0x0888000000000000000000000000000000000002")

    def test_malformed_addresses(self):
        assert not is_contract_address(None)
        assert not is_contract_address("")
        assert not is_contract_address("0x8")
        assert not is_contract_address("0x8" + "g" * 39)
        assert address_type("not an address") is None

    def test_mixed_case_needs_valid_checksum(self):
        assert is_valid_hex_address("0x8" + "A" * 39)
        assert not is_valid_hex_address("0x8" + "aB" * 19 + "c")
