"""
Hex string <-> integer helpers for gas and storage quantities.

Quantities travel as 0x-prefixed hex strings and are handled internally as
Python ints, which are arbitrary precision. Fractions are applied as an exact
integer multiply followed by a floor divide so that large block gas limits
never lose precision to floating point.
"""
from typing import Optional, Union

from web3 import Web3

HexLike = Union[str, int]


def add_hex_prefix(value: Optional[str]) -> Optional[str]:
    """Add a 0x prefix to a hex string that lacks one"""
    if value is None:
        return None
    if value.startswith(("0x", "0X")):
        return "0x" + value[2:]
    return "0x" + value


def strip_hex_prefix(value: str) -> str:
    if value.startswith(("0x", "0X")):
        return value[2:]
    return value


def hex_to_int(value: HexLike) -> int:
    """
    Convert a hex quantity to an unsigned integer

    Args:
        value: 0x-prefixed (or bare) hex string, or an int

    Returns:
        Integer value; "0x" and "" decode to 0
    """
    if isinstance(value, bool):
        raise TypeError("Boolean is not a hex quantity")
    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"Quantity must be unsigned, got {value}")
        return value
    digits = strip_hex_prefix(value.strip())
    if not digits:
        return 0
    return Web3.to_int(hexstr="0x" + digits)


def int_to_hex(value: int) -> str:
    """Convert an unsigned integer to a minimal 0x-prefixed hex quantity"""
    if value < 0:
        raise ValueError(f"Quantity must be unsigned, got {value}")
    return Web3.to_hex(value)


def multiply_by_fraction(value: int, numerator: int, denominator: int) -> int:
    """Scale value by numerator/denominator, truncating toward zero"""
    if denominator == 0:
        raise ZeroDivisionError("Fraction denominator must be non-zero")
    return value * numerator // denominator


def hex_multiply_by_fraction(value: HexLike, numerator: int, denominator: int) -> str:
    return int_to_hex(multiply_by_fraction(hex_to_int(value), numerator, denominator))


def is_empty_hex_data(data: Optional[str]) -> bool:
    """True when data is absent or carries no bytes ("", "0x")"""
    if data is None:
        return True
    return strip_hex_prefix(data.strip()) == ""
