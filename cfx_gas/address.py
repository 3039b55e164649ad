"""
Conflux hex address classification.

The first nibble after 0x encodes the account type:
0x0 builtin/internal contracts, 0x1 user accounts, 0x8 deployed contracts.
"""
import re
from typing import Optional

from web3 import Web3

_HEX_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")

ADDRESS_TYPE_BUILTIN = "0"
ADDRESS_TYPE_USER = "1"
ADDRESS_TYPE_CONTRACT = "8"


def is_valid_hex_address(address: Optional[str]) -> bool:
    if not address or not _HEX_ADDRESS_RE.match(address):
        return False
    # Mixed case means a checksum was supplied, so it has to hold
    body = address[2:]
    if body != body.lower() and body != body.upper():
        return Web3.is_checksum_address(address)
    return True


def address_type(address: str) -> Optional[str]:
    """Return the type nibble of a hex address, or None if it is malformed"""
    if not is_valid_hex_address(address):
        return None
    return address[2]


def is_contract_address(address: Optional[str]) -> bool:
    """True iff address is a well-formed hex address of a deployed contract"""
    return address_type(address) == ADDRESS_TYPE_CONTRACT
