"""
Gas buffer calculation - pads an estimate without exceeding the block gas limit
"""
import logging

from .constants import (
    BUFFER_CEILING_DENOMINATOR,
    BUFFER_CEILING_NUMERATOR,
    BUFFER_MULTIPLIER_DENOMINATOR,
    BUFFER_MULTIPLIER_NUMERATOR,
)
from .hex_utils import HexLike, hex_to_int, int_to_hex, multiply_by_fraction

logger = logging.getLogger(__name__)


def add_gas_buffer(initial_gas_limit_hex: HexLike, block_gas_limit_hex: HexLike) -> str:
    """
    Add a gas buffer without exceeding 90% of the block gas limit

    Args:
        initial_gas_limit_hex: The estimate to pad
        block_gas_limit_hex: Gas limit of the latest block

    Returns:
        The buffered gas limit as a hex string
    """
    initial_gas_limit = hex_to_int(initial_gas_limit_hex)
    block_gas_limit = hex_to_int(block_gas_limit_hex)
    upper_gas_limit = multiply_by_fraction(
        block_gas_limit, BUFFER_CEILING_NUMERATOR, BUFFER_CEILING_DENOMINATOR
    )
    buffered_gas_limit = multiply_by_fraction(
        initial_gas_limit, BUFFER_MULTIPLIER_NUMERATOR, BUFFER_MULTIPLIER_DENOMINATOR
    )

    # if initial gas limit is already above the ceiling, don't shrink it
    if initial_gas_limit > upper_gas_limit:
        logger.debug(f"Gas {initial_gas_limit} above ceiling {upper_gas_limit}, left unbuffered")
        return int_to_hex(initial_gas_limit)
    if buffered_gas_limit < upper_gas_limit:
        return int_to_hex(buffered_gas_limit)
    return int_to_hex(upper_gas_limit)
