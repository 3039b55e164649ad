"""
Constants shared by the gas/storage estimator and its callers
"""
from enum import Enum

SIMPLE_GAS_COST = "0x5208"  # Hex for 21000, cost of a simple send.
SIMPLE_STORAGE_COST = "0x0"  # Hex for 0, storage cost of a simple send.

# Fallback gas limit when the network can't tell us better: 95% of block gas limit
FALLBACK_GAS_NUMERATOR = 19
FALLBACK_GAS_DENOMINATOR = 20

# Buffered gas limits never go past 90% of block gas limit
BUFFER_CEILING_NUMERATOR = 9
BUFFER_CEILING_DENOMINATOR = 10

# Estimates are padded by 50%
BUFFER_MULTIPLIER_NUMERATOR = 3
BUFFER_MULTIPLIER_DENOMINATOR = 2

TRANSACTION_NO_CONTRACT_ERROR_KEY = "transactionErrorNoContract"


class TransactionCategory(str, Enum):
    """Transaction intent tags set by the transaction controller"""
    SENT_ETHER = "sentEther"  # Plain value transfer
    CONTRACT_INTERACTION = "contractInteraction"
    CONTRACT_DEPLOYMENT = "contractDeployment"


SEND_ETHER_ACTION_KEY = TransactionCategory.SENT_ETHER.value
