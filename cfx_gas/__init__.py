"""
Gas and storage limit estimation for Conflux transactions
"""
from .address import is_contract_address
from .constants import (
    SEND_ETHER_ACTION_KEY,
    SIMPLE_GAS_COST,
    SIMPLE_STORAGE_COST,
    TRANSACTION_NO_CONTRACT_ERROR_KEY,
    TransactionCategory,
)
from .errors import (
    BlockFetchError,
    EstimationError,
    GasEstimationError,
    NonContractCallError,
    RpcError,
)
from .gas_buffer import add_gas_buffer
from .models import (
    BlockLimits,
    GasAndCollateral,
    SimulationDebug,
    SimulationFails,
    TransactionMeta,
    TransactionParams,
)
from .network import ConfluxQuery, get_provider
from .tx_gas_utils import TxGasUtil

__all__ = [
    "SEND_ETHER_ACTION_KEY",
    "SIMPLE_GAS_COST",
    "SIMPLE_STORAGE_COST",
    "TRANSACTION_NO_CONTRACT_ERROR_KEY",
    "TransactionCategory",
    "BlockFetchError",
    "EstimationError",
    "GasEstimationError",
    "NonContractCallError",
    "RpcError",
    "BlockLimits",
    "GasAndCollateral",
    "SimulationDebug",
    "SimulationFails",
    "TransactionMeta",
    "TransactionParams",
    "ConfluxQuery",
    "TxGasUtil",
    "add_gas_buffer",
    "get_provider",
    "is_contract_address",
]
