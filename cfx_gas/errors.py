"""
Error taxonomy for gas and storage estimation
"""
from typing import Any, Optional

from .constants import TRANSACTION_NO_CONTRACT_ERROR_KEY


class GasEstimationError(Exception):
    """Base class for estimation failures; error_key lets the UI pick a localized message"""

    def __init__(self, message: str, error_key: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error_key = error_key


class NonContractCallError(GasEstimationError):
    """Call data was sent to an address that has no contract code"""

    def __init__(self, get_code_response: Optional[str] = None):
        super().__init__(
            "TxGasUtil - Trying to call a function on a non-contract address",
            error_key=TRANSACTION_NO_CONTRACT_ERROR_KEY,
        )
        # Raw code lookup result, kept so logs show what the node actually answered
        self.get_code_response = get_code_response


class RpcError(GasEstimationError):
    """JSON-RPC call failed, either at the transport or with an error payload"""

    def __init__(
        self,
        method: str,
        message: str,
        code: Optional[int] = None,
        data: Any = None,
        error_key: Optional[str] = None,
    ):
        if error_key is None and code is not None:
            error_key = str(code)
        super().__init__(message, error_key=error_key)
        self.method = method
        self.code = code
        self.data = data


class EstimationError(RpcError):
    """The node refused or failed to estimate gas and collateral"""


class BlockFetchError(RpcError):
    """The latest block could not be retrieved; nothing can be estimated without it"""
