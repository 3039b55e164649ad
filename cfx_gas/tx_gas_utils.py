"""
Gas and storage limit estimation for unapproved transactions.

TxGasUtil decides whether a transaction is a simple send or a contract
interaction, asks the node for an estimate when it has to, and writes the
resulting gas/storage limits back onto the transaction metadata.
"""
import logging
from typing import Optional

from .address import is_contract_address
from .constants import (
    FALLBACK_GAS_DENOMINATOR,
    FALLBACK_GAS_NUMERATOR,
    SEND_ETHER_ACTION_KEY,
    SIMPLE_GAS_COST,
    SIMPLE_STORAGE_COST,
)
from .errors import GasEstimationError, NonContractCallError, RpcError
from .gas_buffer import add_gas_buffer
from .hex_utils import add_hex_prefix, hex_multiply_by_fraction, hex_to_int
from .models import GasAndCollateral, SimulationDebug, SimulationFails, TransactionMeta
from .network import ConfluxQuery

logger = logging.getLogger(__name__)


class TxGasUtil:
    """
    Gas utility methods for the transaction manager

    Args:
        query: Network query adapter exposing get_block_by_number, get_code
            and estimate_gas coroutines. Defaults to a ConfluxQuery on the
            configured provider.
    """

    def __init__(self, query: Optional[ConfluxQuery] = None):
        self.query = query or ConfluxQuery()

    async def analyze(self, tx_meta: TransactionMeta) -> TransactionMeta:
        """Look up the recipient's code, then analyze gas usage"""
        get_code_response = None
        recipient = tx_meta.tx_params.to
        if recipient:
            try:
                get_code_response = await self.query.get_code(recipient)
            except RpcError as e:
                # Only kept as debug evidence, estimation does not depend on it
                logger.warning(f"Code lookup for {recipient} failed: {e}")
        return await self.analyze_gas_usage(tx_meta, get_code_response)

    async def analyze_gas_usage(
        self,
        tx_meta: TransactionMeta,
        get_code_response: Optional[str] = None,
    ) -> TransactionMeta:
        """
        Estimate gas and storage limits and write them to tx_meta

        Failures of the estimate itself are recorded on tx_meta.simulation_fails.
        A failure to fetch the latest block is raised as BlockFetchError.

        Returns:
            The same tx_meta, mutated in place
        """
        block = await self.query.get_block_by_number("latest", False)

        # a failure from an earlier attempt doesn't describe this one
        tx_meta.simulation_fails = None

        tx_params = tx_meta.tx_params
        original_gas, original_storage_limit = tx_params.gas, tx_params.storage_limit
        original_flags = (
            tx_meta.gas_limit_specified,
            tx_meta.storage_limit_specified,
            tx_meta.simple_send,
        )
        try:
            estimate = await self.estimate_tx_gas_and_collateral(
                tx_meta, block.gas_limit, get_code_response
            )
            # set_tx_gas has no failure path, so malformed quantities stop here
            hex_to_int(estimate.gas_used)
            hex_to_int(estimate.storage_collateralized)
        except Exception as err:
            logger.warning(f"Gas estimation failed for tx {tx_meta.id}: {err}")
            # provisional limits and flags set during estimation are not kept on failure
            tx_params.gas = original_gas
            tx_params.storage_limit = original_storage_limit
            (
                tx_meta.gas_limit_specified,
                tx_meta.storage_limit_specified,
                tx_meta.simple_send,
            ) = original_flags
            error_key = err.error_key if isinstance(err, GasEstimationError) else None
            debug = SimulationDebug(block_number=block.number, block_gas_limit=block.gas_limit)
            if isinstance(err, NonContractCallError):
                debug.get_code_response = err.get_code_response
            tx_meta.simulation_fails = SimulationFails(
                reason=str(err),
                error_key=error_key,
                debug=debug,
            )
            return tx_meta

        self.set_tx_gas(
            tx_meta,
            block.gas_limit,
            estimate.gas_used,
            estimate.storage_collateralized,
        )
        return tx_meta

    async def estimate_tx_gas_and_collateral(
        self,
        tx_meta: TransactionMeta,
        block_gas_limit_hex: str,
        get_code_response: Optional[str] = None,
    ) -> GasAndCollateral:
        """
        Estimate the tx's gas and storage usage

        Args:
            tx_meta: The transaction record, mutated in place
            block_gas_limit_hex: Gas limit of the latest block
            get_code_response: Raw code lookup result for the recipient

        Returns:
            Raw (unbuffered) gas used and storage collateralized
        """
        # new unapproved tx will come here first
        tx_params = tx_meta.tx_params
        if tx_params.to and not is_contract_address(tx_params.to):
            tx_meta.simple_send = True

        tx_meta.gas_limit_specified = bool(tx_params.gas)
        tx_meta.storage_limit_specified = bool(tx_params.storage_limit)

        # storage defaults to free before we know what kind of tx this is
        if not tx_meta.storage_limit_specified:
            tx_params.storage_limit = SIMPLE_STORAGE_COST
            tx_meta.storage_limit_specified = True

        if tx_meta.gas_limit_specified and tx_meta.storage_limit_specified:
            logger.debug(f"Tx {tx_meta.id} has caller specified gas and storage limits")
            return GasAndCollateral(
                gas_used=tx_params.gas,
                storage_collateralized=tx_params.storage_limit,
            )

        if tx_params.to and tx_meta.transaction_category == SEND_ETHER_ACTION_KEY:
            # data on a plain send means a function call on an address with no code
            if tx_params.data:
                raise NonContractCallError(get_code_response)

            # standard simple send, gas requirement is exactly 21k
            tx_params.gas = SIMPLE_GAS_COST
            # prevents buffer addition
            tx_meta.simple_send = True
            return GasAndCollateral(
                gas_used=SIMPLE_GAS_COST,
                storage_collateralized=SIMPLE_STORAGE_COST,
            )

        # fall back to 95% of block gas limit while the node runs the estimate
        tx_params.gas = hex_multiply_by_fraction(
            block_gas_limit_hex, FALLBACK_GAS_NUMERATOR, FALLBACK_GAS_DENOMINATOR
        )
        return await self.query.estimate_gas(tx_params)

    def set_tx_gas(
        self,
        tx_meta: TransactionMeta,
        block_gas_limit_hex: str,
        estimated_gas_hex: str,
        estimated_storage_hex: str,
    ) -> None:
        """
        Write estimated gas/storage onto tx_meta and, when the caller left gas
        open, a buffered gas limit onto its params
        """
        tx_params = tx_meta.tx_params

        if tx_meta.simple_send:
            tx_meta.estimated_gas = tx_params.gas
            tx_meta.estimated_storage = SIMPLE_STORAGE_COST
            return

        tx_meta.estimated_gas = add_hex_prefix(estimated_gas_hex)
        tx_meta.estimated_storage = add_hex_prefix(estimated_storage_hex)

        # caller's storage limit always wins over the node's estimate
        if tx_meta.storage_limit_specified:
            tx_meta.estimated_storage = tx_params.storage_limit

        # if gas limit was specified, use original specified amount
        if tx_meta.gas_limit_specified:
            tx_meta.estimated_gas = tx_params.gas
            return

        tx_params.gas = add_gas_buffer(tx_meta.estimated_gas, block_gas_limit_hex)
        if not tx_meta.storage_limit_specified:
            tx_params.storage_limit = tx_meta.estimated_storage
