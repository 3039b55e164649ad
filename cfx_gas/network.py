"""
Conflux JSON-RPC query adapter used by the gas estimator
"""
import asyncio
import logging
from typing import Any, List, Optional, Type

import aiohttp
from web3 import AsyncWeb3
from web3.types import RPCEndpoint

from .config import get_settings
from .errors import BlockFetchError, EstimationError, RpcError
from .hex_utils import hex_to_int
from .models import BlockLimits, GasAndCollateral, TransactionParams

logger = logging.getLogger(__name__)

# Conflux has epochs rather than block numbers; "latest" means latest executed state
EPOCH_TAGS = {
    "latest": "latest_state",
    "pending": "latest_mined",
}

# Global provider instance (will be initialized on first use)
_provider: Optional[AsyncWeb3] = None


def get_provider() -> AsyncWeb3:
    """Get or create the AsyncWeb3 provider instance"""
    global _provider
    if _provider is None:
        settings = get_settings()
        _provider = AsyncWeb3(
            AsyncWeb3.AsyncHTTPProvider(
                settings.conflux_rpc,
                request_kwargs={"timeout": aiohttp.ClientTimeout(total=settings.rpc_timeout)},
            )
        )
        logger.info(f"Connected gas estimator to {settings.conflux_rpc}")
    return _provider


def to_epoch_tag(tag: str) -> str:
    return EPOCH_TAGS.get(tag, tag)


class ConfluxQuery:
    """
    Thin async wrapper over the cfx_* RPC methods the estimator needs.
    Holds no per-transaction state, so one instance can serve concurrent estimations.
    """

    def __init__(self, w3: Optional[AsyncWeb3] = None):
        self.w3 = w3 or get_provider()

    async def _request(
        self,
        method: str,
        params: List[Any],
        error_cls: Type[RpcError] = RpcError,
    ) -> Any:
        try:
            response = await self.w3.provider.make_request(RPCEndpoint(method), params)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"{method} transport failure: {e}")
            raise error_cls(method, f"{method} request failed: {e}") from e

        error = response.get("error")
        if error:
            if isinstance(error, dict):
                raise error_cls(
                    method,
                    error.get("message", "Unknown RPC error"),
                    code=error.get("code"),
                    data=error.get("data"),
                )
            raise error_cls(method, str(error))
        return response.get("result")

    async def get_block_by_number(self, tag: str = "latest", full_tx: bool = False) -> BlockLimits:
        """
        Fetch a block header by epoch tag

        Returns:
            BlockLimits with the block number and gas limit as hex strings
        """
        method = "cfx_getBlockByEpochNumber"
        block = await self._request(method, [to_epoch_tag(tag), full_tx], BlockFetchError)
        if not block or not block.get("gasLimit"):
            raise BlockFetchError(method, f"No block with gas limit returned for {tag}")

        number = block.get("epochNumber") or block.get("height") or block.get("number")
        return BlockLimits(number=number, gas_limit=block["gasLimit"])

    async def get_code(self, address: str, tag: str = "latest") -> str:
        """Return the deployed bytecode at address ("0x" for plain accounts)"""
        return await self._request("cfx_getCode", [address, to_epoch_tag(tag)])

    async def estimate_gas(self, tx_params: TransactionParams) -> GasAndCollateral:
        """
        Ask the node for gas used and storage collateralized by tx_params

        Raises:
            EstimationError: node error payload, transport failure or malformed reply
        """
        method = "cfx_estimateGasAndCollateral"
        result = await self._request(
            method,
            [tx_params.to_rpc_dict(), to_epoch_tag("latest")],
            EstimationError,
        )
        if not result or "gasUsed" not in result or "storageCollateralized" not in result:
            raise EstimationError(method, f"Malformed estimate response: {result!r}")
        try:
            hex_to_int(result["gasUsed"])
            hex_to_int(result["storageCollateralized"])
        except (ValueError, TypeError, AttributeError) as e:
            raise EstimationError(method, f"Non-hex quantity in estimate response: {result!r}") from e
        return GasAndCollateral(
            gas_used=result["gasUsed"],
            storage_collateralized=result["storageCollateralized"],
        )
