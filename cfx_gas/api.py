"""
FastAPI service exposing gas/storage estimation for unapproved transactions
"""
import logging
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from .config import get_settings
from .errors import BlockFetchError
from .gas_buffer import add_gas_buffer
from .models import TransactionMeta
from .tx_gas_utils import TxGasUtil

logger = logging.getLogger(__name__)

app = FastAPI(title="Conflux Gas Estimator API", version="0.1.0")

# Created on first request so importing the app never touches the network
_gas_util: Optional[TxGasUtil] = None


def get_gas_util() -> TxGasUtil:
    global _gas_util
    if _gas_util is None:
        _gas_util = TxGasUtil()
    return _gas_util


class EstimateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    tx_meta: TransactionMeta = Field(alias="txMeta")
    # When omitted the service looks the recipient's code up itself
    get_code_response: Optional[str] = Field(default=None, alias="getCodeResponse")


class BufferRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    initial_gas_limit: str = Field(alias="initialGasLimit")
    block_gas_limit: str = Field(alias="blockGasLimit")


@app.get("/health")
async def health():
    """Health check"""
    return {"status": "healthy", "rpc_url": get_settings().conflux_rpc}


@app.post("/api/gas/estimate")
async def estimate(request: EstimateRequest, gas_util: TxGasUtil = Depends(get_gas_util)):
    """Analyze a transaction and return it with gas and storage limits filled in"""
    tx_meta = request.tx_meta
    try:
        if request.get_code_response is None:
            await gas_util.analyze(tx_meta)
        else:
            await gas_util.analyze_gas_usage(tx_meta, request.get_code_response)
    except BlockFetchError as e:
        logger.error(f"Could not fetch latest block: {e}")
        raise HTTPException(status_code=502, detail=f"Could not fetch latest block: {e}")

    return tx_meta.to_dict()


@app.post("/api/gas/buffer")
async def buffer(request: BufferRequest):
    """Pad a gas estimate the same way estimation does"""
    try:
        gas_limit = add_gas_buffer(request.initial_gas_limit, request.block_gas_limit)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"gasLimit": gas_limit}


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    logging.basicConfig(level=settings.log_level)
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
