"""
Transaction metadata models consumed and mutated by the gas estimator.

Field names are snake_case in Python and keep the camelCase names used by
the transaction controller and the JSON-RPC wire format as aliases.
"""
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .hex_utils import is_empty_hex_data


class TransactionParams(BaseModel):
    """The part of a transaction that is sent to the network"""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    to: Optional[str] = None  # Absent for contract creation
    from_: Optional[str] = Field(default=None, alias="from")
    value: Optional[str] = None
    data: Optional[str] = None
    gas: Optional[str] = None
    storage_limit: Optional[str] = Field(default=None, alias="storageLimit")
    gas_price: Optional[str] = Field(default=None, alias="gasPrice")
    nonce: Optional[str] = None
    chain_id: Optional[str] = Field(default=None, alias="chainId")
    epoch_height: Optional[str] = Field(default=None, alias="epochHeight")

    @field_validator("to", "gas", "storage_limit", mode="before")
    @classmethod
    def _empty_as_unspecified(cls, value: Any) -> Any:
        if value == "":
            return None
        return value

    @field_validator("data", mode="before")
    @classmethod
    def _no_bytes_as_unspecified(cls, value: Any) -> Any:
        if isinstance(value, str) and is_empty_hex_data(value):
            return None
        return value

    def to_rpc_dict(self) -> Dict[str, Any]:
        """Wire representation with only the fields that are set"""
        return self.model_dump(by_alias=True, exclude_none=True)


class SimulationDebug(BaseModel):
    """Context attached to a failed estimation"""
    model_config = ConfigDict(populate_by_name=True)

    block_number: Optional[str] = Field(default=None, alias="blockNumber")
    block_gas_limit: Optional[str] = Field(default=None, alias="blockGasLimit")
    get_code_response: Optional[str] = Field(default=None, alias="getCodeResponse")


class SimulationFails(BaseModel):
    """Structured failure record; the UI shows reason and disables submit"""
    model_config = ConfigDict(populate_by_name=True)

    reason: str
    error_key: Optional[str] = Field(default=None, alias="errorKey")
    debug: SimulationDebug = Field(default_factory=SimulationDebug)


class TransactionMeta(BaseModel):
    """
    A transaction record owned by the transaction controller.

    The estimator borrows it for a single analyze call and mutates it in
    place. It must not be analyzed again until the previous call settles.
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: Optional[Union[int, str]] = None
    tx_params: TransactionParams = Field(alias="txParams")
    transaction_category: Optional[str] = Field(default=None, alias="transactionCategory")
    gas_limit_specified: Optional[bool] = Field(default=None, alias="gasLimitSpecified")
    storage_limit_specified: Optional[bool] = Field(default=None, alias="storageLimitSpecified")
    simple_send: bool = Field(default=False, alias="simpleSend")
    estimated_gas: Optional[str] = Field(default=None, alias="estimatedGas")
    estimated_storage: Optional[str] = Field(default=None, alias="estimatedStorage")
    simulation_fails: Optional[SimulationFails] = Field(default=None, alias="simulationFails")

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class BlockLimits(BaseModel):
    """Snapshot of the latest block, only what estimation needs"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    number: Optional[str] = None
    gas_limit: str = Field(alias="gasLimit")


class GasAndCollateral(BaseModel):
    """Raw estimate, before any buffer is applied"""
    model_config = ConfigDict(populate_by_name=True)

    gas_used: str = Field(alias="gasUsed")
    storage_collateralized: str = Field(alias="storageCollateralized")
