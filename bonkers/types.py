from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

MODE_CLIENT = "client"
MODE_SERVER = "server"
SDK_MODES = (MODE_CLIENT, MODE_SERVER)

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# An RPC url or a web3 async provider instance
Transport = Any

Abi = list[dict[str, Any]]


class ContractType(str, Enum):
    """On-chain contract kinds, as returned by ``contractType()``."""

    CONTROLLER = "CONTROLLER"
    VAULT = "VAULT"
    VAULT_FACTORY = "VAULT FACTORY"


# =============================================================================
# Chains
# =============================================================================


class NativeCurrency(BaseModel):
    name: str
    symbol: str
    decimals: int = 18

    model_config = ConfigDict(frozen=True)


class Chain(BaseModel):
    """An EVM chain the SDK can talk to."""

    id: int
    name: str
    native_currency: NativeCurrency
    rpc_urls: list[str] = Field(default_factory=list)
    testnet: bool = False

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class ChainDescriptor(BaseModel):
    """Identity of the chain a live handle currently points at."""

    id: int
    name: str
    symbol: str

    @classmethod
    def from_chain(cls, chain: Chain) -> ChainDescriptor:
        return cls(id=chain.id, name=chain.name, symbol=chain.native_currency.symbol)


# =============================================================================
# Config
# =============================================================================


class WalletParameters(BaseModel):
    """Parameters for the client-mode wallet store.

    ``connectors`` holds ``bonkers.wallet.Connector`` instances.
    """

    chains: list[Chain]
    connectors: list[Any] = Field(default_factory=list)
    transports: Optional[dict[int, Transport]] = None

    model_config = ConfigDict(arbitrary_types_allowed=True)


class ClientOptions(BaseModel):
    wallet_config: Optional[WalletParameters] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )


class ServerOptions(BaseModel):
    private_key: Optional[str] = None
    chains: list[Chain] = Field(default_factory=list)
    transports: Optional[dict[int, Transport]] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    @field_validator("chains", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return [] if v is None else v


class Config(BaseModel):
    """SDK configuration.

    ``mode`` selects the execution context and never changes after creation.
    Options may be given as plain dicts; they are coerced to the options model
    of the mode.

    Example:
        ```python
        config = Config(
            mode="server",
            options={"private_key": "0x...", "chains": [base_sepolia]},
        )
        ```
    """

    mode: str
    options: Optional[Union[ClientOptions, ServerOptions]] = None
    logger: Optional[logging.Logger] = None

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @model_validator(mode="before")
    @classmethod
    def coerce_options(cls, data: Any) -> Any:
        if not isinstance(data, dict) or not isinstance(data.get("options"), dict):
            return data
        if data.get("mode") == MODE_CLIENT:
            return {**data, "options": ClientOptions.model_validate(data["options"])}
        if data.get("mode") == MODE_SERVER:
            return {**data, "options": ServerOptions.model_validate(data["options"])}
        return data


# =============================================================================
# Contract parameters and results
# =============================================================================


class ContractParams(BaseModel):
    """Address and ABI of a deployed contract."""

    address: str
    abi: list[dict[str, Any]]


@dataclass(frozen=True)
class ResolvedParams:
    """Result of a successful contract resolution."""

    address: str
    abi: Abi
    chain: Chain


@dataclass
class ContractCall:
    """A single contract function invocation."""

    address: str
    abi: Abi
    function_name: str
    args: tuple[Any, ...] = ()
    value: Optional[int] = None


@dataclass
class Simulation:
    """Outcome of a simulated write: the prepared request and its return value."""

    request: dict[str, Any]
    result: Any = None


class TransactionResult(BaseModel):
    status: str
    result: Any = None
    tx_hash: str
    receipt: Any = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )


class UpgradeParams(BaseModel):
    """Call to run on the new implementation right after an upgrade."""

    function_name: str
    args: list[Any] = Field(default_factory=list)
    value: Optional[int] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Typed data
# =============================================================================


class TypedDataDomain(BaseModel):
    name: Optional[str] = None
    version: Optional[str] = None
    chain_id: Optional[int] = None
    verifying_contract: Optional[str] = None
    salt: Optional[str] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TypedDataParams(BaseModel):
    """EIP-712 payload to sign or verify."""

    domain: Optional[TypedDataDomain] = None
    types: dict[str, list[dict[str, str]]]
    primary_type: str
    message: dict[str, Any]

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Domain results
# =============================================================================


class ControllerRole(int, Enum):
    BOT = 0
    CALLER = 1
    ERC = 2


class Receiver(BaseModel):
    receiver: str
    amount: int

    def as_tuple(self) -> tuple[str, int]:
        return (self.receiver, self.amount)


class Call3(BaseModel):
    target: str
    allow_failure: bool = False
    call_data: str

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def as_tuple(self) -> tuple[Any, ...]:
        return (self.target, self.allow_failure, self.call_data)


class Call3Value(Call3):
    value: int = 0

    def as_tuple(self) -> tuple[Any, ...]:
        return (self.target, self.allow_failure, self.value, self.call_data)


class CallResult(BaseModel):
    success: bool
    return_data: str

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class VaultInfo(BaseModel):
    id: str
    version: str
    project_owner: str
    project_name: str
    reward_token: str
    created_at: str
    deployer: str

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("id", "created_at", mode="before")
    @classmethod
    def stringify_int(cls, v):
        return str(v) if isinstance(v, int) else v


class ControllerLimits(BaseModel):
    quota: str
    reward_allowance: str

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("quota", "reward_allowance", mode="before")
    @classmethod
    def stringify_int(cls, v):
        return str(v) if isinstance(v, int) else v


class ImplementationDetails(BaseModel):
    implementation_address: str
    contract_type: str
    version: str

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreationFee(BaseModel):
    eth_fee: str
    erc20_fee: str

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("eth_fee", "erc20_fee", mode="before")
    @classmethod
    def stringify_int(cls, v):
        return str(v) if isinstance(v, int) else v

