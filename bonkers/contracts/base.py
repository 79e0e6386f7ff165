"""Base classes for the contract wrappers."""

from __future__ import annotations

import logging
from typing import Any, Optional, Union

from eth_utils import to_checksum_address, to_hex
from typing_extensions import Self
from web3 import Web3

from ..binding import ContractBinding, require_non_zero, require_present
from ..chains import get_chain_by_id, get_chains, get_transport
from ..config import describe_config, prepare_config
from ..errors import InvalidSDKMode
from ..executor import TransactionExecutor
from ..logs import logged
from ..resolver import get_contract_type, get_contract_version, implementation_of, resolve
from ..session import Session, new_session
from ..signature import Signature
from ..types import (
    MODE_SERVER,
    Abi,
    Chain,
    ChainDescriptor,
    CallResult,
    Config,
    ContractCall,
    ContractParams,
    ContractType,
    ResolvedParams,
    TransactionResult,
    UpgradeParams,
)
from ..wallet import Connection, Connector
from ..wallet.subscription import ChangeCallback

Params = Union[ContractParams, ResolvedParams, dict[str, Any], None]


def to_call_results(result: Any) -> list[CallResult]:
    """Decode (success, returnData) tuples returned by batch calls."""
    return [
        CallResult(success=success, return_data=to_hex(return_data))
        for success, return_data in result or []
    ]


def bind_session(config: Config, session: Optional[Session] = None) -> Session:
    """Reuse a session, or create one for the config, with handles built once."""
    if session is None:
        session = new_session(config)
    elif session.mode != config.mode:
        raise InvalidSDKMode(
            f"Session mode [{session.mode}] does not match config mode [{config.mode}]"
        )
    if not session.clients_exist(session.client_type):
        session.set_clients(config)
    return session


class SessionAccessors:
    """Session operations exposed by wrappers and the SDK facade.

    Expects ``config``, ``session`` and ``logger`` attributes.
    """

    config: Config
    session: Session
    logger: logging.Logger

    def connectors(self) -> list[Connector]:
        return self.session.connectors()

    def connection(self) -> Optional[Connection]:
        return self.session.connection()

    async def connect(self, connector: Connector, on_change: Optional[ChangeCallback] = None) -> Connection:
        return await self.session.connect(connector, on_change)

    async def reconnect(self, connectors: Optional[list[Connector]] = None) -> list[Connection]:
        """Restore the given connectors, all known connectors by default."""
        if connectors is None:
            connectors = self.session.connectors()
        return await self.session.reconnect(connectors)

    async def disconnect(self) -> None:
        await self.session.disconnect()

    async def switch_chain(self, chain_id: int, on_change: Optional[ChangeCallback] = None) -> Chain:
        return await self.session.switch_chain(chain_id, on_change)

    async def switch_account(
        self, connector: Connector, on_change: Optional[ChangeCallback] = None
    ) -> Connection:
        return await self.session.switch_account(connector, on_change)

    def use_chain(self, chain_id: int) -> Self:
        self.session.use_chain(self.config, chain_id)
        return self

    def use_account(self, private_key: str) -> Self:
        self.session.use_account(private_key)
        return self

    def chain(self) -> ChainDescriptor:
        return self.session.chain(self.session.client_type)

    def chains(self) -> list[Chain]:
        return get_chains(self.config)

    def account(self) -> Optional[str]:
        return self.session.account(self.config)


class ContractWrapper(SessionAccessors):
    """A contract binding plus the session, executor and signature it uses.

    Args:
        config: SDK config.
        params: Address and ABI of the contract, if already known.
        session: Session to share. A new one is created when omitted.
    """

    CONTRACT_TYPE: Optional[ContractType] = None

    def __init__(
        self,
        config: Union[Config, dict[str, Any]],
        params: Params = None,
        *,
        session: Optional[Session] = None,
    ) -> None:
        self.config = prepare_config(config)
        self.mode = self.config.mode
        self.logger = self.config.logger or logging.getLogger(__name__)
        self.session = bind_session(self.config, session)
        self.binding = ContractBinding.from_params(params, self._kind())
        self.executor = TransactionExecutor(self.session, self.logger)
        self.signature = Signature(self.config, self.session)
        self.logger.debug("%s created: %s", type(self).__name__, describe_config(self.config))

    def _kind(self) -> Optional[str]:
        return self.CONTRACT_TYPE.value if self.CONTRACT_TYPE is not None else None

    @property
    def contract_address(self) -> Optional[str]:
        return self.binding.address

    @property
    def contract_abi(self) -> Optional[Abi]:
        return self.binding.abi

    def bind(self, params: Params) -> None:
        """Replace the binding wholesale."""
        self.binding = ContractBinding.from_params(params, self._kind())

    async def reader(self, call: ContractCall) -> Any:
        return await self.executor.read(call)

    async def writer(self, call: ContractCall) -> TransactionResult:
        return await self.executor.write(call)

    def _call(self, function_name: str, *args: Any, value: Optional[int] = None) -> ContractCall:
        require_present(self.binding)
        return ContractCall(
            address=self.binding.address,  # type: ignore[arg-type]
            abi=self.binding.abi,  # type: ignore[arg-type]
            function_name=function_name,
            args=args,
            value=value,
        )

    async def _read(self, function_name: str, *args: Any) -> Any:
        return await self.reader(self._call(function_name, *args))

    async def _write(self, function_name: str, *args: Any, value: Optional[int] = None) -> TransactionResult:
        return await self.writer(self._call(function_name, *args, value=value))

    async def _write_void(self, function_name: str, *args: Any, value: Optional[int] = None) -> TransactionResult:
        result = await self._write(function_name, *args, value=value)
        return result.model_copy(update={"result": None})


class BaseContract(ContractWrapper):
    """Operations shared by every Bonkers contract kind."""

    @logged
    def use_new_contract(self, chain_id: int, params: Params) -> Self:
        """Point the wrapper at another contract.

        In server mode the session is moved to ``chain_id`` first.

        Raises:
            InvalidContract: If the address is the zero address.
        """
        new_binding = ContractBinding.from_params(params, self._kind())
        require_non_zero(new_binding.address)
        if self.mode == MODE_SERVER:
            self.session.use_chain(self.config, chain_id)
        self.binding = new_binding
        return self

    @logged
    async def get_params(self, chain_id: int, address: str) -> ResolvedParams:
        """Resolve address and ABI of a contract of this wrapper's kind."""
        chain = get_chain_by_id(self.config, chain_id)
        return await resolve(
            address, chain, self.CONTRACT_TYPE, get_transport(self.config, chain_id)
        )

    @logged
    async def balance(self) -> int:
        """Native balance of the bound contract, in wei."""
        require_present(self.binding)
        return await self.session.balance_of(self.session.client_type, self.binding.address)  # type: ignore[arg-type]

    @logged
    async def balance_of(self, address: str) -> int:
        """Native balance of any address, in wei."""
        return await self.session.balance_of(self.session.client_type, to_checksum_address(address))

    @logged
    async def implementation_address(self) -> str:
        """Implementation behind the bound proxy."""
        require_present(self.binding)
        chain_id = self.chain().id
        return await implementation_of(
            get_chain_by_id(self.config, chain_id),
            self.binding.address,  # type: ignore[arg-type]
            get_transport(self.config, chain_id),
        )

    @logged
    async def get_contract_type(self, address: Optional[str] = None) -> str:
        """On-chain contract type of ``address``, or of the bound contract."""
        if address is None:
            require_present(self.binding)
            address = self.binding.address
        return await get_contract_type(self.executor, address)  # type: ignore[arg-type]

    @logged
    async def get_contract_version(self, address: Optional[str] = None) -> str:
        if address is None:
            require_present(self.binding)
            address = self.binding.address
        return await get_contract_version(self.executor, address)  # type: ignore[arg-type]

    @logged
    async def upgrade_to_and_call(
        self,
        new_implementation: str,
        params: Union[UpgradeParams, str, None] = None,
    ) -> TransactionResult:
        """Upgrade the proxy and optionally call the new implementation.

        Args:
            new_implementation: Address of the new implementation.
            params: Calldata hex, or an UpgradeParams encoded against the
                bound ABI. No call is made when omitted.
        """
        require_present(self.binding)
        value: Optional[int] = None
        if params is None:
            data = "0x"
        elif isinstance(params, str):
            data = params
        else:
            contract = Web3().eth.contract(abi=self.binding.abi)
            data = contract.encode_abi(params.function_name, args=list(params.args))
            value = params.value
        return await self._write_void(
            "upgradeToAndCall", to_checksum_address(new_implementation), data, value=value
        )
