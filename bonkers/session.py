"""Dual-mode transaction session.

A session owns the live handles the SDK talks to the chain through. It is a
closed variant chosen once from the config mode:

- ``ClientSession`` holds a ``WalletConfig`` (handle kind ``"wallet"``):
  many accounts, user-driven connect and switch, change subscriptions.
- ``ServerSession`` holds an ``AsyncWeb3`` public client and a
  ``ServerSigner`` wallet client (handle kind ``"rpc"``). Chain and account
  changes replace both handles; they are never edited in place.

One session is shared by reference by every wrapper bound to it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional, Union

from eth_account.messages import SignableMessage
from eth_utils import to_checksum_address

from .chains import get_chain_by_id, get_chains, get_transport, make_client
from .config import prepare_config
from .errors import ClientNotFound, InvalidClientType, InvalidSDKMode
from .logs import logged
from .signers import ServerSigner
from .types import (
    MODE_CLIENT,
    MODE_SERVER,
    Chain,
    ChainDescriptor,
    Config,
    ContractCall,
    ServerOptions,
    Simulation,
)
from .wallet import Connection, Connector, WalletConfig
from .wallet.errors import ConnectorNotConnectedError
from .wallet.subscription import ChangeCallback

if TYPE_CHECKING:
    from web3 import AsyncWeb3
    from web3.contract.async_contract import AsyncContractFunction

CLIENT_WALLET = "wallet"
CLIENT_RPC = "rpc"
CLIENT_TYPES = (CLIENT_WALLET, CLIENT_RPC)

WALLET_CLIENT_NOT_FOUND = "Wallet Client Not Found"
RPC_CLIENTS_NOT_FOUND = "RPC Public and Wallet Client Not Found"


def contract_function(client: "AsyncWeb3", call: ContractCall) -> "AsyncContractFunction":
    """Bind a contract call to a handle."""
    contract = client.eth.contract(address=to_checksum_address(call.address), abi=call.abi)  # type: ignore[arg-type]
    return getattr(contract.functions, call.function_name)(*call.args)


async def simulate_call(client: "AsyncWeb3", call: ContractCall, sender: str) -> Simulation:
    """Dry-run a write as ``sender`` and prepare its transaction request.

    ``build_transaction`` estimates gas, so a reverting call fails here
    before anything is signed.
    """
    function = contract_function(client, call)
    tx_params: dict[str, Any] = {"from": sender}
    if call.value:
        tx_params["value"] = call.value
    result = await function.call(tx_params)  # type: ignore[arg-type]
    request = await function.build_transaction(tx_params)  # type: ignore[arg-type]
    return Simulation(request=dict(request), result=result)


class Session:
    """Base session. Operations of the other mode raise ``InvalidSDKMode``."""

    mode = ""
    client_type = ""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger(__name__)

    # =========================================================================
    # Handles
    # =========================================================================

    def clients_exist(self, client_type: str) -> bool:
        raise NotImplementedError

    def set_clients(self, config: Union[Config, dict[str, Any]]) -> None:
        raise NotImplementedError

    def current_chain(self) -> Chain:
        raise NotImplementedError

    @logged
    def chain(self, client_type: str) -> ChainDescriptor:
        """Descriptor of the chain the ``client_type`` handle points at.

        Raises:
            InvalidClientType: For a kind other than "wallet" or "rpc".
            ClientNotFound: If that handle set is not live.
        """
        self._check_client_type(client_type)
        if not self.clients_exist(client_type):
            raise ClientNotFound(self.not_found_message(client_type))
        return ChainDescriptor.from_chain(self.current_chain())

    def account(self, config: Optional[Config] = None) -> Optional[str]:
        raise NotImplementedError

    async def balance_of(self, client_type: str, address: str) -> int:
        raise NotImplementedError

    def _prepare(self, config: Union[Config, dict[str, Any]]) -> Config:
        config = prepare_config(config)
        if config.mode != self.mode:
            raise InvalidSDKMode(
                f"Config mode [{config.mode}] does not match the {self.mode} session"
            )
        return config

    def _check_client_type(self, client_type: str) -> None:
        if client_type not in CLIENT_TYPES:
            raise InvalidClientType(
                f"Invalid Client Type [{client_type}], Expected one of: {', '.join(CLIENT_TYPES)}"
            )

    def _require_clients(self, client_type: str) -> None:
        self._check_client_type(client_type)
        if not self.clients_exist(client_type):
            raise ClientNotFound(self.not_found_message(client_type))

    @staticmethod
    def not_found_message(client_type: str) -> str:
        return WALLET_CLIENT_NOT_FOUND if client_type == CLIENT_WALLET else RPC_CLIENTS_NOT_FOUND

    # =========================================================================
    # Client mode only
    # =========================================================================

    def _client_only(self, function: str) -> InvalidSDKMode:
        return InvalidSDKMode(f"{function} is only available on Client Mode/Environment")

    def _server_only(self, function: str) -> InvalidSDKMode:
        return InvalidSDKMode(f"{function} is only available on Server Mode/Environment")

    def connectors(self) -> list[Connector]:
        raise self._client_only("connectors")

    def connection(self) -> Optional[Connection]:
        raise self._client_only("connection")

    async def connect(self, connector: Connector, on_change: Optional[ChangeCallback] = None) -> Connection:
        raise self._client_only("connect")

    async def disconnect(self) -> None:
        raise self._client_only("disconnect")

    async def reconnect(self, connectors: Optional[list[Connector]] = None) -> list[Connection]:
        raise self._client_only("reconnect")

    async def switch_account(
        self, connector: Connector, on_change: Optional[ChangeCallback] = None
    ) -> Connection:
        raise self._client_only("switch_account")

    async def switch_chain(self, chain_id: int, on_change: Optional[ChangeCallback] = None) -> Chain:
        raise self._client_only("switch_chain")

    # =========================================================================
    # Server mode only
    # =========================================================================

    def use_chain(self, config: Union[Config, dict[str, Any]], chain_id: int) -> None:
        raise self._server_only("use_chain")

    def use_account(self, private_key: str) -> None:
        raise self._server_only("use_account")

    # =========================================================================
    # Executor and signer primitives
    # =========================================================================

    async def read_contract(self, call: ContractCall) -> Any:
        raise NotImplementedError

    async def simulate_contract(self, call: ContractCall) -> Simulation:
        raise NotImplementedError

    async def submit(self, request: dict[str, Any]) -> str:
        raise NotImplementedError

    async def wait_for_transaction_receipt(self, tx_hash: str) -> Any:
        raise NotImplementedError

    async def sign_message(self, message: SignableMessage) -> str:
        raise NotImplementedError

    async def sign_typed_data(self, full_message: dict[str, Any]) -> str:
        raise NotImplementedError


class ClientSession(Session):
    """Session over a ``WalletConfig``.

    Args:
        wallet: Wallet store. Use ``set_clients`` to build one from a config.
        logger: Logger for failures.
    """

    mode = MODE_CLIENT
    client_type = CLIENT_WALLET

    def __init__(
        self,
        wallet: Optional[WalletConfig] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(logger)
        self.wallet = wallet

    def clients_exist(self, client_type: str) -> bool:
        return client_type == CLIENT_WALLET and self.wallet is not None

    @logged
    def set_clients(self, config: Union[Config, dict[str, Any]]) -> None:
        config = self._prepare(config)
        self.wallet = WalletConfig(config.options.wallet_config)  # type: ignore[union-attr]

    def current_chain(self) -> Chain:
        return self._wallet().chain

    def _wallet(self) -> WalletConfig:
        if self.wallet is None:
            raise ClientNotFound(WALLET_CLIENT_NOT_FOUND)
        return self.wallet

    @logged
    def account(self, config: Optional[Config] = None) -> Optional[str]:
        if self.wallet is None:
            return None
        return self.wallet.get_account().address

    @logged
    async def balance_of(self, client_type: str, address: str) -> int:
        self._require_clients(client_type)
        return await self._wallet().get_balance(address)

    @logged
    def connectors(self) -> list[Connector]:
        return list(self._wallet().connectors)

    @logged
    def connection(self) -> Optional[Connection]:
        return self._wallet().current_connection

    @logged
    async def connect(self, connector: Connector, on_change: Optional[ChangeCallback] = None) -> Connection:
        """Connect a connector.

        Args:
            connector: One of ``connectors()``.
            on_change: Called with (current, previous, subscription) whenever
                the connection list changes from now on.
        """
        wallet = self._wallet()
        if on_change is not None:
            wallet.watch_connections(on_change)
        return await wallet.connect(connector)

    @logged
    async def disconnect(self) -> None:
        await self._wallet().disconnect()

    @logged
    async def reconnect(self, connectors: Optional[list[Connector]] = None) -> list[Connection]:
        return await self._wallet().reconnect(connectors)

    @logged
    async def switch_account(
        self, connector: Connector, on_change: Optional[ChangeCallback] = None
    ) -> Connection:
        wallet = self._wallet()
        if on_change is not None:
            wallet.watch_account(on_change)
        return await wallet.switch_account(connector)

    @logged
    async def switch_chain(self, chain_id: int, on_change: Optional[ChangeCallback] = None) -> Chain:
        wallet = self._wallet()
        if on_change is not None:
            wallet.watch_chain_id(on_change)
        return await wallet.switch_chain(chain_id)

    async def read_contract(self, call: ContractCall) -> Any:
        return await contract_function(self._wallet().get_client(), call).call()

    async def simulate_contract(self, call: ContractCall) -> Simulation:
        wallet = self._wallet()
        sender = wallet.get_account().address
        if sender is None:
            raise ConnectorNotConnectedError()
        return await simulate_call(wallet.get_client(), call, sender)

    async def submit(self, request: dict[str, Any]) -> str:
        return await self._wallet().send_transaction(request)

    async def wait_for_transaction_receipt(self, tx_hash: str) -> Any:
        return await self._wallet().get_client().eth.wait_for_transaction_receipt(tx_hash)  # type: ignore[arg-type]

    async def sign_message(self, message: SignableMessage) -> str:
        return await self._wallet().sign_message(message)

    async def sign_typed_data(self, full_message: dict[str, Any]) -> str:
        return await self._wallet().sign_typed_data(full_message)


class ServerSession(Session):
    """Session over a public client and a server-key wallet client.

    Args:
        public_client: AsyncWeb3 handle of the current chain.
        wallet_client: ServerSigner bound to the same chain.
        logger: Logger for failures.
        config: Prepared server config. Lets ``use_account`` build the
            handles on the first configured chain when none exist yet.
    """

    mode = MODE_SERVER
    client_type = CLIENT_RPC

    def __init__(
        self,
        public_client: Optional["AsyncWeb3"] = None,
        wallet_client: Optional[ServerSigner] = None,
        logger: Optional[logging.Logger] = None,
        config: Optional[Config] = None,
    ) -> None:
        super().__init__(logger)
        self.public_client = public_client
        self.wallet_client = wallet_client
        self.config = config

    def clients_exist(self, client_type: str) -> bool:
        return (
            client_type == CLIENT_RPC
            and self.public_client is not None
            and self.wallet_client is not None
        )

    @logged
    def set_clients(self, config: Union[Config, dict[str, Any]]) -> None:
        """Build both handles for the first configured chain."""
        config = self._prepare(config)
        options: ServerOptions = config.options  # type: ignore[assignment]
        self.config = config
        self._bind_key(config, options.private_key)  # type: ignore[arg-type]

    def _bind_key(self, config: Config, private_key: str) -> None:
        chain = get_chains(config)[0]
        public_client = make_client(chain, get_transport(config, chain.id))
        wallet_client = ServerSigner.from_key(public_client, chain, private_key)
        self.public_client, self.wallet_client = public_client, wallet_client

    def current_chain(self) -> Chain:
        return self._signer().chain

    def _signer(self) -> ServerSigner:
        if self.public_client is None or self.wallet_client is None:
            raise ClientNotFound(RPC_CLIENTS_NOT_FOUND)
        return self.wallet_client

    @logged
    def account(self, config: Optional[Config] = None) -> Optional[str]:
        if self.wallet_client is None:
            return None
        return self.wallet_client.address

    @logged
    async def balance_of(self, client_type: str, address: str) -> int:
        self._require_clients(client_type)
        return await self.public_client.eth.get_balance(address)  # type: ignore[union-attr, arg-type]

    @logged
    def use_chain(self, config: Union[Config, dict[str, Any]], chain_id: int) -> None:
        """Rebind both handles to another configured chain, keeping the key.

        Raises:
            ClientNotFound: If no handles exist yet.
            InvalidChainId: If the chain is not configured.
        """
        signer = self._signer()
        config = self._prepare(config)
        chain = get_chain_by_id(config, chain_id)
        public_client = make_client(chain, get_transport(config, chain.id))
        wallet_client = ServerSigner(public_client, chain, signer.account)
        self.public_client, self.wallet_client = public_client, wallet_client

    @logged
    def use_account(self, private_key: str) -> None:
        """Replace the signer with a new key on the same chain.

        Without handles, both are built on the first configured chain.

        Raises:
            ClientNotFound: If there are no handles and no config to build them from.
        """
        if not self.clients_exist(CLIENT_RPC) and self.config is not None:
            self._bind_key(self.config, private_key)
            return
        signer = self._signer()
        self.wallet_client = ServerSigner.from_key(signer.client, signer.chain, private_key)

    async def read_contract(self, call: ContractCall) -> Any:
        self._signer()
        return await contract_function(self.public_client, call).call()  # type: ignore[arg-type]

    async def simulate_contract(self, call: ContractCall) -> Simulation:
        signer = self._signer()
        if signer.address is None:
            raise ClientNotFound("No Account Bound To The Wallet Client")
        return await simulate_call(self.public_client, call, signer.address)  # type: ignore[arg-type]

    async def submit(self, request: dict[str, Any]) -> str:
        return await self._signer().send_transaction(request)

    async def wait_for_transaction_receipt(self, tx_hash: str) -> Any:
        self._signer()
        return await self.public_client.eth.wait_for_transaction_receipt(tx_hash)  # type: ignore[union-attr, arg-type]

    async def sign_message(self, message: SignableMessage) -> str:
        return self._signer().sign_message(message)

    async def sign_typed_data(self, full_message: dict[str, Any]) -> str:
        return self._signer().sign_typed_data(full_message)


def new_session(config: Union[Config, dict[str, Any]]) -> Session:
    """Session variant for the config mode, without handles."""
    config = prepare_config(config)
    if config.mode == MODE_CLIENT:
        return ClientSession(logger=config.logger)
    return ServerSession(logger=config.logger, config=config)


def create_session(config: Union[Config, dict[str, Any]]) -> Session:
    """Session variant for the config mode, with its handles built."""
    config = prepare_config(config)
    session = new_session(config)
    session.set_clients(config)
    return session
