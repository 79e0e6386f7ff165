"""Client-mode wallet state store.

``WalletConfig`` tracks the connected connectors, the current connection
and the active chain. Every state change notifies the matching watchers
synchronously, before the call that caused it returns.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Optional, Union

from eth_account.messages import SignableMessage
from web3 import AsyncWeb3

from ..chains import make_client
from ..types import Chain, WalletParameters
from .connectors import Connector
from .errors import ChainNotConfiguredError, ConnectorAlreadyConnectedError, ConnectorNotConnectedError
from .subscription import ChangeCallback, Listener, Subscription

logger = logging.getLogger(__name__)

STATUS_CONNECTED = "connected"
STATUS_CONNECTING = "connecting"
STATUS_DISCONNECTED = "disconnected"
STATUS_RECONNECTING = "reconnecting"


@dataclass(frozen=True)
class Connection:
    connector: Connector
    accounts: tuple[str, ...]
    chain_id: int


@dataclass(frozen=True)
class WalletState:
    chain_id: int
    connections: dict[str, Connection] = field(default_factory=dict)
    current: Optional[str] = None
    status: str = STATUS_DISCONNECTED


@dataclass(frozen=True)
class AccountState:
    """The current account as seen by watchers."""

    address: Optional[str]
    addresses: tuple[str, ...]
    chain_id: Optional[int]
    connector: Optional[Connector]
    status: str

    @property
    def is_connected(self) -> bool:
        return self.status == STATUS_CONNECTED


def account_from_state(state: WalletState) -> AccountState:
    connection = state.connections.get(state.current) if state.current else None
    if connection is None or state.status != STATUS_CONNECTED:
        return AccountState(
            address=None,
            addresses=(),
            chain_id=None,
            connector=None,
            status=state.status,
        )
    return AccountState(
        address=connection.accounts[0] if connection.accounts else None,
        addresses=connection.accounts,
        chain_id=connection.chain_id,
        connector=connection.connector,
        status=state.status,
    )


class WalletConfig:
    """Multi-chain, multi-connector wallet store.

    Example:
        ```python
        wallet = WalletConfig(
            WalletParameters(chains=[base_sepolia], connectors=[LocalAccountConnector([key])])
        )
        await wallet.connect(wallet.connectors[0])
        ```

    Args:
        parameters: Chains, connectors and optional transports.
    """

    def __init__(self, parameters: Union[WalletParameters, dict[str, Any]]) -> None:
        if not isinstance(parameters, WalletParameters):
            parameters = WalletParameters.model_validate(parameters)
        if not parameters.chains:
            raise ChainNotConfiguredError("Wallet config needs at least one chain.")
        self.chains: list[Chain] = list(parameters.chains)
        self.connectors: list[Connector] = list(parameters.connectors)
        self.transports: dict[int, Any] = dict(parameters.transports or {})
        self.state = WalletState(chain_id=self.chains[0].id)
        self._clients: dict[int, AsyncWeb3] = {}
        self._listeners: list[Listener] = []

    # =========================================================================
    # State
    # =========================================================================

    @property
    def chain(self) -> Chain:
        return self.get_chain(self.state.chain_id)

    @property
    def current_connection(self) -> Optional[Connection]:
        if self.state.current is None:
            return None
        return self.state.connections.get(self.state.current)

    def get_chain(self, chain_id: int) -> Chain:
        for chain in self.chains:
            if chain.id == chain_id:
                return chain
        raise ChainNotConfiguredError(f"Chain [{chain_id}] not configured.")

    def get_client(self, chain_id: Optional[int] = None) -> AsyncWeb3:
        """Read handle for a chain, the active chain by default."""
        chain = self.get_chain(self.state.chain_id if chain_id is None else chain_id)
        if chain.id not in self._clients:
            self._clients[chain.id] = make_client(chain, self.transports.get(chain.id))
        return self._clients[chain.id]

    def get_account(self) -> AccountState:
        return account_from_state(self.state)

    def _set_state(self, **changes: Any) -> None:
        previous = self.state
        self.state = replace(previous, **changes)
        for listener in list(self._listeners):
            listener.notify(previous, self.state)

    def _settled_status(self, connections: dict[str, Connection]) -> str:
        return STATUS_CONNECTED if connections else STATUS_DISCONNECTED

    # =========================================================================
    # Watchers
    # =========================================================================

    def subscribe(self, selector: Callable[[WalletState], Any], callback: ChangeCallback) -> Subscription:
        listener = Listener(selector, callback, self._unsubscribe)
        self._listeners.append(listener)
        return listener.subscription

    def _unsubscribe(self, subscription: Subscription) -> None:
        self._listeners = [
            listener for listener in self._listeners if listener.subscription is not subscription
        ]

    def watch_connections(self, callback: ChangeCallback) -> Subscription:
        return self.subscribe(lambda state: list(state.connections.values()), callback)

    def watch_chain_id(self, callback: ChangeCallback) -> Subscription:
        return self.subscribe(lambda state: state.chain_id, callback)

    def watch_account(self, callback: ChangeCallback) -> Subscription:
        return self.subscribe(account_from_state, callback)

    # =========================================================================
    # Connections
    # =========================================================================

    async def connect(self, connector: Connector, chain_id: Optional[int] = None) -> Connection:
        """Connect a connector and make it the current connection.

        Raises:
            ConnectorAlreadyConnectedError: If the connector is already connected.
            ChainNotConfiguredError: If chain_id is not configured.
        """
        if connector.uid in self.state.connections:
            raise ConnectorAlreadyConnectedError()
        chain = self.get_chain(self.state.chain_id if chain_id is None else chain_id)

        self._set_state(status=STATUS_CONNECTING)
        try:
            accounts = await connector.connect(chain.id)
        except Exception:
            self._set_state(status=self._settled_status(self.state.connections))
            raise

        connection = Connection(connector=connector, accounts=tuple(accounts), chain_id=chain.id)
        self._set_state(
            chain_id=chain.id,
            connections={**self.state.connections, connector.uid: connection},
            current=connector.uid,
            status=STATUS_CONNECTED,
        )
        return connection

    async def disconnect(self, connector: Optional[Connector] = None) -> None:
        """Disconnect a connector, the current one by default."""
        uid = connector.uid if connector is not None else self.state.current
        if uid is None or uid not in self.state.connections:
            return
        await self.state.connections[uid].connector.disconnect()

        remaining = {key: value for key, value in self.state.connections.items() if key != uid}
        current = self.state.current
        if current == uid:
            current = next(iter(remaining), None)
        changes: dict[str, Any] = {
            "connections": remaining,
            "current": current,
            "status": self._settled_status(remaining),
        }
        if current is not None:
            changes["chain_id"] = remaining[current].chain_id
        self._set_state(**changes)

    async def reconnect(self, connectors: Optional[list[Connector]] = None) -> list[Connection]:
        """Restore authorized connectors without user interaction.

        Connectors that are not authorized, or that fail to report accounts,
        are left out of the result.

        Returns:
            The connections actually restored.
        """
        candidates = self.connectors if connectors is None else connectors
        previous_status = self.state.status
        self._set_state(status=STATUS_RECONNECTING)

        restored: dict[str, Connection] = {}
        for connector in candidates:
            if connector.uid in restored:
                continue
            try:
                if not await connector.is_authorized():
                    continue
                accounts = await connector.get_accounts()
            except Exception as error:
                logger.debug("Reconnect skipped %r: %s", connector, error)
                continue
            if not accounts:
                continue
            existing = self.state.connections.get(connector.uid)
            chain_id = existing.chain_id if existing is not None else self.state.chain_id
            restored[connector.uid] = Connection(
                connector=connector, accounts=tuple(accounts), chain_id=chain_id
            )

        if not restored:
            self._set_state(status=previous_status)
            return []

        connections = {**self.state.connections, **restored}
        current = self.state.current if self.state.current in connections else next(iter(restored))
        self._set_state(
            connections=connections,
            current=current,
            chain_id=connections[current].chain_id,
            status=STATUS_CONNECTED,
        )
        return list(restored.values())

    async def switch_account(self, connector: Connector) -> Connection:
        """Make an already connected connector the current connection."""
        connection = self.state.connections.get(connector.uid)
        if connection is None:
            raise ConnectorNotConnectedError()
        self._set_state(current=connector.uid, chain_id=connection.chain_id)
        return connection

    async def switch_chain(self, chain_id: int) -> Chain:
        """Switch the active chain, moving the current connection with it."""
        chain = self.get_chain(chain_id)
        connection = self.current_connection
        if connection is None:
            self._set_state(chain_id=chain.id)
            return chain

        await connection.connector.switch_chain(chain.id)
        moved = replace(connection, chain_id=chain.id)
        self._set_state(
            chain_id=chain.id,
            connections={**self.state.connections, connection.connector.uid: moved},
        )
        return chain

    # =========================================================================
    # Actions
    # =========================================================================

    async def get_balance(self, address: str, chain_id: Optional[int] = None) -> int:
        return await self.get_client(chain_id).eth.get_balance(address)  # type: ignore[arg-type]

    def _require_connection(self) -> Connection:
        connection = self.current_connection
        if connection is None or self.state.status != STATUS_CONNECTED:
            raise ConnectorNotConnectedError()
        return connection

    def _require_address(self) -> str:
        address = self.get_account().address
        if address is None:
            raise ConnectorNotConnectedError()
        return address

    async def send_transaction(self, transaction: dict[str, Any]) -> str:
        connection = self._require_connection()
        return await connection.connector.send_transaction(self.get_client(), transaction)

    async def sign_message(self, message: SignableMessage) -> str:
        connection = self._require_connection()
        return await connection.connector.sign_message(self._require_address(), message)

    async def sign_typed_data(self, full_message: dict[str, Any]) -> str:
        connection = self._require_connection()
        return await connection.connector.sign_typed_data(self._require_address(), full_message)
