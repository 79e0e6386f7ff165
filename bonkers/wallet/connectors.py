"""Wallet connectors.

A connector owns the accounts of one wallet and performs the signing side of
client-mode operations. ``LocalAccountConnector`` signs with eth_account
keys held in process; ``JsonRpcConnector`` delegates to a node or wallet that
manages its own accounts.
"""

from __future__ import annotations

import json
import uuid
from typing import TYPE_CHECKING, Any, Optional, Union

from eth_account import Account
from eth_account.messages import SignableMessage
from eth_utils import to_checksum_address, to_hex
from web3 import AsyncWeb3

from ..chains import make_provider
from ..signers import send_signed_transaction, sign_message_with, sign_typed_data_with
from ..types import Transport
from .errors import (
    ConnectorNotConnectedError,
    SwitchChainNotSupportedError,
    WalletRequestError,
)

if TYPE_CHECKING:
    from eth_account.signers.local import LocalAccount


class Connector:
    """Base wallet connector.

    Subclasses implement the account, chain and signing operations.

    Args:
        name: Human readable connector name.
        id: Stable connector id. Defaults to a slug of the name.
    """

    type = "base"

    def __init__(self, name: str, id: Optional[str] = None) -> None:
        self.name = name
        self.id = id or name.lower().replace(" ", "-")
        self.uid = uuid.uuid4().hex

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, uid={self.uid!r})"

    async def connect(self, chain_id: int) -> list[str]:
        """Connect and return the connector's accounts."""
        raise NotImplementedError

    async def disconnect(self) -> None:
        raise NotImplementedError

    async def get_accounts(self) -> list[str]:
        raise NotImplementedError

    async def is_authorized(self) -> bool:
        """Whether the connector can be reconnected without user interaction."""
        raise NotImplementedError

    async def switch_chain(self, chain_id: int) -> None:
        raise NotImplementedError

    async def send_transaction(self, client: AsyncWeb3, transaction: dict[str, Any]) -> str:
        raise NotImplementedError

    async def sign_message(self, address: str, message: SignableMessage) -> str:
        raise NotImplementedError

    async def sign_typed_data(self, address: str, full_message: dict[str, Any]) -> str:
        raise NotImplementedError


class LocalAccountConnector(Connector):
    """Connector over eth_account accounts held in process.

    Example:
        ```python
        connector = LocalAccountConnector([Account.create(), "0x<private key>"])
        ```

    Args:
        accounts: LocalAccount instances or private keys.
        name: Connector name.
        reconnect: Whether a previously connected connector is restored by
            ``WalletConfig.reconnect``.
        switch_chain: Whether the connector supports switching chains.
    """

    type = "local"

    def __init__(
        self,
        accounts: list[Union["LocalAccount", str]],
        name: str = "Local Account",
        id: Optional[str] = None,
        reconnect: bool = True,
        switch_chain: bool = True,
    ) -> None:
        super().__init__(name, id)
        self.accounts: list["LocalAccount"] = [
            Account.from_key(account) if isinstance(account, str) else account
            for account in accounts
        ]
        self.supports_reconnect = reconnect
        self.supports_switch_chain = switch_chain
        self.chain_id: Optional[int] = None
        self._connected = False

    async def connect(self, chain_id: int) -> list[str]:
        self._connected = True
        self.chain_id = chain_id
        return await self.get_accounts()

    async def disconnect(self) -> None:
        self._connected = False

    async def get_accounts(self) -> list[str]:
        return [account.address for account in self.accounts]

    async def is_authorized(self) -> bool:
        return self.supports_reconnect and self._connected

    async def switch_chain(self, chain_id: int) -> None:
        if not self.supports_switch_chain:
            raise SwitchChainNotSupportedError()
        self.chain_id = chain_id

    async def send_transaction(self, client: AsyncWeb3, transaction: dict[str, Any]) -> str:
        return await send_signed_transaction(
            client, self._account_for(transaction.get("from")), transaction
        )

    async def sign_message(self, address: str, message: SignableMessage) -> str:
        return sign_message_with(self._account_for(address), message)

    async def sign_typed_data(self, address: str, full_message: dict[str, Any]) -> str:
        return sign_typed_data_with(self._account_for(address), full_message)

    def _account_for(self, address: Optional[str]) -> "LocalAccount":
        if not self._connected or not self.accounts:
            raise ConnectorNotConnectedError()
        if address is None:
            return self.accounts[0]
        for account in self.accounts:
            if account.address.lower() == address.lower():
                return account
        raise ConnectorNotConnectedError(f"Account {address} not found on connector.")


class JsonRpcConnector(Connector):
    """Connector over accounts managed by a node or wallet behind JSON-RPC.

    Uses ``eth_requestAccounts``, ``eth_sendTransaction``, ``personal_sign``,
    ``eth_signTypedData_v4`` and ``wallet_switchEthereumChain``.

    Args:
        transport: RPC url or web3 async provider of the wallet.
        name: Connector name.
    """

    type = "jsonRpc"

    def __init__(
        self,
        transport: Transport,
        name: str = "JSON-RPC Wallet",
        id: Optional[str] = None,
    ) -> None:
        super().__init__(name, id)
        self.provider = make_provider(transport)

    async def request(self, method: str, params: Optional[list[Any]] = None) -> Any:
        response = await self.provider.make_request(method, params or [])  # type: ignore[arg-type]
        if response.get("error"):
            error = response["error"]
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise WalletRequestError(f"{method} failed: {message}", cause=error)
        return response.get("result")

    async def connect(self, chain_id: int) -> list[str]:
        accounts = await self.request("eth_requestAccounts")
        current = await self.request("eth_chainId")
        if current is not None and int(current, 16) != chain_id:
            await self.switch_chain(chain_id)
        return [to_checksum_address(account) for account in accounts]

    async def disconnect(self) -> None:
        return None

    async def get_accounts(self) -> list[str]:
        accounts = await self.request("eth_accounts")
        return [to_checksum_address(account) for account in accounts or []]

    async def is_authorized(self) -> bool:
        return len(await self.get_accounts()) > 0

    async def switch_chain(self, chain_id: int) -> None:
        await self.request("wallet_switchEthereumChain", [{"chainId": hex(chain_id)}])

    async def send_transaction(self, client: AsyncWeb3, transaction: dict[str, Any]) -> str:
        wallet = AsyncWeb3(self.provider)
        tx_hash = await wallet.eth.send_transaction(transaction)  # type: ignore[arg-type]
        return to_hex(tx_hash)

    async def sign_message(self, address: str, message: SignableMessage) -> str:
        return await self.request("personal_sign", [to_hex(message.body), address])

    async def sign_typed_data(self, address: str, full_message: dict[str, Any]) -> str:
        payload = json.dumps(full_message, default=_json_default)
        return await self.request("eth_signTypedData_v4", [address, payload])


def _json_default(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return to_hex(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
