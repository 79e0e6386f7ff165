"""Tests for the client-mode wallet store and connectors."""

from unittest.mock import AsyncMock, Mock

import pytest
from eth_account import Account
from eth_account.messages import encode_defunct

from bonkers.chains import base_sepolia, sepolia
from bonkers.types import WalletParameters
from bonkers.wallet import (
    STATUS_CONNECTED,
    STATUS_DISCONNECTED,
    JsonRpcConnector,
    LocalAccountConnector,
    WalletConfig,
)
from bonkers.wallet.errors import (
    ChainNotConfiguredError,
    ConnectorAlreadyConnectedError,
    ConnectorNotConnectedError,
    SwitchChainNotSupportedError,
    WalletRequestError,
)


@pytest.fixture
def wallet(connectors):
    return WalletConfig(WalletParameters(chains=[base_sepolia, sepolia], connectors=connectors))


class TestWalletConfig:
    """Test WalletConfig state transitions."""

    def test_starts_disconnected_on_first_chain(self, wallet):
        assert wallet.state.status == STATUS_DISCONNECTED
        assert wallet.chain == base_sepolia
        assert wallet.current_connection is None
        assert wallet.get_account().address is None

    def test_requires_a_chain(self, connectors):
        with pytest.raises(ChainNotConfiguredError):
            WalletConfig({"chains": [], "connectors": connectors})

    @pytest.mark.asyncio
    async def test_connect(self, wallet, connectors, client_accounts):
        connection = await wallet.connect(connectors[0])

        assert connection.chain_id == base_sepolia.id
        assert wallet.state.status == STATUS_CONNECTED
        account = wallet.get_account()
        assert account.is_connected
        assert account.address == client_accounts[0].address
        assert account.connector is connectors[0]

    @pytest.mark.asyncio
    async def test_connect_on_other_chain(self, wallet, connectors):
        await wallet.connect(connectors[0], chain_id=sepolia.id)

        assert wallet.chain == sepolia
        assert connectors[0].chain_id == sepolia.id

    @pytest.mark.asyncio
    async def test_connect_twice_fails(self, wallet, connectors):
        await wallet.connect(connectors[0])

        with pytest.raises(ConnectorAlreadyConnectedError):
            await wallet.connect(connectors[0])

    @pytest.mark.asyncio
    async def test_failed_connect_restores_status(self, wallet):
        """A connector error leaves the store as it was."""
        failing = LocalAccountConnector([Account.create()], name="Broken")
        failing.connect = AsyncMock(side_effect=RuntimeError("user rejected"))

        with pytest.raises(RuntimeError):
            await wallet.connect(failing)

        assert wallet.state.status == STATUS_DISCONNECTED
        assert wallet.state.connections == {}

    @pytest.mark.asyncio
    async def test_disconnect_falls_back_to_remaining(self, wallet, connectors, client_accounts):
        await wallet.connect(connectors[0])
        await wallet.connect(connectors[1])

        await wallet.disconnect()

        assert wallet.current_connection.connector is connectors[0]
        assert wallet.get_account().address == client_accounts[0].address
        assert wallet.state.status == STATUS_CONNECTED

    @pytest.mark.asyncio
    async def test_disconnect_unknown_connector_is_noop(self, wallet, connectors):
        await wallet.connect(connectors[0])

        await wallet.disconnect(connectors[1])

        assert wallet.current_connection.connector is connectors[0]

    @pytest.mark.asyncio
    async def test_reconnect_only_restores_authorized(self, wallet, connectors):
        await wallet.connect(connectors[0])
        await wallet.connect(connectors[2])

        restored = await wallet.reconnect()

        assert len(restored) == 1
        assert restored[0].connector is connectors[0]

    @pytest.mark.asyncio
    async def test_reconnect_skips_failing_connectors(self, wallet, connectors):
        """A connector that errors is skipped, not fatal."""
        await wallet.connect(connectors[0])
        connectors[1].is_authorized = AsyncMock(side_effect=RuntimeError("locked"))

        restored = await wallet.reconnect()

        assert [connection.connector for connection in restored] == [connectors[0]]

    @pytest.mark.asyncio
    async def test_reconnect_nothing_keeps_status(self, wallet):
        assert await wallet.reconnect() == []
        assert wallet.state.status == STATUS_DISCONNECTED

    @pytest.mark.asyncio
    async def test_switch_account_requires_connection(self, wallet, connectors):
        await wallet.connect(connectors[0])

        with pytest.raises(ConnectorNotConnectedError):
            await wallet.switch_account(connectors[1])

    @pytest.mark.asyncio
    async def test_switch_chain_moves_connection(self, wallet, connectors):
        await wallet.connect(connectors[0])

        await wallet.switch_chain(sepolia.id)

        assert wallet.current_connection.chain_id == sepolia.id
        assert connectors[0].chain_id == sepolia.id

    @pytest.mark.asyncio
    async def test_switch_chain_without_connection(self, wallet):
        assert await wallet.switch_chain(sepolia.id) == sepolia
        assert wallet.state.chain_id == sepolia.id

    @pytest.mark.asyncio
    async def test_switch_to_unconfigured_chain_fails(self, wallet, connectors):
        await wallet.connect(connectors[0])

        with pytest.raises(ChainNotConfiguredError):
            await wallet.switch_chain(1)

    @pytest.mark.asyncio
    async def test_switch_chain_not_supported(self):
        connector = LocalAccountConnector([Account.create()], switch_chain=False)
        wallet = WalletConfig(WalletParameters(chains=[base_sepolia, sepolia], connectors=[connector]))
        await wallet.connect(connector)

        with pytest.raises(SwitchChainNotSupportedError):
            await wallet.switch_chain(sepolia.id)

        assert wallet.chain == base_sepolia

    def test_get_client_is_cached_per_chain(self, wallet, fake_clients):
        first = wallet.get_client()

        assert wallet.get_client() is first
        assert wallet.get_client(sepolia.id) is not first
        assert len(fake_clients) == 2

    @pytest.mark.asyncio
    async def test_sign_message_requires_connection(self, wallet):
        with pytest.raises(ConnectorNotConnectedError):
            await wallet.sign_message(encode_defunct(text="hello"))

    @pytest.mark.asyncio
    async def test_sign_message_with_current_account(self, wallet, connectors, client_accounts):
        await wallet.connect(connectors[0])
        message = encode_defunct(text="hello")

        signature = await wallet.sign_message(message)

        assert Account.recover_message(message, signature=signature) == client_accounts[0].address


class TestWatchers:
    """Test change subscriptions."""

    @pytest.mark.asyncio
    async def test_watch_account(self, wallet, connectors, client_accounts):
        callback = Mock()
        wallet.watch_account(callback)

        await wallet.connect(connectors[0])

        current, previous, _ = callback.call_args.args
        assert current.address == client_accounts[0].address
        assert previous.address is None

    @pytest.mark.asyncio
    async def test_unchanged_selection_does_not_notify(self, wallet, connectors):
        await wallet.connect(connectors[0])
        callback = Mock()
        wallet.watch_chain_id(callback)

        await wallet.switch_chain(base_sepolia.id)

        callback.assert_not_called()

    @pytest.mark.asyncio
    async def test_cancelled_subscription_stops(self, wallet, connectors):
        callback = Mock()
        subscription = wallet.watch_connections(callback)
        subscription.cancel()
        subscription.cancel()

        await wallet.connect(connectors[0])

        callback.assert_not_called()
        assert not subscription.active


class TestJsonRpcConnector:
    """Test the JSON-RPC connector against a mocked provider."""

    def make_connector(self, responses):
        connector = JsonRpcConnector("http://127.0.0.1:8545")
        connector.provider = Mock()
        connector.provider.make_request = AsyncMock(side_effect=lambda method, params: responses[method])
        return connector

    @pytest.mark.asyncio
    async def test_connect_switches_to_requested_chain(self):
        address = Account.create().address
        connector = self.make_connector(
            {
                "eth_requestAccounts": {"result": [address.lower()]},
                "eth_chainId": {"result": hex(base_sepolia.id)},
                "wallet_switchEthereumChain": {"result": None},
            }
        )

        accounts = await connector.connect(sepolia.id)

        assert accounts == [address]
        connector.provider.make_request.assert_any_await(
            "wallet_switchEthereumChain", [{"chainId": hex(sepolia.id)}]
        )

    @pytest.mark.asyncio
    async def test_error_response_raises(self):
        connector = self.make_connector({"eth_accounts": {"error": {"code": 4100, "message": "Unauthorized"}}})

        with pytest.raises(WalletRequestError, match="Unauthorized"):
            await connector.get_accounts()

    @pytest.mark.asyncio
    async def test_is_authorized_with_accounts(self):
        connector = self.make_connector({"eth_accounts": {"result": [Account.create().address]}})

        assert await connector.is_authorized()
