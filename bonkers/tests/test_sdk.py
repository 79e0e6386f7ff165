"""Tests for the SDK facade."""

from unittest.mock import Mock

import pytest
from eth_account import Account
from eth_utils import to_hex

from bonkers import BonkersSDK
from bonkers.abi import KIND_CONTROLLER, KIND_VAULT, get_abi
from bonkers.chains import base_sepolia, sepolia
from bonkers.contracts import Controller, Erc20
from bonkers.errors import InvalidChainId, InvalidContract, InvalidSDKMode
from bonkers.session import ServerSession, create_session
from bonkers.types import ChainDescriptor, ContractType


class TestServerSDK:
    """Test the SDK in server mode."""

    def test_wrappers_share_one_session(self, server_config, fake_clients):
        sdk = BonkersSDK(server_config)

        assert sdk.controller().session is sdk.session
        assert sdk.vault().session is sdk.session
        assert sdk.vault_factory().session is sdk.session
        assert sdk.erc20().session is sdk.session
        assert len(fake_clients) == 1

    def test_accepts_dict_config(self, fake_clients):
        sdk = BonkersSDK(
            {
                "mode": "server",
                "options": {"privateKey": to_hex(Account.create().key), "chains": [base_sepolia]},
            }
        )

        assert sdk.chain() == ChainDescriptor.from_chain(base_sepolia)

    def test_chain_switch_is_visible_to_every_wrapper(self, server_config, fake_clients):
        sdk = BonkersSDK(server_config)

        sdk.use_chain(sepolia.id)

        assert sdk.vault().chain().id == sepolia.id
        assert sdk.controller().chain().id == sepolia.id

    def test_use_account_is_shared(self, server_config, fake_clients):
        sdk = BonkersSDK(server_config)
        other = Account.create()

        sdk.vault().use_account(to_hex(other.key))

        assert sdk.account() == other.address
        assert sdk.controller().account() == other.address

    def test_accessor_rebinds_shared_wrapper(self, server_config, fake_clients):
        sdk = BonkersSDK(server_config)
        address = Account.create().address

        vault = sdk.vault({"address": address, "abi": get_abi(KIND_VAULT, "0.0.1")})

        assert vault is sdk.vault()
        assert vault.contract_address == address

    def test_erc20_is_new_per_call(self, server_config, fake_clients):
        sdk = BonkersSDK(server_config)
        token = Account.create().address

        erc20 = sdk.erc20(token)

        assert isinstance(erc20, Erc20)
        assert erc20 is not sdk.erc20(token)
        assert erc20.contract_address == token

    def test_chains(self, server_config, fake_clients):
        assert BonkersSDK(server_config).chains() == [base_sepolia, sepolia]

    def test_reuses_given_session(self, server_config, fake_clients):
        session = create_session(server_config)

        sdk = BonkersSDK(server_config, session=session)

        assert sdk.session is session
        assert len(fake_clients) == 1

    def test_rejects_session_of_other_mode(self, client_config):
        with pytest.raises(InvalidSDKMode):
            BonkersSDK(client_config, session=ServerSession())

    def test_client_operations_fail(self, server_config, fake_clients):
        with pytest.raises(InvalidSDKMode):
            BonkersSDK(server_config).connectors()

    @pytest.mark.asyncio
    async def test_get_params_uses_chain_transport(self, server_config, backend, fake_clients):
        backend.respond("contractType", "CONTROLLER")
        backend.respond("version", "0.0.1")
        sdk = BonkersSDK(server_config)
        address = Account.create().address

        params = await sdk.get_params(sepolia.id, address, ContractType.CONTROLLER)

        assert params.chain == sepolia
        assert params.abi == get_abi(KIND_CONTROLLER, "0.0.1")
        assert fake_clients[-1].transport == sepolia.rpc_urls[0]
        assert isinstance(sdk.controller(params), Controller)

    @pytest.mark.asyncio
    async def test_get_params_unknown_chain(self, server_config, fake_clients):
        sdk = BonkersSDK(server_config)

        with pytest.raises(InvalidChainId):
            await sdk.get_params(1, Account.create().address, ContractType.VAULT)

    @pytest.mark.asyncio
    async def test_get_params_wrong_type(self, server_config, backend, fake_clients):
        backend.respond("contractType", "VAULT")
        sdk = BonkersSDK(server_config)

        with pytest.raises(InvalidContract):
            await sdk.vault_factory().get_params(base_sepolia.id, Account.create().address)

    @pytest.mark.asyncio
    async def test_balance_of(self, server_config, backend, fake_clients):
        holder = Account.create().address
        backend.balances[holder.lower()] = 3
        sdk = BonkersSDK(server_config)

        assert await sdk.vault().balance_of(holder.lower()) == 3


class TestClientSDK:
    """Test the SDK in client mode."""

    @pytest.mark.asyncio
    async def test_connect_and_account(self, client_config, client_accounts, connectors):
        sdk = BonkersSDK(client_config)

        assert sdk.connectors() == connectors
        assert sdk.account() is None

        await sdk.connect(connectors[0])

        assert sdk.account() == client_accounts[0].address
        assert sdk.vault().account() == client_accounts[0].address
        assert sdk.connection().connector is connectors[0]

    @pytest.mark.asyncio
    async def test_reconnect_defaults_to_all_connectors(self, client_config, connectors):
        sdk = BonkersSDK(client_config)
        await sdk.connect(connectors[0])

        restored = await sdk.reconnect()

        assert [connection.connector for connection in restored] == [connectors[0]]

    @pytest.mark.asyncio
    async def test_switch_chain_with_callback(self, client_config, connectors):
        sdk = BonkersSDK(client_config)
        await sdk.connect(connectors[0])
        on_change = Mock()

        await sdk.controller().switch_chain(sepolia.id, on_change)

        on_change.assert_called_once()
        assert sdk.chain().id == sepolia.id

    @pytest.mark.asyncio
    async def test_disconnect(self, client_config, connectors):
        sdk = BonkersSDK(client_config)
        await sdk.connect(connectors[0])

        await sdk.disconnect()

        assert sdk.account() is None

    def test_server_operations_fail(self, client_config):
        with pytest.raises(InvalidSDKMode):
            BonkersSDK(client_config).use_chain(sepolia.id)
