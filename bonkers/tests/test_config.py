"""Tests for config preparation and the chain registry."""

import logging

import pytest
from eth_account import Account
from eth_utils import to_hex
from pydantic import ValidationError
from web3 import AsyncHTTPProvider, AsyncWeb3

from bonkers.chains import (
    CHAINS_BY_ID,
    anvil,
    base_sepolia,
    get_chain_by_id,
    get_chains,
    get_default_transports,
    get_transport,
    make_client,
    make_provider,
    sepolia,
)
from bonkers.config import censor, describe_config, prepare_config
from bonkers.errors import InvalidChainId, InvalidSDKMode, MissingRequiredParams
from bonkers.types import ChainDescriptor, ClientOptions, Config, ServerOptions


class TestPrepareConfig:
    """Test prepare_config validation and defaults."""

    def test_client_without_wallet_config_fails(self):
        """Client mode requires a wallet config."""
        with pytest.raises(MissingRequiredParams, match="Missing Wallet Config"):
            prepare_config(Config(mode="client", options=ClientOptions()))

    def test_server_without_private_key_fails(self):
        """Server mode requires a private key."""
        with pytest.raises(MissingRequiredParams, match="Missing PrivateKey"):
            prepare_config(Config(mode="server", options=ServerOptions(chains=[base_sepolia])))

    def test_server_without_chains_fails(self):
        """Server mode requires at least one chain."""
        config = Config(mode="server", options=ServerOptions(private_key="0x01"))
        with pytest.raises(MissingRequiredParams, match="Must Have At Least 1 Chain"):
            prepare_config(config)

    def test_unknown_mode_fails(self):
        """Only client and server modes are accepted."""
        with pytest.raises(InvalidSDKMode):
            prepare_config({"mode": "browser", "options": {}})

    def test_unknown_mode_without_options_fails(self):
        with pytest.raises(InvalidSDKMode, match=r"Invalid SDK Mode \[browser\]"):
            prepare_config({"mode": "browser"})

    def test_client_dict_without_options_fails(self):
        with pytest.raises(MissingRequiredParams, match="Missing Wallet Config"):
            prepare_config({"mode": "client"})

    def test_server_dict_without_options_fails(self):
        with pytest.raises(MissingRequiredParams, match="Missing PrivateKey"):
            prepare_config({"mode": "server"})

    def test_server_dict_with_null_chains_fails(self):
        with pytest.raises(MissingRequiredParams, match="Must Have At Least 1 Chain"):
            prepare_config({"mode": "server", "options": {"privateKey": "0x01", "chains": None}})

    def test_server_transports_are_synthesized(self, server_config):
        """Each chain gets its first RPC url as default transport."""
        prepared = prepare_config(server_config)

        assert prepared.options.transports == {
            base_sepolia.id: base_sepolia.rpc_urls[0],
            sepolia.id: sepolia.rpc_urls[0],
        }

    def test_configured_transports_are_kept(self):
        """A supplied transport map is not replaced."""
        config = Config(
            mode="server",
            options=ServerOptions(
                private_key="0x01",
                chains=[base_sepolia],
                transports={base_sepolia.id: "http://localhost:8545"},
            ),
        )

        prepared = prepare_config(config)

        assert prepared.options.transports == {base_sepolia.id: "http://localhost:8545"}

    def test_logger_defaults_to_package_logger(self, server_config):
        """A missing logger becomes the bonkers package logger."""
        prepared = prepare_config(server_config)

        assert prepared.logger is logging.getLogger("bonkers")

    def test_custom_logger_is_kept(self, server_config):
        """A supplied logger is used as is."""
        custom = logging.getLogger("my-app")
        config = server_config.model_copy(update={"logger": custom})

        assert prepare_config(config).logger is custom

    def test_prepare_is_idempotent(self, server_config):
        """Preparing twice yields the same settings."""
        once = prepare_config(server_config)
        twice = prepare_config(once)

        assert twice.mode == once.mode
        assert twice.logger is once.logger
        assert twice.options.transports == once.options.transports
        assert twice.options.private_key == once.options.private_key

    def test_options_dict_is_coerced_for_mode(self):
        """Plain dict options become the options model of the mode."""
        key = to_hex(Account.create().key)
        config = Config(mode="server", options={"private_key": key, "chains": [base_sepolia]})

        assert isinstance(config.options, ServerOptions)
        assert config.options.private_key == key

    def test_camel_case_options_are_accepted(self):
        """Options also accept camelCase keys."""
        config = Config(mode="server", options={"privateKey": "0x01", "chains": [base_sepolia]})

        assert config.options.private_key == "0x01"

    def test_mode_is_immutable(self, server_config):
        """The mode can not change after creation."""
        with pytest.raises(ValidationError):
            server_config.mode = "client"


class TestCensor:
    """Test secret masking."""

    def test_censor_keeps_edges_only(self):
        key = "0x4c0883a69102937d6231471b5dbb6204fe512961708279f2e3e8a5d4b8e3e4d1"
        assert censor(key) == "0x4c...e4d1"

    def test_censor_short_values_fully(self):
        assert censor("secret") == "******"

    def test_censor_empty(self):
        assert censor(None) == ""

    def test_describe_config_never_contains_key(self, server_config):
        """Config summaries are safe to log."""
        summary = describe_config(prepare_config(server_config))

        assert server_config.options.private_key not in str(summary)
        assert summary["chains"] == [base_sepolia.id, sepolia.id]


class TestChainRegistry:
    """Test chain lookup and transport selection."""

    def test_get_chains_server(self, server_config):
        assert get_chains(prepare_config(server_config)) == [base_sepolia, sepolia]

    def test_get_chains_client(self, client_config):
        assert get_chains(prepare_config(client_config)) == [base_sepolia, sepolia]

    def test_get_chain_by_id(self, server_config):
        assert get_chain_by_id(prepare_config(server_config), sepolia.id) == sepolia

    def test_unknown_chain_id_fails(self, server_config):
        """Unknown chain ids fail with the chain id in the message."""
        with pytest.raises(InvalidChainId) as exc_info:
            get_chain_by_id(prepare_config(server_config), 1)

        assert str(exc_info.value) == "Chain Id [1] Does Not Exist On The Provided Chains"

    def test_get_transport_prefers_configured(self):
        config = prepare_config(
            Config(
                mode="server",
                options=ServerOptions(
                    private_key="0x01",
                    chains=[base_sepolia, sepolia],
                    transports={sepolia.id: "http://sepolia.local"},
                ),
            )
        )

        assert get_transport(config, sepolia.id) == "http://sepolia.local"
        assert get_transport(config, base_sepolia.id) == base_sepolia.rpc_urls[0]

    def test_get_transport_client_mode_defaults(self, client_config):
        config = prepare_config(client_config)

        assert get_transport(config, sepolia.id) == sepolia.rpc_urls[0]

    def test_default_transports_require_chains(self):
        with pytest.raises(MissingRequiredParams):
            get_default_transports([])

    def test_make_provider_from_url(self):
        provider = make_provider("http://127.0.0.1:8545")

        assert isinstance(provider, AsyncHTTPProvider)

    def test_make_provider_keeps_provider(self):
        provider = AsyncHTTPProvider("http://127.0.0.1:8545")

        assert make_provider(provider) is provider

    def test_make_provider_rejects_unknown_transport(self):
        with pytest.raises(MissingRequiredParams):
            make_provider(42)

    def test_make_client_builds_async_web3(self):
        assert isinstance(make_client(anvil), AsyncWeb3)

    def test_well_known_chains_by_id(self):
        assert CHAINS_BY_ID[84532] is base_sepolia
        assert CHAINS_BY_ID[31337] is anvil

    def test_chain_descriptor_from_chain(self):
        descriptor = ChainDescriptor.from_chain(base_sepolia)

        assert descriptor == ChainDescriptor(id=84532, name="Base Sepolia", symbol="ETH")
