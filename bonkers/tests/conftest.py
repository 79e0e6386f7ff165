"""Shared test fixtures."""

import pytest
from eth_account import Account
from eth_utils import to_hex

from bonkers.chains import base_sepolia, sepolia
from bonkers.types import ClientOptions, Config, ServerOptions, WalletParameters
from bonkers.wallet import LocalAccountConnector

from .mocks import FakeChainBackend, FakeWeb3

# ============================================================================
# Fake chain
# ============================================================================


@pytest.fixture
def backend():
    return FakeChainBackend()


@pytest.fixture
def fake_clients(monkeypatch, backend):
    """Route every handle the SDK builds to a FakeWeb3 over ``backend``.

    Returns the list of handles created, in creation order.
    """
    created = []

    def factory(chain, transport=None):
        web3 = FakeWeb3(backend, chain, transport)
        created.append(web3)
        return web3

    for target in (
        "bonkers.session.make_client",
        "bonkers.wallet.state.make_client",
        "bonkers.resolver.make_client",
    ):
        monkeypatch.setattr(target, factory)
    return created


# ============================================================================
# Server mode
# ============================================================================


@pytest.fixture
def server_account():
    return Account.create()


@pytest.fixture
def server_config(server_account):
    return Config(
        mode="server",
        options=ServerOptions(
            private_key=to_hex(server_account.key),
            chains=[base_sepolia, sepolia],
        ),
    )


# ============================================================================
# Client mode
# ============================================================================


@pytest.fixture
def client_accounts():
    return [Account.create(), Account.create()]


@pytest.fixture
def connectors(client_accounts):
    return [
        LocalAccountConnector([client_accounts[0]], name="Primary"),
        LocalAccountConnector([client_accounts[1]], name="Secondary"),
        LocalAccountConnector([Account.create()], name="No Reconnect", reconnect=False),
    ]


@pytest.fixture
def client_config(connectors):
    return Config(
        mode="client",
        options=ClientOptions(
            wallet_config=WalletParameters(
                chains=[base_sepolia, sepolia],
                connectors=connectors,
            )
        ),
    )
