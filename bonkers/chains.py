"""Chain registry: well-known chains, lookup by id and transport selection."""

from __future__ import annotations

from typing import Optional

from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.providers.async_base import AsyncBaseProvider

from .errors import InvalidChainId, MissingRequiredParams
from .types import (
    MODE_CLIENT,
    Chain,
    ClientOptions,
    Config,
    NativeCurrency,
    ServerOptions,
    Transport,
)

# =============================================================================
# Well-known chains
# =============================================================================

ETHER = NativeCurrency(name="Ether", symbol="ETH", decimals=18)

mainnet = Chain(
    id=1,
    name="Ethereum",
    native_currency=ETHER,
    rpc_urls=["https://eth.merkle.io"],
)
sepolia = Chain(
    id=11155111,
    name="Sepolia",
    native_currency=NativeCurrency(name="Sepolia Ether", symbol="ETH", decimals=18),
    rpc_urls=["https://sepolia.drpc.org"],
    testnet=True,
)
base = Chain(
    id=8453,
    name="Base",
    native_currency=ETHER,
    rpc_urls=["https://mainnet.base.org"],
)
base_sepolia = Chain(
    id=84532,
    name="Base Sepolia",
    native_currency=NativeCurrency(name="Sepolia Ether", symbol="ETH", decimals=18),
    rpc_urls=["https://sepolia.base.org"],
    testnet=True,
)
polygon = Chain(
    id=137,
    name="Polygon",
    native_currency=NativeCurrency(name="POL", symbol="POL", decimals=18),
    rpc_urls=["https://polygon-rpc.com"],
)
polygon_amoy = Chain(
    id=80002,
    name="Polygon Amoy",
    native_currency=NativeCurrency(name="POL", symbol="POL", decimals=18),
    rpc_urls=["https://rpc-amoy.polygon.technology"],
    testnet=True,
)
arbitrum = Chain(
    id=42161,
    name="Arbitrum One",
    native_currency=ETHER,
    rpc_urls=["https://arb1.arbitrum.io/rpc"],
)
optimism = Chain(
    id=10,
    name="OP Mainnet",
    native_currency=ETHER,
    rpc_urls=["https://mainnet.optimism.io"],
)
# Local development nodes
anvil = Chain(
    id=31337,
    name="Anvil",
    native_currency=ETHER,
    rpc_urls=["http://127.0.0.1:8545"],
    testnet=True,
)
hardhat = Chain(
    id=31337,
    name="Hardhat",
    native_currency=ETHER,
    rpc_urls=["http://127.0.0.1:8545"],
    testnet=True,
)

# anvil and hardhat share an id, anvil wins the lookup
CHAINS_BY_ID: dict[int, Chain] = {
    chain.id: chain
    for chain in (
        mainnet,
        sepolia,
        base,
        base_sepolia,
        polygon,
        polygon_amoy,
        arbitrum,
        optimism,
        anvil,
    )
}


# =============================================================================
# Registry
# =============================================================================


def get_chains(config: Config) -> list[Chain]:
    """Chains available to a config, in the order they were configured."""
    options = config.options
    if config.mode == MODE_CLIENT:
        if isinstance(options, ClientOptions) and options.wallet_config is not None:
            return list(options.wallet_config.chains)
        return []
    if isinstance(options, ServerOptions):
        return list(options.chains)
    return []


def get_chain_by_id(config: Config, chain_id: int) -> Chain:
    """Look up one of the config's chains.

    Raises:
        InvalidChainId: If the chain is not part of the config.
    """
    for chain in get_chains(config):
        if chain.id == chain_id:
            return chain
    raise InvalidChainId(f"Chain Id [{chain_id}] Does Not Exist On The Provided Chains")


def get_default_transports(chains: list[Chain]) -> dict[int, Transport]:
    """One transport per chain, using the chain's first RPC url."""
    if not chains:
        raise MissingRequiredParams("Must Have At Least 1 Chain")
    transports: dict[int, Transport] = {}
    for chain in chains:
        if not chain.rpc_urls:
            raise MissingRequiredParams(f"Chain [{chain.id}] Has No RPC Url")
        transports[chain.id] = chain.rpc_urls[0]
    return transports


def get_transport(config: Config, chain_id: int) -> Transport:
    """Configured transport for a chain, falling back to the chain default."""
    options = config.options
    transports: Optional[dict[int, Transport]] = None
    if isinstance(options, ServerOptions):
        transports = options.transports
    elif isinstance(options, ClientOptions) and options.wallet_config is not None:
        transports = options.wallet_config.transports
    if transports and chain_id in transports:
        return transports[chain_id]
    chain = get_chain_by_id(config, chain_id)
    return get_default_transports([chain])[chain.id]


def make_provider(transport: Transport) -> AsyncBaseProvider:
    """Turn a transport into a web3 async provider."""
    if isinstance(transport, AsyncBaseProvider):
        return transport
    if isinstance(transport, str):
        return AsyncHTTPProvider(transport)
    raise MissingRequiredParams(f"Unsupported Transport: {transport!r}")


def make_client(chain: Chain, transport: Optional[Transport] = None) -> AsyncWeb3:
    """Build a read handle for a chain."""
    if transport is None:
        transport = get_default_transports([chain])[chain.id]
    return AsyncWeb3(make_provider(transport))
