"""Mock implementations for testing."""

from .chain import (
    FakeChainBackend,
    FakeContract,
    FakeContractFunction,
    FakeEth,
    FakeWeb3,
    storage_word,
)

__all__ = [
    "FakeChainBackend",
    "FakeContract",
    "FakeContractFunction",
    "FakeEth",
    "FakeWeb3",
    "storage_word",
]
