"""ABI registry: ABIs by contract kind and version.

The registry tables live as JSON files under ``bonkers/abi/json`` and are
named ``<kind>_<major>_<minor>_<patch>.json``.
"""

from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from typing import Any, Optional

from ..types import Abi, ContractType

KIND_CONTROLLER = "controller"
KIND_VAULT = "vault"
KIND_VAULT_FACTORY = "vaultFactory"

_FILE_PREFIXES = {
    KIND_CONTROLLER: "controller",
    KIND_VAULT: "vault",
    KIND_VAULT_FACTORY: "vault_factory",
}

SUPPORTED_VERSIONS: dict[str, tuple[str, ...]] = {
    KIND_CONTROLLER: ("0.0.1",),
    KIND_VAULT: ("0.0.1",),
    KIND_VAULT_FACTORY: ("0.0.1",),
}

# Identity functions every Bonkers contract exposes
BASE_ABI: Abi = [
    {
        "inputs": [],
        "name": "contractType",
        "outputs": [{"internalType": "string", "name": "", "type": "string"}],
        "stateMutability": "pure",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "version",
        "outputs": [{"internalType": "string", "name": "", "type": "string"}],
        "stateMutability": "pure",
        "type": "function",
    },
]

ERC20_ABI: Abi = [
    {
        "inputs": [],
        "name": "name",
        "outputs": [{"name": "", "type": "string"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "symbol",
        "outputs": [{"name": "", "type": "string"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "decimals",
        "outputs": [{"name": "", "type": "uint8"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "totalSupply",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"name": "account", "type": "address"}],
        "name": "balanceOf",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [
            {"name": "owner", "type": "address"},
            {"name": "spender", "type": "address"},
        ],
        "name": "allowance",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [
            {"name": "spender", "type": "address"},
            {"name": "value", "type": "uint256"},
        ],
        "name": "approve",
        "outputs": [{"name": "", "type": "bool"}],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [
            {"name": "to", "type": "address"},
            {"name": "value", "type": "uint256"},
        ],
        "name": "transfer",
        "outputs": [{"name": "", "type": "bool"}],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [
            {"name": "from", "type": "address"},
            {"name": "to", "type": "address"},
            {"name": "value", "type": "uint256"},
        ],
        "name": "transferFrom",
        "outputs": [{"name": "", "type": "bool"}],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]


def contract_type_formatter(contract_type: str) -> str:
    """Map an on-chain contract type to its registry kind.

    Example:
        >>> contract_type_formatter("VAULT FACTORY")
        'vaultFactory'
    """
    words = contract_type.strip().lower().split()
    if not words:
        return ""
    return words[0] + "".join(word.capitalize() for word in words[1:])


def normalize_contract_type(contract_type: Any) -> str:
    """Canonical form used to compare contract types."""
    if isinstance(contract_type, ContractType):
        contract_type = contract_type.value
    return " ".join(str(contract_type).split()).upper()


@lru_cache(maxsize=None)
def _load(kind: str, version: str) -> tuple[dict[str, Any], ...]:
    filename = f"{_FILE_PREFIXES[kind]}_{version.replace('.', '_')}.json"
    source = resources.files(__package__).joinpath("json").joinpath(filename)
    return tuple(json.loads(source.read_text(encoding="utf-8")))


def get_abi(kind: str, version: str) -> Optional[Abi]:
    """Registered ABI for a kind and version, or None."""
    if version not in SUPPORTED_VERSIONS.get(kind, ()):
        return None
    return list(_load(kind, version))


def get_versions(kind: str) -> tuple[str, ...]:
    return SUPPORTED_VERSIONS.get(kind, ())


ABIS: dict[str, dict[str, Abi]] = {
    kind: {version: get_abi(kind, version) for version in versions}
    for kind, versions in SUPPORTED_VERSIONS.items()
}
