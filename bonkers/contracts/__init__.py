"""Contract wrappers."""

from .base import BaseContract, ContractWrapper, SessionAccessors, bind_session
from .controller import Controller
from .erc20 import Erc20
from .vault import Vault
from .vault_factory import VaultFactory

__all__ = [
    "BaseContract",
    "ContractWrapper",
    "SessionAccessors",
    "bind_session",
    "Controller",
    "Vault",
    "VaultFactory",
    "Erc20",
]
