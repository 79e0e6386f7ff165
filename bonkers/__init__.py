"""Bonkers Python SDK - client for the Bonkers controller, vault and vault factory contracts.

Runs in two modes: "client", where accounts come from wallet connectors,
and "server", where a single private key signs every transaction.

Quick Start:
    ```python
    from bonkers import BonkersSDK, Config, ContractType
    from bonkers.chains import base_sepolia

    # Server-side: one key, explicit chain switching
    sdk = BonkersSDK(
        Config(mode="server", options={"private_key": "0x...", "chains": [base_sepolia]})
    )
    params = await sdk.get_params(base_sepolia.id, "0x...", ContractType.VAULT)
    tx = await sdk.vault(params).reward("0x...", 10**18)

    # Client-side: wallet connectors
    sdk = BonkersSDK(
        Config(
            mode="client",
            options={
                "wallet_config": {
                    "chains": [base_sepolia],
                    "connectors": [LocalAccountConnector([account])],
                }
            },
        )
    )
    await sdk.connect(sdk.connectors()[0])
    ```
"""

import logging

# Configuration
from .config import censor, prepare_config
from .types import (
    MODE_CLIENT,
    MODE_SERVER,
    ZERO_ADDRESS,
    Call3,
    Call3Value,
    CallResult,
    Chain,
    ChainDescriptor,
    ClientOptions,
    Config,
    ContractCall,
    ContractParams,
    ContractType,
    ControllerLimits,
    ControllerRole,
    CreationFee,
    ImplementationDetails,
    NativeCurrency,
    Receiver,
    ResolvedParams,
    ServerOptions,
    TransactionResult,
    TypedDataDomain,
    TypedDataParams,
    UpgradeParams,
    VaultInfo,
    WalletParameters,
)

# Errors
from .errors import (
    BonkersError,
    ClientNotFound,
    ContractAbiNotFound,
    ContractInteractionFailed,
    InvalidChainId,
    InvalidClientType,
    InvalidContract,
    InvalidContractType,
    InvalidContractVersion,
    InvalidSDKMode,
    MissingRequiredParams,
    UnknownError,
)

# Core components
from .abi import ABIS, BASE_ABI, ERC20_ABI, contract_type_formatter
from .binding import ContractBinding, require_present
from .executor import TransactionExecutor
from .resolver import implementation_of, resolve
from .session import ClientSession, ServerSession, Session, create_session
from .signature import Signature
from .wallet import JsonRpcConnector, LocalAccountConnector, WalletConfig

# Wrappers
from .contracts import BaseContract, Controller, Erc20, Vault, VaultFactory
from .sdk import BonkersSDK

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Configuration
    "Config",
    "ClientOptions",
    "ServerOptions",
    "WalletParameters",
    "prepare_config",
    "censor",
    "MODE_CLIENT",
    "MODE_SERVER",
    # Types
    "Chain",
    "NativeCurrency",
    "ChainDescriptor",
    "ContractType",
    "ContractParams",
    "ContractCall",
    "ResolvedParams",
    "TransactionResult",
    "UpgradeParams",
    "TypedDataDomain",
    "TypedDataParams",
    "ControllerRole",
    "Receiver",
    "Call3",
    "Call3Value",
    "CallResult",
    "VaultInfo",
    "ControllerLimits",
    "ImplementationDetails",
    "CreationFee",
    "ZERO_ADDRESS",
    # Errors
    "BonkersError",
    "UnknownError",
    "ContractInteractionFailed",
    "ContractAbiNotFound",
    "InvalidSDKMode",
    "InvalidChainId",
    "InvalidContract",
    "InvalidContractVersion",
    "InvalidContractType",
    "MissingRequiredParams",
    "InvalidClientType",
    "ClientNotFound",
    # Core
    "ABIS",
    "BASE_ABI",
    "ERC20_ABI",
    "contract_type_formatter",
    "ContractBinding",
    "require_present",
    "TransactionExecutor",
    "resolve",
    "implementation_of",
    "Session",
    "ClientSession",
    "ServerSession",
    "create_session",
    "Signature",
    "WalletConfig",
    "LocalAccountConnector",
    "JsonRpcConnector",
    # Wrappers
    "BaseContract",
    "Controller",
    "Vault",
    "VaultFactory",
    "Erc20",
    "BonkersSDK",
]
