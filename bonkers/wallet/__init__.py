"""Client-mode wallet layer: connectors, state store and change subscriptions."""

from .connectors import Connector, JsonRpcConnector, LocalAccountConnector
from .errors import (
    ChainNotConfiguredError,
    ConnectorAlreadyConnectedError,
    ConnectorNotConnectedError,
    SwitchChainNotSupportedError,
    WalletError,
    WalletRequestError,
)
from .state import (
    STATUS_CONNECTED,
    STATUS_CONNECTING,
    STATUS_DISCONNECTED,
    STATUS_RECONNECTING,
    AccountState,
    Connection,
    WalletConfig,
    WalletState,
)
from .subscription import Subscription

__all__ = [
    "Connector",
    "LocalAccountConnector",
    "JsonRpcConnector",
    "WalletConfig",
    "WalletState",
    "Connection",
    "AccountState",
    "Subscription",
    "STATUS_CONNECTED",
    "STATUS_CONNECTING",
    "STATUS_DISCONNECTED",
    "STATUS_RECONNECTING",
    "WalletError",
    "WalletRequestError",
    "ConnectorAlreadyConnectedError",
    "ConnectorNotConnectedError",
    "ChainNotConfiguredError",
    "SwitchChainNotSupportedError",
]
