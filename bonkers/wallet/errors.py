"""Wallet layer errors."""

from __future__ import annotations

from ..errors import BonkersError


class WalletError(BonkersError):
    """Base class for wallet layer errors."""

    pass


class ConnectorAlreadyConnectedError(WalletError):
    """Raised when connecting a connector that is already connected."""

    def __init__(self, message: str = "Connector already connected.", **kwargs) -> None:
        super().__init__(message, **kwargs)


class ConnectorNotConnectedError(WalletError):
    """Raised when an operation needs a connector that is not connected."""

    def __init__(self, message: str = "Connector not connected.", **kwargs) -> None:
        super().__init__(message, **kwargs)


class ChainNotConfiguredError(WalletError):
    """Raised when a chain id is not part of the wallet config."""

    def __init__(self, message: str = "Chain not configured.", **kwargs) -> None:
        super().__init__(message, **kwargs)


class SwitchChainNotSupportedError(WalletError):
    """Raised when a connector can not switch chains."""

    def __init__(
        self, message: str = "Connector does not support switching chains.", **kwargs
    ) -> None:
        super().__init__(message, **kwargs)


class WalletRequestError(WalletError):
    """Raised when a wallet JSON-RPC request returns an error."""

    pass
