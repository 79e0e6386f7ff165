"""Exception hierarchy for the Bonkers SDK.

Every error raised by the SDK derives from ``BonkersError`` and carries an
optional ``cause`` describing the underlying failure.
"""

from __future__ import annotations

from typing import Any, Optional


class BonkersError(Exception):
    """Base class for all SDK errors."""

    def __init__(self, message: str = "", *, cause: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class UnknownError(BonkersError):
    """Raised when a failure can not be attributed to a known condition."""

    pass


class ContractInteractionFailed(BonkersError):
    """Raised when a contract read or write fails.

    Attributes:
        step: For writes, the protocol step that failed ("simulate",
            "submit" or "confirm"). None for reads.
    """

    def __init__(
        self,
        message: str = "",
        *,
        cause: Optional[Any] = None,
        step: Optional[str] = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.step = step


class ContractAbiNotFound(BonkersError):
    """Raised when no ABI is registered for a contract kind and version."""

    pass


class InvalidSDKMode(BonkersError):
    """Raised when a mode is unknown or an operation is used in the wrong mode."""

    pass


class InvalidChainId(BonkersError):
    """Raised when a chain id is not part of the configured chains."""

    pass


class InvalidContract(BonkersError):
    """Raised when an address does not host the expected contract."""

    pass


class InvalidContractVersion(BonkersError):
    """Raised when a contract version can not be read."""

    pass


class InvalidContractType(BonkersError):
    """Raised when a contract type can not be read or does not match."""

    pass


class MissingRequiredParams(BonkersError):
    """Raised when a required parameter is absent."""

    pass


class InvalidClientType(BonkersError):
    """Raised when a handle kind other than "wallet" or "rpc" is requested."""

    pass


class ClientNotFound(BonkersError):
    """Raised when the session has no live handle set for the request."""

    pass


def describe_error(error: BaseException) -> str:
    """Render an exception as "<ErrorName> | <message>"."""
    return f"{type(error).__name__} | {error}"
