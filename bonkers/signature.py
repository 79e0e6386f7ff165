"""Message and EIP-712 typed-data signatures.

Signing goes through the session's signer; verification, recovery and
hashing are computed locally with eth_account.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional, Union

from eth_account import Account
from eth_account.messages import (
    SignableMessage,
    _hash_eip191_message,
    encode_defunct,
    encode_typed_data,
)
from eth_utils import to_hex
from typing_extensions import Self

from .config import prepare_config
from .errors import ClientNotFound, MissingRequiredParams
from .logs import logged
from .types import Config, TypedDataParams

if TYPE_CHECKING:
    from .session import Session

# A plain string, raw bytes, or {"raw": "0x..."}
Message = Union[str, bytes, dict[str, Any]]

DOMAIN_FIELDS = (
    ("name", "string"),
    ("version", "string"),
    ("chainId", "uint256"),
    ("verifyingContract", "address"),
    ("salt", "bytes32"),
)


def encode_message(message: Message) -> SignableMessage:
    """EIP-191 encoding of a plain message."""
    if isinstance(message, dict):
        raw = message.get("raw")
        if isinstance(raw, (bytes, bytearray)):
            return encode_defunct(primitive=bytes(raw))
        if isinstance(raw, str):
            return encode_defunct(hexstr=raw)
        raise MissingRequiredParams("Raw Message Must Be Hex Or Bytes")
    if isinstance(message, (bytes, bytearray)):
        return encode_defunct(primitive=bytes(message))
    return encode_defunct(text=message)


def build_typed_data(params: Union[TypedDataParams, dict[str, Any]]) -> dict[str, Any]:
    """Full EIP-712 message for eth_account, adding ``EIP712Domain`` when absent."""
    if not isinstance(params, TypedDataParams):
        params = TypedDataParams.model_validate(params)
    domain: dict[str, Any] = (
        params.domain.model_dump(by_alias=True, exclude_none=True) if params.domain else {}
    )
    types = dict(params.types)
    if "EIP712Domain" not in types:
        types["EIP712Domain"] = [
            {"name": name, "type": type_} for name, type_ in DOMAIN_FIELDS if name in domain
        ]
    return {
        "types": types,
        "primaryType": params.primary_type,
        "domain": domain,
        "message": params.message,
    }


class Signature:
    """Signature helper bound to a session.

    The pending message and typed data are set with ``set_message`` and
    ``set_typed_data``; the last value set wins.

    Example:
        ```python
        signature = await sdk.controller().signature.set_message("hello").sign_message()
        ```

    Args:
        config: SDK config.
        session: Session whose signer is used.
    """

    def __init__(self, config: Union[Config, dict[str, Any]], session: "Session") -> None:
        self.config = prepare_config(config)
        self.mode = self.config.mode
        self.logger = self.config.logger or logging.getLogger(__name__)
        self.session = session
        self.message: Optional[Message] = None
        self.typed_data: Optional[TypedDataParams] = None

    def set_message(self, message: Message) -> Self:
        self.message = message
        return self

    def set_typed_data(self, typed_data: Union[TypedDataParams, dict[str, Any]]) -> Self:
        if not isinstance(typed_data, TypedDataParams):
            typed_data = TypedDataParams.model_validate(typed_data)
        self.typed_data = typed_data
        return self

    def _check_clients(self) -> None:
        client_type = self.session.client_type
        if not self.session.clients_exist(client_type) or self.session.account() is None:
            raise ClientNotFound(self.session.not_found_message(client_type))

    def _require_message(self) -> Message:
        if self.message is None:
            raise MissingRequiredParams("Message To Sign or Verify Missing")
        return self.message

    def _require_typed_data(self) -> TypedDataParams:
        if self.typed_data is None:
            raise MissingRequiredParams("Typed Data To Sign or Verify Missing")
        return self.typed_data

    # =========================================================================
    # Signing
    # =========================================================================

    @logged
    async def sign_message(self) -> str:
        """Sign the pending message with the session's signer.

        Raises:
            ClientNotFound: If the session has no live signer.
            MissingRequiredParams: If no message is pending.
        """
        self._check_clients()
        message = self._require_message()
        return await self.session.sign_message(encode_message(message))

    @logged
    async def sign_typed_data(self) -> str:
        """Sign the pending typed data with the session's signer.

        Raises:
            ClientNotFound: If the session has no live signer.
            MissingRequiredParams: If no typed data is pending.
        """
        self._check_clients()
        typed_data = self._require_typed_data()
        return await self.session.sign_typed_data(build_typed_data(typed_data))

    # =========================================================================
    # Verification and recovery
    # =========================================================================

    @logged
    async def recover_message_address(self, signature: str) -> str:
        message = self._require_message()
        return Account.recover_message(encode_message(message), signature=signature)

    @logged
    async def recover_typed_data_address(self, signature: str) -> str:
        typed_data = self._require_typed_data()
        signable = encode_typed_data(full_message=build_typed_data(typed_data))
        return Account.recover_message(signable, signature=signature)

    @logged
    async def verify_message(self, signature: str, address: Optional[str] = None) -> bool:
        """Whether ``signature`` signs the pending message.

        Args:
            signature: Signature to check.
            address: Expected signer. Defaults to the session's current account.
        """
        expected = address or self.session.account()
        if expected is None:
            return False
        recovered = await self.recover_message_address(signature)
        return recovered.lower() == expected.lower()

    @logged
    async def verify_typed_data(self, signature: str, address: Optional[str] = None) -> bool:
        expected = address or self.session.account()
        if expected is None:
            return False
        recovered = await self.recover_typed_data_address(signature)
        return recovered.lower() == expected.lower()

    # =========================================================================
    # Hashing
    # =========================================================================

    @logged
    def hash_message(self) -> str:
        return to_hex(_hash_eip191_message(encode_message(self._require_message())))

    @logged
    def hash_typed_data(self) -> str:
        signable = encode_typed_data(full_message=build_typed_data(self._require_typed_data()))
        return to_hex(_hash_eip191_message(signable))
