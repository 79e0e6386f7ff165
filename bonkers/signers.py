"""Local signing with eth_account.

Provides the server-mode wallet client, a private key bound to a chain
handle, and the signing helpers shared with the local wallet connector.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from eth_account import Account
from eth_account.messages import SignableMessage, encode_typed_data
from eth_utils import to_hex

from .errors import ClientNotFound
from .types import Chain

if TYPE_CHECKING:
    from eth_account.signers.local import LocalAccount
    from web3 import AsyncWeb3


async def send_signed_transaction(
    client: "AsyncWeb3",
    account: "LocalAccount",
    transaction: dict[str, Any],
) -> str:
    """Sign a prepared transaction locally and broadcast it.

    Args:
        client: Handle of the chain to broadcast on.
        account: eth_account LocalAccount that signs.
        transaction: Prepared transaction, as returned by build_transaction.

    Returns:
        Transaction hash (0x-prefixed hex).
    """
    tx = dict(transaction)
    if "nonce" not in tx:
        tx["nonce"] = await client.eth.get_transaction_count(account.address, "pending")
    signed = account.sign_transaction(tx)
    tx_hash = await client.eth.send_raw_transaction(signed.raw_transaction)
    return to_hex(tx_hash)


def sign_message_with(account: "LocalAccount", message: SignableMessage) -> str:
    """EIP-191 signature of an encoded message, as 0x-prefixed hex."""
    return to_hex(account.sign_message(message).signature)


def sign_typed_data_with(account: "LocalAccount", full_message: dict[str, Any]) -> str:
    """EIP-712 signature of a full typed-data message, as 0x-prefixed hex."""
    signable = encode_typed_data(full_message=full_message)
    return to_hex(account.sign_message(signable).signature)


class ServerSigner:
    """Server-side wallet client using eth_account.

    Pairs a chain handle with the server's private key. Instances are never
    edited: switching chain or key builds a new signer.

    Example:
        ```python
        client = make_client(base_sepolia)
        signer = ServerSigner.from_key(client, base_sepolia, "0x...")
        tx_hash = await signer.send_transaction(request)
        ```

    Args:
        client: AsyncWeb3 handle of the chain.
        chain: Chain the handle points at.
        account: eth_account LocalAccount, or None for an unbound signer.
    """

    def __init__(
        self,
        client: "AsyncWeb3",
        chain: Chain,
        account: Optional["LocalAccount"] = None,
    ) -> None:
        self.client = client
        self.chain = chain
        self.account = account

    @classmethod
    def from_key(cls, client: "AsyncWeb3", chain: Chain, private_key: str) -> ServerSigner:
        return cls(client, chain, Account.from_key(private_key))

    @property
    def address(self) -> Optional[str]:
        """Checksummed signer address, or None when no key is bound."""
        if self.account is None:
            return None
        return self.account.address

    async def send_transaction(self, transaction: dict[str, Any]) -> str:
        return await send_signed_transaction(self.client, self._require_account(), transaction)

    def sign_message(self, message: SignableMessage) -> str:
        return sign_message_with(self._require_account(), message)

    def sign_typed_data(self, full_message: dict[str, Any]) -> str:
        return sign_typed_data_with(self._require_account(), full_message)

    def _require_account(self) -> "LocalAccount":
        if self.account is None:
            raise ClientNotFound("No Account Bound To The Wallet Client")
        return self.account
