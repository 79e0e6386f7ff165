"""Generic ERC-20 token wrapper."""

from __future__ import annotations

from typing import Any, Optional, Union

from eth_utils import to_checksum_address
from typing_extensions import Self

from ..abi import ERC20_ABI
from ..binding import ContractBinding
from ..logs import logged
from ..session import Session
from ..types import Abi, Config, TransactionResult
from .base import ContractWrapper


class Erc20(ContractWrapper):
    """Wrapper for any ERC-20 token, bound to the standard ERC-20 ABI.

    Args:
        config: SDK config.
        token_address: Token to operate on. Can be set later with ``use_token``.
        session: Session to share. A new one is created when omitted.
    """

    def __init__(
        self,
        config: Union[Config, dict[str, Any]],
        token_address: Optional[str] = None,
        *,
        session: Optional[Session] = None,
    ) -> None:
        super().__init__(
            config,
            {"address": to_checksum_address(token_address) if token_address else None, "abi": ERC20_ABI},
            session=session,
        )

    def use_token(self, token_address: str) -> Self:
        self.binding = ContractBinding(
            address=to_checksum_address(token_address), abi=self.binding.abi
        )
        return self

    def use_abi(self, abi: Abi) -> Self:
        """Use a token ABI that extends the standard one."""
        self.binding = ContractBinding(address=self.binding.address, abi=abi)
        return self

    @logged
    async def name(self) -> str:
        return await self._read("name")

    @logged
    async def symbol(self) -> str:
        return await self._read("symbol")

    @logged
    async def decimals(self) -> int:
        return await self._read("decimals")

    @logged
    async def total_supply(self) -> int:
        return await self._read("totalSupply")

    @logged
    async def balance_of(self, account: str) -> int:
        return await self._read("balanceOf", to_checksum_address(account))

    @logged
    async def allowance(self, owner: str, spender: str) -> int:
        return await self._read("allowance", to_checksum_address(owner), to_checksum_address(spender))

    @logged
    async def approve(self, spender: str, amount: int) -> TransactionResult:
        return await self._write("approve", to_checksum_address(spender), amount)

    @logged
    async def transfer(self, to: str, amount: int) -> TransactionResult:
        return await self._write("transfer", to_checksum_address(to), amount)

    @logged
    async def transfer_from(self, from_: str, to: str, amount: int) -> TransactionResult:
        return await self._write(
            "transferFrom", to_checksum_address(from_), to_checksum_address(to), amount
        )
