"""Per-wrapper contract binding and its presence precondition."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

from .errors import InvalidContract, MissingRequiredParams
from .types import ZERO_ADDRESS, Abi, ContractParams, ResolvedParams


@dataclass(frozen=True)
class ContractBinding:
    """Address and ABI a wrapper operates on.

    Bindings are replaced wholesale, never edited.
    """

    address: Optional[str] = None
    abi: Optional[Abi] = None
    kind: Optional[str] = None

    @classmethod
    def from_params(
        cls,
        params: Union[ContractParams, ResolvedParams, dict[str, Any], None],
        kind: Optional[str] = None,
    ) -> ContractBinding:
        if params is None:
            return cls(kind=kind)
        if isinstance(params, dict):
            return cls(address=params.get("address"), abi=params.get("abi"), kind=kind)
        return cls(address=params.address, abi=params.abi, kind=kind)


def require_present(binding: ContractBinding) -> None:
    """Fail unless the binding has both an ABI and an address.

    Raises:
        MissingRequiredParams: "Contract Abi" is checked before "Contract Address".
    """
    if not binding.abi:
        raise MissingRequiredParams("Contract Abi")
    if not binding.address:
        raise MissingRequiredParams("Contract Address")


def is_zero_address(address: Optional[str]) -> bool:
    return address is not None and address.lower() == ZERO_ADDRESS


def require_non_zero(address: Optional[str]) -> None:
    """Raises InvalidContract for the zero address."""
    if is_zero_address(address):
        raise InvalidContract("Can Not Be Zero Address")
