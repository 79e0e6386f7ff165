"""Contract identity resolution and EIP-1967 implementation lookup."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from eth_utils import keccak, to_checksum_address

from .abi import BASE_ABI, contract_type_formatter, get_abi, normalize_contract_type
from .chains import make_client
from .errors import (
    BonkersError,
    ContractAbiNotFound,
    InvalidContract,
    InvalidContractType,
    InvalidContractVersion,
    describe_error,
)
from .session import contract_function
from .types import ZERO_ADDRESS, Chain, ContractCall, ResolvedParams, Transport

if TYPE_CHECKING:
    from web3 import AsyncWeb3

    from .executor import TransactionExecutor

# bytes32(uint256(keccak256("eip1967.proxy.implementation")) - 1)
IMPLEMENTATION_SLOT = int.from_bytes(keccak(text="eip1967.proxy.implementation"), "big") - 1

TYPE_MISMATCH = "Contract Type and Expected Contract Type Does Not Match"


def _identity_call(address: str, function_name: str) -> ContractCall:
    return ContractCall(address=address, abi=BASE_ABI, function_name=function_name)


async def resolve(
    address: str,
    chain: Chain,
    expected_type: Any,
    transport: Optional[Transport] = None,
    *,
    client: Optional["AsyncWeb3"] = None,
) -> ResolvedParams:
    """Verify that an address hosts the expected contract and bind its ABI.

    Reads ``contractType()`` first and stops on a mismatch without reading
    ``version()``.

    Args:
        address: Contract address.
        chain: Chain to read from.
        expected_type: Expected contract type, e.g. ContractType.VAULT.
        transport: Transport for the chain. Defaults to its first RPC url.
        client: Existing handle to read through instead of building one.

    Returns:
        ResolvedParams with the checksummed address and the registered ABI.

    Raises:
        InvalidContract: If the reads fail, the type does not match or no ABI
            is registered for the kind and version.
    """
    try:
        client = client or make_client(chain, transport)
        contract_type = await contract_function(client, _identity_call(address, "contractType")).call()
        if normalize_contract_type(contract_type) != normalize_contract_type(expected_type):
            raise InvalidContractType(TYPE_MISMATCH)

        version = await contract_function(client, _identity_call(address, "version")).call()
        kind = contract_type_formatter(normalize_contract_type(contract_type))
        abi = get_abi(kind, version)
        if abi is None:
            raise ContractAbiNotFound(
                f"ABI Not Found For {kind} version {version}, Please Supply It Manually"
            )
    except Exception as error:
        cause = error.message if isinstance(error, BonkersError) else describe_error(error)
        raise InvalidContract(
            f"Failed To Verify Contract Existence On {chain.name} Chain | Cause: {cause}",
            cause=cause,
        ) from error

    return ResolvedParams(address=to_checksum_address(address), abi=abi, chain=chain)


async def implementation_of(
    chain: Chain,
    address: str,
    transport: Optional[Transport] = None,
    *,
    client: Optional["AsyncWeb3"] = None,
) -> str:
    """Implementation address behind an EIP-1967 proxy.

    Returns:
        Checksummed implementation address, or the zero address when the
        slot is empty.
    """
    client = client or make_client(chain, transport)
    raw = await client.eth.get_storage_at(to_checksum_address(address), IMPLEMENTATION_SLOT)  # type: ignore[arg-type]
    word = bytes(raw)
    if int.from_bytes(word, "big") == 0:
        return ZERO_ADDRESS
    return to_checksum_address(word[-20:].rjust(20, b"\x00"))


async def get_contract_type(executor: "TransactionExecutor", address: str) -> str:
    """Read ``contractType()`` through a session.

    Raises:
        InvalidContractType: If the read fails.
    """
    try:
        return await executor.read(_identity_call(address, "contractType"))
    except Exception as error:
        raise InvalidContractType(
            "Can Not Find Contract Type From The Given Address",
            cause=describe_error(error),
        ) from error


async def get_contract_version(executor: "TransactionExecutor", address: str) -> str:
    """Read ``version()`` through a session.

    Raises:
        InvalidContractVersion: If the read fails.
    """
    try:
        return await executor.read(_identity_call(address, "version"))
    except Exception as error:
        raise InvalidContractVersion(
            "Can Not Find Version From The Given Address",
            cause=describe_error(error),
        ) from error
