"""Vault factory contract wrapper."""

from __future__ import annotations

from eth_utils import to_checksum_address
from typing_extensions import Self

from ..logs import logged
from ..types import (
    ContractType,
    CreationFee,
    ImplementationDetails,
    TransactionResult,
    VaultInfo,
)
from .base import BaseContract, Params
from .vault import to_vault_info


class VaultFactory(BaseContract):
    """Wrapper for the Bonkers Vault Factory.

    Example:
        ```python
        factory = sdk.vault_factory(params)
        fee = await factory.creation_fee()
        tx = await factory.create_vault(owner, token, "My Project", use_token_for_payment=False)
        vault_address = tx.result
        ```
    """

    CONTRACT_TYPE = ContractType.VAULT_FACTORY

    def use_new_vault_factory(self, chain_id: int, params: Params) -> Self:
        return self.use_new_contract(chain_id, params)

    # =========================================================================
    # Reads
    # =========================================================================

    @logged
    async def contract_type(self) -> str:
        return await self._read("contractType")

    @logged
    async def version(self) -> str:
        return await self._read("version")

    @logged
    async def get_vault_info(self, vault_address: str) -> VaultInfo:
        return to_vault_info(await self._read("getVaultInfo", to_checksum_address(vault_address)))

    @logged
    async def get_implementation_details(self) -> ImplementationDetails:
        """Implementation the factory clones for new vaults."""
        implementation_address, contract_type, version = await self._read(
            "getImplementationDetails"
        )
        return ImplementationDetails(
            implementation_address=implementation_address,
            contract_type=contract_type,
            version=version,
        )

    @logged
    async def creation_fee(self) -> CreationFee:
        eth_fee, erc20_fee = await self._read("creationFee")
        return CreationFee(eth_fee=eth_fee, erc20_fee=erc20_fee)

    @logged
    async def fee_receiver(self) -> str:
        return await self._read("feeReceiver")

    @logged
    async def total_vaults(self) -> int:
        return int(await self._read("totalVaults"))

    @logged
    async def owner(self) -> str:
        return await self._read("owner")

    @logged
    async def erc20_payment_token(self) -> str:
        return await self._read("erc20PaymentToken")

    @logged
    async def is_controller(self, controller: str) -> bool:
        return await self._read("isController", to_checksum_address(controller))

    # =========================================================================
    # Writes
    # =========================================================================

    @logged
    async def change_vault_factory_owner(self, new_owner: str) -> TransactionResult:
        return await self._write_void("changeVaultFactoryOwner", to_checksum_address(new_owner))

    @logged
    async def update_implementation(self, new_implementation: str) -> TransactionResult:
        return await self._write_void(
            "updateImplementation", to_checksum_address(new_implementation)
        )

    @logged
    async def update_vault_info(self, vault: str) -> TransactionResult:
        return await self._write_void("updateVaultInfo", to_checksum_address(vault))

    @logged
    async def set_fee_receiver(self, new_fee_receiver: str) -> TransactionResult:
        return await self._write_void("setFeeReceiver", to_checksum_address(new_fee_receiver))

    @logged
    async def set_erc20_payment_token(self, new_erc20_payment_token: str) -> TransactionResult:
        return await self._write_void(
            "setERC20PaymentToken", to_checksum_address(new_erc20_payment_token)
        )

    @logged
    async def update_creation_fee(
        self, new_creation_fee: int, new_erc20_creation_fee: int
    ) -> TransactionResult:
        return await self._write_void("updateCreationFee", new_creation_fee, new_erc20_creation_fee)

    @logged
    async def create_vault(
        self,
        project_owner: str,
        reward_token: str,
        project_name: str,
        use_token_for_payment: bool,
    ) -> TransactionResult:
        """Create a vault, paying the native creation fee unless paying in tokens.

        Returns:
            TransactionResult whose ``result`` is the new vault address.
        """
        fee = await self.creation_fee()
        value = 0 if use_token_for_payment else int(fee.eth_fee)
        return await self._write(
            "createVault",
            to_checksum_address(project_owner),
            to_checksum_address(reward_token),
            project_name,
            use_token_for_payment,
            value=value,
        )

    @logged
    async def grant_permit(self, controller: str) -> TransactionResult:
        return await self._write_void("grantPermit", to_checksum_address(controller))

    @logged
    async def revoke_permit(self, controller: str) -> TransactionResult:
        return await self._write_void("revokePermit", to_checksum_address(controller))
