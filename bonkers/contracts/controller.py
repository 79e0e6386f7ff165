"""Controller contract wrapper."""

from __future__ import annotations

from eth_utils import to_checksum_address
from typing_extensions import Self

from ..logs import logged
from ..types import (
    Call3,
    Call3Value,
    ContractType,
    ControllerRole,
    Receiver,
    TransactionResult,
)
from .base import BaseContract, Params, to_call_results


class Controller(BaseContract):
    """Wrapper for the Bonkers Controller.

    The controller relays calls and rewards to vaults and factories on behalf
    of its role holders.

    Example:
        ```python
        controller = Controller(config, {"address": "0x...", "abi": ABIS["controller"]["0.0.1"]})
        owner = await controller.owner()
        ```
    """

    CONTRACT_TYPE = ContractType.CONTROLLER

    def use_new_controller(self, chain_id: int, params: Params) -> Self:
        return self.use_new_contract(chain_id, params)

    # =========================================================================
    # Reads
    # =========================================================================

    @logged
    async def multicall_address(self) -> str:
        return await self._read("multicallAddress")

    @logged
    async def fee_receiver(self) -> str:
        return await self._read("feeReceiver")

    @logged
    async def contract_type(self) -> str:
        return await self._read("contractType")

    @logged
    async def version(self) -> str:
        return await self._read("version")

    @logged
    async def owner(self) -> str:
        return await self._read("owner")

    @logged
    async def has_controller_role(self, role: ControllerRole, account: str) -> bool:
        return await self._read("hasControllerRole", int(role), to_checksum_address(account))

    # =========================================================================
    # Writes
    # =========================================================================

    @logged
    async def call(self, target_contract: str, call_data: str) -> TransactionResult:
        """Relay arbitrary calldata to a target contract."""
        return await self._write("call", to_checksum_address(target_contract), call_data)

    @logged
    async def call_batch(self, calls: list[Call3], value: int = 0) -> TransactionResult:
        result = await self._write(
            "callBatch", [call.as_tuple() for call in calls], value=value
        )
        return result.model_copy(update={"result": to_call_results(result.result)})

    @logged
    async def call_batch_value(self, calls: list[Call3Value]) -> TransactionResult:
        """Batch of calls that each forward native value; sends the sum."""
        result = await self._write(
            "callBatchValue",
            [call.as_tuple() for call in calls],
            value=sum(call.value for call in calls),
        )
        return result.model_copy(update={"result": to_call_results(result.result)})

    @logged
    async def transfer_erc20_token(
        self, token_address: str, receiver: str, amount: int
    ) -> TransactionResult:
        return await self._write_void(
            "transferERC20Token",
            to_checksum_address(token_address),
            to_checksum_address(receiver),
            amount,
        )

    @logged
    async def change_controller_owner(self, new_owner: str) -> TransactionResult:
        return await self._write_void("changeControllerOwner", to_checksum_address(new_owner))

    @logged
    async def add_controller_role(self, role: ControllerRole, account: str) -> TransactionResult:
        return await self._write_void("addControllerRole", int(role), to_checksum_address(account))

    @logged
    async def remove_controller_role(self, role: ControllerRole, account: str) -> TransactionResult:
        return await self._write_void(
            "removeControllerRole", int(role), to_checksum_address(account)
        )

    @logged
    async def set_fee_receiver(self, new_fee_receiver: str) -> TransactionResult:
        return await self._write_void("setFeeReceiver", to_checksum_address(new_fee_receiver))

    @logged
    async def set_multicall_address(self, new_multicall_address: str) -> TransactionResult:
        return await self._write_void(
            "setMulticallAddress", to_checksum_address(new_multicall_address)
        )

    # =========================================================================
    # Vault relays
    # =========================================================================

    @logged
    async def create_vault(
        self,
        target_vault_factory: str,
        project_owner: str,
        reward_token: str,
        project_name: str,
    ) -> TransactionResult:
        """Create a vault through a factory. ``result`` is the new vault address."""
        return await self._write(
            "createVault",
            to_checksum_address(target_vault_factory),
            to_checksum_address(project_owner),
            to_checksum_address(reward_token),
            project_name,
        )

    @logged
    async def vault_reward(self, target_vault: str, to: str, amount: int) -> TransactionResult:
        return await self._write(
            "vaultReward", to_checksum_address(target_vault), to_checksum_address(to), amount
        )

    @logged
    async def vault_reward_batch(self, target_vault: str, receivers: list[Receiver]) -> TransactionResult:
        result = await self._write(
            "vaultRewardBatch",
            to_checksum_address(target_vault),
            [receiver.as_tuple() for receiver in receivers],
        )
        return result.model_copy(update={"result": to_call_results(result.result)})
