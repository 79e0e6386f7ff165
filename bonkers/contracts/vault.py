"""Vault contract wrapper."""

from __future__ import annotations

from typing import Any, Sequence

from eth_utils import to_checksum_address
from typing_extensions import Self

from ..logs import logged
from ..types import ContractType, ControllerLimits, Receiver, TransactionResult, VaultInfo
from .base import BaseContract, Params, to_call_results

VAULT_INFO_FIELDS = (
    "id",
    "version",
    "project_owner",
    "project_name",
    "reward_token",
    "created_at",
    "deployer",
)


def to_vault_info(raw: Sequence[Any]) -> VaultInfo:
    """Build a VaultInfo from the decoded ``VaultInfo`` struct."""
    return VaultInfo(**dict(zip(VAULT_INFO_FIELDS, raw)))


def to_controller_limits(raw: Sequence[Any]) -> ControllerLimits:
    quota, reward_allowance = raw
    return ControllerLimits(quota=quota, reward_allowance=reward_allowance)


class Vault(BaseContract):
    """Wrapper for a Bonkers Vault, the reward pool of one project."""

    CONTRACT_TYPE = ContractType.VAULT

    def use_new_vault(self, chain_id: int, params: Params) -> Self:
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
    async def get_vault_info(self) -> VaultInfo:
        return to_vault_info(await self._read("getVaultInfo"))

    @logged
    async def reward_pool(self) -> str:
        """Reward tokens held by the vault, as a decimal string."""
        return str(await self._read("rewardPool"))

    @logged
    async def controller_limits(self, controller: str) -> ControllerLimits:
        return to_controller_limits(
            await self._read("controllerLimits", to_checksum_address(controller))
        )

    @logged
    async def default_controller_limits(self) -> ControllerLimits:
        return to_controller_limits(await self._read("defaultControllerLimits"))

    @logged
    async def controller_limits_enabled(self) -> bool:
        return await self._read("controllerLimitsEnabled")

    @logged
    async def is_controller(self, controller: str) -> bool:
        return await self._read("isController", to_checksum_address(controller))

    # =========================================================================
    # Writes
    # =========================================================================

    @logged
    async def toggle_controller_limits(self) -> TransactionResult:
        return await self._write_void("toggleControllerLimits")

    @logged
    async def set_controller_limits(
        self, controller: str, quota: int, reward_allowance: int
    ) -> TransactionResult:
        return await self._write_void(
            "setControllerLimits", to_checksum_address(controller), quota, reward_allowance
        )

    @logged
    async def set_default_controller_limits(self, quota: int, reward_allowance: int) -> TransactionResult:
        return await self._write_void("setDefaultControllerLimits", quota, reward_allowance)

    @logged
    async def update_reward_token(self, new_reward_token: str) -> TransactionResult:
        return await self._write_void("updateRewardToken", to_checksum_address(new_reward_token))

    @logged
    async def withdraw_token(self, token_address: str, amount: int) -> TransactionResult:
        return await self._write("withdrawToken", to_checksum_address(token_address), amount)

    @logged
    async def change_vault_owner(self, new_owner: str) -> TransactionResult:
        return await self._write_void("changeVaultOwner", to_checksum_address(new_owner))

    @logged
    async def reward(self, to: str, amount: int) -> TransactionResult:
        return await self._write("reward", to_checksum_address(to), amount)

    @logged
    async def reward_batch(self, receivers: list[Receiver]) -> TransactionResult:
        result = await self._write(
            "rewardBatch", [receiver.as_tuple() for receiver in receivers]
        )
        return result.model_copy(update={"result": to_call_results(result.result)})

    @logged
    async def grant_permit(self, controller: str) -> TransactionResult:
        return await self._write_void("grantPermit", to_checksum_address(controller))

    @logged
    async def revoke_permit(self, controller: str) -> TransactionResult:
        return await self._write_void("revokePermit", to_checksum_address(controller))
