"""Tests for the read and write protocol."""

from unittest.mock import AsyncMock, Mock

import pytest

from bonkers.errors import ContractInteractionFailed
from bonkers.executor import STEP_CONFIRM, STEP_SIMULATE, STEP_SUBMIT, TransactionExecutor
from bonkers.types import ContractCall, Simulation

CALL = ContractCall(
    address="0x0000000000000000000000000000000000000001",
    abi=[],
    function_name="reward",
    args=("0x0000000000000000000000000000000000000002", 10),
)


def make_session():
    session = Mock()
    session.read_contract = AsyncMock(return_value="VAULT")
    session.simulate_contract = AsyncMock(
        return_value=Simulation(request={"to": CALL.address, "data": "0x"}, result=True)
    )
    session.submit = AsyncMock(return_value="0xabc")
    session.wait_for_transaction_receipt = AsyncMock(return_value={"status": 1})
    return session


class TestRead:
    """Test TransactionExecutor.read."""

    @pytest.mark.asyncio
    async def test_read_returns_value(self):
        session = make_session()

        assert await TransactionExecutor(session).read(CALL) == "VAULT"
        session.read_contract.assert_awaited_once_with(CALL)

    @pytest.mark.asyncio
    async def test_read_failure_is_wrapped(self):
        session = make_session()
        session.read_contract.side_effect = ValueError("execution reverted")

        with pytest.raises(ContractInteractionFailed) as exc_info:
            await TransactionExecutor(session).read(CALL)

        error = exc_info.value
        assert error.message == "Failed To Execute Read on: reward"
        assert error.cause == "ValueError | execution reverted"
        assert error.step is None
        assert isinstance(error.__cause__, ValueError)


class TestWrite:
    """Test TransactionExecutor.write."""

    @pytest.mark.asyncio
    async def test_write_runs_all_steps(self):
        session = make_session()

        result = await TransactionExecutor(session).write(CALL)

        assert result.status == "success"
        assert result.result is True
        assert result.tx_hash == "0xabc"
        assert result.receipt == {"status": 1}
        session.submit.assert_awaited_once_with({"to": CALL.address, "data": "0x"})
        session.wait_for_transaction_receipt.assert_awaited_once_with("0xabc")

    @pytest.mark.asyncio
    async def test_simulation_failure_submits_nothing(self):
        session = make_session()
        session.simulate_contract.side_effect = ValueError("execution reverted: not owner")

        with pytest.raises(ContractInteractionFailed) as exc_info:
            await TransactionExecutor(session).write(CALL)

        assert exc_info.value.step == STEP_SIMULATE
        assert exc_info.value.message == "Failed To Execute Write on: reward"
        session.submit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_submit_failure(self):
        session = make_session()
        session.submit.side_effect = RuntimeError("user rejected")

        with pytest.raises(ContractInteractionFailed) as exc_info:
            await TransactionExecutor(session).write(CALL)

        assert exc_info.value.step == STEP_SUBMIT
        assert exc_info.value.cause == "RuntimeError | user rejected"
        session.wait_for_transaction_receipt.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_confirm_failure_after_broadcast(self):
        """A receipt failure still means the transaction was submitted."""
        session = make_session()
        session.wait_for_transaction_receipt.side_effect = TimeoutError("receipt timeout")

        with pytest.raises(ContractInteractionFailed) as exc_info:
            await TransactionExecutor(session).write(CALL)

        assert exc_info.value.step == STEP_CONFIRM
        session.submit.assert_awaited_once()
