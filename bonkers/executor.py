"""Uniform read and write protocol over a session.

Writes run in three steps: simulate, submit, confirm. The transaction hash
is obtained before confirmation starts, so a confirmation failure still
means the transaction was broadcast.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from .errors import ContractInteractionFailed, describe_error
from .types import ContractCall, TransactionResult

if TYPE_CHECKING:
    from .session import Session

STEP_SIMULATE = "simulate"
STEP_SUBMIT = "submit"
STEP_CONFIRM = "confirm"

STATUS_SUCCESS = "success"


class TransactionExecutor:
    """Runs contract reads and writes through a session.

    Args:
        session: Session shared with the owning wrapper.
        logger: Logger for debug tracing.
    """

    def __init__(self, session: "Session", logger: Optional[logging.Logger] = None) -> None:
        self.session = session
        self.logger = logger or logging.getLogger(__name__)

    async def read(self, call: ContractCall):
        """Call a view or pure function.

        Raises:
            ContractInteractionFailed: If the call fails for any reason.
        """
        self.logger.debug("Read %s on %s", call.function_name, call.address)
        try:
            return await self.session.read_contract(call)
        except Exception as error:
            raise ContractInteractionFailed(
                f"Failed To Execute Read on: {call.function_name}",
                cause=describe_error(error),
            ) from error

    async def write(self, call: ContractCall) -> TransactionResult:
        """Simulate, submit and confirm a state-changing call.

        Returns:
            TransactionResult with the simulated return value, the hash and
            the receipt.

        Raises:
            ContractInteractionFailed: If any step fails. ``step`` names it.
        """
        self.logger.debug("Write %s on %s", call.function_name, call.address)
        step = STEP_SIMULATE
        try:
            simulation = await self.session.simulate_contract(call)
            step = STEP_SUBMIT
            tx_hash = await self.session.submit(simulation.request)
            step = STEP_CONFIRM
            self.logger.debug("Submitted %s: %s", call.function_name, tx_hash)
            receipt = await self.session.wait_for_transaction_receipt(tx_hash)
        except Exception as error:
            raise ContractInteractionFailed(
                f"Failed To Execute Write on: {call.function_name}",
                cause=describe_error(error),
                step=step,
            ) from error

        return TransactionResult(
            status=STATUS_SUCCESS,
            result=simulation.result,
            tx_hash=tx_hash,
            receipt=receipt,
        )
