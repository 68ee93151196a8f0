"""
Status lifecycle: draft -> confirmed -> cancelled, and draft -> cancelled.
Cancelled is terminal.

Each transition is a single conditional write on the status column, so two
callers racing on the same transaction cannot both succeed.
"""

import logging
from typing import Dict, Optional, Tuple

from sqlalchemy.engine import Engine

from db_engine import get_session
from errors import BusinessError, NotFoundError
from models import TransactionStatus, TransactionWithItems
from repositories import TransactionRepository

logger = logging.getLogger(__name__)

# Target status -> statuses it may be reached from
TRANSITIONS: Dict[TransactionStatus, Tuple[TransactionStatus, ...]] = {
    TransactionStatus.CONFIRMED: (TransactionStatus.DRAFT,),
    TransactionStatus.CANCELLED: (TransactionStatus.DRAFT, TransactionStatus.CONFIRMED),
}


def can_transition(current: str, target: str) -> bool:
    """Check whether the state machine allows current -> target."""
    sources = TRANSITIONS.get(TransactionStatus(target), ())
    return TransactionStatus(current) in sources


class StatusLifecycleManager:
    """Guards status transitions of transactions."""

    def __init__(self, engine: Engine, transactions: Optional[TransactionRepository] = None):
        self.engine = engine
        self.transactions = transactions or TransactionRepository(engine)

    def confirm(self, transaction_id: int) -> TransactionWithItems:
        """
        Move a draft transaction to confirmed.

        Raises:
            BusinessError: transaction missing or not in draft status
        """
        return self._transition(
            transaction_id,
            TransactionStatus.CONFIRMED,
            "Transaction not found or not in draft status"
        )

    def cancel(self, transaction_id: int) -> TransactionWithItems:
        """
        Cancel a draft or confirmed transaction.

        Raises:
            BusinessError: transaction missing or already cancelled
        """
        return self._transition(
            transaction_id,
            TransactionStatus.CANCELLED,
            "Transaction not found or already cancelled"
        )

    def _transition(
        self,
        transaction_id: int,
        target: TransactionStatus,
        failure_message: str
    ) -> TransactionWithItems:
        with get_session(self.engine) as session:
            changed = self.transactions.transition_status(
                transaction_id,
                target,
                TRANSITIONS[target],
                session=session
            )
            if changed == 0:
                # Missing id and wrong current status are reported the same way
                logger.warning(f"Transition to {target.value} rejected for transaction {transaction_id}")
                raise BusinessError(failure_message)

            result = self.transactions.get_with_items(transaction_id, session=session)

        if result is None:
            raise NotFoundError(f"{target.value.capitalize()} transaction not found")
        logger.info(f"Transaction {transaction_id} is now {target.value}")
        return result
