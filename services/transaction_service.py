"""
Transaction service - the synchronous call boundary of the transaction core.
Composes the store, the lifecycle manager and the summary aggregator around
one injected engine.
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.engine import Engine

from config import Settings, configure_logging, get_settings
from db_engine import create_db_engine, init_db
from models import (
    CreateTransactionRequest,
    TransactionFilter,
    TransactionSummary,
    TransactionWithItems,
    UpdateTransactionRequest,
)
from services.lifecycle import StatusLifecycleManager
from services.summary import SummaryAggregator
from services.transaction_store import TransactionStore

logger = logging.getLogger(__name__)


class TransactionService:
    """Entry point for all transaction operations."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self.store = TransactionStore(engine)
        self.lifecycle = StatusLifecycleManager(engine, self.store.transactions)
        self.summary = SummaryAggregator(engine, self.store.transactions)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "TransactionService":
        """
        Start-up path: configure logging, create the engine and make sure the tables exist.

        Args:
            settings: Optional settings; defaults to the global settings
        """
        settings = settings or get_settings()
        configure_logging(settings)
        engine = create_db_engine(settings)
        init_db(engine)
        logger.info(f"Transaction service ready on {engine.url.render_as_string(hide_password=True)}")
        return cls(engine)

    def list_transactions(
        self,
        transaction_type: Optional[str] = None,
        customer_id: Optional[int] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None
    ) -> List[TransactionWithItems]:
        return self.store.list(
            TransactionFilter(
                transaction_type=transaction_type,
                customer_id=customer_id,
                limit=limit,
                offset=offset
            )
        )

    def get_transaction(self, transaction_id: int) -> Optional[TransactionWithItems]:
        return self.store.get(transaction_id)

    def create_transaction(self, request: CreateTransactionRequest) -> TransactionWithItems:
        return self.store.create(request)

    def update_transaction(self, transaction_id: int, request: UpdateTransactionRequest) -> TransactionWithItems:
        return self.store.update(transaction_id, request)

    def delete_transaction(self, transaction_id: int) -> None:
        self.store.delete(transaction_id)

    def confirm_transaction(self, transaction_id: int) -> TransactionWithItems:
        return self.lifecycle.confirm(transaction_id)

    def cancel_transaction(self, transaction_id: int) -> TransactionWithItems:
        return self.lifecycle.cancel(transaction_id)

    def get_summary(
        self,
        transaction_type: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None
    ) -> TransactionSummary:
        return self.summary.summarize(transaction_type, start_date, end_date)
