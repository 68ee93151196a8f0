"""
Summary aggregator - count, total and tax over non-cancelled transactions.
"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.engine import Engine

from models import TransactionSummary
from repositories import TransactionRepository
from services.calculator import quantize_money
from services.validation import validate_transaction_type

logger = logging.getLogger(__name__)


class SummaryAggregator:
    """Computes rollups over a filtered set of transactions."""

    def __init__(self, engine: Engine, transactions: Optional[TransactionRepository] = None):
        self.engine = engine
        self.transactions = transactions or TransactionRepository(engine)

    def summarize(
        self,
        transaction_type: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None
    ) -> TransactionSummary:
        """
        Summarize transactions matching all supplied filters.
        Cancelled transactions never count. With no matches every field is 0.

        Args:
            transaction_type: Optional 'sale' or 'purchase'
            start_date: Optional inclusive lower bound on transaction_date
            end_date: Optional inclusive upper bound on transaction_date

        Returns:
            TransactionSummary
        """
        if transaction_type is not None:
            transaction_type = validate_transaction_type(transaction_type)

        count, total_amount, tax_amount = self.transactions.summarize(
            transaction_type=transaction_type,
            start_date=start_date,
            end_date=end_date
        )
        summary = TransactionSummary(
            count=count,
            total_amount=quantize_money(total_amount or 0),
            tax_amount=quantize_money(tax_amount or 0)
        )
        logger.debug(f"Summary type={transaction_type} from={start_date} to={end_date}: {summary}")
        return summary
