"""
Transaction Repository - data access layer for Transaction and TransactionItem.

Multi-row writes (create with items, delete with items) happen in a single
database transaction. Status transitions are conditional updates: the row is
only written when its current status matches, and the affected row count
tells the caller whether the transition happened.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, Tuple
import logging

from sqlalchemy import delete, func, update
from sqlmodel import Session, select

from models import (
    Customer,
    Product,
    Transaction,
    TransactionFilter,
    TransactionItem,
    TransactionItemWithProduct,
    TransactionStatus,
    TransactionWithItems,
)
from repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class TransactionRepository(BaseRepository):
    """Repository for Transaction persistence and read-model reconstruction."""

    def list(self, filters: TransactionFilter, session: Optional[Session] = None) -> List[TransactionWithItems]:
        """
        Retrieve transactions with their items, newest first.

        Args:
            filters: Type/customer filter and optional limit/offset
            session: Optional existing session for transaction reuse

        Returns:
            List of TransactionWithItems ordered by transaction_date desc, created_at desc
        """
        def _list(sess: Session) -> List[TransactionWithItems]:
            statement = select(Transaction)
            if filters.transaction_type is not None:
                statement = statement.where(Transaction.transaction_type == filters.transaction_type)
            if filters.customer_id is not None:
                statement = statement.where(Transaction.customer_id == filters.customer_id)
            statement = statement.order_by(
                Transaction.transaction_date.desc(),
                Transaction.created_at.desc()
            )
            # Offset is only meaningful together with a limit
            if filters.limit is not None:
                statement = statement.limit(filters.limit)
                if filters.offset is not None:
                    statement = statement.offset(filters.offset)

            transactions = list(sess.exec(statement).all())
            return self._assemble(sess, transactions)

        return self._run(_list, session)

    def get_with_items(self, transaction_id: int, session: Optional[Session] = None) -> Optional[TransactionWithItems]:
        """
        Retrieve a transaction with items, products and customer.

        Args:
            transaction_id: Transaction ID to look up
            session: Optional existing session for transaction reuse

        Returns:
            TransactionWithItems or None if not found
        """
        def _get_with_items(sess: Session) -> Optional[TransactionWithItems]:
            transaction = sess.get(Transaction, transaction_id)
            if transaction is None:
                return None
            assembled = self._assemble(sess, [transaction])
            return assembled[0] if assembled else None

        return self._run(_get_with_items, session)

    def exists(self, transaction_id: int, session: Optional[Session] = None) -> bool:
        """Check whether a transaction with this id exists."""
        def _exists(sess: Session) -> bool:
            statement = select(Transaction.id).where(Transaction.id == transaction_id)
            return sess.exec(statement).first() is not None

        return self._run(_exists, session)

    def create_with_items(
        self,
        transaction: Transaction,
        items: Sequence[TransactionItem],
        session: Optional[Session] = None
    ) -> int:
        """
        Insert a transaction and all of its items in one unit of work.
        Either every row becomes visible or none does.

        Args:
            transaction: Unsaved Transaction with totals already computed
            items: Unsaved TransactionItems; transaction_id is filled in here
            session: Optional existing session for transaction reuse

        Returns:
            ID of the new transaction
        """
        def _create(sess: Session) -> int:
            sess.add(transaction)
            sess.flush()
            transaction_id = transaction.id
            for item in items:
                item.transaction_id = transaction_id
                sess.add(item)
            sess.commit()
            logger.info(f"Inserted transaction {transaction_id} with {len(items)} item(s)")
            return transaction_id

        return self._run(_create, session)

    def update_fields(
        self,
        transaction_id: int,
        assignments: Sequence[Tuple[str, Any]],
        session: Optional[Session] = None
    ) -> int:
        """
        Apply a partial update to a transaction's scalar fields.
        Only the given columns are written, plus updated_at.

        When the update moves the status to anything but cancelled, the write is
        guarded so a cancelled transaction is never reopened.

        Args:
            transaction_id: Transaction ID to update
            assignments: Ordered (column, value) pairs
            session: Optional existing session for transaction reuse

        Returns:
            Number of rows changed (0 or 1)
        """
        values: Dict[str, Any] = {}
        for column, value in assignments:
            values[column] = value.value if isinstance(value, TransactionStatus) else value
        values["updated_at"] = datetime.now()

        def _update(sess: Session) -> int:
            statement = update(Transaction).where(Transaction.id == transaction_id)
            new_status = values.get("status")
            if new_status is not None and new_status != TransactionStatus.CANCELLED.value:
                statement = statement.where(Transaction.status != TransactionStatus.CANCELLED.value)
            result = sess.exec(statement.values(**values))
            sess.commit()
            return result.rowcount

        return self._run(_update, session)

    def delete_with_items(self, transaction_id: int, session: Optional[Session] = None) -> bool:
        """
        Delete a transaction's items and then the transaction, in one unit of work.

        Args:
            transaction_id: Transaction ID to delete
            session: Optional existing session for transaction reuse

        Returns:
            True if the transaction was deleted, False if it did not exist
        """
        def _delete(sess: Session) -> bool:
            items_deleted = sess.exec(
                delete(TransactionItem).where(TransactionItem.transaction_id == transaction_id)
            ).rowcount
            deleted = sess.exec(
                delete(Transaction).where(Transaction.id == transaction_id)
            ).rowcount
            if deleted == 0:
                sess.rollback()
                return False
            sess.commit()
            logger.info(f"Deleted transaction {transaction_id} and {items_deleted} item(s)")
            return True

        return self._run(_delete, session)

    def transition_status(
        self,
        transaction_id: int,
        new_status: TransactionStatus,
        allowed_from: Sequence[TransactionStatus],
        session: Optional[Session] = None
    ) -> int:
        """
        Compare-and-set the status column.
        The row is written only if its current status is one of allowed_from.

        Args:
            transaction_id: Transaction ID to transition
            new_status: Target status
            allowed_from: Statuses the transaction may currently be in
            session: Optional existing session for transaction reuse

        Returns:
            Number of rows changed; 0 means missing id or wrong current status
        """
        def _transition(sess: Session) -> int:
            statement = (
                update(Transaction)
                .where(
                    Transaction.id == transaction_id,
                    Transaction.status.in_([status.value for status in allowed_from])
                )
                .values(status=new_status.value, updated_at=datetime.now())
            )
            result = sess.exec(statement)
            sess.commit()
            return result.rowcount

        return self._run(_transition, session)

    def summarize(
        self,
        transaction_type: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        session: Optional[Session] = None
    ) -> Tuple[int, Decimal, Decimal]:
        """
        Count and sum non-cancelled transactions.
        Date bounds are inclusive; all filters are combined with AND.

        Returns:
            Tuple of (count, total_amount, tax_amount); amounts are 0 when nothing matches
        """
        def _summarize(sess: Session) -> Tuple[int, Decimal, Decimal]:
            statement = select(
                func.count(Transaction.id),
                func.coalesce(func.sum(Transaction.total_amount), 0),
                func.coalesce(func.sum(Transaction.tax_amount), 0)
            ).where(Transaction.status != TransactionStatus.CANCELLED.value)
            if transaction_type is not None:
                statement = statement.where(Transaction.transaction_type == transaction_type)
            if start_date is not None:
                statement = statement.where(Transaction.transaction_date >= start_date)
            if end_date is not None:
                statement = statement.where(Transaction.transaction_date <= end_date)

            count, total_amount, tax_amount = sess.exec(statement).one()
            return int(count or 0), total_amount, tax_amount

        return self._run(_summarize, session)

    @staticmethod
    def _assemble(sess: Session, transactions: List[Transaction]) -> List[TransactionWithItems]:
        """Join transactions with their customers and items+products, keeping input order."""
        if not transactions:
            return []

        transaction_ids = [tx.id for tx in transactions]
        customer_ids = sorted({tx.customer_id for tx in transactions})

        customers = {
            customer.id: customer
            for customer in sess.exec(select(Customer).where(Customer.id.in_(customer_ids))).all()
        }

        items_by_transaction: Dict[int, List[TransactionItemWithProduct]] = {tid: [] for tid in transaction_ids}
        item_rows = sess.exec(
            select(TransactionItem, Product)
            .join(Product, TransactionItem.product_id == Product.id)
            .where(TransactionItem.transaction_id.in_(transaction_ids))
            .order_by(TransactionItem.id)
        ).all()
        for item, product in item_rows:
            items_by_transaction[item.transaction_id].append(
                TransactionItemWithProduct(item=item, product=product)
            )

        result = []
        for tx in transactions:
            customer = customers.get(tx.customer_id)
            if customer is None:
                logger.warning(f"Transaction {tx.id} references missing customer {tx.customer_id}")
                continue
            result.append(
                TransactionWithItems(
                    transaction=tx,
                    items=items_by_transaction[tx.id],
                    customer=customer
                )
            )
        return result
