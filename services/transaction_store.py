"""
Transaction store - create, read, update and delete of transactions.

Creation runs validation, reference checks and the line-item calculator and
then writes the transaction row and all item rows in one unit of work.
"""

import logging
from typing import List, Optional

from sqlalchemy.engine import Engine

from db_engine import get_session
from errors import BusinessError, NotFoundError
from models import (
    CreateTransactionRequest,
    Transaction,
    TransactionFilter,
    TransactionItem,
    TransactionStatus,
    TransactionWithItems,
    UpdateTransactionRequest,
)
from repositories import CustomerRepository, InvoiceRepository, ProductRepository, TransactionRepository
from services.calculator import calculate_line, calculate_totals
from services.reference_resolver import ReferenceResolver
from services.validation import validate_create_request, validate_filter, validate_update_request

logger = logging.getLogger(__name__)


class TransactionStore:
    """Persistence-facing operations on transactions and their items."""

    def __init__(
        self,
        engine: Engine,
        transactions: Optional[TransactionRepository] = None,
        resolver: Optional[ReferenceResolver] = None,
        invoices: Optional[InvoiceRepository] = None
    ):
        self.engine = engine
        self.transactions = transactions or TransactionRepository(engine)
        self.resolver = resolver or ReferenceResolver(
            CustomerRepository(engine),
            ProductRepository(engine)
        )
        self.invoices = invoices or InvoiceRepository(engine)

    def list(self, filters: Optional[TransactionFilter] = None) -> List[TransactionWithItems]:
        """
        List transactions, newest first.

        Args:
            filters: Optional type/customer filter with limit/offset; no limit returns all rows

        Returns:
            List of TransactionWithItems
        """
        filters = validate_filter(filters or TransactionFilter())
        return self.transactions.list(filters)

    def get(self, transaction_id: int) -> Optional[TransactionWithItems]:
        """Get one transaction with its items, or None if absent."""
        return self.transactions.get_with_items(transaction_id)

    def create(self, request: CreateTransactionRequest) -> TransactionWithItems:
        """
        Record a new transaction with its items.
        The status is always draft; totals are computed from the items.

        Args:
            request: CreateTransactionRequest

        Returns:
            The stored transaction, re-read from the database

        Raises:
            ValidationError: malformed request
            NotFoundError: unknown customer, or unknown/inactive product
            DatabaseError: storage failure; nothing is written
        """
        request = validate_create_request(request)

        with get_session(self.engine) as session:
            self.resolver.require_customer(request.customer_id, session=session)
            self.resolver.require_active_products(
                [item.product_id for item in request.items],
                session=session
            )

            lines = [
                calculate_line(item.quantity, item.unit_price, item.tax_rate)
                for item in request.items
            ]
            total_amount, tax_amount = calculate_totals(lines)

            transaction = Transaction(
                customer_id=request.customer_id,
                transaction_type=request.transaction_type,
                transaction_date=request.transaction_date,
                total_amount=total_amount,
                tax_amount=tax_amount,
                status=TransactionStatus.DRAFT.value,
                notes=request.notes
            )
            items = [
                TransactionItem(
                    product_id=item.product_id,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    tax_rate=item.tax_rate,
                    subtotal=line.subtotal,
                    tax_amount=line.tax_amount,
                    total_amount=line.total_amount
                )
                for item, line in zip(request.items, lines)
            ]

            transaction_id = self.transactions.create_with_items(transaction, items, session=session)
            created = self.transactions.get_with_items(transaction_id, session=session)

        if created is None:
            raise NotFoundError("Created transaction not found")
        logger.info(
            f"Created {request.transaction_type} transaction {transaction_id} "
            f"(total {total_amount}, tax {tax_amount})"
        )
        return created

    def update(self, transaction_id: int, request: UpdateTransactionRequest) -> TransactionWithItems:
        """
        Update the supplied scalar fields of a transaction; other fields stay as they are.

        Raises:
            NotFoundError: transaction or new customer does not exist
            ValidationError: invalid status or nothing to update
            BusinessError: attempt to move a cancelled transaction to another status
        """
        with get_session(self.engine) as session:
            if not self.transactions.exists(transaction_id, session=session):
                raise NotFoundError("Transaction not found")

            if request.customer_id is not None:
                self.resolver.require_customer(request.customer_id, session=session)

            request = validate_update_request(request)

            changed = self.transactions.update_fields(
                transaction_id,
                request.assignments(),
                session=session
            )
            if changed == 0:
                # Deleted since the existence check, or guarded by the cancelled status
                if request.status is None or not self.transactions.exists(transaction_id, session=session):
                    raise NotFoundError("Transaction not found")
                logger.warning(f"Refused to reopen cancelled transaction {transaction_id}")
                raise BusinessError("Cancelled transaction cannot change status")

            updated = self.transactions.get_with_items(transaction_id, session=session)

        if updated is None:
            raise NotFoundError("Updated transaction not found")
        fields = ", ".join(name for name, _ in request.assignments())
        logger.info(f"Updated transaction {transaction_id}: {fields}")
        return updated

    def delete(self, transaction_id: int) -> None:
        """
        Delete a transaction and its items.

        Raises:
            BusinessError: the transaction has tax invoices
            NotFoundError: the transaction does not exist
        """
        with get_session(self.engine) as session:
            if self.invoices.count_for_transaction(transaction_id, session=session) > 0:
                logger.warning(f"Refused to delete invoiced transaction {transaction_id}")
                raise BusinessError(
                    "Cannot delete transaction that has tax invoices. Cancel the transaction instead."
                )

            if not self.transactions.delete_with_items(transaction_id, session=session):
                raise NotFoundError("Transaction not found")

        logger.info(f"Deleted transaction {transaction_id}")
