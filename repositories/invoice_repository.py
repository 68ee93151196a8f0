"""
Invoice Repository - tax invoices as seen by the transaction core.
The core only needs to know whether a transaction has been invoiced.
"""

from decimal import Decimal
from typing import Optional
from sqlalchemy import func
from sqlmodel import Session, select

from models import TaxInvoice
from repositories.base import BaseRepository


class InvoiceRepository(BaseRepository):
    """Repository for TaxInvoice lookups."""

    def add(
        self,
        transaction_id: int,
        invoice_number: str,
        total_amount: Decimal = Decimal("0"),
        tax_amount: Decimal = Decimal("0"),
        session: Optional[Session] = None
    ) -> TaxInvoice:
        """Add a tax invoice for a transaction."""
        def _create_invoice(sess: Session) -> TaxInvoice:
            invoice = TaxInvoice(
                transaction_id=transaction_id,
                invoice_number=invoice_number,
                total_amount=total_amount,
                tax_amount=tax_amount
            )
            sess.add(invoice)
            sess.commit()
            sess.refresh(invoice)
            return invoice

        return self._run(_create_invoice, session)

    def count_for_transaction(self, transaction_id: int, session: Optional[Session] = None) -> int:
        """Count the tax invoices issued against a transaction."""
        def _count(sess: Session) -> int:
            statement = select(func.count()).select_from(TaxInvoice).where(
                TaxInvoice.transaction_id == transaction_id
            )
            return int(sess.exec(statement).one())

        return self._run(_count, session)
