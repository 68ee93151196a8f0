"""
TaxInvoice model - invoices issued against a transaction.
Only read here to guard transaction deletion.
"""

from decimal import Decimal
from typing import Optional
from datetime import datetime
from sqlmodel import SQLModel, Field


class TaxInvoice(SQLModel, table=True):
    """Represents a tax invoice issued for a transaction."""
    __tablename__ = "tax_invoices"

    id: Optional[int] = Field(default=None, primary_key=True)
    transaction_id: int = Field(foreign_key="transactions.id", index=True)
    invoice_number: str = Field(index=True)
    issue_date: datetime = Field(default_factory=datetime.now)
    supplier_business_number: str = Field(default="")
    supplier_name: str = Field(default="")
    buyer_business_number: str = Field(default="")
    buyer_name: str = Field(default="")
    total_amount: Decimal = Field(default=Decimal("0"), max_digits=18, decimal_places=4)
    tax_amount: Decimal = Field(default=Decimal("0"), max_digits=18, decimal_places=4)
    status: str = Field(default="issued")  # "issued", "sent", "received"
    pdf_path: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=datetime.now)
