"""
Transaction models - a sale or purchase and its line items.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional
from datetime import datetime
from sqlmodel import SQLModel, Field


class TransactionType(str, Enum):
    SALE = "sale"
    PURCHASE = "purchase"


class TransactionStatus(str, Enum):
    """Lifecycle states. CANCELLED is terminal."""
    DRAFT = "draft"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class Transaction(SQLModel, table=True):
    """
    Represents a sale or purchase.
    total_amount and tax_amount are always the sums over the items.
    """
    __tablename__ = "transactions"

    id: Optional[int] = Field(default=None, primary_key=True)
    customer_id: int = Field(foreign_key="customers.id", index=True)
    transaction_type: str = Field(index=True)  # "sale" or "purchase"
    transaction_date: datetime = Field(index=True)
    total_amount: Decimal = Field(default=Decimal("0"), max_digits=18, decimal_places=4)
    tax_amount: Decimal = Field(default=Decimal("0"), max_digits=18, decimal_places=4)
    status: str = Field(default=TransactionStatus.DRAFT.value, index=True)
    notes: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class TransactionItem(SQLModel, table=True):
    """
    One line of a transaction.
    unit_price and tax_rate are captured at the time of the transaction.
    """
    __tablename__ = "transaction_items"

    id: Optional[int] = Field(default=None, primary_key=True)
    transaction_id: int = Field(foreign_key="transactions.id", ondelete="CASCADE", index=True)
    product_id: int = Field(foreign_key="products.id", index=True)
    quantity: Decimal = Field(max_digits=18, decimal_places=4)
    unit_price: Decimal = Field(max_digits=18, decimal_places=4)
    tax_rate: Decimal = Field(max_digits=18, decimal_places=6)

    # Derived from quantity, unit_price and tax_rate
    subtotal: Decimal = Field(max_digits=18, decimal_places=4)
    tax_amount: Decimal = Field(max_digits=18, decimal_places=4)
    total_amount: Decimal = Field(max_digits=18, decimal_places=4)
