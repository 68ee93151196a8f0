"""
Request and read-model types for the transaction core.
These are plain dataclasses; only the table models in this package are persisted.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple, Union

from models.customer import Customer
from models.product import Product
from models.transaction import Transaction, TransactionItem

# Monetary input accepted from callers; converted to Decimal by the validation layer
Amount = Union[Decimal, int, float, str]

# Fixed column order used when building partial updates
UPDATABLE_FIELDS: Tuple[str, ...] = ("customer_id", "transaction_date", "status", "notes")


@dataclass(frozen=True)
class CreateTransactionItemRequest:
    product_id: int
    quantity: Amount
    unit_price: Amount
    tax_rate: Amount


@dataclass(frozen=True)
class CreateTransactionRequest:
    """User intent for recording a new sale or purchase."""
    customer_id: int
    transaction_type: str
    transaction_date: datetime
    items: List[CreateTransactionItemRequest] = field(default_factory=list)
    notes: Optional[str] = None


@dataclass(frozen=True)
class UpdateTransactionRequest:
    """
    Partial update of a transaction's scalar fields.
    A field left as None is not touched.
    """
    customer_id: Optional[int] = None
    transaction_date: Optional[datetime] = None
    status: Optional[str] = None
    notes: Optional[str] = None

    def assignments(self) -> List[Tuple[str, Any]]:
        """
        Translate the supplied fields into an ordered list of column assignments.

        Returns:
            List of (column, value) pairs in UPDATABLE_FIELDS order
        """
        return [
            (name, getattr(self, name))
            for name in UPDATABLE_FIELDS
            if getattr(self, name) is not None
        ]

    @property
    def is_empty(self) -> bool:
        return not self.assignments()


@dataclass(frozen=True)
class TransactionFilter:
    """Filter and pagination for listing transactions."""
    transaction_type: Optional[str] = None
    customer_id: Optional[int] = None
    limit: Optional[int] = None
    offset: Optional[int] = None


@dataclass(frozen=True)
class LineAmounts:
    """Derived monetary values of a single line item."""
    subtotal: Decimal
    tax_amount: Decimal
    total_amount: Decimal


@dataclass
class TransactionItemWithProduct:
    item: TransactionItem
    product: Product

    def to_dict(self) -> Dict[str, Any]:
        return {
            'item': self.item.model_dump(),
            'product': self.product.model_dump(),
        }


@dataclass
class TransactionWithItems:
    """
    A transaction assembled on read with its items, their products and the customer.
    Not persisted.
    """
    transaction: Transaction
    items: List[TransactionItemWithProduct]
    customer: Customer

    @property
    def id(self) -> Optional[int]:
        return self.transaction.id

    @property
    def status(self) -> str:
        return self.transaction.status

    def to_dict(self) -> Dict[str, Any]:
        return {
            'transaction': self.transaction.model_dump(),
            'items': [item.to_dict() for item in self.items],
            'customer': self.customer.model_dump(),
        }


@dataclass
class TransactionSummary:
    """Count and amount rollup over non-cancelled transactions."""
    count: int = 0
    total_amount: Decimal = Decimal("0")
    tax_amount: Decimal = Decimal("0")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'count': self.count,
            'total_amount': self.total_amount,
            'tax_amount': self.tax_amount,
        }
