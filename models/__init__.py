"""
Database models for LedgerDesk.
All SQLModel table definitions are centralized here.
"""

from models.customer import Customer
from models.product import Product
from models.tax_invoice import TaxInvoice
from models.transaction import Transaction, TransactionItem, TransactionStatus, TransactionType
from models.schemas import (
    CreateTransactionItemRequest,
    CreateTransactionRequest,
    UpdateTransactionRequest,
    TransactionFilter,
    LineAmounts,
    TransactionItemWithProduct,
    TransactionWithItems,
    TransactionSummary,
)

__all__ = [
    # Tables
    'Customer',
    'Product',
    'TaxInvoice',
    'Transaction',
    'TransactionItem',
    # Enumerations
    'TransactionStatus',
    'TransactionType',
    # Requests and read models
    'CreateTransactionItemRequest',
    'CreateTransactionRequest',
    'UpdateTransactionRequest',
    'TransactionFilter',
    'LineAmounts',
    'TransactionItemWithProduct',
    'TransactionWithItems',
    'TransactionSummary',
]
