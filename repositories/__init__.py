"""
Repositories package for LedgerDesk.
Provides data access layer for all database operations.
"""

from repositories.base import BaseRepository
from repositories.customer_repository import CustomerRepository
from repositories.product_repository import ProductRepository
from repositories.invoice_repository import InvoiceRepository
from repositories.transaction_repository import TransactionRepository

__all__ = [
    'BaseRepository',
    'CustomerRepository',
    'ProductRepository',
    'InvoiceRepository',
    'TransactionRepository',
]
