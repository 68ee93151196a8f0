"""
Existence checks for the entities a transaction points at.
"""

import logging
from typing import Iterable, Optional

from sqlmodel import Session

from errors import NotFoundError
from repositories import CustomerRepository, ProductRepository

logger = logging.getLogger(__name__)


class ReferenceResolver:
    """
    Confirms that referenced customers and products exist and are usable.
    Inactive products may stay on old transactions but not appear on new ones.
    """

    def __init__(self, customers: CustomerRepository, products: ProductRepository):
        self.customers = customers
        self.products = products

    def resolve_customer(self, customer_id: int, session: Optional[Session] = None) -> bool:
        return self.customers.exists(customer_id, session=session)

    def resolve_active_product(self, product_id: int, session: Optional[Session] = None) -> bool:
        return self.products.exists_active(product_id, session=session)

    def require_customer(self, customer_id: int, session: Optional[Session] = None) -> None:
        """Raise NotFoundError unless the customer exists."""
        if not self.resolve_customer(customer_id, session=session):
            logger.warning(f"Customer {customer_id} not found")
            raise NotFoundError("Customer not found")

    def require_active_products(self, product_ids: Iterable[int], session: Optional[Session] = None) -> None:
        """Raise NotFoundError unless every product exists and is active."""
        for product_id in dict.fromkeys(product_ids):
            if not self.resolve_active_product(product_id, session=session):
                logger.warning(f"Product {product_id} not found or inactive")
                raise NotFoundError("Product not found or inactive")
