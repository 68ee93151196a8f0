"""
Product Repository - read access to products for the transaction core.
"""

from decimal import Decimal
from typing import Optional
from sqlmodel import Session, select

from models import Product
from repositories.base import BaseRepository


class ProductRepository(BaseRepository):
    """Repository for Product lookups."""

    def add(
        self,
        name: str,
        unit_price: Decimal,
        tax_rate: Decimal = Decimal("0"),
        is_active: bool = True,
        code: Optional[str] = None,
        unit: str = "unit",
        session: Optional[Session] = None
    ) -> Product:
        """
        Add a new product to the database.

        Args:
            name: Product name
            unit_price: Current list price
            tax_rate: Default tax rate (0.1 for 10%)
            is_active: Whether the product may appear on new transactions
            code: Optional product code
            unit: Unit of measure
            session: Optional existing session for transaction reuse

        Returns:
            Created Product object
        """
        def _create_product(sess: Session) -> Product:
            product = Product(
                name=name,
                code=code,
                unit_price=unit_price,
                unit=unit,
                tax_rate=tax_rate,
                is_active=is_active
            )
            sess.add(product)
            sess.commit()
            sess.refresh(product)
            return product

        return self._run(_create_product, session)

    def exists_active(self, product_id: int, session: Optional[Session] = None) -> bool:
        """Check whether a product exists and is active."""
        def _exists_active(sess: Session) -> bool:
            statement = select(Product.id).where(
                Product.id == product_id,
                Product.is_active == True  # noqa: E712
            )
            return sess.exec(statement).first() is not None

        return self._run(_exists_active, session)

    def get(self, product_id: int, session: Optional[Session] = None) -> Optional[Product]:
        """Retrieve a product by its ID, or None if not found."""
        def _get(sess: Session) -> Optional[Product]:
            return sess.get(Product, product_id)

        return self._run(_get, session)
