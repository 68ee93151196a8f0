"""
Customer Repository - read access to customers for the transaction core.
"""

from typing import Optional
from sqlmodel import Session, select

from models import Customer
from repositories.base import BaseRepository


class CustomerRepository(BaseRepository):
    """Repository for Customer lookups."""

    def add(
        self,
        name: str,
        customer_type: str = "customer",
        business_number: Optional[str] = None,
        session: Optional[Session] = None
    ) -> Customer:
        """
        Add a new customer to the database.

        Args:
            name: Customer name
            customer_type: 'customer' or 'supplier'
            business_number: Optional business registration number
            session: Optional existing session for transaction reuse

        Returns:
            Created Customer object
        """
        def _create_customer(sess: Session) -> Customer:
            customer = Customer(
                name=name,
                customer_type=customer_type,
                business_number=business_number
            )
            sess.add(customer)
            sess.commit()
            sess.refresh(customer)
            return customer

        return self._run(_create_customer, session)

    def exists(self, customer_id: int, session: Optional[Session] = None) -> bool:
        """Check whether a customer with this id exists."""
        def _exists(sess: Session) -> bool:
            statement = select(Customer.id).where(Customer.id == customer_id)
            return sess.exec(statement).first() is not None

        return self._run(_exists, session)

    def get(self, customer_id: int, session: Optional[Session] = None) -> Optional[Customer]:
        """Retrieve a customer by its ID, or None if not found."""
        def _get(sess: Session) -> Optional[Customer]:
            return sess.get(Customer, customer_id)

        return self._run(_get, session)
