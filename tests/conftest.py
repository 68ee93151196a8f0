"""Shared pytest fixtures for the transaction core tests."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Callable, Iterator, Sequence, Tuple

import pytest
from sqlalchemy.engine import Engine

from config import Settings
from db_engine import create_db_engine, init_db
from models import (
    CreateTransactionItemRequest,
    CreateTransactionRequest,
    Customer,
    Product,
)
from repositories import (
    CustomerRepository,
    InvoiceRepository,
    ProductRepository,
    TransactionRepository,
)
from services import TransactionService

DEFAULT_DATE = datetime(2024, 1, 15, 10, 0, 0)

# (product key, quantity, unit_price, tax_rate)
ItemSpec = Tuple[str, object, object, object]


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a throwaway SQLite file."""

    return Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'ledger.db'}",
        db_busy_timeout_ms=5000,
    )


@pytest.fixture
def engine(settings: Settings) -> Iterator[Engine]:
    """Engine with all tables created; disposed after the test."""

    engine = create_db_engine(settings)
    init_db(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def customers(engine: Engine) -> CustomerRepository:
    return CustomerRepository(engine)


@pytest.fixture
def products(engine: Engine) -> ProductRepository:
    return ProductRepository(engine)


@pytest.fixture
def invoices(engine: Engine) -> InvoiceRepository:
    return InvoiceRepository(engine)


@pytest.fixture
def transactions(engine: Engine) -> TransactionRepository:
    return TransactionRepository(engine)


@pytest.fixture
def service(engine: Engine) -> TransactionService:
    return TransactionService(engine)


@pytest.fixture
def customer(customers: CustomerRepository) -> Customer:
    return customers.add("Acme Trading", business_number="123-45-67890")


@pytest.fixture
def supplier(customers: CustomerRepository) -> Customer:
    return customers.add("Bolt Supplies", customer_type="supplier")


@pytest.fixture
def catalog(products: ProductRepository) -> dict[str, Product]:
    """Two active products and one retired product."""

    return {
        "widget": products.add("Widget", Decimal("10.00"), Decimal("0.1"), code="W-1"),
        "gadget": products.add("Gadget", Decimal("5.00"), Decimal("0"), code="G-1"),
        "retired": products.add("Old Gizmo", Decimal("7.50"), Decimal("0.1"), is_active=False),
    }


@pytest.fixture
def make_request(customer: Customer, catalog: dict[str, Product]) -> Callable[..., CreateTransactionRequest]:
    """Factory for creation requests against the seeded catalog."""

    def _make(
        items: Sequence[ItemSpec] = (("widget", 2, 10.0, 0.1), ("gadget", 1, 5.0, 0.0)),
        *,
        transaction_type: str = "sale",
        transaction_date: datetime = DEFAULT_DATE,
        customer_id: int | None = None,
        notes: str | None = None,
    ) -> CreateTransactionRequest:
        return CreateTransactionRequest(
            customer_id=customer.id if customer_id is None else customer_id,
            transaction_type=transaction_type,
            transaction_date=transaction_date,
            items=[
                CreateTransactionItemRequest(
                    product_id=catalog[key].id,
                    quantity=quantity,
                    unit_price=unit_price,
                    tax_rate=tax_rate,
                )
                for key, quantity, unit_price, tax_rate in items
            ],
            notes=notes,
        )

    return _make
