"""
Product model - an item that can appear on a transaction line.
"""

from decimal import Decimal
from typing import Optional
from datetime import datetime
from sqlmodel import SQLModel, Field


class Product(SQLModel, table=True):
    """Represents a product or service in the catalogue."""
    __tablename__ = "products"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    code: Optional[str] = Field(default=None, index=True)
    description: Optional[str] = Field(default=None)
    unit_price: Decimal = Field(default=Decimal("0"), max_digits=18, decimal_places=4)
    unit: str = Field(default="unit")  # "unit", "kg", "box", ...
    tax_rate: Decimal = Field(default=Decimal("0"), max_digits=18, decimal_places=6)  # 0.1 for 10%
    category: Optional[str] = Field(default=None)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
