"""
Customer model - a customer or supplier a transaction is recorded against.
"""

from typing import Optional
from datetime import datetime
from sqlmodel import SQLModel, Field


class Customer(SQLModel, table=True):
    """Represents a customer or supplier."""
    __tablename__ = "customers"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    business_number: Optional[str] = Field(default=None)
    address: Optional[str] = Field(default=None)
    phone: Optional[str] = Field(default=None)
    email: Optional[str] = Field(default=None)
    contact_person: Optional[str] = Field(default=None)
    customer_type: str = Field(default="customer")  # "customer" or "supplier"
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
