"""
Travel API — SQLAlchemy Models
================================

What:  ORM models for the `destinations`, `hotels` and `contact_us` tables.
Why:   Typed, parameterized queries for hotels and contact messages, and a
       metadata object that tests use to create a throwaway schema.
Who:   Used by TravelService and by the test fixtures.

The production MySQL schema is provisioned outside this repository. These
models declare the columns the API touches; the destinations endpoint selects
every column the real table has, not just the ones listed here.
"""

from decimal import Decimal
from typing import Optional

from sqlalchemy import ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from travel_api.database import Base


class Destination(Base):
    """A travel location; parent of zero or more hotels."""

    __tablename__ = "destinations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    country: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Destination(id={self.id}, name='{self.name}')>"


class Hotel(Base):
    """A hotel located at one destination."""

    __tablename__ = "hotels"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    destination_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("destinations.id"),
        nullable=False,
        index=True,
    )
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    price_per_night: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)

    def __repr__(self) -> str:
        return f"<Hotel(id={self.id}, destination_id={self.destination_id})>"


class ContactMessage(Base):
    """
    A note submitted through the contact form.

    Write-only from the API's perspective. NOT NULL columns mean a submission
    with missing fields is rejected by the datastore, not by the route.
    """

    __tablename__ = "contact_us"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<ContactMessage(id={self.id}, email='{self.email}')>"
