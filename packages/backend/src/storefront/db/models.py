"""SQLAlchemy ORM models — single source of truth for the database schema.

Learn: Declarative ORM mapping with SQLAlchemy 2.0 style (Mapped[] + mapped_column).
Alembic auto-generates migrations by comparing these models to the actual DB.

Categories are a native PostgreSQL TEXT[] column. Other dialects (SQLite in
tests) store the same list as JSON.
"""

from sqlalchemy import JSON, Integer, Numeric, String, Text
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class Product(Base):
    """A catalogue entry. The only persisted entity in the app."""

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # asdecimal=False: the API speaks floats, not Decimal
    price: Mapped[float] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", server_default="")
    categories: Mapped[list[str]] = mapped_column(
        JSON().with_variant(ARRAY(Text), "postgresql"),
        default=list,
    )

    def __repr__(self) -> str:
        return f"<Product id={self.id} name={self.name!r}>"
