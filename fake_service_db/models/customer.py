"""Customer ORM — mapping of the externally owned customers table.

Invariants:
    - The service only reads this table; it never creates or migrates it in production
    - name is nullable here because the store does not promise otherwise
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from fake_service_db.db.base import Base


class CustomerRecord(Base):
    """A row of the customers table."""
    __tablename__ = "customers"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str | None] = mapped_column(Text, nullable=True)
