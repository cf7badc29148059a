"""Core SQLAlchemy models (2.x style) for the advocates directory.

Using PostgreSQL with jsonb specialties and pg_trgm indexes for substring search.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, BigInteger, CheckConstraint, Index, Integer, Text, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


# jsonb on PostgreSQL, plain JSON elsewhere (SQLite in tests)
SpecialtiesType = JSON().with_variant(JSONB(), "postgresql")


def _trigram_index(column: str) -> Index:
    """GIN trigram index; only emitted on PostgreSQL (requires pg_trgm)."""
    return Index(
        f"ix_advocates_{column}_trgm",
        column,
        postgresql_using="gin",
        postgresql_ops={column: "gin_trgm_ops"},
    ).ddl_if(dialect="postgresql")


class Advocate(Base):
    """Advocates table."""
    __tablename__ = "advocates"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(Text, nullable=False)
    last_name: Mapped[str] = mapped_column(Text, nullable=False)
    city: Mapped[str] = mapped_column(Text, nullable=False)
    degree: Mapped[str] = mapped_column(Text, nullable=False)
    specialties: Mapped[list[str]] = mapped_column(SpecialtiesType, nullable=False)
    years_of_experience: Mapped[int] = mapped_column(Integer, nullable=False)
    phone_number: Mapped[int] = mapped_column(BigInteger, nullable=False)
    created_at: Mapped[datetime | None] = mapped_column(server_default=func.current_timestamp())

    __table_args__ = (
        CheckConstraint("years_of_experience >= 0", name="ck_advocates_years_non_negative"),
        # Natural key used for conflict-free re-seeding
        UniqueConstraint("first_name", "last_name", "phone_number", name="uq_advocates_identity"),
        _trigram_index("first_name"),
        _trigram_index("last_name"),
        _trigram_index("city"),
        _trigram_index("degree"),
    )

    def __repr__(self) -> str:
        return f"<Advocate id={self.id} {self.first_name} {self.last_name}>"
