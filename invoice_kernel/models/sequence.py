"""
Module: invoice_kernel.models.sequence
Responsibility: Named counters backing party code allocation.
Architecture position: Kernel > Models.  May import from db/base.py only.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from invoice_kernel.db.base import Base


class SequenceCounter(Base):
    """
    Sequence counter table.

    Each row represents a named sequence with its current value.
    Row-level locking ensures monotonicity under concurrency.
    """

    __tablename__ = "sequence_counters"

    # Sequence name (e.g., "supplier", "client")
    name: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        unique=True,
    )

    current_value: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )
