"""
Sequence counter model backing order and requisition numbers.
"""

from sqlalchemy import String, Integer
from sqlalchemy.orm import Mapped, mapped_column

from printshop.core.database import Base


ORDER_NUMBER_SEQUENCE = "order_number"


def requisition_sequence(client_id: str) -> str:
    """Counter name of a client's requisition sequence."""
    return f"client:{client_id}"


class SequenceCounter(Base):
    """
    Last value handed out for a named sequence.
    Rows are rebuilt from the orders table after a restore.
    """

    __tablename__ = "sequence_counters"

    name: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<SequenceCounter(name='{self.name}', value={self.value})>"
