import enum
from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:
    from .call_log import CallLog
    from .message import Message


class UserRole(str, enum.Enum):
    """Platform role, owned by the identity subsystem."""

    SUPPLIER = "supplier"
    RETAILER = "retailer"
    SALES = "sales"
    SALES_REP = "sales_rep"


SALES_ROLES = frozenset({UserRole.SALES.value, UserRole.SALES_REP.value})


class User(Base):
    """Platform user. Read-only from the communications core."""

    __tablename__ = "user"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    # Free text owned by the identity subsystem; may hold roles not listed in
    # UserRole, or known roles in a different case.
    role: Mapped[str] = mapped_column(String(20), nullable=False)

    # Relationships
    sent_messages: Mapped[list["Message"]] = relationship(
        back_populates="sender",
        foreign_keys="Message.sender_id",
        passive_deletes=True,
    )
    received_messages: Mapped[list["Message"]] = relationship(
        back_populates="recipient",
        foreign_keys="Message.recipient_id",
        passive_deletes=True,
    )
    placed_calls: Mapped[list["CallLog"]] = relationship(
        back_populates="caller",
        foreign_keys="CallLog.caller_id",
        passive_deletes=True,
    )
    received_calls: Mapped[list["CallLog"]] = relationship(
        back_populates="recipient",
        foreign_keys="CallLog.recipient_id",
        passive_deletes=True,
    )
