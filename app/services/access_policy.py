"""Role-based rule for who may message or call whom."""

import enum
import logging

from sqlalchemy.orm import Session

from app.models import SALES_ROLES, User, UserRole

logger = logging.getLogger(__name__)

_TRADING_PAIR = frozenset({UserRole.SUPPLIER.value, UserRole.RETAILER.value})


def normalize_role(role: UserRole | str | None) -> str | None:
    """Lower-cased role value, or None when there is no usable role."""
    if isinstance(role, enum.Enum):
        role = role.value
    if not isinstance(role, str) or not role.strip():
        return None
    return role.strip().lower()


def is_permitted_pair(role_a: UserRole | str | None, role_b: UserRole | str | None) -> bool:
    """Sales talks to everyone; otherwise only supplier <-> retailer.

    Roles are compared case-insensitively. Unknown or missing roles are denied
    unless the other side is sales.
    """
    roles = {normalize_role(role_a), normalize_role(role_b)}
    if roles & SALES_ROLES:
        return True
    return roles == _TRADING_PAIR


class AccessPolicy:
    """Decides whether two users may communicate.

    Roles are read from the store on every call, so a role change applies to
    the very next request.
    """

    def __init__(self, db: Session):
        self.db = db

    def can_communicate(self, user_a_id: int, user_b_id: int) -> bool:
        """Return True if the pair may exchange messages and calls.

        Any lookup miss (unknown id, or both ids naming the same user) denies.
        """
        if user_a_id is None or user_b_id is None or user_a_id == user_b_id:
            return False

        roles = [
            role
            for (role,) in self.db.query(User.role)
            .filter(User.id.in_([user_a_id, user_b_id]))
            .all()
        ]
        if len(roles) != 2:
            return False

        permitted = is_permitted_pair(roles[0], roles[1])
        if not permitted:
            logger.debug(f"Roles {roles[0]!r} and {roles[1]!r} may not communicate")
        return permitted
