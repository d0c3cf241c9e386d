"""Doctor scoping rules shared by the services.

Records belong to the doctor who created them. ADMIN doctors see and act
on every doctor's records; USER doctors only on their own.
"""

from typing import TypeVar

from sqlalchemy import Select

from medscreen.models.doctor import Doctor


class NotFoundError(Exception):
    """Raised when a record does not exist or is not visible to the caller."""
    pass


class AccessDeniedError(Exception):
    """Raised when the caller's role does not allow the action."""
    pass


T = TypeVar("T")


def can_see(doctor: Doctor, owner_id: str | None) -> bool:
    """Check whether a doctor may see a record owned by owner_id."""
    return doctor.is_admin or owner_id == doctor.id


def scoped(query: Select, doctor: Doctor, owner_column) -> Select:
    """Restrict a query to the doctor's own records unless they are ADMIN."""
    if doctor.is_admin:
        return query
    return query.where(owner_column == doctor.id)


def require_admin(doctor: Doctor, action: str) -> None:
    """Raise AccessDeniedError unless the doctor is ADMIN."""
    if not doctor.is_admin:
        raise AccessDeniedError(f"Only admin doctors can {action}")


def ensure_found(record: T | None, kind: str) -> T:
    """Return record or raise NotFoundError naming its kind."""
    if record is None:
        raise NotFoundError(f"{kind} not found")
    return record
