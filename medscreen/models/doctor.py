"""Doctor accounts."""

from enum import Enum

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from medscreen.db.base import Base, TimestampMixin


class DoctorRole(str, Enum):
    """Application role of a doctor account."""

    ADMIN = "ADMIN"
    USER = "USER"


class Doctor(Base, TimestampMixin):
    """Doctor who owns patients, caregivers and questionnaires.

    ADMIN doctors can author questionnaires and see every doctor's records.
    """

    __tablename__ = "doctors"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    role: Mapped[DoctorRole] = mapped_column(
        String(20),
        default=DoctorRole.USER,
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )

    @property
    def is_admin(self) -> bool:
        return self.role == DoctorRole.ADMIN

    def __repr__(self) -> str:
        return f"<Doctor {self.email} ({self.role})>"
