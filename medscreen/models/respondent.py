"""Self-registered respondent accounts for the public portal."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from medscreen.db.base import Base, TimestampMixin


class Respondent(Base, TimestampMixin):
    """Account of a patient's household on the respondent portal.

    One account covers the patient and, optionally, their caregiver; the
    submission's fill_as says which of them answered.
    """

    __tablename__ = "respondents"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    name: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    patient_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    patient_age: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
    )
    patient_gender: Mapped[str | None] = mapped_column(
        String(20),
        nullable=True,
    )
    caregiver_name: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    caregiver_relation: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Respondent {self.email}>"
