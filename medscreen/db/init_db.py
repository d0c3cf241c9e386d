"""Schema creation and bootstrap data for development databases.

Production schemas are managed by the alembic migrations.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from medscreen.core.config import settings
from medscreen.core.security import hash_password
from medscreen.db.base import Base
from medscreen.db.session import engine
from medscreen.models.doctor import Doctor, DoctorRole

logger = logging.getLogger(__name__)


async def create_tables() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"Created {len(Base.metadata.tables)} tables")


async def ensure_admin_doctor(session: AsyncSession) -> Doctor | None:
    """Create the bootstrap ADMIN doctor unless an ADMIN already exists.

    Without an ADMIN nobody can author questionnaires.

    Returns:
        The created doctor, or None if nothing was created
    """
    existing_admin = await session.scalar(
        select(Doctor.id).where(Doctor.role == DoctorRole.ADMIN).limit(1)
    )
    if existing_admin:
        return None

    admin = Doctor(
        email=settings.bootstrap_admin_email.lower(),
        name=settings.bootstrap_admin_name,
        hashed_password=hash_password(settings.bootstrap_admin_password),
        role=DoctorRole.ADMIN,
        is_active=True,
    )
    session.add(admin)
    await session.commit()
    await session.refresh(admin)

    logger.warning(f"Created bootstrap admin doctor {admin.email}; change its password")
    return admin


async def init_db(session: AsyncSession) -> None:
    """Create tables and the bootstrap admin."""
    await create_tables()
    await ensure_admin_doctor(session)
