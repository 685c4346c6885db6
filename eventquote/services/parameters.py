import logging
from typing import Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from eventquote.core.config import settings
from eventquote.core.metrics import parameters_version, track_db_operation
from eventquote.models.global_parameters import GlobalParameters
from eventquote.schemas.parameters import GlobalParametersData

logger = logging.getLogger(__name__)


async def _load(db: AsyncSession):
    res = await db.execute(
        select(GlobalParameters).where(GlobalParameters.id == settings.GLOBAL_PARAMETERS_ID)
    )
    return res.scalars().first()


@track_db_operation("select", "global_parameters")
async def ensure_global_parameters(db: AsyncSession) -> GlobalParameters:
    """Return the singleton parameters row, seeding defaults when it is missing."""
    parameters = await _load(db)
    if parameters is not None:
        return parameters

    defaults = GlobalParametersData().model_dump()
    parameters = GlobalParameters(id=settings.GLOBAL_PARAMETERS_ID, version=1, **defaults)
    db.add(parameters)
    try:
        await db.commit()
    except IntegrityError:
        # another request seeded the row first
        await db.rollback()
        return await _load(db)
    await db.refresh(parameters)
    logger.info("Seeded default global parameters")
    return parameters


@track_db_operation("update", "global_parameters")
async def replace_global_parameters(db: AsyncSession, data: GlobalParametersData) -> GlobalParameters:
    """Whole-record replacement; the version advances on every call."""
    parameters = await ensure_global_parameters(db)
    for field, value in data.model_dump().items():
        setattr(parameters, field, value)
    parameters.version = (parameters.version or 0) + 1
    db.add(parameters)
    return parameters


class ParametersProvider:
    """Reads the current global parameters and their version for one request."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def current(self) -> Tuple[GlobalParametersData, int]:
        row = await ensure_global_parameters(self.db)
        parameters_version.set(row.version)
        return GlobalParametersData.model_validate(row), row.version
