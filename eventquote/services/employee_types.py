from typing import Dict, Iterable

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from eventquote.core.metrics import track_db_operation
from eventquote.models.employee_type import EmployeeType


class EmployeeTypeLookup:

    def __init__(self, db: AsyncSession):
        self.db = db

    @track_db_operation("select", "employee_types")
    async def costs_for(self, ids: Iterable[int]) -> Dict[int, float]:
        """Map each existing employee type id to its cost per day. Unknown ids are absent."""
        wanted = set(ids)
        if not wanted:
            return {}
        res = await self.db.execute(
            select(EmployeeType.id, EmployeeType.cost_per_day).where(EmployeeType.id.in_(wanted))
        )
        return {row.id: row.cost_per_day for row in res.all()}
