from pydantic import Field
from typing import Optional
from datetime import datetime

from eventquote.schemas.base import CamelModel


class OperationalCostConceptIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None


class OperationalCostConceptOut(OperationalCostConceptIn):
    id: int
    created_by: int
    created_at: datetime
    updated_at: Optional[datetime] = None
