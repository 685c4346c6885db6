from pydantic import Field
from typing import Optional
from datetime import datetime

from eventquote.schemas.base import CamelModel


class EmployeeTypeCreate(CamelModel):
    name: str = Field(..., min_length=1)
    is_operator: bool = True
    cost_per_day: float = Field(..., ge=0)


class EmployeeTypeUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    is_operator: Optional[bool] = None
    cost_per_day: Optional[float] = Field(None, ge=0)


class EmployeeTypeOut(CamelModel):
    id: int
    name: str
    is_operator: bool
    cost_per_day: float
    created_by: int
    created_at: datetime
    updated_at: Optional[datetime] = None
