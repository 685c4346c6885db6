from pydantic import Field
from typing import Optional
from datetime import datetime

from eventquote.schemas.base import CamelModel


class CommissionIn(CamelModel):
    name: str = Field(..., min_length=1)
    percentage: float = Field(..., ge=0, le=100)
    is_default: bool = False


class CommissionOut(CommissionIn):
    id: int
    created_at: datetime
    updated_at: Optional[datetime] = None


class FixedExpenseIn(CamelModel):
    name: str = Field(..., min_length=1)
    amount: float = Field(..., ge=0)
    is_default: bool = False


class FixedExpenseOut(FixedExpenseIn):
    id: int
    created_at: datetime
    updated_at: Optional[datetime] = None
