from sqlalchemy import Column, String, Float, Boolean
from eventquote.models.base import BaseModel


class GlobalCommission(BaseModel):
    __tablename__ = "global_commissions"

    name = Column(String(120), nullable=False)
    percentage = Column(Float, nullable=False)
    is_default = Column(Boolean, nullable=False, default=False)


class GlobalFixedExpense(BaseModel):
    __tablename__ = "global_fixed_expenses"

    name = Column(String(120), nullable=False)
    amount = Column(Float, nullable=False)
    is_default = Column(Boolean, nullable=False, default=False)
