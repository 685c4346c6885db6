from sqlalchemy import Column, String, Float, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from eventquote.models.base import BaseModel


class EmployeeType(BaseModel):
    __tablename__ = "employee_types"

    name = Column(String(120), nullable=False)
    is_operator = Column(Boolean, nullable=False, default=True)
    cost_per_day = Column(Float, nullable=False)
    created_by = Column(ForeignKey("users.id"), nullable=False)

    creator = relationship("User", backref="employee_types")
