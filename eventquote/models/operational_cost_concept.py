from sqlalchemy import Column, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from eventquote.models.base import BaseModel


class OperationalCostConcept(BaseModel):
    """A reusable custom operational cost name, private to the user who created it."""
    __tablename__ = "custom_operational_cost_concepts"

    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    created_by = Column(ForeignKey("users.id"), nullable=False, index=True)

    creator = relationship("User", backref="operational_cost_concepts")
