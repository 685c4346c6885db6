from sqlalchemy import Column, Float, Integer, JSON
from eventquote.models.base import BaseModel


class GlobalParameters(BaseModel):
    """Singleton row holding pricing defaults. ``version`` increases on every replacement."""

    __tablename__ = "global_parameters"

    default_platform_fee = Column(Float, nullable=False, default=5.0)
    default_ticketing_fee = Column(Float, nullable=False, default=3.0)
    default_additional_services_fee = Column(Float, nullable=False, default=2.0)
    default_credit_card_fee = Column(Float, nullable=False, default=3.67)
    default_debit_card_fee = Column(Float, nullable=False, default=0.8)
    default_cash_fee = Column(Float, nullable=False, default=0.5)

    default_credentials_cost = Column(Float, nullable=False, default=0.0)
    default_supervisors_cost = Column(Float, nullable=False, default=0.0)
    default_operators_cost = Column(Float, nullable=False, default=0.0)
    default_mobility_cost = Column(Float, nullable=False, default=0.0)

    palco4_fee_per_ticket = Column(Float, nullable=False, default=180.0)
    line_cost_percentage = Column(Float, nullable=False, default=0.41)
    ticketing_cost_per_ticket = Column(Float, nullable=False, default=5.0)
    fuel_cost_per_liter = Column(Float, nullable=False, default=300.0)
    km_per_liter = Column(Float, nullable=False, default=10.0)
    monthly_fixed_costs = Column(Float, nullable=False, default=0.0)

    custom_operational_costs = Column(JSON, nullable=True)
    custom_additional_services = Column(JSON, nullable=True)

    version = Column(Integer, nullable=False, default=1)
