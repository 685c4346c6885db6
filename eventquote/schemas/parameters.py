from typing import Dict, Optional
from datetime import datetime
from pydantic import Field

from eventquote.schemas.base import CamelModel


class AdditionalServiceTemplate(CamelModel):
    amount: float = Field(..., ge=0)
    is_percentage: bool = False


class GlobalParametersData(CamelModel):
    """Pricing defaults handed to the calculator as a plain value."""

    default_platform_fee: float = Field(5.0, ge=0, le=100)
    default_ticketing_fee: float = Field(3.0, ge=0, le=100)
    default_additional_services_fee: float = Field(2.0, ge=0, le=100)
    default_credit_card_fee: float = Field(3.67, ge=0, le=100)
    default_debit_card_fee: float = Field(0.8, ge=0, le=100)
    default_cash_fee: float = Field(0.5, ge=0, le=100)

    default_credentials_cost: float = Field(0.0, ge=0)
    default_supervisors_cost: float = Field(0.0, ge=0)
    default_operators_cost: float = Field(0.0, ge=0)
    default_mobility_cost: float = Field(0.0, ge=0)

    palco4_fee_per_ticket: float = Field(180.0, ge=0)
    line_cost_percentage: float = Field(0.41, ge=0, le=100)
    ticketing_cost_per_ticket: float = Field(5.0, ge=0)
    fuel_cost_per_liter: float = Field(300.0, ge=0)
    km_per_liter: float = Field(10.0, gt=0)
    monthly_fixed_costs: float = Field(0.0, ge=0)

    custom_operational_costs: Optional[Dict[str, float]] = None
    custom_additional_services: Optional[Dict[str, AdditionalServiceTemplate]] = None


class GlobalParametersOut(GlobalParametersData):
    version: int
    updated_at: Optional[datetime] = None


class CacheInvalidation(CamelModel):
    success: bool
    keys_deleted: int = 0


class GlobalParametersUpdateOut(GlobalParametersOut):
    cache_invalidation: CacheInvalidation
