from typing import List, Optional
from pydantic import Field, model_validator

from eventquote.schemas.base import CamelModel
from eventquote.core.enums import (
    EventType,
    PlatformName,
    ChargedTo,
    CostCalculationType,
)


class Platform(CamelModel):
    name: PlatformName
    percentage: float = Field(0.0, ge=0, le=100)


class PaymentMethod(CamelModel):
    percentage: float = Field(..., ge=0, le=100)
    charged_to: ChargedTo = ChargedTo.CONSUMER


class PaymentMethods(CamelModel):
    credit: Optional[PaymentMethod] = None
    debit: Optional[PaymentMethod] = None
    cash: Optional[PaymentMethod] = None


class EmployeeAllocation(CamelModel):
    employee_type_id: int = Field(..., gt=0)
    quantity: int = Field(..., gt=0)
    days: int = Field(..., gt=0)


class Mobility(CamelModel):
    kilometers: float = Field(0.0, ge=0)
    number_of_tolls: int = Field(0, ge=0)
    tolls_cost: float = Field(0.0, ge=0)


class CustomOperationalCost(CamelModel):
    name: str = Field(..., min_length=1)
    amount: float = Field(..., ge=0)
    calculation_type: CostCalculationType = CostCalculationType.FIXED
    days: Optional[int] = Field(None, gt=0)
    persons: Optional[int] = Field(None, gt=0)
    sector_name: Optional[str] = None

    @model_validator(mode="after")
    def _check_calculation_arguments(self):
        kind = self.calculation_type
        problems = []
        if kind == CostCalculationType.PERCENTAGE and self.amount > 100:
            problems.append("percentage amount must be between 0 and 100")
        if kind in (CostCalculationType.PER_DAY, CostCalculationType.PER_DAY_PER_PERSON) and self.days is None:
            problems.append(f"days is required for {kind.value} costs")
        if kind == CostCalculationType.PER_DAY_PER_PERSON and self.persons is None:
            problems.append("persons is required for PER_DAY_PER_PERSON costs")
        if kind == CostCalculationType.PER_TICKET_SECTOR and not self.sector_name:
            problems.append("sectorName is required for PER_TICKET_SECTOR costs")
        if problems:
            raise ValueError("; ".join(problems))
        return self


class AdditionalServiceItemIn(CamelModel):
    name: str = Field(..., min_length=1)
    amount: float = Field(..., ge=0)
    is_percentage: bool = False

    @model_validator(mode="after")
    def _check_percentage(self):
        if self.is_percentage and self.amount > 100:
            raise ValueError("percentage amount must be between 0 and 100")
        return self


class TicketVariationIn(CamelModel):
    name: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    quantity: int = Field(..., ge=0)


class TicketSectorIn(CamelModel):
    name: str = Field(..., min_length=1)
    variations: List[TicketVariationIn] = Field(..., min_length=1)


class QuotationInput(CamelModel):
    event_type: EventType
    platform: Platform
    service_charge: float = Field(..., ge=0, le=100)
    additional_services_percentage: float = Field(0.0, ge=0, le=100)
    payment_methods: PaymentMethods = Field(default_factory=PaymentMethods)
    employees: List[EmployeeAllocation] = Field(default_factory=list)
    mobility: Mobility = Field(default_factory=Mobility)
    custom_operational_costs: List[CustomOperationalCost] = Field(default_factory=list)
    additional_service_items: List[AdditionalServiceItemIn] = Field(default_factory=list)
    credentials_cost: Optional[float] = Field(None, ge=0)
    ticket_sectors: List[TicketSectorIn] = Field(..., min_length=1)

    @model_validator(mode="after")
    def _check_sector_references(self):
        sector_names = {sector.name for sector in self.ticket_sectors}
        unknown = [
            cost.sector_name
            for cost in self.custom_operational_costs
            if cost.calculation_type == CostCalculationType.PER_TICKET_SECTOR
            and cost.sector_name not in sector_names
        ]
        if unknown:
            raise ValueError(f"customOperationalCosts reference unknown sectors: {', '.join(unknown)}")
        return self


class PaymentFees(CamelModel):
    credit: float = 0.0
    debit: float = 0.0
    cash: float = 0.0
    total: float = 0.0


class CustomCostLine(CamelModel):
    name: str
    calculation_type: CostCalculationType = CostCalculationType.FIXED
    amount: float


class OperationalCosts(CamelModel):
    credentials: float = 0.0
    ticketing: float = 0.0
    employees: float = 0.0
    mobility: float = 0.0
    custom: List[CustomCostLine] = Field(default_factory=list)
    total: float = 0.0


class QuotationResult(CamelModel):
    ticket_quantity: int
    total_value: float = 0.0
    platform_fee: float
    ticketing_fee: float
    additional_services: float
    payment_fees: PaymentFees
    palco4_cost: float
    line_cost: float
    operational_costs: OperationalCosts
    total_revenue: float
    total_costs: float
    gross_margin: float
    gross_profitability: float
