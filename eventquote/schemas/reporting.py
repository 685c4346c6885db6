from typing import List, Optional
from datetime import datetime, date

from eventquote.schemas.base import CamelModel
from eventquote.core.enums import EventType, QuotationStatus, PaymentStatus, DateMode


class RecentQuotation(CamelModel):
    id: int
    name: str
    event_type: EventType
    status: QuotationStatus
    payment_status: PaymentStatus
    ticket_quantity: int
    gross_profitability: float
    created_by: int
    created_at: datetime


class QuotationStats(CamelModel):
    total_quotations: int
    approved_quotations: int
    total_revenue: float
    total_costs: float
    average_profitability: float
    recent_quotations: List[RecentQuotation]
    is_admin: bool


class ProfitabilityLine(CamelModel):
    id: int
    name: str
    event_type: EventType
    status: QuotationStatus
    payment_status: PaymentStatus
    total_revenue: float
    total_costs: float
    gross_margin: float
    gross_profitability: float
    created_at: datetime
    estimated_payment_date: Optional[datetime] = None


class GlobalProfitability(CamelModel):
    date_from: date
    date_to: date
    mode: DateMode
    total_revenue: float
    total_operational_costs: float
    monthly_fixed_costs: float
    total_fixed_costs: float
    total_costs: float
    profit: float
    profitability: float
    quotation_count: int
    timeframe_in_months: float
    quotations: List[ProfitabilityLine]
