from typing import List, Optional
from datetime import datetime
from pydantic import Field

from eventquote.schemas.base import CamelModel
from eventquote.schemas.quotation import QuotationResult, TicketSectorIn, AdditionalServiceItemIn
from eventquote.core.enums import EventType, PlatformName, QuotationStatus, PaymentStatus


class QuotationCreate(QuotationResult):
    name: str = Field(..., min_length=1, max_length=200)
    event_type: EventType
    platform_name: Optional[PlatformName] = None
    ticket_sectors: List[TicketSectorIn] = Field(..., min_length=1)
    additional_service_items: List[AdditionalServiceItemIn] = Field(default_factory=list)
    estimated_payment_date: Optional[datetime] = None
    status: QuotationStatus = QuotationStatus.REVIEW
    payment_status: PaymentStatus = PaymentStatus.PENDING


class TicketVariationOut(CamelModel):
    id: int
    name: str
    price: float
    quantity: int


class TicketSectorOut(CamelModel):
    id: int
    name: str
    variations: List[TicketVariationOut] = Field(default_factory=list)


class AdditionalServiceItemOut(CamelModel):
    id: int
    name: str
    amount: float
    is_percentage: bool


class QuotationOut(QuotationResult):
    id: int
    name: str
    event_type: EventType
    platform_name: Optional[PlatformName] = None
    status: QuotationStatus
    payment_status: PaymentStatus
    estimated_payment_date: Optional[datetime] = None
    created_by: int
    created_at: datetime
    updated_at: Optional[datetime] = None
    ticket_sectors: List[TicketSectorOut] = Field(default_factory=list)
    additional_service_items: List[AdditionalServiceItemOut] = Field(default_factory=list)


class StatusUpdate(CamelModel):
    status: QuotationStatus


class PaymentStatusUpdate(CamelModel):
    payment_status: PaymentStatus
