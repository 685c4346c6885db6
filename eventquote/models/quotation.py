from sqlalchemy import Column, String, Float, Integer, Boolean, DateTime, ForeignKey, Enum, JSON
from sqlalchemy.orm import relationship
from eventquote.models.base import BaseModel
from eventquote.core.enums import EventType, PlatformName, QuotationStatus, PaymentStatus


class Quotation(BaseModel):
    __tablename__ = "quotations"

    name = Column(String(200), nullable=False)
    event_type = Column(Enum(EventType), nullable=False)
    platform_name = Column(Enum(PlatformName), nullable=True)

    status = Column(Enum(QuotationStatus), nullable=False, default=QuotationStatus.REVIEW, index=True)
    payment_status = Column(Enum(PaymentStatus), nullable=False, default=PaymentStatus.PENDING, index=True)
    estimated_payment_date = Column(DateTime(timezone=True), nullable=True, index=True)

    created_by = Column(ForeignKey("users.id"), nullable=False, index=True)
    creator = relationship("User", backref="quotations")

    ticket_quantity = Column(Integer, nullable=False)
    total_value = Column(Float, nullable=False, default=0.0)
    platform_fee = Column(Float, nullable=False)
    ticketing_fee = Column(Float, nullable=False)
    additional_services = Column(Float, nullable=False)
    payment_fees = Column(JSON, nullable=False)
    palco4_cost = Column(Float, nullable=False)
    line_cost = Column(Float, nullable=False)
    operational_costs = Column(JSON, nullable=False)
    total_revenue = Column(Float, nullable=False)
    total_costs = Column(Float, nullable=False)
    gross_margin = Column(Float, nullable=False)
    gross_profitability = Column(Float, nullable=False)

    ticket_sectors = relationship(
        "TicketSector",
        back_populates="quotation",
        cascade="all, delete-orphan",
        order_by="TicketSector.id",
    )
    additional_service_items = relationship(
        "AdditionalServiceItem",
        back_populates="quotation",
        cascade="all, delete-orphan",
        order_by="AdditionalServiceItem.id",
    )


class TicketSector(BaseModel):
    __tablename__ = "ticket_sectors"

    quotation_id = Column(ForeignKey("quotations.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(120), nullable=False)

    quotation = relationship("Quotation", back_populates="ticket_sectors")
    variations = relationship(
        "TicketVariation",
        back_populates="sector",
        cascade="all, delete-orphan",
        order_by="TicketVariation.id",
    )


class TicketVariation(BaseModel):
    __tablename__ = "ticket_variations"

    sector_id = Column(ForeignKey("ticket_sectors.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(120), nullable=False)
    price = Column(Float, nullable=False)
    quantity = Column(Integer, nullable=False)

    sector = relationship("TicketSector", back_populates="variations")


class AdditionalServiceItem(BaseModel):
    __tablename__ = "additional_service_items"

    quotation_id = Column(ForeignKey("quotations.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(120), nullable=False)
    amount = Column(Float, nullable=False)
    is_percentage = Column(Boolean, nullable=False, default=False)

    quotation = relationship("Quotation", back_populates="additional_service_items")
