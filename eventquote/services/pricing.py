"""Quotation pricing.

``compute_quotation`` turns a validated QuotationInput plus the current
global parameters and employee-type costs into the full financial
breakdown. It performs no I/O and keeps no state.
"""
import logging
from typing import Dict, List, Mapping, Tuple

from eventquote.core.enums import ChargedTo, CostCalculationType, PlatformName
from eventquote.core.errors import DomainError
from eventquote.schemas.parameters import GlobalParametersData
from eventquote.schemas.quotation import (
    QuotationInput,
    QuotationResult,
    PaymentFees,
    OperationalCosts,
    CustomCostLine,
)

logger = logging.getLogger(__name__)

NO_TICKETS_MESSAGE = "No valid ticket quantity or price defined"


def percent_of(base: float, percentage: float) -> float:
    return base * (percentage / 100)


def profitability(margin: float, revenue: float) -> float:
    """Margin as a percentage of revenue; a revenue-less figure is 0%."""
    return (margin / revenue) * 100 if revenue > 0 else 0.0


def aggregate_tickets(req: QuotationInput) -> Tuple[float, int, Dict[str, int]]:
    total_value = 0.0
    ticket_quantity = 0
    per_sector: Dict[str, int] = {}
    for sector in req.ticket_sectors:
        for variation in sector.variations:
            total_value += variation.price * variation.quantity
            ticket_quantity += variation.quantity
            per_sector[sector.name] = per_sector.get(sector.name, 0) + variation.quantity
    if total_value <= 0 or ticket_quantity <= 0:
        raise DomainError(NO_TICKETS_MESSAGE)
    return total_value, ticket_quantity, per_sector


def payment_fees(req: QuotationInput, total_value: float) -> PaymentFees:
    fees = PaymentFees()
    ours = 0.0
    for channel in ("credit", "debit", "cash"):
        method = getattr(req.payment_methods, channel)
        if method is None:
            continue
        fee = percent_of(total_value, method.percentage)
        setattr(fees, channel, fee)
        if method.charged_to == ChargedTo.US:
            ours += fee
    fees.total = ours
    return fees


def employee_costs(req: QuotationInput, costs_per_day: Mapping[int, float]) -> float:
    total = 0.0
    for allocation in req.employees:
        cost_per_day = costs_per_day.get(allocation.employee_type_id)
        if cost_per_day is None:
            logger.warning(
                f"Employee type {allocation.employee_type_id} not found; allocation contributes 0"
            )
            continue
        total += cost_per_day * allocation.quantity * allocation.days
    return total


def mobility_cost(req: QuotationInput, params: GlobalParametersData) -> float:
    fuel = req.mobility.kilometers * (params.fuel_cost_per_liter / params.km_per_liter)
    return fuel + req.mobility.number_of_tolls * req.mobility.tolls_cost


def custom_costs(
    req: QuotationInput,
    total_value: float,
    ticket_quantity: int,
    tickets_per_sector: Mapping[str, int],
) -> List[CustomCostLine]:
    lines = []
    for cost in req.custom_operational_costs:
        kind = cost.calculation_type
        if kind == CostCalculationType.PERCENTAGE:
            amount = percent_of(total_value, cost.amount)
        elif kind == CostCalculationType.PER_DAY:
            amount = cost.amount * cost.days
        elif kind == CostCalculationType.PER_DAY_PER_PERSON:
            amount = cost.amount * cost.days * cost.persons
        elif kind == CostCalculationType.PER_TICKET_SYSTEM:
            amount = cost.amount * ticket_quantity
        elif kind == CostCalculationType.PER_TICKET_SECTOR:
            amount = cost.amount * tickets_per_sector.get(cost.sector_name, 0)
        else:
            amount = cost.amount
        lines.append(CustomCostLine(name=cost.name, calculation_type=kind, amount=amount))
    return lines


def additional_services_revenue(req: QuotationInput, total_value: float) -> float:
    revenue = percent_of(total_value, req.additional_services_percentage)
    for item in req.additional_service_items:
        revenue += percent_of(total_value, item.amount) if item.is_percentage else item.amount
    return revenue


def compute_quotation(
    req: QuotationInput,
    params: GlobalParametersData,
    employee_type_costs: Mapping[int, float],
) -> QuotationResult:
    total_value, ticket_quantity, tickets_per_sector = aggregate_tickets(req)
    is_palco4 = req.platform.name == PlatformName.PALCO4

    if is_palco4:
        platform_fee = ticket_quantity * params.palco4_fee_per_ticket
    else:
        platform_fee = percent_of(total_value, req.platform.percentage)

    ticketing_fee = percent_of(total_value, req.service_charge)
    additional_services = additional_services_revenue(req, total_value)
    total_revenue = ticketing_fee + additional_services

    fees = payment_fees(req, total_value)
    line_cost = 0.0 if is_palco4 else percent_of(total_value, params.line_cost_percentage)

    credentials = req.credentials_cost if req.credentials_cost is not None else params.default_credentials_cost
    custom = custom_costs(req, total_value, ticket_quantity, tickets_per_sector)
    operational = OperationalCosts(
        credentials=credentials,
        ticketing=0.0 if is_palco4 else ticket_quantity * params.ticketing_cost_per_ticket,
        employees=employee_costs(req, employee_type_costs),
        mobility=mobility_cost(req, params),
        custom=custom,
    )
    operational.total = (
        operational.credentials
        + operational.ticketing
        + operational.employees
        + operational.mobility
        + sum(line.amount for line in custom)
    )

    total_costs = platform_fee + line_cost + operational.total + fees.total
    gross_margin = total_revenue - total_costs

    return QuotationResult(
        ticket_quantity=ticket_quantity,
        total_value=total_value,
        platform_fee=platform_fee,
        ticketing_fee=ticketing_fee,
        additional_services=additional_services,
        payment_fees=fees,
        palco4_cost=platform_fee if is_palco4 else 0.0,
        line_cost=line_cost,
        operational_costs=operational,
        total_revenue=total_revenue,
        total_costs=total_costs,
        gross_margin=gross_margin,
        gross_profitability=profitability(gross_margin, total_revenue),
    )
