import pytest

from eventquote.core.enums import CostCalculationType
from eventquote.core.errors import DomainError
from eventquote.schemas.parameters import GlobalParametersData
from eventquote.schemas.quotation import QuotationInput
from eventquote.services.pricing import compute_quotation, profitability, NO_TICKETS_MESSAGE


def make_input(**overrides) -> QuotationInput:
    data = {
        "eventType": "A",
        "platform": {"name": "TICKET_PLUS", "percentage": 5},
        "serviceCharge": 10,
        "ticketSectors": [
            {"name": "General", "variations": [{"name": "Entrada", "price": 1000, "quantity": 100}]}
        ],
    }
    data.update(overrides)
    return QuotationInput.model_validate(data)


@pytest.fixture
def params():
    return GlobalParametersData()


class TestPalco4:

    def test_end_to_end_example(self, params):
        req = make_input(platform={"name": "PALCO4"}, serviceCharge=3)
        result = compute_quotation(req, params, {})

        assert result.total_value == 100000
        assert result.ticket_quantity == 100
        assert result.platform_fee == 18000
        assert result.palco4_cost == 18000
        assert result.ticketing_fee == 3000
        assert result.total_revenue == 3000
        assert result.line_cost == 0
        assert result.operational_costs.ticketing == 0
        assert result.total_costs == 18000
        assert result.gross_margin == -15000
        assert result.gross_profitability == pytest.approx(-500.0)

    def test_percentage_ignored_under_palco4(self, params):
        req = make_input(platform={"name": "PALCO4", "percentage": 50}, serviceCharge=3)
        assert compute_quotation(req, params, {}).platform_fee == 18000


class TestTicketPlus:

    def test_full_breakdown(self, params):
        req = make_input(
            additionalServicesPercentage=2,
            paymentMethods={
                "credit": {"percentage": 3.67, "chargedTo": "US"},
                "debit": {"percentage": 0.8, "chargedTo": "CONSUMER"},
            },
        )
        result = compute_quotation(req, params, {})

        assert result.total_value == 100000
        assert result.platform_fee == pytest.approx(5000)
        assert result.palco4_cost == 0
        assert result.ticketing_fee == pytest.approx(10000)
        assert result.additional_services == pytest.approx(2000)
        assert result.total_revenue == pytest.approx(12000)
        assert result.line_cost == pytest.approx(410)
        assert result.operational_costs.ticketing == pytest.approx(500)
        assert result.payment_fees.credit == pytest.approx(3670)
        assert result.payment_fees.debit == pytest.approx(800)
        assert result.payment_fees.cash == 0
        # only fees charged to us are a cost
        assert result.payment_fees.total == pytest.approx(3670)
        assert result.total_costs == pytest.approx(5000 + 410 + 500 + 3670)
        assert result.gross_margin == pytest.approx(12000 - 9580)
        assert result.gross_profitability == pytest.approx(2420 / 12000 * 100)

    def test_sectors_are_aggregated(self, params):
        req = make_input(ticketSectors=[
            {"name": "VIP", "variations": [
                {"name": "Early", "price": 5000, "quantity": 10},
                {"name": "Late", "price": 6000, "quantity": 5},
            ]},
            {"name": "General", "variations": [{"name": "Entrada", "price": 1000, "quantity": 50}]},
        ])
        result = compute_quotation(req, params, {})
        assert result.total_value == 50000 + 30000 + 50000
        assert result.ticket_quantity == 65

    def test_zero_revenue_gives_zero_profitability(self, params):
        req = make_input(serviceCharge=0)
        result = compute_quotation(req, params, {})
        assert result.total_revenue == 0
        assert result.gross_profitability == 0


class TestNoTickets:

    @pytest.mark.parametrize("variation", [
        {"name": "Free", "price": 0, "quantity": 100},
        {"name": "Empty", "price": 1000, "quantity": 0},
    ])
    def test_zero_volume_is_a_domain_error(self, params, variation):
        req = make_input(ticketSectors=[{"name": "General", "variations": [variation]}])
        with pytest.raises(DomainError) as exc:
            compute_quotation(req, params, {})
        assert exc.value.message == NO_TICKETS_MESSAGE


class TestOperationalCosts:

    def test_employees_use_looked_up_costs(self, params):
        req = make_input(employees=[{"employeeTypeId": 1, "quantity": 2, "days": 3}])
        result = compute_quotation(req, params, {1: 1000.0})
        assert result.operational_costs.employees == 6000

    def test_unknown_employee_type_contributes_nothing(self, params, caplog):
        req = make_input(employees=[
            {"employeeTypeId": 1, "quantity": 1, "days": 1},
            {"employeeTypeId": 99, "quantity": 5, "days": 5},
        ])
        result = compute_quotation(req, params, {1: 500.0})
        assert result.operational_costs.employees == 500
        assert "99" in caplog.text

    def test_mobility(self, params):
        req = make_input(mobility={"kilometers": 100, "numberOfTolls": 2, "tollsCost": 500})
        result = compute_quotation(req, params, {})
        # 100 km at 300 per liter and 10 km per liter, plus two tolls
        assert result.operational_costs.mobility == pytest.approx(3000 + 1000)

    def test_credentials_default_and_override(self):
        params = GlobalParametersData(default_credentials_cost=750)
        assert compute_quotation(make_input(), params, {}).operational_costs.credentials == 750
        overridden = compute_quotation(make_input(credentialsCost=100), params, {})
        assert overridden.operational_costs.credentials == 100

    def test_custom_cost_rules(self, params):
        req = make_input(
            ticketSectors=[
                {"name": "VIP", "variations": [{"name": "V", "price": 2000, "quantity": 20}]},
                {"name": "General", "variations": [{"name": "G", "price": 1000, "quantity": 60}]},
            ],
            customOperationalCosts=[
                {"name": "Insurance", "amount": 1500},
                {"name": "Royalty", "amount": 2, "calculationType": "PERCENTAGE"},
                {"name": "Stage", "amount": 100, "calculationType": "PER_DAY", "days": 3},
                {"name": "Catering", "amount": 10, "calculationType": "PER_DAY_PER_PERSON", "days": 2, "persons": 4},
                {"name": "Wristbands", "amount": 3, "calculationType": "PER_TICKET_SYSTEM"},
                {"name": "VIP gifts", "amount": 50, "calculationType": "PER_TICKET_SECTOR", "sectorName": "VIP"},
            ],
        )
        result = compute_quotation(req, params, {})
        amounts = {line.name: line.amount for line in result.operational_costs.custom}

        assert amounts == {
            "Insurance": 1500,
            "Royalty": pytest.approx(2000),
            "Stage": 300,
            "Catering": 80,
            "Wristbands": 240,
            "VIP gifts": 1000,
        }
        kinds = [line.calculation_type for line in result.operational_costs.custom]
        assert kinds[1] == CostCalculationType.PERCENTAGE

        ticketing = 80 * params.ticketing_cost_per_ticket
        assert result.operational_costs.total == pytest.approx(
            ticketing + 1500 + 2000 + 300 + 80 + 240 + 1000
        )

    def test_additional_service_items_add_revenue(self, params):
        req = make_input(additionalServiceItems=[
            {"name": "Parking", "amount": 2500},
            {"name": "Merch", "amount": 1, "isPercentage": True},
        ])
        result = compute_quotation(req, params, {})
        assert result.additional_services == pytest.approx(2500 + 1000)
        assert result.total_revenue == pytest.approx(10000 + 3500)


class TestPaymentFees:

    @pytest.mark.parametrize("channel", ["credit", "debit", "cash"])
    @pytest.mark.parametrize("charged_to", ["US", "CLIENT", "CONSUMER", None])
    def test_only_fees_charged_to_us_are_costs(self, params, channel, charged_to):
        method = {"percentage": 2}
        if charged_to is not None:
            method["chargedTo"] = charged_to
        baseline = compute_quotation(make_input(), params, {})
        result = compute_quotation(make_input(paymentMethods={channel: method}), params, {})

        assert getattr(result.payment_fees, channel) == pytest.approx(2000)
        for other in {"credit", "debit", "cash"} - {channel}:
            assert getattr(result.payment_fees, other) == 0

        ours = 2000 if charged_to == "US" else 0
        assert result.payment_fees.total == pytest.approx(ours)
        assert result.total_costs == pytest.approx(baseline.total_costs + ours)
        assert result.total_revenue == pytest.approx(baseline.total_revenue)

    def test_channels_are_independent(self, params):
        req = make_input(paymentMethods={
            "credit": {"percentage": 3, "chargedTo": "CLIENT"},
            "debit": {"percentage": 1, "chargedTo": "US"},
            "cash": {"percentage": 0.5, "chargedTo": "US"},
        })
        fees = compute_quotation(req, params, {}).payment_fees
        assert (fees.credit, fees.debit, fees.cash) == (pytest.approx(3000), pytest.approx(1000), pytest.approx(500))
        assert fees.total == pytest.approx(1500)


def test_profitability_guard():
    assert profitability(50, 200) == 25
    assert profitability(-10, 0) == 0
