from sqlalchemy.future import select

from eventquote.core.metrics import registry
from eventquote.models.audit import Audit


def calc_body(**overrides):
    body = {
        "eventType": "A",
        "platform": {"name": "TICKET_PLUS", "percentage": 5},
        "serviceCharge": 10,
        "paymentMethods": {"credit": {"percentage": 3.67, "chargedTo": "US"}},
        "ticketSectors": [
            {"name": "General", "variations": [{"name": "Entrada", "price": 1000, "quantity": 100}]}
        ],
    }
    body.update(overrides)
    return body


def cache_hits():
    return registry.get_sample_value("cache_hits_total", {"cache": "quotation"}) or 0


async def create_quotation(client, headers, name="Summer Fest", **extra):
    """Calculate a breakdown for ``calc_body()`` and save it as a quotation."""
    body = calc_body()
    calc = await client.post("/quotations/calculate", json=body, headers=headers)
    assert calc.status_code == 200, calc.text
    payload = {
        **calc.json(),
        "name": name,
        "eventType": body["eventType"],
        "platformName": body["platform"]["name"],
        "ticketSectors": body["ticketSectors"],
        **extra,
    }
    response = await client.post("/quotations/", json=payload, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


async def audit_actions(db_session):
    res = await db_session.execute(select(Audit).order_by(Audit.id))
    return [a.action for a in res.scalars().all()]
