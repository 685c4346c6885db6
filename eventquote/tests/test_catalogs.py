import pytest

from eventquote.core.enums import AuditAction
from eventquote.tests.helpers import audit_actions


class TestCommissions:

    async def test_put_replaces_whole_catalog(self, test_client, admin_headers, quoter_headers):
        first = [
            {"name": "Agency", "percentage": 10, "isDefault": True},
            {"name": "Promoter", "percentage": 5},
        ]
        response = await test_client.put("/admin/global-settings/commissions", json=first, headers=admin_headers)
        assert response.status_code == 200
        assert [c["name"] for c in response.json()] == ["Agency", "Promoter"]
        assert response.json()[1]["isDefault"] is False

        second = [{"name": "Reseller", "percentage": 7.5, "isDefault": True}]
        await test_client.put("/admin/global-settings/commissions", json=second, headers=admin_headers)

        listed = await test_client.get("/admin/global-settings/commissions", headers=quoter_headers)
        assert listed.status_code == 200
        assert [(c["name"], c["percentage"]) for c in listed.json()] == [("Reseller", 7.5)]

    async def test_empty_list_clears_catalog(self, test_client, admin_headers):
        url = "/admin/global-settings/commissions"
        await test_client.put(url, json=[{"name": "Agency", "percentage": 10}], headers=admin_headers)
        assert (await test_client.put(url, json=[], headers=admin_headers)).json() == []
        assert (await test_client.get(url, headers=admin_headers)).json() == []

    async def test_quoter_cannot_replace(self, test_client, quoter_headers):
        response = await test_client.put(
            "/admin/global-settings/commissions",
            json=[{"name": "Mine", "percentage": 50}],
            headers=quoter_headers,
        )
        assert response.status_code == 403

    async def test_percentage_bounds(self, test_client, admin_headers):
        response = await test_client.put(
            "/admin/global-settings/commissions",
            json=[{"name": "Too much", "percentage": 150}],
            headers=admin_headers,
        )
        assert response.status_code == 422

    async def test_requires_authentication(self, test_client):
        assert (await test_client.get("/admin/global-settings/commissions")).status_code == 401


class TestFixedExpenses:

    async def test_put_replaces_and_audits(self, test_client, db_session, admin_user, admin_headers):
        url = "/admin/global-settings/fixed-expenses"
        await test_client.put(url, json=[{"name": "Rent", "amount": 2000, "isDefault": True}], headers=admin_headers)
        response = await test_client.put(
            url,
            json=[{"name": "Office", "amount": 1500, "isDefault": True}, {"name": "Legal", "amount": 300}],
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert [e["name"] for e in (await test_client.get(url, headers=admin_headers)).json()] == ["Office", "Legal"]
        assert (await audit_actions(db_session)).count(str(AuditAction.REPLACE_FIXED_EXPENSES)) == 2

    async def test_quoter_cannot_replace(self, test_client, quoter_headers):
        response = await test_client.put(
            "/admin/global-settings/fixed-expenses", json=[], headers=quoter_headers
        )
        assert response.status_code == 403

    async def test_dashboard_uses_default_expenses(self, test_client, admin_headers, quoter_headers):
        await test_client.put("/admin/parameters/", json={"monthlyFixedCosts": 3044}, headers=admin_headers)
        await test_client.put(
            "/admin/global-settings/fixed-expenses",
            json=[
                {"name": "Rent", "amount": 1000, "isDefault": True},
                {"name": "Staff", "amount": 500, "isDefault": True},
                {"name": "Occasional", "amount": 9999},
            ],
            headers=admin_headers,
        )

        response = await test_client.get("/dashboard/global-profitability", headers=quoter_headers)
        assert response.status_code == 200
        assert response.json()["monthlyFixedCosts"] == pytest.approx(1500)

        explicit = await test_client.get(
            "/dashboard/global-profitability", params={"monthlyFixedCosts": 10}, headers=quoter_headers
        )
        assert explicit.json()["monthlyFixedCosts"] == 10

    async def test_dashboard_falls_back_without_defaults(self, test_client, admin_headers, quoter_headers):
        await test_client.put("/admin/parameters/", json={"monthlyFixedCosts": 3044}, headers=admin_headers)
        await test_client.put(
            "/admin/global-settings/fixed-expenses",
            json=[{"name": "Occasional", "amount": 9999}],
            headers=admin_headers,
        )
        response = await test_client.get("/dashboard/global-profitability", headers=quoter_headers)
        assert response.json()["monthlyFixedCosts"] == 3044


class TestOperationalCostConcepts:

    url = "/custom-operational-costs/"

    async def test_create_and_list_are_owner_scoped(self, test_client, quoter_headers, other_quoter_headers):
        first = await test_client.post(self.url, json={"name": "Security"}, headers=quoter_headers)
        assert first.status_code == 200
        assert first.json()["description"] is None
        await test_client.post(
            self.url, json={"name": "Cleaning", "description": "After the show"}, headers=quoter_headers
        )
        await test_client.post(self.url, json={"name": "Not mine"}, headers=other_quoter_headers)

        mine = (await test_client.get(self.url, headers=quoter_headers)).json()
        assert [c["name"] for c in mine] == ["Cleaning", "Security"]
        theirs = (await test_client.get(self.url, headers=other_quoter_headers)).json()
        assert [c["name"] for c in theirs] == ["Not mine"]

    async def test_admin_sees_every_concept(self, test_client, quoter_headers, other_quoter_headers, admin_headers):
        await test_client.post(self.url, json={"name": "A"}, headers=quoter_headers)
        await test_client.post(self.url, json={"name": "B"}, headers=other_quoter_headers)
        assert len((await test_client.get(self.url, headers=admin_headers)).json()) == 2

    async def test_update_and_delete_by_owner(self, test_client, quoter_headers):
        created = (await test_client.post(self.url, json={"name": "Security"}, headers=quoter_headers)).json()
        item_url = f"{self.url}{created['id']}"

        updated = await test_client.put(
            item_url, json={"name": "Private security", "description": "Night shift"}, headers=quoter_headers
        )
        assert updated.status_code == 200
        assert updated.json()["name"] == "Private security"
        assert updated.json()["description"] == "Night shift"

        deleted = await test_client.delete(item_url, headers=quoter_headers)
        assert deleted.json() == {"success": True, "id": created["id"]}
        assert (await test_client.get(self.url, headers=quoter_headers)).json() == []

    async def test_other_user_cannot_touch(self, test_client, quoter_headers, other_quoter_headers, admin_headers):
        created = (await test_client.post(self.url, json={"name": "Security"}, headers=quoter_headers)).json()
        item_url = f"{self.url}{created['id']}"

        assert (await test_client.put(item_url, json={"name": "Hijack"}, headers=other_quoter_headers)).status_code == 403
        assert (await test_client.delete(item_url, headers=other_quoter_headers)).status_code == 403
        assert (await test_client.delete(item_url, headers=admin_headers)).status_code == 200

    async def test_missing_concept(self, test_client, quoter_headers):
        assert (await test_client.delete(f"{self.url}999", headers=quoter_headers)).status_code == 404

    async def test_name_required(self, test_client, quoter_headers):
        assert (await test_client.post(self.url, json={"name": ""}, headers=quoter_headers)).status_code == 422
