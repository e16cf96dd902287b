import unittest
from datetime import datetime
from unittest.mock import patch

from tests.base import ApiTestCase

NOW = datetime(2024, 5, 10, 9, 0)
THEMES = ["#277C78", "#F2CDAC", "#82C9D7", "#626070", "#C94736"]


class OverviewTests(ApiTestCase):
    async def asyncSetUp(self) -> None:
        await super().asyncSetUp()
        self.now = patch("finance_api.utils.periods.utcnow", return_value=NOW)
        self.now.start()
        self.addCleanup(self.now.stop)
        self.headers = await self.register()

    async def test_overview_aggregates(self) -> None:
        await self.create_transaction(self.headers, name="Salary", amount=3000.0, category="General", date="2024-05-01T08:00:00")
        for day in range(2, 8):
            await self.create_transaction(self.headers, amount=-10.0, date=f"2024-05-0{day}T08:00:00")
        await self.create_transaction(self.headers, amount=-999.0, date="2024-05-03T08:00:00", is_template=True)
        await self.create_transaction(self.headers, amount=-40.0, date="2024-04-20T08:00:00")

        for i, theme in enumerate(THEMES):
            response = await self.client.post(
                "/api/pots", json={"name": f"Pot {i}", "target": 100, "theme": theme}, headers=self.headers
            )
            pot_id = response.json()["data"]["pot"]["id"]
            await self.client.post(f"/api/pots/{pot_id}/deposit", json={"amount": 10}, headers=self.headers)

        await self.client.post(
            "/api/budgets", json={"category": "Dining Out", "maximum": 100, "theme": THEMES[0]}, headers=self.headers
        )
        await self.client.post(
            "/api/recurring-bills",
            json={"name": "Spark Electric", "amount": 80, "due_day": 12, "category": "Bills"},
            headers=self.headers,
        )

        response = await self.client.get("/api/overview", headers=self.headers)

        self.assertEqual(response.status_code, 200, response.text)
        data = response.json()["data"]
        # 3000 - 60 this month, minus 50 moved into pots
        self.assertAlmostEqual(data["balance"]["current"], 2890.0)
        self.assertEqual(data["balance"]["income"], 3000.0)
        self.assertEqual(data["balance"]["expenses"], 100.0)
        self.assertEqual(data["pots"]["total_saved"], 50.0)
        self.assertEqual(len(data["pots"]["items"]), 4)
        self.assertEqual(data["budgets"]["items"][0]["spent"], 60.0)
        self.assertEqual(len(data["transactions"]["recent"]), 5)
        self.assertEqual(data["recurring_bills"]["due_soon"], {"count": 1, "amount": 80.0})

    async def test_balance_endpoint(self) -> None:
        await self.create_transaction(self.headers, name="Salary", amount=500.0, category="General", date="2024-05-01T08:00:00")
        await self.create_transaction(self.headers, amount=-120.0, date="2024-05-02T08:00:00")

        response = await self.client.get("/api/overview/balance", headers=self.headers)

        self.assertEqual(
            response.json()["data"],
            {"current_balance": 380.0, "income": 500.0, "expenses": 120.0},
        )

    async def test_requires_authentication(self) -> None:
        self.assertError(await self.client.get("/api/overview"), 401, "UNAUTHORIZED")


class AppEndpointTests(ApiTestCase):
    async def test_root(self) -> None:
        response = await self.client.get("/")

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["success"])

    async def test_health_pings_database(self) -> None:
        response = await self.client.get("/health")

        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["data"]["database"], "connected")

    async def test_unknown_route_uses_error_envelope(self) -> None:
        response = await self.client.get("/api/nope")

        self.assertError(response, 404, "NOT_FOUND")


if __name__ == "__main__":
    unittest.main()
