import unittest
from datetime import datetime, timedelta
from unittest.mock import patch

from tests.base import ApiTestCase

NOW = datetime(2024, 5, 15, 12, 0)


class TransactionBalanceTests(ApiTestCase):
    async def asyncSetUp(self) -> None:
        await super().asyncSetUp()
        self.now = patch("finance_api.utils.periods.utcnow", return_value=NOW)
        self.now.start()
        self.addCleanup(self.now.stop)
        self.headers = await self.register()

    async def test_expense_reduces_balance_and_delete_restores_it(self) -> None:
        await self.create_transaction(self.headers, amount=1000.0, name="Salary", date="2024-05-01T09:00:00")
        tx = await self.create_transaction(self.headers, amount=-50.0, date="2024-05-10T18:30:00")
        self.assertAlmostEqual(await self.balance(self.headers), 950.0)

        response = await self.client.delete(f"/api/transactions/{tx['id']}", headers=self.headers)

        self.assertEqual(response.status_code, 200, response.text)
        self.assertAlmostEqual(await self.balance(self.headers), 1000.0)

    async def test_templates_never_touch_balance(self) -> None:
        tx = await self.create_transaction(
            self.headers, amount=-80.0, date="2024-05-10T00:00:00", is_template=True
        )
        self.assertEqual(await self.balance(self.headers), 0.0)

        await self.client.patch(f"/api/transactions/{tx['id']}", json={"amount": -120.0}, headers=self.headers)
        self.assertEqual(await self.balance(self.headers), 0.0)

        await self.client.delete(f"/api/transactions/{tx['id']}", headers=self.headers)
        self.assertEqual(await self.balance(self.headers), 0.0)

    async def test_other_months_do_not_touch_balance(self) -> None:
        await self.create_transaction(self.headers, amount=-50.0, date="2024-04-30T23:00:00")
        await self.create_transaction(self.headers, amount=-50.0, date="2024-06-01T00:00:00")

        self.assertEqual(await self.balance(self.headers), 0.0)

    async def test_update_applies_difference(self) -> None:
        tx = await self.create_transaction(self.headers, amount=-50.0, date="2024-05-10T00:00:00")

        response = await self.client.put(
            f"/api/transactions/{tx['id']}", json={"amount": -80.0}, headers=self.headers
        )

        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["data"]["transaction"]["amount"], -80.0)
        self.assertAlmostEqual(await self.balance(self.headers), -80.0)

    async def test_moving_into_and_out_of_current_month(self) -> None:
        tx = await self.create_transaction(self.headers, amount=-50.0, date="2024-04-10T00:00:00")
        self.assertEqual(await self.balance(self.headers), 0.0)

        await self.client.patch(
            f"/api/transactions/{tx['id']}", json={"date": "2024-05-02T00:00:00"}, headers=self.headers
        )
        self.assertAlmostEqual(await self.balance(self.headers), -50.0)

        await self.client.patch(
            f"/api/transactions/{tx['id']}", json={"date": "2024-03-02T00:00:00"}, headers=self.headers
        )
        self.assertAlmostEqual(await self.balance(self.headers), 0.0)

    async def test_toggling_template_flag(self) -> None:
        tx = await self.create_transaction(self.headers, amount=-50.0, date="2024-05-10T00:00:00")

        await self.client.patch(f"/api/transactions/{tx['id']}", json={"is_template": True}, headers=self.headers)
        self.assertAlmostEqual(await self.balance(self.headers), 0.0)

        await self.client.patch(f"/api/transactions/{tx['id']}", json={"is_template": False}, headers=self.headers)
        self.assertAlmostEqual(await self.balance(self.headers), -50.0)


class TransactionListTests(ApiTestCase):
    async def asyncSetUp(self) -> None:
        await super().asyncSetUp()
        self.headers = await self.register()
        base = datetime.utcnow().replace(day=1, hour=12, minute=0, second=0, microsecond=0)
        for i, (name, amount, category) in enumerate([
            ("Savory Bites Bistro", -55.5, "Dining Out"),
            ("Urban Services Hub", -65.0, "General"),
            ("Emma Richardson", 75.5, "General"),
            ("Pixel Playground", -10.0, "Entertainment"),
            ("Serenity Spa & Wellness", -30.0, "Personal Care"),
        ]):
            await self.create_transaction(
                self.headers,
                name=name,
                amount=amount,
                category=category,
                date=(base + timedelta(hours=i)).isoformat(),
            )

    async def list(self, **params) -> dict:
        response = await self.client.get("/api/transactions", params=params, headers=self.headers)
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()["data"]

    async def test_pagination(self) -> None:
        page = await self.list(page=2, limit=2)

        self.assertEqual(page["total"], 5)
        self.assertEqual(page["pages"], 3)
        self.assertEqual(page["page"], 2)
        self.assertEqual(len(page["transactions"]), 2)

    async def test_default_sort_is_latest_first(self) -> None:
        names = [tx["name"] for tx in (await self.list())["transactions"]]

        self.assertEqual(names[0], "Serenity Spa &amp; Wellness")
        self.assertEqual(names[-1], "Savory Bites Bistro")

    async def test_sort_by_amount_and_name(self) -> None:
        highest = (await self.list(sort="Highest"))["transactions"]
        a_to_z = (await self.list(sort="A to Z"))["transactions"]

        self.assertEqual(highest[0]["amount"], 75.5)
        self.assertEqual(highest[-1]["amount"], -65.0)
        self.assertEqual(a_to_z[0]["name"], "Emma Richardson")

    async def test_search_is_case_insensitive_substring(self) -> None:
        page = await self.list(search="bistro")

        self.assertEqual([tx["name"] for tx in page["transactions"]], ["Savory Bites Bistro"])

    async def test_search_treats_wildcards_literally(self) -> None:
        self.assertEqual((await self.list(search="%"))["total"], 0)
        self.assertEqual((await self.list(search="_"))["total"], 0)

    async def test_category_filter(self) -> None:
        self.assertEqual((await self.list(category="General"))["total"], 2)
        self.assertEqual((await self.list(filter="General"))["total"], 2)
        self.assertEqual((await self.list(category="All Transactions"))["total"], 5)
        self.assertEqual((await self.list(category="Not A Category"))["total"], 5)

    async def test_invalid_query_params(self) -> None:
        response = await self.client.get("/api/transactions", params={"limit": 501}, headers=self.headers)
        self.assertError(response, 400, "VALIDATION_ERROR")

        response = await self.client.get("/api/transactions", params={"sort": "Random"}, headers=self.headers)
        self.assertError(response, 400, "VALIDATION_ERROR")


class TransactionValidationTests(ApiTestCase):
    async def asyncSetUp(self) -> None:
        await super().asyncSetUp()
        self.headers = await self.register()

    async def post(self, **body):
        payload = {"name": "Coffee", "amount": -3.5, "category": "Dining Out", "date": "2024-05-01T08:00:00"}
        payload.update(body)
        return await self.client.post("/api/transactions", json=payload, headers=self.headers)

    async def test_rejects_bad_fields(self) -> None:
        self.assertError(await self.post(amount=0), 400, "VALIDATION_ERROR")
        self.assertError(await self.post(amount=2e9), 400, "VALIDATION_ERROR")
        self.assertError(await self.post(category="Crypto"), 400, "VALIDATION_ERROR")
        self.assertError(await self.post(name=""), 400, "VALIDATION_ERROR")
        self.assertError(await self.post(date="not-a-date"), 400, "VALIDATION_ERROR")
        self.assertError(await self.post(user_id="someone-else"), 400, "VALIDATION_ERROR")

    async def test_name_is_sanitized(self) -> None:
        response = await self.post(name="  <b>Coffee</b> ")

        self.assertEqual(response.status_code, 201, response.text)
        self.assertEqual(response.json()["data"]["transaction"]["name"], "&lt;b&gt;Coffee&lt;/b&gt;")

    async def test_empty_update_rejected(self) -> None:
        tx = (await self.post()).json()["data"]["transaction"]

        response = await self.client.patch(f"/api/transactions/{tx['id']}", json={}, headers=self.headers)

        self.assertError(response, 400, "VALIDATION_ERROR")

    async def test_invalid_id(self) -> None:
        response = await self.client.get("/api/transactions/not-a-uuid", headers=self.headers)

        self.assertError(response, 400, "INVALID_ID")

    async def test_other_users_transaction_is_not_found(self) -> None:
        tx = (await self.post()).json()["data"]["transaction"]
        other = await self.register(email="bob@example.com")

        response = await self.client.get(f"/api/transactions/{tx['id']}", headers=other)
        self.assertError(response, 404, "NOT_FOUND")

        response = await self.client.delete(f"/api/transactions/{tx['id']}", headers=other)
        self.assertError(response, 404, "NOT_FOUND")


if __name__ == "__main__":
    unittest.main()
