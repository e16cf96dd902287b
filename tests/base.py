import unittest
from datetime import datetime
from typing import Dict, Optional

from httpx import ASGITransport, AsyncClient

from finance_api import models  # noqa: F401
from finance_api.core.database import AsyncSessionLocal, Base, engine
from finance_api.main import app


class ApiTestCase(unittest.IsolatedAsyncioTestCase):
    """Fresh schema and HTTP client per test."""

    async def asyncSetUp(self) -> None:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
        self.client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")

    async def asyncTearDown(self) -> None:
        await self.client.aclose()
        await engine.dispose()

    def session(self):
        return AsyncSessionLocal()

    async def register(
        self,
        email: str = "ada@example.com",
        password: str = "secret123",
        full_name: str = "Ada Lovelace",
    ) -> Dict[str, str]:
        response = await self.client.post(
            "/api/auth/register",
            json={"email": email, "password": password, "full_name": full_name},
        )
        self.assertEqual(response.status_code, 201, response.text)
        # Authenticate with the header only; tests opt into the cookie explicitly
        self.client.cookies.clear()
        return {"Authorization": f"Bearer {response.json()['data']['token']}"}

    async def create_transaction(self, headers: Dict[str, str], **overrides) -> dict:
        body = {
            "name": "Savory Bites Bistro",
            "amount": -50.0,
            "category": "Dining Out",
            "date": datetime.utcnow().isoformat(),
        }
        body.update(overrides)
        response = await self.client.post("/api/transactions", json=body, headers=headers)
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()["data"]["transaction"]

    async def balance(self, headers: Dict[str, str]) -> float:
        response = await self.client.get("/api/overview/balance", headers=headers)
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()["data"]["current_balance"]

    def assertError(self, response, status_code: int, code: Optional[str] = None) -> None:
        self.assertEqual(response.status_code, status_code, response.text)
        body = response.json()
        self.assertFalse(body["success"])
        if code is not None:
            self.assertEqual(body["code"], code)
