"""Shared helpers for API tests: fresh schema per test and token helpers."""

import unittest

from fastapi.testclient import TestClient

from plantshop.core.database import SessionLocal, create_tables, drop_tables
from plantshop.main import app
from plantshop.models import Category, Product
from plantshop.services.auth import register_user

ADMIN_EMAIL = "admin@plants.test"
ADMIN_PASSWORD = "admin-pw"


class ApiTestCase(unittest.TestCase):
    """Each test gets empty tables and a TestClient bound to the app."""

    def setUp(self) -> None:
        drop_tables()
        create_tables()
        self.client = TestClient(app)

    def tearDown(self) -> None:
        self.client.close()
        drop_tables()

    def register(self, email: str, password: str):
        return self.client.post("/api/register", json={"email": email, "password": password})

    def login(self, email: str, password: str):
        return self.client.post("/api/login", json={"email": email, "password": password})

    def user_token(self, email: str = "a@x.com", password: str = "pw") -> str:
        self.assertEqual(self.register(email, password).status_code, 201)
        resp = self.login(email, password)
        self.assertEqual(resp.status_code, 200)
        return resp.json()["token"]

    def admin_token(self) -> str:
        with SessionLocal() as db:
            register_user(db, ADMIN_EMAIL, ADMIN_PASSWORD, role="admin")
        resp = self.login(ADMIN_EMAIL, ADMIN_PASSWORD)
        self.assertEqual(resp.status_code, 200)
        return resp.json()["token"]

    @staticmethod
    def bearer(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    @staticmethod
    def product_count() -> int:
        with SessionLocal() as db:
            return db.query(Product).count()

    @staticmethod
    def category_count() -> int:
        with SessionLocal() as db:
            return db.query(Category).count()
