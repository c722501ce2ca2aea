# -*- coding: utf-8 -*-
"""Shared fixture for API tests: in-memory SQLite, test settings, mail patched out."""

from __future__ import annotations

import unittest
from typing import Optional
from unittest import mock

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from daily_diet.api.deps import get_db
from daily_diet.core.config import Settings
from daily_diet.db.model_registry import metadata
from daily_diet.main import create_app
from daily_diet.models.user import User

ADMIN_KEY = "test-admin-key"
PASSWORD = "s3cret-pass"


def make_settings(**overrides) -> Settings:
    values = dict(
        environment="test",
        database_url="sqlite://",
        admin_api_key=ADMIN_KEY,
        mail_backend="console",
    )
    values.update(overrides)
    return Settings(**values)


class ApiTestCase(unittest.TestCase):
    settings_overrides: dict = {}
    raise_server_exceptions = True

    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        metadata.create_all(self.engine)
        self.Session = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)

        self.settings = make_settings(**self.settings_overrides)
        self.app = create_app(self.settings)

        def _db():
            db = self.Session()
            try:
                yield db
            finally:
                db.close()

        self.app.dependency_overrides[get_db] = _db

        patcher = mock.patch("daily_diet.api.routes.users.send_verification_email")
        self.send_mail = patcher.start()
        self.addCleanup(patcher.stop)

        self.client = TestClient(self.app, raise_server_exceptions=self.raise_server_exceptions)
        self.addCleanup(self.client.close)
        self.addCleanup(self.engine.dispose)

    # ---- helpers ----

    def get_user(self, email: str) -> Optional[User]:
        with self.Session() as db:
            return db.query(User).filter(User.email == email.lower()).first()

    def register(self, email: str, name: str = "Maria Silva", password: str = PASSWORD):
        return self.client.post("/users", json={"name": name, "email": email, "password": password})

    def register_and_verify(self, email: str, name: str = "Maria Silva") -> str:
        """Create a verified user and return its session id; the client keeps no cookie."""
        resp = self.register(email, name=name)
        self.assertEqual(resp.status_code, 201, resp.text)
        code = self.get_user(email).verification_code
        resp = self.client.post("/users/verify", json={"email": email, "code": code})
        self.assertEqual(resp.status_code, 200, resp.text)
        self.client.cookies.clear()
        return resp.json()["sessionId"]

    @staticmethod
    def auth(session_id: str) -> dict:
        return {"x-session-id": session_id}
