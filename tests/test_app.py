# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest
from unittest import mock

from daily_diet.schemas.common import to_iso
from daily_diet.services.uptime import format_uptime

from support import ApiTestCase


class TestFormatUptime(unittest.TestCase):
    def test_formats(self) -> None:
        self.assertEqual(format_uptime(0), "0s")
        self.assertEqual(format_uptime(59.9), "59s")
        self.assertEqual(format_uptime(303), "5m 3s")
        self.assertEqual(format_uptime(3600), "1h 0m 0s")
        self.assertEqual(format_uptime(90061), "1d 1h 1m 1s")


class TestHealth(ApiTestCase):
    def test_health(self) -> None:
        resp = self.client.get("/health")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["status"], "ok")
        self.assertTrue(body["timestamp"].endswith("Z"))
        self.assertTrue(body["uptime"].endswith("s"))


class TestErrors(ApiTestCase):
    raise_server_exceptions = False

    def test_unknown_route_uses_error_shape(self) -> None:
        resp = self.client.get("/nope")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"error": "Not Found", "message": "Not Found"})

    def test_malformed_json_is_bad_request(self) -> None:
        resp = self.client.post(
            "/users", content=b"{not json", headers={"Content-Type": "application/json"}
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["error"], "Bad Request")

    def test_unexpected_failure_is_500_with_message(self) -> None:
        session_id = self.register_and_verify("ok@example.com")
        with mock.patch(
            "daily_diet.api.routes.metrics.compute_metrics", side_effect=RuntimeError("boom")
        ):
            resp = self.client.get("/metrics", headers=self.auth(session_id))
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"error": "Internal Server Error", "message": "boom"})


class TestCors(ApiTestCase):
    settings_overrides = {"frontend_url": "https://diet.example.com/"}

    def _preflight(self, origin: str):
        return self.client.options(
            "/meals",
            headers={"Origin": origin, "Access-Control-Request-Method": "POST"},
        )

    def test_allowed_origins(self) -> None:
        for origin in (
            "http://localhost:5173",
            "http://localhost:3000",
            "https://diet.example.com",
            "https://preview-123.lovable.app",
            "http://preview-123.lovable.dev",
        ):
            with self.subTest(origin=origin):
                resp = self._preflight(origin)
                self.assertEqual(resp.status_code, 200)
                self.assertEqual(resp.headers["access-control-allow-origin"], origin)
                self.assertEqual(resp.headers["access-control-allow-credentials"], "true")

    def test_other_origins_rejected(self) -> None:
        resp = self._preflight("https://evil.example.org")
        self.assertNotIn("access-control-allow-origin", resp.headers)


class TestCorsDevelopment(ApiTestCase):
    settings_overrides = {"environment": "development"}

    def test_any_origin(self) -> None:
        resp = self.client.options(
            "/meals",
            headers={"Origin": "http://192.168.0.10:8080", "Access-Control-Request-Method": "GET"},
        )
        self.assertEqual(resp.headers["access-control-allow-origin"], "http://192.168.0.10:8080")


class TestIsoFormat(unittest.TestCase):
    def test_naive_values_are_treated_as_utc(self) -> None:
        from datetime import datetime

        self.assertEqual(to_iso(datetime(2024, 1, 1, 0, 0, 0, 123456)), "2024-01-01T00:00:00.123Z")


if __name__ == "__main__":
    unittest.main()
