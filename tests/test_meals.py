# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest
from datetime import datetime, timezone

from daily_diet.models.meal import Meal

from support import ApiTestCase

MEAL = {
    "name": "Breakfast",
    "description": "Oats and fruit",
    "date": "2024-01-01T00:00:00.000Z",
    "isOnDiet": True,
}


class TestMeals(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.alice = self.register_and_verify("alice@example.com", name="Alice Lima")
        self.bob = self.register_and_verify("bob@example.com", name="Bob Costa")

    def _create(self, session_id: str, **overrides) -> dict:
        payload = dict(MEAL, **overrides)
        resp = self.client.post("/meals", json=payload, headers=self.auth(session_id))
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()["meal"]

    def test_create_and_get_round_trips_date(self) -> None:
        meal = self._create(self.alice)
        self.assertEqual(meal["date"], "2024-01-01T00:00:00.000Z")
        self.assertEqual(meal["userId"], self.alice)
        self.assertTrue(meal["isOnDiet"])

        resp = self.client.get(f"/meals/{meal['id']}", headers=self.auth(self.alice))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["meal"], meal)

    def test_offset_dates_are_normalized_to_utc(self) -> None:
        meal = self._create(self.alice, date="2024-01-01T02:30:00.250+02:00")
        self.assertEqual(meal["date"], "2024-01-01T00:30:00.250Z")

    def test_missing_description_is_null(self) -> None:
        payload = {k: v for k, v in MEAL.items() if k != "description"}
        resp = self.client.post("/meals", json=payload, headers=self.auth(self.alice))
        self.assertEqual(resp.status_code, 201)
        self.assertIsNone(resp.json()["meal"]["description"])

    def test_invalid_bodies(self) -> None:
        cases = [
            dict(MEAL, name=""),
            dict(MEAL, date="yesterday"),
            dict(MEAL, date="2024-01-01T00:00:00"),  # no timezone
            dict(MEAL, isOnDiet="yes"),
            {k: v for k, v in MEAL.items() if k != "isOnDiet"},
        ]
        for payload in cases:
            with self.subTest(payload=payload):
                resp = self.client.post("/meals", json=payload, headers=self.auth(self.alice))
                self.assertEqual(resp.status_code, 400)
                self.assertEqual(resp.json()["error"], "Bad Request")
        resp = self.client.get("/meals", headers=self.auth(self.alice))
        self.assertEqual(resp.json()["meals"], [])

    def test_list_is_scoped_and_newest_first(self) -> None:
        first = self._create(self.alice, name="First")
        second = self._create(self.alice, name="Second")
        self._create(self.bob, name="Bob's")

        resp = self.client.get("/meals", headers=self.auth(self.alice))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([m["id"] for m in resp.json()["meals"]], [second["id"], first["id"]])

    def test_other_users_meal_is_not_found(self) -> None:
        meal = self._create(self.bob)
        missing = self.client.get("/meals/unknown-id", headers=self.auth(self.alice))
        foreign = self.client.get(f"/meals/{meal['id']}", headers=self.auth(self.alice))
        self.assertEqual(foreign.status_code, 404)
        self.assertEqual(foreign.json(), missing.json())
        self.assertEqual(foreign.json(), {"error": "Not Found", "message": "Meal not found"})

    def test_partial_update(self) -> None:
        meal = self._create(self.alice)
        stale = datetime(2020, 1, 1, tzinfo=timezone.utc)
        with self.Session() as db:
            db.query(Meal).filter(Meal.id == meal["id"]).update({"updated_at": stale})
            db.commit()

        resp = self.client.put(
            f"/meals/{meal['id']}", json={"name": "Brunch"}, headers=self.auth(self.alice)
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        updated = resp.json()["meal"]
        self.assertEqual(updated["name"], "Brunch")
        for field in ("description", "date", "isOnDiet", "userId", "createdAt"):
            self.assertEqual(updated[field], meal[field])
        self.assertGreater(updated["updatedAt"], "2020-01-01T00:00:00.000Z")
        self.assertGreaterEqual(updated["updatedAt"], meal["updatedAt"])

        resp = self.client.put(
            f"/meals/{meal['id']}",
            json={"description": None, "isOnDiet": False, "date": "2024-02-03T12:00:00.000Z"},
            headers=self.auth(self.alice),
        )
        updated = resp.json()["meal"]
        self.assertIsNone(updated["description"])
        self.assertFalse(updated["isOnDiet"])
        self.assertEqual(updated["date"], "2024-02-03T12:00:00.000Z")
        self.assertEqual(updated["name"], "Brunch")

    def test_update_foreign_or_missing_meal(self) -> None:
        meal = self._create(self.bob)
        resp = self.client.put(
            f"/meals/{meal['id']}", json={"name": "Hijacked"}, headers=self.auth(self.alice)
        )
        self.assertEqual(resp.status_code, 404)
        resp = self.client.put("/meals/unknown-id", json={"name": "X"}, headers=self.auth(self.alice))
        self.assertEqual(resp.status_code, 404)

        resp = self.client.get(f"/meals/{meal['id']}", headers=self.auth(self.bob))
        self.assertEqual(resp.json()["meal"]["name"], MEAL["name"])

    def test_delete(self) -> None:
        meal = self._create(self.alice)
        foreign = self.client.delete(f"/meals/{meal['id']}", headers=self.auth(self.bob))
        self.assertEqual(foreign.status_code, 404)

        resp = self.client.delete(f"/meals/{meal['id']}", headers=self.auth(self.alice))
        self.assertEqual(resp.status_code, 204)
        self.assertEqual(resp.content, b"")

        again = self.client.get(f"/meals/{meal['id']}", headers=self.auth(self.alice))
        self.assertEqual(again.status_code, 404)


if __name__ == "__main__":
    unittest.main()
