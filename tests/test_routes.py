"""
Travel API — HTTP Route Tests
===============================

What:  End-to-end behavior of every route through the ASGI app.
How:   HTTPX AsyncClient over ASGITransport; SQLite datastores injected
       through create_app().
"""

import asyncio

import pytest
from sqlalchemy import select

from travel_api.config import Settings
from travel_api.main import check_datastore
from travel_api.models.travel import ContactMessage


class TestDestinationsRoute:

    @pytest.mark.asyncio
    async def test_returns_all_rows(self, test_client):
        response = await test_client.get("/api/destinations")

        assert response.status_code == 200
        body = response.json()
        assert isinstance(body, list)
        assert len(body) == 3
        assert {d["name"] for d in body} == {"Paris", "Tokyo", "Nairobi"}

    @pytest.mark.asyncio
    async def test_datastore_failure_returns_500_with_error(
        self, make_client, empty_schema_datastore
    ):
        async with await make_client(empty_schema_datastore) as client:
            response = await client.get("/api/destinations")

        assert response.status_code == 500
        assert "destinations" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_production_hides_driver_message(self, make_client, empty_schema_datastore):
        prod = Settings(_env_file=None, NODE_ENV="production")
        async with await make_client(empty_schema_datastore, settings=prod) as client:
            response = await client.get("/api/destinations")

        assert response.status_code == 500
        assert "destinations" not in response.json()["error"]


class TestHotelsRoute:

    @pytest.mark.asyncio
    async def test_returns_only_matching_hotels(self, test_client):
        response = await test_client.get("/api/hotels/1")

        assert response.status_code == 200
        body = response.json()
        assert sorted(h["id"] for h in body) == [10, 11]
        assert set(body[0]) == {"id", "name", "price_per_night"}
        le_petit = next(h for h in body if h["id"] == 11)
        # DECIMAL comes back as an exact string, not a float
        assert le_petit["price_per_night"] == "85.00"

    @pytest.mark.asyncio
    async def test_empty_array_for_destination_without_hotels(self, test_client):
        response = await test_client.get("/api/hotels/3")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_unvalidated_id_returns_empty_array(self, test_client):
        response = await test_client.get("/api/hotels/abc")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_datastore_failure_returns_500(self, make_client, unreachable_datastore):
        async with await make_client(unreachable_datastore) as client:
            response = await client.get("/api/hotels/1")

        assert response.status_code == 500
        assert response.json()["error"]


class TestContactRoute:

    @pytest.mark.asyncio
    async def test_stores_message(self, test_client, seeded_datastore):
        response = await test_client.post(
            "/api/contact",
            json={"name": "A", "email": "a@x.com", "message": "hi"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Message sent successfully"
        assert isinstance(body["id"], int) and body["id"] > 0

        async with seeded_datastore.session() as session:
            rows = (await session.execute(select(ContactMessage))).scalars().all()
        assert [(r.id, r.name, r.email, r.message) for r in rows] == [
            (body["id"], "A", "a@x.com", "hi")
        ]

    @pytest.mark.asyncio
    async def test_missing_fields_return_500_from_datastore(self, test_client):
        response = await test_client.post("/api/contact", json={"name": "A"})

        assert response.status_code == 500
        assert "NOT NULL" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_empty_body_reaches_datastore(self, test_client):
        response = await test_client.post("/api/contact")

        assert response.status_code == 500
        assert "NOT NULL" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_form_body_treated_as_empty_payload(self, test_client):
        response = await test_client.post(
            "/api/contact",
            data={"name": "A", "email": "a@x.com", "message": "hi"},
        )

        assert response.status_code == 500
        assert "NOT NULL" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_json_array_treated_as_empty_payload(self, test_client):
        response = await test_client.post("/api/contact", json=["A", "a@x.com", "hi"])

        assert response.status_code == 500
        assert "NOT NULL" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_malformed_json_rejected_before_datastore(self, test_client, seeded_datastore):
        response = await test_client.post(
            "/api/contact",
            content=b'{"name": "A",',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 422
        async with seeded_datastore.session() as session:
            rows = (await session.execute(select(ContactMessage))).scalars().all()
        assert rows == []

    @pytest.mark.asyncio
    async def test_extra_fields_ignored(self, test_client):
        response = await test_client.post(
            "/api/contact",
            json={"name": "A", "email": "a@x.com", "message": "hi", "phone": "555"},
        )

        assert response.status_code == 200
        assert response.json()["id"] > 0

    @pytest.mark.asyncio
    async def test_concurrent_submissions_get_distinct_ids(self, test_client, seeded_datastore):
        responses = await asyncio.gather(*[
            test_client.post(
                "/api/contact",
                json={"name": f"user{i}", "email": f"u{i}@x.com", "message": "hello"},
            )
            for i in range(20)
        ])

        assert all(r.status_code == 200 for r in responses)
        ids = [r.json()["id"] for r in responses]
        assert len(set(ids)) == 20
        assert all(i > 0 for i in ids)

        async with seeded_datastore.session() as session:
            stored = (await session.execute(select(ContactMessage.id))).scalars().all()
        assert sorted(stored) == sorted(ids)


class TestHealthRoutes:

    @pytest.mark.asyncio
    async def test_health_ok(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "OK", "message": "Server is running"}

    @pytest.mark.asyncio
    async def test_health_ok_when_datastore_down(self, make_client, unreachable_datastore):
        async with await make_client(unreachable_datastore) as client:
            response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "OK", "message": "Server is running"}

    @pytest.mark.asyncio
    async def test_db_success(self, test_client):
        response = await test_client.get("/api/test-db")

        assert response.status_code == 200
        assert response.json() == {"connection": "Success", "test": {"test": 1}, "env": "test"}

    @pytest.mark.asyncio
    async def test_db_failure(self, make_client, unreachable_datastore):
        async with await make_client(unreachable_datastore) as client:
            response = await client.get("/api/test-db")
            # the process keeps serving after a failed check
            follow_up = await client.get("/health")

        assert response.status_code == 500
        body = response.json()
        assert body["connection"] == "Failed"
        assert body["env"] == "test"
        assert body["error"]
        assert follow_up.status_code == 200

    @pytest.mark.asyncio
    async def test_db_failure_in_production_hides_driver_message(
        self, make_client, unreachable_datastore
    ):
        prod = Settings(_env_file=None, NODE_ENV="production")
        async with await make_client(unreachable_datastore, settings=prod) as client:
            response = await client.get("/api/test-db")

        assert response.status_code == 500
        assert response.json() == {
            "error": "Database connection failed",
            "connection": "Failed",
            "env": "production",
        }


class TestCrossCutting:

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_client):
        response = await test_client.get("/api/destinations", headers={"X-Request-ID": "abc123"})
        assert response.headers["X-Request-ID"] == "abc123"

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_client):
        response = await test_client.get("/health")
        assert response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_cors_open_to_any_origin(self, test_client):
        response = await test_client.get(
            "/api/destinations", headers={"Origin": "http://frontend.example"}
        )
        assert response.headers["access-control-allow-origin"] in ("*", "http://frontend.example")
        assert response.headers["access-control-allow-credentials"] == "true"

    @pytest.mark.asyncio
    async def test_startup_check_reports_without_raising(self, datastore, unreachable_datastore):
        assert await check_datastore(datastore) is True
        assert await check_datastore(unreachable_datastore) is False
