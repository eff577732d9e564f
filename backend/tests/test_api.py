"""
Voxboard Backend - HTTP API Tests
==================================

What:  End-to-end requests through create_app() with fake adapters and an
       in-memory database.

What we test:
    - Status codes per route and the success / error envelopes
    - Request validation failures surface as 400, not 422
    - External failures become 500 with a generic message
    - Unexpected exceptions become 500 with the raw message
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

OWNER = "owner@example.com"


def assert_error(response, status: int, error: str):
    assert response.status_code == status
    body = response.json()
    assert body["success"] is False
    assert body["error"] == error
    assert body["message"]
    assert "request_id" in body
    return body


class TestServiceEndpoints:

    @pytest.mark.asyncio
    async def test_welcome(self, test_client):
        response = await test_client.get("/")
        assert response.status_code == 200
        assert response.json()["success"] is True

    @pytest.mark.asyncio
    async def test_health_is_always_200(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["uptime_seconds"] >= 0

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, test_client):
        response = await test_client.get("/", headers={"X-Request-ID": "abc12345"})
        assert response.headers["X-Request-ID"] == "abc12345"

    @pytest.mark.asyncio
    async def test_request_id_is_generated(self, test_client):
        response = await test_client.get("/")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_unknown_route_uses_error_envelope(self, test_client):
        response = await test_client.get("/nope")
        assert_error(response, 404, "http_error")


class TestSoundboardEndpoints:

    @pytest.mark.asyncio
    async def test_create_returns_201_with_camel_case_record(self, test_client):
        response = await test_client.post(
            "/soundboards", json={"title": "Hi", "text": "Halo", "email": OWNER}
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Soundboard created successfully"
        data = body["data"]
        assert data["audioUrl"].rsplit("/", 1)[-1] == data["fileName"]
        assert data["createdByEmail"] == OWNER

    @pytest.mark.asyncio
    async def test_missing_field_is_400_and_no_synthesis(self, test_client, fake_synthesizer):
        response = await test_client.post("/soundboards", json={"title": "Hi", "email": OWNER})

        body = assert_error(response, 400, "validation_error")
        assert body["message"] == "Title, text, and email are required"
        assert fake_synthesizer.calls == []

    @pytest.mark.asyncio
    async def test_malformed_json_is_400(self, test_client):
        response = await test_client.post(
            "/soundboards",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert_error(response, 400, "validation_error")

    @pytest.mark.asyncio
    async def test_synthesis_failure_is_500(self, test_client, fake_synthesizer):
        fake_synthesizer.fail = True

        response = await test_client.post(
            "/soundboards", json={"title": "Hi", "text": "Halo", "email": OWNER}
        )

        body = assert_error(response, 500, "server_error")
        assert body["message"] == "Failed to create soundboard"
        assert "details" not in body

    @pytest.mark.asyncio
    async def test_list_not_found_for_unknown_owner(self, test_client):
        response = await test_client.get("/soundboards/nobody@example.com")

        body = assert_error(response, 404, "not_found")
        assert body["message"] == "No soundboards found for this email"

    @pytest.mark.asyncio
    async def test_list_includes_file_status(self, test_client, fake_blob_store):
        created = (
            await test_client.post(
                "/soundboards", json={"title": "Hi", "text": "Halo", "email": OWNER}
            )
        ).json()["data"]

        response = await test_client.get(f"/soundboards/{OWNER}")

        assert response.status_code == 200
        [item] = response.json()["data"]
        assert item["id"] == created["id"]
        assert item["fileExists"] is True
        assert item["fileStatus"] == "present"

    @pytest.mark.asyncio
    async def test_delete_unknown_is_404_without_blob_call(self, test_client, fake_blob_store):
        response = await test_client.delete("/soundboards/6f1c1a44-2a52-4c0c-9a4c-5b7a1f0e9d11")

        body = assert_error(response, 404, "not_found")
        assert body["message"] == "Soundboard not found"
        assert fake_blob_store.delete_calls == []

    @pytest.mark.asyncio
    async def test_delete_then_list_is_404(self, test_client):
        created = (
            await test_client.post(
                "/soundboards", json={"title": "Hi", "text": "Halo", "email": OWNER}
            )
        ).json()["data"]

        response = await test_client.delete(f"/soundboards/{created['id']}")
        assert response.status_code == 200
        assert response.json()["message"] == "Soundboard deleted successfully"

        response = await test_client.get(f"/soundboards/{OWNER}")
        assert response.status_code == 404


class TestHistoryEndpoints:

    @pytest.mark.asyncio
    async def test_create_twice_is_rejected(self, test_client):
        payload = {"email": OWNER, "title": "Trip"}

        first = await test_client.post("/history/email", json=payload)
        second = await test_client.post("/history/email", json=payload)

        assert first.status_code == 201
        assert first.json()["data"]["email"] == OWNER
        assert_error(second, 400, "already_exists")

    @pytest.mark.asyncio
    async def test_message_without_history_is_404(self, test_client):
        response = await test_client.post(
            f"/history/{OWNER}", json={"message": "hi", "is_speech_to_text": False}
        )
        assert_error(response, 404, "not_found")

    @pytest.mark.asyncio
    async def test_message_missing_flag_is_400(self, test_client):
        await test_client.post("/history/email", json={"email": OWNER, "title": "Trip"})

        response = await test_client.post(f"/history/{OWNER}", json={"message": "hi"})

        assert_error(response, 400, "validation_error")

    @pytest.mark.asyncio
    async def test_full_lifecycle(self, test_client):
        await test_client.post("/history/email", json={"email": OWNER, "title": "Trip"})
        created = await test_client.post(
            f"/history/{OWNER}", json={"message": "hi", "is_speech_to_text": True}
        )
        assert created.status_code == 201

        fetched = await test_client.get(f"/history/{OWNER}")
        assert fetched.status_code == 200
        data = fetched.json()["data"]
        assert data["history"]["title"] == "Trip"
        assert [m["message"] for m in data["messages"]] == ["hi"]
        assert data["messages"][0]["is_speech_to_text"] is True

        deleted = await test_client.delete(f"/history/{OWNER}")
        assert deleted.status_code == 200

        assert (await test_client.get(f"/history/{OWNER}")).status_code == 404


class TestProfileEndpoints:

    @pytest.mark.asyncio
    async def test_create_get_and_duplicate(self, test_client):
        created = await test_client.post("/profile", json={"name": "Ayu", "email": OWNER})
        duplicate = await test_client.post("/profile", json={"name": "Ayu", "email": OWNER})
        fetched = await test_client.get(f"/profile/{OWNER}")

        assert created.status_code == 201
        assert_error(duplicate, 400, "already_exists")
        assert fetched.status_code == 200
        assert fetched.json()["data"]["name"] == "Ayu"

    @pytest.mark.asyncio
    async def test_get_missing_is_404(self, test_client):
        assert_error(await test_client.get(f"/profile/{OWNER}"), 404, "not_found")

    @pytest.mark.asyncio
    async def test_update_with_picture(self, test_client, fake_blob_store, sample_png_bytes):
        await test_client.post("/profile", json={"name": "Ayu", "email": OWNER})

        response = await test_client.put(
            f"/profile/{OWNER}",
            data={"name": "Ayu L"},
            files={"profile_picture": ("me.png", sample_png_bytes, "image/png")},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["name"] == "Ayu L"
        [key] = fake_blob_store.upload_calls
        assert data["profile_picture_url"].endswith(key)

    @pytest.mark.asyncio
    async def test_update_name_only(self, test_client, fake_blob_store):
        await test_client.post("/profile", json={"name": "Ayu", "email": OWNER})

        response = await test_client.put(f"/profile/{OWNER}", data={"name": "Ayu L"})

        assert response.status_code == 200
        assert response.json()["data"]["profile_picture_url"] is None
        assert fake_blob_store.upload_calls == []

    @pytest.mark.asyncio
    async def test_update_rejects_gif(self, test_client, fake_blob_store):
        await test_client.post("/profile", json={"name": "Ayu", "email": OWNER})

        response = await test_client.put(
            f"/profile/{OWNER}",
            data={"name": "Ayu"},
            files={"profile_picture": ("me.gif", b"GIF89a", "image/gif")},
        )

        assert_error(response, 400, "validation_error")
        assert fake_blob_store.upload_calls == []

    @pytest.mark.asyncio
    async def test_update_unknown_profile_is_404(self, test_client):
        response = await test_client.put(f"/profile/{OWNER}", data={"name": "Nobody"})
        assert_error(response, 404, "not_found")


class TestFeedbackAndReportEndpoints:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("rating,status", [(0, 400), (1, 201), (4, 201), (5, 400), (True, 400)])
    async def test_feedback_rating_bounds(self, test_client, rating, status):
        response = await test_client.post("/feedback", json={"comment": "ok", "rating": rating})
        assert response.status_code == status

    @pytest.mark.asyncio
    async def test_feedback_response_has_id(self, test_client):
        response = await test_client.post("/feedback", json={"comment": "ok", "rating": 3})
        assert response.json()["data"]["id"] >= 1

    @pytest.mark.asyncio
    async def test_report_pagination(self, test_client):
        for i in range(25):
            response = await test_client.post("/report", json={"comment": f"report {i}"})
            assert response.status_code == 201

        response = await test_client.get("/report", params={"page": 1, "limit": 10})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["total"] == 25
        assert body["currentPage"] == 1
        assert body["totalPages"] == 3
        assert len(body["data"]) == 10
        assert "createdAt" in body["data"][0]

    @pytest.mark.asyncio
    async def test_report_defaults(self, test_client):
        response = await test_client.get("/report")

        assert response.status_code == 200
        assert response.json()["currentPage"] == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("params", [{"page": 0}, {"limit": 0}, {"limit": 500}, {"page": "x"}])
    async def test_report_bad_paging_is_400(self, test_client, params):
        response = await test_client.get("/report", params=params)
        assert_error(response, 400, "validation_error")

    @pytest.mark.asyncio
    async def test_report_requires_comment(self, test_client):
        assert_error(await test_client.post("/report", json={}), 400, "validation_error")


class TestGenerateEndpoint:

    @pytest.mark.asyncio
    async def test_generate(self, test_client, fake_text_generator):
        response = await test_client.post("/generate", json={"topic": "gamelan"})

        assert response.status_code == 200
        assert response.json()["data"]["response"] == "Generated answer"
        assert fake_text_generator.topics == ["gamelan"]

    @pytest.mark.asyncio
    async def test_missing_topic_is_400(self, test_client, fake_text_generator):
        assert_error(await test_client.post("/generate", json={}), 400, "validation_error")
        assert fake_text_generator.topics == []

    @pytest.mark.asyncio
    async def test_generation_failure_is_generic_500(self, test_client, fake_text_generator):
        fake_text_generator.fail = True

        response = await test_client.post("/generate", json={"topic": "gamelan"})

        body = assert_error(response, 500, "external_service_error")
        assert "ResourceExhausted" not in body["message"]


class TestUnexpectedErrors:

    @pytest.mark.asyncio
    async def test_unhandled_exception_returns_raw_message(self, app):
        broken = MagicMock()
        broken.get_by_email = AsyncMock(side_effect=RuntimeError("connection pool exhausted"))
        app.state.history_service = broken

        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get(f"/history/{OWNER}")

        body = assert_error(response, 500, "internal_server_error")
        assert body["message"] == "connection pool exhausted"
