"""
Word REST API: HTTP Endpoint Tests
===================================

What:  Status codes, bodies and headers for every route.
How:   HTTPX AsyncClient over ASGITransport with the lifespan running against
       a temporary SQLite database (see conftest.test_client).
"""

import uuid
from unittest.mock import AsyncMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from word_rest_api.exceptions import ServiceUnavailableError


async def _create_user(client, name="John Doe", email="john@example.com"):
    response = await client.post("/api/users", json={"name": name, "email": email})
    assert response.status_code == 201, response.text
    return response.json()


def _detail_fields(body):
    return {d["field"] for d in body["error"]["details"]}


class TestHealth:

    @pytest.mark.asyncio
    async def test_health_is_plain_ok(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        assert response.text == "OK"
        assert response.headers["content-type"].startswith("text/plain")

    @pytest.mark.asyncio
    async def test_readiness(self, test_client):
        response = await test_client.get("/health/ready")

        assert response.status_code == 200
        assert response.json() == {"status": "ready", "database": "connected"}

    @pytest.mark.asyncio
    async def test_readiness_when_database_down(self, app, test_client):
        with patch.object(app.state.db, "health_check", AsyncMock(return_value=False)):
            response = await test_client.get("/health/ready")

        assert response.status_code == 503
        assert response.json()["error"]["code"] == "SERVICE_UNAVAILABLE"
        assert response.headers["Retry-After"] == "1"


class TestRequestId:

    @pytest.mark.asyncio
    async def test_generated_when_absent(self, test_client):
        response = await test_client.get("/api/users")
        assert response.headers.get("X-Request-ID")

    @pytest.mark.asyncio
    async def test_client_id_is_echoed(self, test_client):
        response = await test_client.get("/health", headers={"X-Request-ID": "trace-123"})
        assert response.headers["X-Request-ID"] == "trace-123"

    @pytest.mark.asyncio
    async def test_present_on_errors(self, test_client):
        response = await test_client.get(f"/api/users/{uuid.uuid4()}")
        assert response.status_code == 404
        assert response.headers.get("X-Request-ID")


class TestUsersApi:

    @pytest.mark.asyncio
    async def test_create_and_conflict(self, test_client):
        payload = {"name": "John Doe", "email": "john@example.com"}

        first = await test_client.post("/api/users", json=payload)
        assert first.status_code == 201
        body = first.json()
        assert uuid.UUID(body["id"])
        assert body["name"] == "John Doe"
        assert body["email"] == "john@example.com"
        assert body["created_at"] and body["updated_at"]

        second = await test_client.post("/api/users", json=payload)
        assert second.status_code == 409
        assert second.json()["error"]["code"] == "CONFLICT"
        assert set(second.json()) == {"error"}

    @pytest.mark.asyncio
    async def test_list_empty(self, test_client):
        response = await test_client.get("/api/users")
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_multiple_invalid_fields_in_one_response(self, test_client):
        response = await test_client.post("/api/users", json={"name": "  ", "email": "nope"})

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert _detail_fields(response.json()) == {"name", "email"}

    @pytest.mark.asyncio
    async def test_malformed_json(self, test_client):
        response = await test_client.post(
            "/api/users",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_malformed_id_is_400(self, test_client):
        response = await test_client.get("/api/users/not-a-uuid")

        assert response.status_code == 400
        assert _detail_fields(response.json()) == {"user_id"}

    @pytest.mark.asyncio
    async def test_get_put_patch_delete(self, test_client):
        user = await _create_user(test_client)
        url = f"/api/users/{user['id']}"

        assert (await test_client.get(url)).json()["email"] == "john@example.com"

        put = await test_client.put(url, json={"name": "Jane Doe", "email": "Jane@Example.com"})
        assert put.status_code == 200
        assert put.json()["email"] == "jane@example.com"

        patch_response = await test_client.patch(url, json={"name": "Jane D."})
        assert patch_response.status_code == 200
        assert patch_response.json() == {**put.json(), "name": "Jane D.", "updated_at": patch_response.json()["updated_at"]}

        empty_patch = await test_client.patch(url, json={})
        assert empty_patch.status_code == 400

        deleted = await test_client.delete(url)
        assert deleted.status_code == 204
        assert deleted.content == b""
        assert (await test_client.get(url)).status_code == 404

    @pytest.mark.asyncio
    async def test_put_requires_all_fields(self, test_client):
        user = await _create_user(test_client)
        response = await test_client.put(f"/api/users/{user['id']}", json={"name": "Only Name"})

        assert response.status_code == 400
        assert _detail_fields(response.json()) == {"email"}

    @pytest.mark.asyncio
    async def test_update_missing_user(self, test_client):
        response = await test_client.put(
            f"/api/users/{uuid.uuid4()}",
            json={"name": "Ghost", "email": "ghost@example.com"},
        )
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    @pytest.mark.asyncio
    async def test_delete_user_removes_posts(self, test_client):
        user = await _create_user(test_client)
        for title in ("one", "two"):
            await test_client.post("/api/posts", json={"user_id": user["id"], "title": title})

        assert (await test_client.delete(f"/api/users/{user['id']}")).status_code == 204

        posts = await test_client.get("/api/posts", params={"user_id": user["id"]})
        assert posts.status_code == 200
        assert posts.json() == []


class TestPostsApi:

    @pytest.mark.asyncio
    async def test_unknown_user_is_404(self, test_client):
        response = await test_client.post(
            "/api/posts",
            json={"user_id": str(uuid.uuid4()), "title": "Hello"},
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    @pytest.mark.asyncio
    async def test_create_filter_and_crud(self, test_client):
        alice = await _create_user(test_client, "Alice", "alice@example.com")
        bob = await _create_user(test_client, "Bob", "bob@example.com")

        created = await test_client.post(
            "/api/posts",
            json={"user_id": alice["id"], "title": " First ", "content": "   "},
        )
        assert created.status_code == 201
        post = created.json()
        assert post["title"] == "First"
        assert post["content"] is None
        await test_client.post("/api/posts", json={"user_id": bob["id"], "title": "Bob's"})

        alice_posts = await test_client.get("/api/posts", params={"user_id": alice["id"]})
        assert [p["id"] for p in alice_posts.json()] == [post["id"]]
        assert len((await test_client.get("/api/posts")).json()) == 2

        url = f"/api/posts/{post['id']}"
        patched = await test_client.patch(url, json={"content": "Now with a body"})
        assert patched.json()["content"] == "Now with a body"
        assert patched.json()["title"] == "First"

        replaced = await test_client.put(url, json={"title": "Replaced"})
        assert replaced.json()["content"] is None

        assert (await test_client.delete(url)).status_code == 204
        assert (await test_client.get(url)).status_code == 404

    @pytest.mark.asyncio
    async def test_invalid_filter(self, test_client):
        response = await test_client.get("/api/posts", params={"user_id": "abc"})
        assert response.status_code == 400


class TestVocabularyApi:

    @pytest.mark.asyncio
    async def test_create_then_list(self, test_client):
        created = await test_client.post(
            "/api/vocabulary",
            json={"en_word": "apple", "ja_word": "りんご"},
        )
        assert created.status_code == 201

        listed = await test_client.get("/api/vocabulary")
        assert listed.status_code == 200
        [entry] = listed.json()
        assert entry["en_word"] == "apple"
        assert entry["ja_word"] == "りんご"
        assert entry["en_example"] is None
        assert entry["created_at"] and entry["updated_at"]
        assert "りんご".encode("utf-8") in listed.content

    @pytest.mark.asyncio
    async def test_random(self, test_client):
        empty = await test_client.get("/api/vocabulary/random")
        assert empty.status_code == 404

        await test_client.post("/api/vocabulary", json={"en_word": "book", "ja_word": "本"})
        picked = await test_client.get("/api/vocabulary/random")
        assert picked.status_code == 200
        assert picked.json()["en_word"] == "book"

    @pytest.mark.asyncio
    async def test_by_id_update_delete(self, test_client):
        created = (await test_client.post(
            "/api/vocabulary",
            json={"en_word": "computer", "ja_word": "コンピューター", "en_example": "I use it."},
        )).json()
        url = f"/api/vocabulary/{created['id']}"

        assert (await test_client.get(url)).json()["en_example"] == "I use it."

        patched = await test_client.patch(url, json={"ja_example": "使います。"})
        assert patched.json()["ja_example"] == "使います。"
        assert patched.json()["en_example"] == "I use it."

        replaced = await test_client.put(url, json={"en_word": "computer", "ja_word": "パソコン"})
        assert replaced.json()["ja_word"] == "パソコン"
        assert replaced.json()["en_example"] is None

        assert (await test_client.delete(url)).status_code == 204
        assert (await test_client.get(url)).status_code == 404

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "bad_id", ["0", "-1", "abc", "2147483648", "9223372036854775808"]
    )
    async def test_invalid_id(self, test_client, bad_id):
        response = await test_client.get(f"/api/vocabulary/{bad_id}")
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"
        assert _detail_fields(response.json()) == {"vocabulary_id"}

    @pytest.mark.asyncio
    async def test_id_beyond_integer_range_on_writes(self, test_client):
        url = "/api/vocabulary/9223372036854775808"

        put = await test_client.put(url, json={"en_word": "apple", "ja_word": "りんご"})
        patched = await test_client.patch(url, json={"en_word": "apple"})
        deleted = await test_client.delete(url)

        assert [r.status_code for r in (put, patched, deleted)] == [400, 400, 400]


class TestUnexpectedErrors:

    @pytest.mark.asyncio
    async def test_unhandled_exception_is_generic_500(self, app, test_client):
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            with patch(
                "word_rest_api.routes.users.user_repository.list",
                AsyncMock(side_effect=RuntimeError("secret internals")),
            ):
                response = await client.get("/api/users")

        assert response.status_code == 500
        assert response.json() == {
            "error": {"code": "INTERNAL_ERROR", "message": "An internal server error occurred"}
        }

    @pytest.mark.asyncio
    async def test_storage_outage_is_503(self, test_client):
        with patch(
            "word_rest_api.routes.users.user_repository.list",
            AsyncMock(side_effect=ServiceUnavailableError()),
        ):
            response = await test_client.get("/api/users")

        assert response.status_code == 503
        assert response.json()["error"]["code"] == "SERVICE_UNAVAILABLE"
