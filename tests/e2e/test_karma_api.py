"""End-to-end tests for the karma endpoints."""

from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from agora.config import AuthSettings
from agora.interface.api.app import create_app
from agora.persistence.repository.inmemory import InMemoryDatabase
from agora.util.di.container import setup_di
from agora.util.jwt import create_token
from tests.di import build_test_container
from tests.factories import make_post, make_user


@pytest_asyncio.fixture
async def api():
    """Async client, in-memory database and auth settings of one app."""
    app_instance = create_app()
    test_container = build_test_container()
    setup_di(app_instance, test_container)

    db = await test_container.get(InMemoryDatabase)
    auth_settings = await test_container.get(AuthSettings)

    transport = ASGITransport(app=app_instance)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client, db, auth_settings

    await test_container.close()


async def upvote(client: AsyncClient, post_id, voter_id, auth_settings) -> None:
    """Upvote a post as voter_id through the API."""
    client.cookies.set("auth_token", create_token(str(voter_id), "voter", auth_settings))
    response = await client.post(
        "/vote",
        json={"votable_type": "post", "votable_id": str(post_id), "vote_type": "up"},
    )
    assert response.status_code == 200


class TestHealthEndpoint:
    """Tests for GET /health."""

    @pytest.mark.asyncio
    async def test_health(self, api):
        client, _, _ = api

        response = await client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["karma_floor"] == -99


class TestKarmaEndpoints:
    """End-to-end tests for the /karma API."""

    @pytest.mark.asyncio
    async def test_get_karma_of_new_user(self, api):
        client, db, _ = api
        user_id = make_user(db)

        response = await client.get(f"/karma/user/{user_id}")

        assert response.status_code == 200
        assert response.json()["karma"]["total_karma"] == 0

    @pytest.mark.asyncio
    async def test_get_karma_after_votes(self, api):
        client, db, auth_settings = api
        author_id = make_user(db)
        post_id = make_post(db, author_id)
        await upvote(client, post_id, make_user(db), auth_settings)
        await upvote(client, post_id, make_user(db), auth_settings)

        response = await client.get(f"/karma/user/{author_id}")

        assert response.status_code == 200
        karma = response.json()["karma"]
        assert karma["post_karma"] == 2
        assert karma["total_karma"] == 2

    @pytest.mark.asyncio
    async def test_get_karma_of_unknown_user_returns_404(self, api):
        client, _, _ = api

        response = await client.get(f"/karma/user/{uuid4()}")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_history(self, api):
        client, db, auth_settings = api
        author_id = make_user(db)
        post_id = make_post(db, author_id)
        await upvote(client, post_id, make_user(db), auth_settings)

        response = await client.get(f"/karma/user/{author_id}/history?limit=5")

        assert response.status_code == 200
        [event] = response.json()["events"]
        assert event["category"] == "post"
        assert event["delta"] == 1

    @pytest.mark.asyncio
    async def test_history_limit_is_validated(self, api):
        client, db, _ = api

        response = await client.get(f"/karma/user/{make_user(db)}/history?limit=0")

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_leaderboard(self, api):
        client, db, auth_settings = api
        top = make_user(db, handle="top")
        runner_up = make_user(db, handle="runner-up")
        top_post = make_post(db, top)
        await upvote(client, top_post, make_user(db), auth_settings)
        await upvote(client, top_post, make_user(db), auth_settings)
        await upvote(client, make_post(db, runner_up), make_user(db), auth_settings)

        response = await client.get("/karma/leaderboard?limit=10")

        assert response.status_code == 200
        entries = response.json()["entries"]
        assert [(e["rank"], e["handle"]) for e in entries] == [
            (1, "top"),
            (2, "runner-up"),
        ]

    @pytest.mark.asyncio
    async def test_recalculate_requires_auth(self, api):
        client, db, _ = api

        response = await client.post(f"/karma/recalculate/{make_user(db)}")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_recalculate(self, api):
        client, db, auth_settings = api
        author_id = make_user(db)
        post_id = make_post(db, author_id)
        await upvote(client, post_id, make_user(db), auth_settings)
        db.karma[author_id] = db.karma[author_id].model_copy(
            update={"post_karma": 9, "total_karma": 9}
        )
        client.cookies.set(
            "auth_token", create_token(str(make_user(db)), "admin", auth_settings)
        )

        response = await client.post(f"/karma/recalculate/{author_id}")

        assert response.status_code == 200
        assert response.json()["karma"]["total_karma"] == 1
