"""End-to-end tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from relay.interface.api.app import create_app
from tests.di import build_test_container


@pytest.fixture
def client():
    """Create test client with test container."""
    app_instance = create_app(container=build_test_container())
    with TestClient(app_instance) as test_client:
        yield test_client


def _create(client, identity: str, **fields) -> dict:
    response = client.put(f"/users/{identity}", json=fields)
    assert response.status_code == 200
    return response.json()


class TestHealth:
    """Tests for the health endpoint."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["online"] == 0
        assert "git_sha" in body


class TestProfiles:
    """Tests for profile endpoints."""

    def test_get_nonexistent_profile(self, client):
        response = client.get("/users/auth0|nobody")

        assert response.status_code == 404
        assert "not found" in response.json()["detail"]

    def test_overlong_identity_is_bad_request(self, client):
        response = client.get(f"/users/{'x' * 300}")

        assert response.status_code == 400
        assert response.json()["detail"] == "Identity must be at most 255 characters"

    def test_upsert_then_get(self, client):
        created = _create(client, "auth0|alice", name="Alice", username="alice")
        _create(client, "auth0|alice", profile_pic_url="https://example.com/a.png")

        response = client.get("/users/auth0|alice")

        assert response.status_code == 200
        body = response.json()
        assert body["identity"] == "auth0|alice"
        assert body["name"] == "Alice"
        assert body["profile_pic_url"] == "https://example.com/a.png"
        assert body["created_at"] == created["created_at"]
        assert body["followers_count"] == 0

    def test_counters_are_not_writable(self, client):
        _create(client, "auth0|alice")

        body = _create(client, "auth0|alice", followers_count=1000)

        assert body["followers_count"] == 0

    def test_push_token_register_and_remove(self, client):
        _create(client, "auth0|alice")

        registered = client.put(
            "/users/auth0|alice/push-token",
            json={"push_token": "ExponentPushToken[abc]"},
        )
        removed = client.delete("/users/auth0|alice/push-token")

        assert registered.json()["has_push_token"] is True
        assert removed.json()["has_push_token"] is False

    def test_push_token_for_unknown_profile(self, client):
        response = client.put(
            "/users/auth0|ghost/push-token",
            json={"push_token": "ExponentPushToken[abc]"},
        )

        assert response.status_code == 404

    def test_location_validation(self, client):
        _create(client, "auth0|alice")

        response = client.put(
            "/users/auth0|alice/location", json={"latitude": 91, "longitude": 0}
        )

        assert response.status_code == 422

    def test_nearby(self, client):
        for identity, latitude in (
            ("auth0|alice", 40.7128),
            ("auth0|bob", 40.71285),
            ("auth0|carol", 40.75),
        ):
            _create(client, identity)
            response = client.put(
                f"/users/{identity}/location",
                json={"latitude": latitude, "longitude": -74.006},
            )
            assert response.status_code == 200

        response = client.get(
            "/users/nearby",
            params={"latitude": 40.7128, "longitude": -74.006, "exclude": "auth0|alice"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["radius_m"] == 20.0
        assert [hit["profile"]["identity"] for hit in body["profiles"]] == ["auth0|bob"]

    def test_nearby_radius_too_large(self, client):
        response = client.get(
            "/users/nearby",
            params={"latitude": 0, "longitude": 0, "max_distance": 10_000_000},
        )

        assert response.status_code == 400


class TestFollows:
    """Tests for follow endpoints."""

    def test_follow_unfollow_roundtrip(self, client):
        _create(client, "auth0|alice")
        _create(client, "auth0|bob")
        payload = {"fromAuth0Id": "auth0|alice", "toAuth0Id": "auth0|bob"}

        followed = client.post("/follows", json=payload)
        again = client.post("/follows", json=payload)
        followers = client.get("/users/auth0|bob/followers")
        following = client.get("/users/auth0|alice/following")
        unfollowed = client.request("DELETE", "/follows", json=payload)
        not_following = client.request("DELETE", "/follows", json=payload)

        assert followed.status_code == 200
        assert followed.json()["outcome"] == "followed"
        assert followed.json()["following_followers_count"] == 1
        assert again.json()["outcome"] == "already_following"
        assert again.json()["following_followers_count"] == 1
        assert [p["identity"] for p in followers.json()["profiles"]] == ["auth0|alice"]
        assert [p["identity"] for p in following.json()["profiles"]] == ["auth0|bob"]
        assert unfollowed.json()["outcome"] == "unfollowed"
        assert not_following.json()["outcome"] == "not_following"
        assert client.get("/users/auth0|bob").json()["followers_count"] == 0

    def test_self_follow_is_bad_request(self, client):
        _create(client, "auth0|alice")

        response = client.post(
            "/follows", json={"follower_id": "auth0|alice", "following_id": "auth0|alice"}
        )

        assert response.status_code == 400

    def test_follow_unknown_profile_is_not_found(self, client):
        _create(client, "auth0|alice")

        response = client.post(
            "/follows", json={"myAuth0Id": "auth0|alice", "targetAuth0Id": "auth0|ghost"}
        )

        assert response.status_code == 404

    def test_http_follow_reaches_live_sockets(self, client):
        _create(client, "auth0|alice")
        _create(client, "auth0|bob")

        with client.websocket_connect("/ws") as alice, client.websocket_connect(
            "/ws"
        ) as bob:
            for ws, identity in ((alice, "auth0|alice"), (bob, "auth0|bob")):
                ws.send_json({"event": "join", "data": identity})
                assert ws.receive_json()["event"] == "joined"

            client.post(
                "/follows", json={"fromAuth0Id": "auth0|alice", "toAuth0Id": "auth0|bob"}
            )

            assert alice.receive_json()["event"] == "followSuccess"
            update = bob.receive_json()

        assert update["event"] == "followUpdate"
        assert update["data"]["followersCount"] == 1


class TestMessages:
    """Tests for message history."""

    def test_conversation_requires_both_identities(self, client):
        response = client.get("/messages/conversation", params={"a": "auth0|alice"})

        assert response.status_code == 422

    def test_blank_identity_is_bad_request(self, client):
        response = client.get("/messages/conversation", params={"a": " ", "b": "x"})

        assert response.status_code == 400
