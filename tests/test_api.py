"""HTTP-level tests for the API routes."""

import pytest

from estate_forum.core.ids import new_object_id

ESTATE_PAYLOAD = {
    "title": "Flat near the park",
    "description": "Bright, two bedrooms",
    "price": 120.0,
    "square_meters": 60,
    "total_rooms": 3,
    "category": "Flat",
    "floor_number": 2,
    "images": [],
    "longitude": 21.9,
    "latitude": 43.3,
}


def register(client, username: str) -> dict:
    """Register a user and return the auth response with a ready header."""
    response = client.post(
        "/api/users/register",
        json={
            "username": username,
            "email": f"{username}@example.com",
            "phone_number": "060123456",
            "password": "password123",
        },
    )
    assert response.status_code == 201, response.text
    data = response.json()
    data["headers"] = {"Authorization": f"Bearer {data['access_token']}"}
    return data


@pytest.fixture
def owner(client):
    return register(client, "owner")


@pytest.fixture
def fan(client):
    return register(client, "fan")


@pytest.fixture
def estate(client, owner):
    response = client.post("/api/estates", json=ESTATE_PAYLOAD, headers=owner["headers"])
    assert response.status_code == 201, response.text
    return response.json()


def test_health_check(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "estate-forum"}


class TestEstateRoutes:
    """Tests for /api/estates."""

    def test_create_requires_auth(self, client):
        assert client.post("/api/estates", json=ESTATE_PAYLOAD).status_code == 401

    def test_create_returns_owner(self, estate, owner):
        assert estate["user_id"] == owner["id"]
        assert estate["user"]["username"] == "owner"
        assert estate["category"] == "Flat"

    def test_flat_without_floor_is_400(self, client, owner):
        payload = {**ESTATE_PAYLOAD, "floor_number": None}
        response = client.post("/api/estates", json=payload, headers=owner["headers"])
        assert response.status_code == 400

    def test_search_envelope(self, client, estate):
        response = client.get(
            "/api/estates/search",
            params={"title": "park", "priceMin": 100, "priceMax": 120, "categories": ["flat", "house"]},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["totalLength"] == 1
        assert body["data"][0]["id"] == estate["id"]

    def test_search_unknown_category_is_400(self, client):
        response = client.get("/api/estates/search", params={"categories": "castle"})
        assert response.status_code == 400

    def test_user_estates_paging(self, client, estate, owner):
        response = client.get(f"/api/estates/user/{owner['id']}", params={"page": 1, "pageSize": 5})
        assert response.status_code == 200
        assert response.json()["totalLength"] == 1

    def test_invalid_id_is_400(self, client):
        assert client.get("/api/estates/not-an-id").status_code == 400

    def test_unknown_id_is_404(self, client):
        assert client.get(f"/api/estates/{new_object_id()}").status_code == 404

    def test_only_owner_deletes(self, client, estate, fan, owner):
        url = f"/api/estates/{estate['id']}"
        assert client.delete(url, headers=fan["headers"]).status_code == 403
        assert client.delete(url, headers=owner["headers"]).status_code == 204
        assert client.get(url).status_code == 404


class TestFavoriteRoutes:
    """Tests for /api/users/me/favorites."""

    def test_favorite_lifecycle(self, client, estate, fan):
        url = f"/api/users/me/favorites/{estate['id']}"

        assert client.get(f"{url}/can-add", headers=fan["headers"]).json() is True
        assert client.post(url, headers=fan["headers"]).json() is True
        assert client.get(f"{url}/can-add", headers=fan["headers"]).json() is False

        duplicate = client.post(url, headers=fan["headers"])
        assert duplicate.status_code == 409
        assert duplicate.json()["detail"] == "Estate is already in favorites"

        favorites = client.get(f"/api/estates/favorites/{fan['id']}").json()
        assert favorites["totalLength"] == 1

        assert client.delete(url, headers=fan["headers"]).json() is True
        assert client.delete(url, headers=fan["headers"]).json() is False

    def test_owner_cannot_favorite(self, client, estate, owner):
        response = client.post(f"/api/users/me/favorites/{estate['id']}", headers=owner["headers"])
        assert response.status_code == 403


class TestForumRoutes:
    """Tests for /api/posts and /api/comments."""

    def test_post_and_comment_flow(self, client, estate, owner, fan):
        response = client.post(
            "/api/posts",
            json={"title": "Is it still available?", "content": "Asking for a friend", "estate_id": estate["id"]},
            headers=fan["headers"],
        )
        assert response.status_code == 201, response.text
        post = response.json()
        assert post["author"]["id"] == fan["id"]
        assert post["estate"]["id"] == estate["id"]

        response = client.post(
            "/api/comments",
            json={"post_id": post["id"], "content": "Yes"},
            headers=owner["headers"],
        )
        assert response.status_code == 201, response.text

        listing = client.get("/api/posts", params={"title": "AVAILABLE", "page": 1, "pageSize": 10}).json()
        assert listing["totalLength"] == 1
        assert client.get(f"/api/posts/estate/{estate['id']}").json()["totalLength"] == 1

        comments = client.get(f"/api/comments/post/{post['id']}", params={"skip": 0, "limit": 10}).json()
        assert comments["totalLength"] == 1
        assert comments["data"][0]["author"]["username"] == "owner"

    def test_deleting_estate_removes_its_forum(self, client, estate, owner, fan):
        post = client.post(
            "/api/posts",
            json={"title": "Question", "content": "Body", "estate_id": estate["id"]},
            headers=fan["headers"],
        ).json()
        client.post("/api/comments", json={"post_id": post["id"], "content": "Reply"}, headers=owner["headers"])
        client.post(f"/api/users/me/favorites/{estate['id']}", headers=fan["headers"])

        assert client.delete(f"/api/estates/{estate['id']}", headers=owner["headers"]).status_code == 204

        assert client.get(f"/api/posts/{post['id']}").status_code == 404
        assert client.get(f"/api/comments/post/{post['id']}").json()["totalLength"] == 0
        assert client.get(f"/api/posts/user/{fan['id']}").json()["totalLength"] == 0
        assert client.get(f"/api/estates/favorites/{fan['id']}").json()["totalLength"] == 0

    def test_bad_page_is_400(self, client):
        assert client.get("/api/posts", params={"page": 0}).status_code == 400
