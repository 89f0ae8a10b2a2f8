# =============================================================================
# tests/test_users.py - User Directory Tests
# =============================================================================
# Follow / unfollow idempotence and the profile summary.
# =============================================================================

from uuid import uuid4


class TestFollow:
    """Test POST /follow/{id} and POST /unfollow/{id}."""

    def test_follow(self, client, api, store, auth_headers):
        target = store.add_user("Ada", "ada@example.com")

        response = client.post(api(f"/follow/{target['id']}"), headers=auth_headers("b@example.com"))

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == target["id"]
        assert body["email"] == "ada@example.com"
        assert body["followers"] == ["b@example.com"]

    def test_follow_twice_is_idempotent(self, client, api, store, auth_headers):
        target = store.add_user("Ada", "ada@example.com")
        headers = auth_headers("b@example.com")

        first = client.post(api(f"/follow/{target['id']}"), headers=headers)
        second = client.post(api(f"/follow/{target['id']}"), headers=headers)

        assert first.status_code == second.status_code == 200
        assert first.json()["followers"] == second.json()["followers"] == ["b@example.com"]

    def test_follow_updates_following_of_follower(self, client, api, store, auth_headers):
        target = store.add_user("Ada", "ada@example.com")
        follower = store.add_user("Bo", "b@example.com")

        client.post(api(f"/follow/{target['id']}"), headers=auth_headers("b@example.com"))

        assert store.users[follower["id"]]["following"] == ["ada@example.com"]

    def test_follow_unknown_user(self, client, api, store, auth_headers):
        response = client.post(api(f"/follow/{uuid4()}"), headers=auth_headers())

        assert response.status_code == 404
        assert response.json()["code"] == "USER_NOT_FOUND"

    def test_follow_malformed_id(self, client, api, store, auth_headers):
        response = client.post(api("/follow/not-a-uuid"), headers=auth_headers())

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_unfollow(self, client, api, store, auth_headers):
        target = store.add_user("Ada", "ada@example.com")
        headers = auth_headers("b@example.com")
        client.post(api(f"/follow/{target['id']}"), headers=headers)

        response = client.post(api(f"/unfollow/{target['id']}"), headers=headers)

        assert response.status_code == 200
        assert response.json()["followers"] == []

    def test_unfollow_non_follower_is_noop(self, client, api, store, auth_headers):
        target = store.add_user("Ada", "ada@example.com")
        client.post(api(f"/follow/{target['id']}"), headers=auth_headers("c@example.com"))

        response = client.post(api(f"/unfollow/{target['id']}"), headers=auth_headers("b@example.com"))

        assert response.status_code == 200
        assert response.json()["followers"] == ["c@example.com"]

    def test_unfollow_unknown_user(self, client, api, store, auth_headers):
        response = client.post(api(f"/unfollow/{uuid4()}"), headers=auth_headers())

        assert response.status_code == 404

    def test_self_follow_allowed(self, client, api, store, auth_headers):
        me = store.add_user("Test", "test@example.com")

        response = client.post(api(f"/follow/{me['id']}"), headers=auth_headers())

        assert response.status_code == 200
        assert response.json()["followers"] == ["test@example.com"]
        assert response.json()["following"] == ["test@example.com"]


class TestProfile:
    """Test GET /user."""

    def test_profile_counts(self, client, api, store, auth_headers):
        me = store.add_user("Test", "test@example.com")
        other = store.add_user("Ada", "ada@example.com")
        client.post(api(f"/follow/{me['id']}"), headers=auth_headers("ada@example.com"))
        client.post(api(f"/follow/{me['id']}"), headers=auth_headers("b@example.com"))
        client.post(api(f"/follow/{other['id']}"), headers=auth_headers())

        response = client.get(api("/user"), headers=auth_headers())

        assert response.status_code == 200
        assert response.json() == {"name": "Test", "followers": 2, "following": 1}

    def test_profile_without_record(self, client, api, store, auth_headers):
        response = client.get(api("/user"), headers=auth_headers("ghost@example.com"))

        assert response.status_code == 400
        assert response.json()["code"] == "PROFILE_NOT_FOUND"
