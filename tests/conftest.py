# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Replaces the Supabase gateway with an in-memory store that keeps the
#   same conditional-update behaviour as the SQL functions
# - Provides a TestClient and bearer-token helpers
# =============================================================================

import copy
import os
from datetime import datetime, timedelta, timezone
from uuid import uuid4

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-signing")
os.environ.setdefault("AUTH_BACKEND", "static")
os.environ.setdefault("AUTH_EMAIL", "test@example.com")
os.environ.setdefault("AUTH_PASSWORD", "password")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from app.auth import get_credential_verifier
from app.main import app


# =============================================================================
# In-memory store
# =============================================================================

class InMemoryStore:
    """
    Stand-in for lib.supabase_client.SupabaseClient.

    Exposes the same methods; rows are plain dicts and every read returns
    a copy, as a real query would.
    """

    def __init__(self):
        self.users: dict[str, dict] = {}
        self.posts: dict[str, dict] = {}
        self.comments: dict[str, dict] = {}
        self._clock = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

    def _tick(self) -> str:
        self._clock += timedelta(seconds=1)
        return self._clock.isoformat()

    # -- seeding helpers ------------------------------------------------------

    def add_user(self, name: str, email: str) -> dict:
        row = {
            "id": str(uuid4()),
            "name": name,
            "email": email,
            "followers": [],
            "following": [],
            "created_at": self._tick(),
        }
        self.users[row["id"]] = row
        return copy.deepcopy(row)

    def add_post(self, author: str, title: str = "T", description: str = "D",
                 created_at: str | None = None) -> dict:
        row = {
            "id": str(uuid4()),
            "title": title,
            "description": description,
            "author": author,
            "likes": [],
            "created_at": created_at or self._tick(),
        }
        self.posts[row["id"]] = row
        return copy.deepcopy(row)

    # -- users ----------------------------------------------------------------

    def fetch_user_by_email(self, email):
        for user in self.users.values():
            if user["email"] == email:
                return copy.deepcopy(user)
        return None

    def fetch_users_by_email(self, emails):
        return [
            {"id": u["id"], "name": u["name"], "email": u["email"]}
            for u in self.users.values()
            if u["email"] in emails
        ]

    def add_follower(self, user_id, email):
        target = self.users.get(str(user_id))
        if target is None:
            return None
        for user in self.users.values():
            if user["email"] == email and target["email"] not in user["following"]:
                user["following"].append(target["email"])
        if email not in target["followers"]:
            target["followers"].append(email)
        return copy.deepcopy(target)

    def remove_follower(self, user_id, email):
        target = self.users.get(str(user_id))
        if target is None:
            return None
        for user in self.users.values():
            if user["email"] == email and target["email"] in user["following"]:
                user["following"].remove(target["email"])
        if email in target["followers"]:
            target["followers"].remove(email)
        return copy.deepcopy(target)

    # -- posts ----------------------------------------------------------------

    def insert_post(self, data):
        row = {"id": str(uuid4()), "likes": [], **data}
        self.posts[row["id"]] = row
        return copy.deepcopy(row)

    def fetch_post(self, post_id):
        return copy.deepcopy(self.posts.get(str(post_id)))

    def fetch_posts(self, author=None):
        posts = list(self.posts.values())
        if author is not None:
            posts = [p for p in posts if p["author"] == author]
            posts.sort(key=lambda p: p["created_at"], reverse=True)
        return copy.deepcopy(posts)

    def delete_post(self, post_id, author):
        post = self.posts.get(str(post_id))
        if post is None or post["author"] != author:
            return False
        del self.posts[str(post_id)]
        self.comments = {
            cid: c for cid, c in self.comments.items() if c["post_id"] != str(post_id)
        }
        return True

    def add_like(self, post_id, email):
        post = self.posts.get(str(post_id))
        if post is None or email in post["likes"]:
            return None
        post["likes"].append(email)
        return copy.deepcopy(post)

    def remove_like(self, post_id, email):
        post = self.posts.get(str(post_id))
        if post is None or email not in post["likes"]:
            return None
        post["likes"].remove(email)
        return copy.deepcopy(post)

    # -- comments -------------------------------------------------------------

    def create_comment(self, post_id, author, text):
        if str(post_id) not in self.posts:
            return None
        row = {
            "id": str(uuid4()),
            "text": text,
            "author": author,
            "post_id": str(post_id),
            "created_at": self._tick(),
        }
        self.comments[row["id"]] = row
        return copy.deepcopy(row)

    def fetch_comments(self, post_ids):
        ids = {str(p) for p in post_ids}
        rows = [c for c in self.comments.values() if c["post_id"] in ids]
        return copy.deepcopy(sorted(rows, key=lambda c: c["created_at"]))

    def count_comments(self, post_id):
        return sum(1 for c in self.comments.values() if c["post_id"] == str(post_id))

    def ping(self):
        return None


# =============================================================================
# Fixtures
# =============================================================================

GATEWAY_USERS = [
    "core.services.user_service.SupabaseClient",
    "core.services.post_service.SupabaseClient",
    "core.services.comment_service.SupabaseClient",
    "app.routers.health.SupabaseClient",
]


@pytest.fixture
def store():
    """In-memory store patched in wherever the gateway is used."""
    fake = InMemoryStore()
    patchers = [patch(target, fake) for target in GATEWAY_USERS]
    for p in patchers:
        p.start()
    yield fake
    for p in patchers:
        p.stop()


@pytest.fixture
def client(store):
    """TestClient backed by the in-memory store."""
    return TestClient(app)


@pytest.fixture
def verifier():
    """The application's CredentialVerifier."""
    return get_credential_verifier()


@pytest.fixture
def auth_headers(verifier):
    """Build an Authorization header for any identity."""
    def _headers(email: str = "test@example.com") -> dict[str, str]:
        return {"Authorization": f"Bearer {verifier.create_token(email)}"}
    return _headers


@pytest.fixture
def api():
    """Prefix API paths with the configured mount point."""
    from app.config import settings

    def _path(path: str) -> str:
        return f"{settings.api_prefix}{path}"
    return _path
