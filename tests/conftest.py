import itertools
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

import pytest
from fastapi import Request
from fastapi.testclient import TestClient

from dependencies import get_current_user, get_firestore
from main import app
from models.post import Post
from models.user import User
from services.errors import StoreError, UnauthorizedError
from services.posts import PostManager


class InMemoryPostStore:
    """Same interface as FirestoreDB, documents held in a dict"""

    def __init__(self):
        self.documents: Dict[str, Post] = {}
        self._ids = itertools.count(1)

    def get_all_posts(self) -> List[Post]:
        posts = [post.model_copy(deep=True) for post in self.documents.values()]
        return sorted(posts, key=lambda post: post.date, reverse=True)

    def get_post(self, post_id: str) -> Optional[Post]:
        post = self.documents.get(post_id)
        return post.model_copy(deep=True) if post else None

    def create_post(self, post: Post) -> Post:
        stored = post.model_copy(update={"id": f"post{next(self._ids)}"}, deep=True)
        self.documents[stored.id] = stored
        return stored.model_copy(deep=True)

    def update_post(self, post: Post) -> Post:
        self.documents[post.id] = post.model_copy(deep=True)
        return post

    def delete_post(self, post_id: str) -> bool:
        return self.documents.pop(post_id, None) is not None


class UnavailablePostStore(InMemoryPostStore):
    def get_all_posts(self):
        raise StoreError("Failed to list posts")

    def get_post(self, post_id):
        raise StoreError(f"Failed to fetch post {post_id}")

    def create_post(self, post):
        raise StoreError("Failed to create post")

    def update_post(self, post):
        raise StoreError(f"Failed to update post {post.id}")

    def delete_post(self, post_id):
        raise StoreError(f"Failed to delete post {post_id}")


class ReadOnlyPostStore(InMemoryPostStore):
    """Reads and inserts succeed, every later write fails"""

    def update_post(self, post):
        raise StoreError(f"Failed to update post {post.id}")

    def delete_post(self, post_id):
        raise StoreError(f"Failed to delete post {post_id}")


async def header_user(request: Request) -> User:
    """Treats the bearer token as the caller's uid"""
    authorization = request.headers.get("Authorization", "")
    if not authorization.startswith("Bearer "):
        raise UnauthorizedError("Invalid authorization header")
    return User(user_id=authorization.split("Bearer ")[1])


def auth(uid: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {uid}"}


@pytest.fixture
def store():
    return InMemoryPostStore()


@pytest.fixture
def manager(store):
    return PostManager(store)


@pytest.fixture
def alice():
    return User(user_id="alice", email="alice@example.com")


@pytest.fixture
def bob():
    return User(user_id="bob", email="bob@example.com")


@pytest.fixture
def client(store):
    app.dependency_overrides[get_firestore] = lambda: store
    app.dependency_overrides[get_current_user] = header_user
    yield TestClient(app)
    app.dependency_overrides.clear()


def days_ago(days: int) -> datetime:
    return datetime.now(timezone.utc) - timedelta(days=days)
