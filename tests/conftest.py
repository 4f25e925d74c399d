"""
Pytest configuration for tests.

Runs the app in testing mode against mongomock, with HS256 tokens signed by the
testing shared secret. Env vars are set BEFORE postflow is imported.
"""
import os

os.environ["APP_ENV"] = "testing"
os.environ["APP_LOG_TO_FILE"] = "false"

from datetime import datetime, timedelta, timezone

import jwt
import mongomock
import pytest

from postflow import create_app
from postflow.config import TestingConfig
from postflow.extensions import mongo
from postflow.extensions.mongo import db


def make_token(subject_id, email=None, secret=None, **claims):
    payload = {
        "sub": subject_id,
        "email": email,
        "iat": datetime.now(timezone.utc),
        "exp": datetime.now(timezone.utc) + timedelta(hours=1),
    }
    payload.update(claims)
    return jwt.encode(payload, secret or TestingConfig.TOKEN_SHARED_SECRET, algorithm="HS256")


def auth_header(subject_id, email=None):
    return {"Authorization": f"Bearer {make_token(subject_id, email)}"}


@pytest.fixture
def app(request, monkeypatch):
    """
    Testing app backed by a fresh mongomock client.
    Config overrides come from @pytest.mark.app_config(KEY=value).
    """
    monkeypatch.setattr(mongo, "MongoClient", mongomock.MongoClient)

    marker = request.node.get_closest_marker("app_config")
    overrides = dict(marker.kwargs) if marker else None

    yield create_app("testing", overrides=overrides)
    db.close()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def users(app):
    return db.get_collection("users")


@pytest.fixture
def posts(app):
    return db.get_collection("posts")


@pytest.fixture
def tags(app):
    return db.get_collection("tags")


@pytest.fixture
def seed_user(users):
    """Insert a directory record directly and return its id."""
    def _seed(subject_id, email=None, status="approved", role=None, requested_role=None, created_at=None):
        requested_role = requested_role or role or "creator"
        doc = {
            "subjectId": subject_id,
            "email": email or f"{subject_id}@example.com",
            "requestedRole": requested_role,
            "status": status,
            "role": role if status == "approved" else None,
            "createdAt": created_at or datetime.now(timezone.utc),
            "approvedAt": datetime.now(timezone.utc) if status == "approved" else None,
            "approvedBy": "root@example.com" if status == "approved" else None,
        }
        return users.insert_one(doc).inserted_id
    return _seed


@pytest.fixture
def admin_headers(seed_user):
    seed_user("admin-uid", "admin@example.com", role="admin")
    return auth_header("admin-uid", "admin@example.com")


@pytest.fixture
def creator_headers(seed_user):
    seed_user("creator-uid", "creator@example.com", role="creator")
    return auth_header("creator-uid", "creator@example.com")


@pytest.fixture
def publisher_headers(seed_user):
    seed_user("publisher-uid", "publisher@example.com", role="publisher")
    return auth_header("publisher-uid", "publisher@example.com")
