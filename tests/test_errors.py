import pytest
from bson import ObjectId
from pymongo.errors import PyMongoError

from postflow.models.post_model import Post
from postflow.models.tag_model import Tag
from postflow.models.user_model import User
from tests.conftest import auth_header


def _raising(error):
    def _raise(cls, *args, **kwargs):
        raise error
    return classmethod(_raise)


# -------------------------------------------------------------------
# storage failures inside handlers surface the driver message
# -------------------------------------------------------------------

def test_create_post_storage_failure(client, monkeypatch):
    monkeypatch.setattr(Post, "create", _raising(PyMongoError("boom")))

    resp = client.post("/api/posts", json={"account": "acme", "day": "mon"})

    assert resp.status_code == 500
    assert resp.get_json()["message"] == "boom"


def test_list_posts_storage_failure(client, creator_headers, monkeypatch):
    monkeypatch.setattr(Post, "list_recent", _raising(PyMongoError("boom")))

    resp = client.get("/api/posts", headers=creator_headers)

    assert resp.status_code == 500
    assert resp.get_json()["message"] == "boom"


def test_update_post_storage_failure(client, creator_headers, monkeypatch):
    monkeypatch.setattr(Post, "update_content", _raising(PyMongoError("boom")))

    resp = client.patch(f"/api/posts/{ObjectId()}", json={"caption": "x"}, headers=creator_headers)

    assert resp.status_code == 500
    assert resp.get_json()["message"] == "boom"


def test_set_status_storage_failure(client, monkeypatch):
    monkeypatch.setattr(Post, "set_status", _raising(PyMongoError("boom")))

    resp = client.patch(f"/api/posts/{ObjectId()}/status", json={"status": "posted"})

    assert resp.status_code == 500
    assert resp.get_json()["message"] == "boom"


def test_list_pending_storage_failure(client, admin_headers, monkeypatch):
    monkeypatch.setattr(User, "list_pending", _raising(PyMongoError("boom")))

    resp = client.get("/api/access-requests", headers=admin_headers)

    assert resp.status_code == 500
    assert resp.get_json()["message"] == "boom"


def test_approve_storage_failure(client, admin_headers, monkeypatch):
    monkeypatch.setattr(User, "approve", _raising(PyMongoError("boom")))

    resp = client.patch(f"/api/access-requests/{ObjectId()}/approve", headers=admin_headers)

    assert resp.status_code == 500
    assert resp.get_json()["message"] == "boom"


def test_create_tag_storage_failure(client, admin_headers, monkeypatch):
    monkeypatch.setattr(Tag, "create", _raising(PyMongoError("boom")))

    resp = client.post("/api/tags", json={"account": "acme"}, headers=admin_headers)

    assert resp.status_code == 500
    assert resp.get_json()["message"] == "boom"


@pytest.mark.parametrize("method,path,body", [
    ("post", "/api/users", {"role": "creator"}),
    ("get", "/api/users/me", None),
])
def test_user_routes_report_generic_server_error(client, monkeypatch, method, path, body):
    monkeypatch.setattr(User, "get_by_subject_id", _raising(PyMongoError("boom")))

    resp = getattr(client, method)(path, json=body, headers=auth_header("someone"))

    assert resp.status_code == 500
    assert resp.get_json()["message"] == "Server error"


def test_storage_failure_in_access_gate(client, creator_headers, monkeypatch):
    # the approval lookup runs outside the handler's own try block
    monkeypatch.setattr(User, "get_by_subject_id", _raising(PyMongoError("lookup failed")))

    resp = client.get("/api/posts", headers=creator_headers)

    assert resp.status_code == 500
    assert resp.get_json()["message"] == "lookup failed"


# -------------------------------------------------------------------
# anything else escaping a handler
# -------------------------------------------------------------------

def test_unexpected_error_surfaces_message(client, monkeypatch):
    monkeypatch.setattr(Post, "create", _raising(RuntimeError("disk on fire")))

    resp = client.post("/api/posts", json={"account": "acme", "day": "mon"})

    assert resp.status_code == 500
    assert resp.get_json()["message"] == "disk on fire"


def test_http_errors_keep_their_status(client):
    assert client.get("/api/nowhere").status_code == 404
    assert client.delete("/api/posts").status_code == 405


# -------------------------------------------------------------------
# integers MongoDB cannot store are rejected up front
# -------------------------------------------------------------------

def test_oversized_int_in_hashtags_is_rejected(client, posts):
    resp = client.post("/api/posts", json={"account": "acme", "day": "mon", "hashtags": 10 ** 30})

    assert resp.status_code == 400
    assert posts.count_documents({}) == 0


def test_oversized_int_nested_in_hashtags_is_rejected(client, posts):
    resp = client.post("/api/posts", json={"account": "acme", "day": "mon", "hashtags": ["#a", [-(2 ** 64)]]})

    assert resp.status_code == 400
    assert posts.count_documents({}) == 0


def test_int64_hashtags_are_stored(client, posts):
    resp = client.post("/api/posts", json={"account": "acme", "day": "mon", "hashtags": 2 ** 63 - 1})

    assert resp.status_code == 200
    assert posts.find_one({})["hashtags"] == 2 ** 63 - 1


def test_oversized_int_in_tag_is_rejected(client, admin_headers, tags):
    resp = client.post("/api/tags", json={"account": "acme", "weight": 10 ** 30}, headers=admin_headers)

    assert resp.status_code == 400
    assert tags.count_documents({}) == 0
