import mongomock
import pytest
from flask import Flask

from postflow.extensions import mongo
from postflow.extensions.mongo import MongoDB


def _app():
    app = Flask(__name__)
    app.config.update(MONGO_URI="mongodb://localhost:27017", DB_NAME="postFlow-storage-test")
    return app


def test_close_is_registered_once(monkeypatch):
    registered = []
    monkeypatch.setattr(mongo, "MongoClient", mongomock.MongoClient)
    monkeypatch.setattr(mongo.atexit, "register", registered.append)

    store = MongoDB()
    store.init_app(_app())
    store.init_app(_app())

    assert registered == [store.close]
    store.close()


def test_get_collection_before_init_fails():
    with pytest.raises(RuntimeError, match="not initialized"):
        MongoDB().get_collection("posts")
