# postflow/models/base_model.py

from datetime import datetime, timezone

from bson import ObjectId

from ..extensions.mongo import db


class BaseModel:
    """
    Shared helpers for the collection-backed models.
    Models are stateless: every call resolves its collection from the shared client.
    """
    collection_name = None

    @classmethod
    def collection(cls):
        return db.get_collection(cls.collection_name)

    @staticmethod
    def now():
        return datetime.now(timezone.utc)

    @staticmethod
    def is_valid_id(value) -> bool:
        return isinstance(value, str) and ObjectId.is_valid(value)

    @classmethod
    def serialize(cls, doc):
        """ObjectId -> str and datetime -> ISO-8601 for JSON responses."""
        if doc is None:
            return None
        out = {}
        for key, value in doc.items():
            if isinstance(value, ObjectId):
                out[key] = str(value)
            elif isinstance(value, datetime):
                if value.tzinfo is None:
                    value = value.replace(tzinfo=timezone.utc)
                out[key] = value.isoformat()
            else:
                out[key] = value
        return out

    @staticmethod
    def insert_result(result):
        return {
            "acknowledged": result.acknowledged,
            "insertedId": str(result.inserted_id),
        }

    @staticmethod
    def update_result(result):
        upserted_id = result.upserted_id
        return {
            "acknowledged": result.acknowledged,
            "matchedCount": result.matched_count,
            "modifiedCount": result.modified_count,
            "upsertedId": str(upserted_id) if upserted_id is not None else None,
            "upsertedCount": 1 if upserted_id is not None else 0,
        }
