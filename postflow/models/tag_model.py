# postflow/models/tag_model.py

from pymongo import ASCENDING

from .base_model import BaseModel
from ..utils.helpers import normalize_label


class Tag(BaseModel):
    """Account-scoped label. Insert-only."""
    collection_name = "tags"

    @classmethod
    def create(cls, doc):
        insert_doc = dict(doc or {})
        insert_doc.pop("_id", None)
        insert_doc["account"] = normalize_label(insert_doc.get("account"))
        insert_doc["createdAt"] = cls.now()

        result = cls.collection().insert_one(insert_doc)
        return cls.insert_result(result)

    @classmethod
    def ensure_indexes(cls):
        cls.collection().create_index([("account", ASCENDING)])
