# postflow/models/post_model.py

from typing import Any, Dict, Optional

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING

from .base_model import BaseModel
from ..utils.helpers import normalize_label


class Post(BaseModel):
    collection_name = "posts"

    STATUS_PENDING = "pending"
    STATUS_POSTED = "posted"
    STATUSES = (STATUS_PENDING, STATUS_POSTED)

    # content fields an editor may change after creation
    EDITABLE_FIELDS = ("account", "day", "caption", "cta", "source", "hashtags", "driveLink")

    # -------------------------
    # CRUD
    # -------------------------

    @classmethod
    def create(cls, doc: Dict[str, Any]):
        """
        Insert a content item. account/day are normalized, status starts pending.
        Returns the insert outcome dict.
        """
        insert_doc = dict(doc or {})
        insert_doc["account"] = normalize_label(insert_doc.get("account"))
        insert_doc["day"] = normalize_label(insert_doc.get("day"))
        insert_doc["createdAt"] = cls.now()
        insert_doc["status"] = cls.STATUS_PENDING
        insert_doc.pop("_id", None)
        insert_doc.pop("postedAt", None)

        result = cls.collection().insert_one(insert_doc)
        return cls.insert_result(result)

    @classmethod
    def list_recent(cls, account: Optional[str] = None, page: int = 1, per_page: int = 10):
        query: Dict[str, Any] = {}
        if account:
            query["account"] = normalize_label(account)

        page = max(int(page), 1)
        skip = (page - 1) * per_page

        cursor = (
            cls.collection().find(query)
            .sort("createdAt", DESCENDING)
            .skip(skip)
            .limit(per_page)
        )
        return [cls.serialize(doc) for doc in cursor]

    @classmethod
    def update_content(cls, post_id: str, updates: Dict[str, Any], updated_by: Optional[str]):
        """
        Whitelisted content update. Only EDITABLE_FIELDS present in `updates` are written;
        updatedAt/updatedBy are always stamped.
        """
        fields = {k: v for k, v in (updates or {}).items() if k in cls.EDITABLE_FIELDS}
        for key in ("account", "day"):
            if key in fields:
                fields[key] = normalize_label(fields[key])

        fields["updatedAt"] = cls.now()
        fields["updatedBy"] = updated_by

        result = cls.collection().update_one({"_id": ObjectId(post_id)}, {"$set": fields})
        return cls.update_result(result)

    # -------------------------
    # Status updates
    # -------------------------

    @classmethod
    def set_status(cls, post_id: str, status: str):
        """
        posted stamps postedAt; pending removes the field entirely.
        Returns the raw UpdateResult.
        """
        if status not in cls.STATUSES:
            raise ValueError(f"unsupported post status: {status}")

        if status == cls.STATUS_POSTED:
            update = {"$set": {"status": status, "postedAt": cls.now()}}
        else:
            update = {"$set": {"status": status}, "$unset": {"postedAt": ""}}

        return cls.collection().update_one({"_id": ObjectId(post_id)}, update)

    @classmethod
    def ensure_indexes(cls):
        col = cls.collection()
        col.create_index([("createdAt", DESCENDING)])
        col.create_index([("account", ASCENDING), ("createdAt", DESCENDING)])
