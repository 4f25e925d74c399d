# postflow/models/user_model.py

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING

from .base_model import BaseModel
from ..constants.roles import USER_STATUS_APPROVED, USER_STATUS_PENDING
from ..utils.logger import Log


class User(BaseModel):
    """
    Directory record tracking a subject's requested and approved role.

    `role` stays None while the record is pending and is copied from
    `requestedRole` when an admin approves the request.
    """
    collection_name = "users"

    SNAPSHOT_FIELDS = ("email", "status", "role", "requestedRole", "approvedAt", "approvedBy", "createdAt")

    @classmethod
    def get_by_subject_id(cls, subject_id):
        return cls.collection().find_one({"subjectId": subject_id})

    @classmethod
    def create_access_request(cls, subject_id, email, requested_role):
        """
        Insert a pending record and return its id as a string.
        Raises DuplicateKeyError when the subject already has a record.
        """
        doc = {
            "subjectId": subject_id,
            "email": email,
            "requestedRole": requested_role,
            "status": USER_STATUS_PENDING,
            "role": None,
            "createdAt": cls.now(),
            "approvedAt": None,
            "approvedBy": None,
        }
        result = cls.collection().insert_one(doc)
        return str(result.inserted_id)

    @classmethod
    def list_pending(cls):
        cursor = cls.collection().find({"status": USER_STATUS_PENDING}).sort("createdAt", DESCENDING)
        return [cls.serialize(doc) for doc in cursor]

    @classmethod
    def approve(cls, request_id, approved_by):
        """
        Approve a pending request: role <- requestedRole, status <- approved.

        The write is conditional on the requestedRole read just before it, so a
        record deleted or replaced in between is reported as not found.
        Returns the update outcome dict, or None when no record matches.
        """
        col = cls.collection()
        query = {"_id": ObjectId(request_id)}

        target = col.find_one(query, {"requestedRole": 1})
        if not target:
            return None

        requested_role = target.get("requestedRole")
        result = col.update_one(
            {**query, "requestedRole": requested_role},
            {
                "$set": {
                    "status": USER_STATUS_APPROVED,
                    "role": requested_role,
                    "approvedAt": cls.now(),
                    "approvedBy": approved_by,
                }
            },
        )
        if result.matched_count == 0:
            Log.info(f"[user_model.py][User][approve] request {request_id} changed before approval")
            return None

        return cls.update_result(result)

    @classmethod
    def snapshot(cls, doc, fallback_email=None):
        out = {field: doc.get(field) for field in cls.SNAPSHOT_FIELDS}
        out["email"] = out["email"] or fallback_email
        out["status"] = out["status"] or USER_STATUS_PENDING
        return cls.serialize(out)

    @classmethod
    def ensure_indexes(cls):
        col = cls.collection()
        col.create_index([("subjectId", ASCENDING)], unique=True)
        col.create_index([("status", ASCENDING), ("createdAt", DESCENDING)])
