from flask.views import MethodView
from flask import request, jsonify, g
from flask_smorest import Blueprint, abort
from pymongo.errors import DuplicateKeyError, PyMongoError

from ..constants.roles import ADMIN_ONLY
from ..constants.service_code import HTTP_STATUS_CODES, ERROR_MESSAGES
from ..models.user_model import User
from ..schemas.user_schema import AccessRequestSchema
from ..security.auth import token_required, approval_required, object_id_required
from ..utils.helpers import make_log_tag
from ..utils.logger import Log

blp_users = Blueprint("users", __name__, description="Access requests and approval")


# -------------------------------------------------------------------
# POST /users : submit an access request for the caller
# -------------------------------------------------------------------
@blp_users.route("/users", methods=["POST"])
class AccessRequestResource(MethodView):

    @token_required
    @blp_users.arguments(AccessRequestSchema, error_status_code=400)
    def post(self, payload):
        identity = g.current_identity
        log_tag = make_log_tag(
            "users_resource.py", "AccessRequestResource", "post",
            request.remote_addr, identity.subject_id,
        )

        requested_role = payload["role"]

        try:
            if User.get_by_subject_id(identity.subject_id):
                Log.info(f"{log_tag} access request already exists")
                return jsonify({"message": ERROR_MESSAGES["USER_EXISTS"]}), HTTP_STATUS_CODES["CONFLICT"]

            inserted_id = User.create_access_request(identity.subject_id, identity.email, requested_role)

        except DuplicateKeyError:
            # lost a race with a concurrent request for the same subject
            Log.info(f"{log_tag} duplicate access request rejected by unique index")
            return jsonify({"message": ERROR_MESSAGES["USER_EXISTS"]}), HTTP_STATUS_CODES["CONFLICT"]
        except PyMongoError as e:
            Log.error(f"{log_tag} failed to save access request: {e}")
            return jsonify({"message": ERROR_MESSAGES["SERVER_ERROR"]}), HTTP_STATUS_CODES["INTERNAL_SERVER_ERROR"]

        Log.info(f"{log_tag} access request saved, requestedRole={requested_role}")
        return jsonify({
            "message": "User request saved (pending approval)",
            "insertedId": inserted_id,
        }), HTTP_STATUS_CODES["CREATED"]


# -------------------------------------------------------------------
# GET /users/me : the caller's own approval snapshot
# -------------------------------------------------------------------
@blp_users.route("/users/me", methods=["GET"])
class CurrentUserResource(MethodView):

    @token_required
    def get(self):
        identity = g.current_identity
        log_tag = make_log_tag(
            "users_resource.py", "CurrentUserResource", "get",
            request.remote_addr, identity.subject_id,
        )

        try:
            me = User.get_by_subject_id(identity.subject_id)
        except PyMongoError as e:
            Log.error(f"{log_tag} failed to load user: {e}")
            return jsonify({"message": ERROR_MESSAGES["SERVER_ERROR"]}), HTTP_STATUS_CODES["INTERNAL_SERVER_ERROR"]

        if not me:
            return jsonify({
                "message": ERROR_MESSAGES["SUBMIT_ACCESS_REQUEST"],
                "status": "not_found",
                "role": None,
                "requestedRole": None,
            }), HTTP_STATUS_CODES["NOT_FOUND"]

        return jsonify(User.snapshot(me, fallback_email=identity.email)), HTTP_STATUS_CODES["OK"]


# -------------------------------------------------------------------
# GET /access-requests : pending requests, newest first (admin)
# -------------------------------------------------------------------
@blp_users.route("/access-requests", methods=["GET"])
class AccessRequestListResource(MethodView):

    @token_required
    @approval_required(ADMIN_ONLY)
    def get(self):
        try:
            pending = User.list_pending()
        except PyMongoError as e:
            Log.error(f"[users_resource.py][AccessRequestListResource][get] {e}")
            return jsonify({"message": str(e)}), HTTP_STATUS_CODES["INTERNAL_SERVER_ERROR"]

        return jsonify(pending), HTTP_STATUS_CODES["OK"]


# -------------------------------------------------------------------
# PATCH /access-requests/<request_id>/approve (admin)
# -------------------------------------------------------------------
@blp_users.route("/access-requests/<request_id>/approve", methods=["PATCH"])
class ApproveAccessRequestResource(MethodView):

    @token_required
    @object_id_required("request_id", ERROR_MESSAGES["INVALID_REQUEST_ID"])
    @approval_required(ADMIN_ONLY)
    def patch(self, request_id):
        admin = g.current_user
        log_tag = make_log_tag(
            "users_resource.py", "ApproveAccessRequestResource", "patch",
            request.remote_addr, admin.get("subjectId"), admin.get("role"),
            request_id=request_id,
        )

        try:
            result = User.approve(request_id, approved_by=admin.get("email"))
        except PyMongoError as e:
            Log.error(f"{log_tag} approval failed: {e}")
            return jsonify({"message": str(e)}), HTTP_STATUS_CODES["INTERNAL_SERVER_ERROR"]

        if result is None:
            abort(404, message=ERROR_MESSAGES["USER_NOT_FOUND"])

        Log.info(f"{log_tag} access request approved")
        return jsonify(result), HTTP_STATUS_CODES["OK"]
