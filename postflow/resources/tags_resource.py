from flask.views import MethodView
from flask import request, jsonify, g
from flask_smorest import Blueprint
from pymongo.errors import PyMongoError

from ..constants.roles import ADMIN_ONLY
from ..constants.service_code import HTTP_STATUS_CODES
from ..models.tag_model import Tag
from ..schemas.tag_schema import CreateTagSchema
from ..security.auth import token_required, approval_required
from ..utils.helpers import make_log_tag
from ..utils.logger import Log

blp_tags = Blueprint("tags", __name__, description="Account-scoped labels")


@blp_tags.route("/tags", methods=["POST"])
class TagsResource(MethodView):

    # body is validated before the admin check
    @token_required
    @blp_tags.arguments(CreateTagSchema, error_status_code=400)
    @approval_required(ADMIN_ONLY)
    def post(self, payload):
        admin = g.current_user
        log_tag = make_log_tag(
            "tags_resource.py", "TagsResource", "post",
            request.remote_addr, admin.get("subjectId"), admin.get("role"),
        )

        try:
            result = Tag.create(payload)
        except PyMongoError as e:
            Log.error(f"{log_tag} failed to create tag: {e}")
            return jsonify({"message": str(e)}), HTTP_STATUS_CODES["INTERNAL_SERVER_ERROR"]

        return jsonify(result), HTTP_STATUS_CODES["OK"]
