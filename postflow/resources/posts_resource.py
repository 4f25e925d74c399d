from flask.views import MethodView
from flask import request, jsonify, g, current_app
from flask_smorest import Blueprint, abort
from pymongo.errors import PyMongoError

from ..constants.roles import ANY_APPROVED, CONTENT_EDITORS
from ..constants.service_code import HTTP_STATUS_CODES, ERROR_MESSAGES
from ..models.post_model import Post
from ..schemas.post_schema import (
    CreatePostSchema,
    UpdatePostSchema,
    PostStatusSchema,
    ListPostsQuerySchema,
)
from ..security.auth import (
    token_required,
    approval_required,
    object_id_required,
    gated_if_configured,
    when_configured,
)
from ..utils.helpers import make_log_tag
from ..utils.logger import Log

blp_posts = Blueprint("posts", __name__, description="Scheduled content items")


@blp_posts.route("/posts", methods=["GET", "POST"])
class PostsResource(MethodView):

    # ---------------------------------------------------
    # POST /posts : create a pending content item
    # ---------------------------------------------------
    @gated_if_configured("POSTS_CREATE_REQUIRES_AUTH", CONTENT_EDITORS)
    @blp_posts.arguments(CreatePostSchema, error_status_code=400)
    def post(self, payload):
        log_tag = make_log_tag("posts_resource.py", "PostsResource", "post", request.remote_addr)

        try:
            result = Post.create(payload)
        except PyMongoError as e:
            Log.error(f"{log_tag} failed to create post: {e}")
            return jsonify({"message": str(e)}), HTTP_STATUS_CODES["INTERNAL_SERVER_ERROR"]

        Log.info(f"{log_tag} post created id={result['insertedId']} account={payload.get('account')}")
        return jsonify(result), HTTP_STATUS_CODES["OK"]

    # ---------------------------------------------------
    # GET /posts?account=&page= : newest first, one page
    # ---------------------------------------------------
    @token_required
    @approval_required(ANY_APPROVED)
    @blp_posts.arguments(ListPostsQuerySchema, location="query", error_status_code=400)
    def get(self, args):
        try:
            posts = Post.list_recent(
                account=args.get("account"),
                page=args.get("page", 1),
                per_page=current_app.config.get("POSTS_PAGE_SIZE", 10),
            )
        except PyMongoError as e:
            Log.error(f"[posts_resource.py][PostsResource][get] {e}")
            return jsonify({"message": str(e)}), HTTP_STATUS_CODES["INTERNAL_SERVER_ERROR"]

        return jsonify(posts), HTTP_STATUS_CODES["OK"]


# -------------------------------------------------------------------
# PATCH /posts/<post_id> : whitelisted content edit (admin/creator)
# -------------------------------------------------------------------
@blp_posts.route("/posts/<post_id>", methods=["PATCH"])
class PostResource(MethodView):

    @token_required
    @object_id_required("post_id", ERROR_MESSAGES["INVALID_POST_ID"])
    @approval_required(CONTENT_EDITORS)
    @blp_posts.arguments(UpdatePostSchema, error_status_code=400)
    def patch(self, payload, post_id):
        me = g.current_user
        log_tag = make_log_tag(
            "posts_resource.py", "PostResource", "patch",
            request.remote_addr, me.get("subjectId"), me.get("role"),
            post_id=post_id,
        )

        try:
            result = Post.update_content(post_id, payload, updated_by=me.get("email"))
        except PyMongoError as e:
            Log.error(f"{log_tag} failed to update post: {e}")
            return jsonify({"message": str(e)}), HTTP_STATUS_CODES["INTERNAL_SERVER_ERROR"]

        Log.info(f"{log_tag} fields={sorted(payload.keys())} matched={result['matchedCount']}")
        return jsonify(result), HTTP_STATUS_CODES["OK"]


# -------------------------------------------------------------------
# PATCH /posts/<post_id>/status : mark posted / pending
# -------------------------------------------------------------------
@blp_posts.route("/posts/<post_id>/status", methods=["PATCH"])
class PostStatusResource(MethodView):

    # token, then id shape, then approval, whether or not the gate is on
    @when_configured("POSTS_STATUS_REQUIRES_AUTH", token_required)
    @object_id_required("post_id", ERROR_MESSAGES["INVALID_POST_ID"])
    @when_configured("POSTS_STATUS_REQUIRES_AUTH", approval_required(ANY_APPROVED))
    @blp_posts.arguments(PostStatusSchema, error_status_code=400)
    def patch(self, payload, post_id):
        status = payload["status"]
        log_tag = make_log_tag(
            "posts_resource.py", "PostStatusResource", "patch",
            request.remote_addr, post_id=post_id, status=status,
        )

        try:
            result = Post.set_status(post_id, status)
        except PyMongoError as e:
            Log.error(f"{log_tag} failed to set status: {e}")
            return jsonify({"message": str(e)}), HTTP_STATUS_CODES["INTERNAL_SERVER_ERROR"]

        if result.matched_count == 0:
            abort(404, message=ERROR_MESSAGES["POST_NOT_FOUND"])

        return jsonify({
            "message": f"Marked as {status}",
            "modifiedCount": result.modified_count,
        }), HTTP_STATUS_CODES["OK"]
