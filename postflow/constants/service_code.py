HTTP_STATUS_CODES = {
    "OK": 200,
    "CREATED": 201,
    "NO_CONTENT": 204,
    "BAD_REQUEST": 400,
    "UNAUTHORIZED": 401,
    "FORBIDDEN": 403,
    "NOT_FOUND": 404,
    "CONFLICT": 409,
    "INTERNAL_SERVER_ERROR": 500,
}

ERROR_MESSAGES = {
    "INVALID_ROLE": "Invalid role. Role is required.",
    "USER_EXISTS": "User already exists",
    "USER_NOT_FOUND": "User not found",
    "INVALID_REQUEST_ID": "Invalid request id",
    "INVALID_POST_ID": "Invalid post id",
    "INVALID_STATUS": "Invalid status",
    "POST_NOT_FOUND": "Post not found",
    "SUBMIT_ACCESS_REQUEST": "User record not found. Submit access request first.",
    "SERVER_ERROR": "Server error",
    "INT_TOO_LARGE": "Integer values must fit in 64 bits",
}

AUTHENTICATION_MESSAGES = {
    "NO_TOKEN": "Unauthorized: No token",
    "INVALID_TOKEN": "Unauthorized: Invalid token",
}

# message raised by the approval gate, keyed by policy name
FORBIDDEN_MESSAGES = {
    "admin_only": "Forbidden: admin only",
    "any_approved": "Access not approved",
    "content_editors": "Access: admin and creator only",
}
