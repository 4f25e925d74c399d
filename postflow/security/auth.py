from functools import wraps

from flask import request, g, current_app
from flask_smorest import abort

from ..constants.service_code import AUTHENTICATION_MESSAGES, FORBIDDEN_MESSAGES
from ..extensions.token_verifier import token_verifier, TokenVerificationError
from ..models.base_model import BaseModel
from ..models.user_model import User
from ..utils.helpers import make_log_tag
from ..utils.logger import Log


def token_required(f):
    """Verify the bearer credential and expose the identity as g.current_identity."""
    @wraps(f)
    def decorated(*args, **kwargs):
        log_tag = make_log_tag("auth.py", "token_required", request.method, request.remote_addr)

        auth_header = request.headers.get("Authorization")
        if not auth_header or not auth_header.startswith("Bearer "):
            abort(401, message=AUTHENTICATION_MESSAGES["NO_TOKEN"])

        token = auth_header.split(" ", 1)[1].strip()
        try:
            identity = token_verifier.verify(token)
        except TokenVerificationError as e:
            Log.info(f"{log_tag} token rejected: {e}")
            abort(401, message=AUTHENTICATION_MESSAGES["INVALID_TOKEN"])

        g.current_identity = identity
        return f(*args, **kwargs)
    return decorated


def approval_required(policy):
    """
    Load the caller's directory record and check it against `policy`.
    Must run after token_required. The record is exposed as g.current_user.
    """
    def decorator(f):
        @wraps(f)
        def decorated(*args, **kwargs):
            identity = g.get("current_identity")
            if identity is None:
                abort(401, message=AUTHENTICATION_MESSAGES["NO_TOKEN"])

            user = User.get_by_subject_id(identity.subject_id)
            if not policy.allows(user):
                log_tag = make_log_tag(
                    "auth.py", "approval_required", request.method, request.remote_addr,
                    identity.subject_id, (user or {}).get("role"), policy=policy.name,
                )
                Log.info(f"{log_tag} access denied, status={(user or {}).get('status')}")
                raise PermissionError(FORBIDDEN_MESSAGES[policy.name])

            g.current_user = user
            return f(*args, **kwargs)
        return decorated
    return decorator


def object_id_required(param, message):
    """Reject a malformed id path parameter with 400 before anything touches the store."""
    def decorator(f):
        @wraps(f)
        def decorated(*args, **kwargs):
            if not BaseModel.is_valid_id(kwargs.get(param)):
                abort(400, message=message)
            return f(*args, **kwargs)
        return decorated
    return decorator


def when_configured(config_key, gate):
    """Apply decorator `gate` only while app.config[config_key] is truthy."""
    def decorator(f):
        gated = gate(f)

        @wraps(f)
        def decorated(*args, **kwargs):
            if current_app.config.get(config_key):
                return gated(*args, **kwargs)
            return f(*args, **kwargs)
        return decorated
    return decorator


def gated_if_configured(config_key, policy):
    """
    Leave the route open unless app.config[config_key] is truthy,
    in which case token_required + approval_required(policy) apply.
    """
    return when_configured(config_key, lambda f: token_required(approval_required(policy)(f)))
