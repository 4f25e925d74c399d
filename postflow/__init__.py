from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix
from marshmallow import ValidationError
from flask_smorest import Api
from pymongo.errors import PyMongoError

from .config import load_config
from .extensions import db, cors, token_verifier
from .models import ensure_indexes
from .routes import register_routes
from .utils.error_handlers import (
    handle_permission_error,
    handle_validation_error,
    handle_storage_error,
    handle_unexpected_error,
)
from .utils.logger import Log


def create_app(config_name=None, overrides=None):
    app = Flask(__name__)

    # get actual client IP behind the proxy
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    load_config(app, config_name=config_name, overrides=overrides)

    api = Api(app)

    # Initialize all extensions
    db.init_app(app)
    token_verifier.init_app(app)
    cors.init_app(app, origins=app.config["ALLOWED_ORIGINS"])

    with app.app_context():
        ensure_indexes()

    # Register custom error handlers
    app.errorhandler(PermissionError)(handle_permission_error)
    app.errorhandler(ValidationError)(handle_validation_error)
    app.errorhandler(PyMongoError)(handle_storage_error)
    app.errorhandler(Exception)(handle_unexpected_error)

    register_routes(app, api)

    Log.info(f"[__init__.py][create_app] {app.config['APP_NAME']} ready (testing={app.config['TESTING']})")
    return app
