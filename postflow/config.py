import os

from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file

FIREBASE_JWKS_URL = "https://www.googleapis.com/service_accounts/v1/jwk/securetoken@system.gserviceaccount.com"


def _env_flag(name, default="false"):
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _firebase_issuer(project_id):
    if not project_id:
        return None
    return f"https://securetoken.google.com/{project_id}"


class Config:
    """Base configuration class."""
    APP_NAME = os.getenv("APP_NAME", "PostFlow")
    DEBUG = False
    TESTING = False

    MONGO_URI = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
    DB_NAME = os.getenv("DB_NAME", "postFlow-db")

    # Token verification: HS256 when a shared secret is set, otherwise RS256 against the JWKS URL
    TOKEN_SHARED_SECRET = os.getenv("TOKEN_SHARED_SECRET")
    TOKEN_AUDIENCE = os.getenv("FIREBASE_PROJECT_ID")
    TOKEN_ISSUER = os.getenv("TOKEN_ISSUER") or _firebase_issuer(os.getenv("FIREBASE_PROJECT_ID"))
    TOKEN_JWKS_URL = os.getenv("TOKEN_JWKS_URL", FIREBASE_JWKS_URL)

    ALLOWED_ORIGINS = [o.strip() for o in os.getenv("ALLOWED_ORIGINS", "*").split(",") if o.strip()]

    # post creation and status toggling are open unless switched on here
    POSTS_CREATE_REQUIRES_AUTH = _env_flag("POSTS_CREATE_REQUIRES_AUTH")
    POSTS_STATUS_REQUIRES_AUTH = _env_flag("POSTS_STATUS_REQUIRES_AUTH")
    POSTS_PAGE_SIZE = 10

    # flask-smorest
    API_TITLE = "PostFlow API"
    API_VERSION = "v1"
    OPENAPI_VERSION = "3.0.3"
    OPENAPI_URL_PREFIX = "/api"
    OPENAPI_JSON_PATH = "openapi.json"


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    MONGO_URI = os.getenv("TEST_MONGODB_URI", "mongodb://localhost:27017")
    DB_NAME = "postFlow-test"
    TOKEN_SHARED_SECRET = "postflow-test-secret-0123456789abcdef"
    TOKEN_AUDIENCE = None
    TOKEN_ISSUER = None
    POSTS_CREATE_REQUIRES_AUTH = False
    POSTS_STATUS_REQUIRES_AUTH = False


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


CONFIG_BY_ENV = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def load_config(app, config_name=None, overrides=None):
    load_dotenv()
    config_name = config_name or os.getenv("APP_ENV", "development")
    app.config.from_object(CONFIG_BY_ENV.get(config_name, DevelopmentConfig))
    if overrides:
        app.config.update(overrides)
    return app.config
