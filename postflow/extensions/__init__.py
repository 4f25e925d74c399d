from flask_cors import CORS

from .mongo import db
from .token_verifier import token_verifier

# Only app-aware extensions should be global
cors = CORS()

__all__ = [
    "cors",
    "db",
    "token_verifier",
]
