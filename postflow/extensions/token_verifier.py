from dataclasses import dataclass
from typing import Optional

import jwt  # PyJWT

from ..utils.logger import Log


class TokenVerificationError(Exception):
    """Raised when a bearer credential cannot be verified."""


@dataclass(frozen=True)
class Identity:
    subject_id: str
    email: Optional[str] = None


class TokenVerifier:
    """
    Verifies identity tokens issued by the external identity provider.

    Two modes, picked from app config:
      - TOKEN_SHARED_SECRET set: HS256 tokens signed with that secret.
      - otherwise: RS256 tokens checked against the signing keys at TOKEN_JWKS_URL
        (Firebase ID tokens by default).
    TOKEN_AUDIENCE / TOKEN_ISSUER are enforced when configured.
    """

    def __init__(self):
        self.shared_secret = None
        self.audience = None
        self.issuer = None
        self.jwks_client = None

    def init_app(self, app):
        self.shared_secret = app.config.get("TOKEN_SHARED_SECRET")
        self.audience = app.config.get("TOKEN_AUDIENCE")
        self.issuer = app.config.get("TOKEN_ISSUER")
        self.jwks_client = None

        if not self.shared_secret:
            # keys are fetched lazily and cached by PyJWKClient
            self.jwks_client = jwt.PyJWKClient(app.config["TOKEN_JWKS_URL"], cache_keys=True)
            if not self.audience:
                Log.warning("[token_verifier.py][TokenVerifier][init_app] FIREBASE_PROJECT_ID not set, token audience is not checked")

        app.extensions["token_verifier"] = self

    def verify(self, token: str) -> Identity:
        if not token or token.lower() in ("null", "undefined", "none"):
            raise TokenVerificationError("Missing token")

        options = {
            "require": ["sub", "exp"],
            "verify_aud": self.audience is not None,
            "verify_iss": self.issuer is not None,
        }

        try:
            if self.shared_secret:
                claims = jwt.decode(
                    token,
                    self.shared_secret,
                    algorithms=["HS256"],
                    audience=self.audience,
                    issuer=self.issuer,
                    options=options,
                )
            else:
                if self.jwks_client is None:
                    raise TokenVerificationError("Token verifier not initialized")
                signing_key = self.jwks_client.get_signing_key_from_jwt(token)
                claims = jwt.decode(
                    token,
                    signing_key.key,
                    algorithms=["RS256"],
                    audience=self.audience,
                    issuer=self.issuer,
                    options=options,
                )
        except jwt.ExpiredSignatureError as e:
            raise TokenVerificationError("Token expired") from e
        except jwt.PyJWKClientError as e:
            Log.warning(f"[token_verifier.py][TokenVerifier][verify] signing key lookup failed: {e}")
            raise TokenVerificationError("Unknown signing key") from e
        except jwt.InvalidTokenError as e:
            raise TokenVerificationError(str(e)) from e

        subject_id = claims.get("sub")
        if not subject_id:
            raise TokenVerificationError("Token has no subject")

        return Identity(subject_id=str(subject_id), email=claims.get("email"))


token_verifier = TokenVerifier()
