"""
AuthGate - Resolves the requester's email from a JWT.

The token is read from the session cookie or an "Authorization: Bearer"
header and verified with PyJWT. Issuing tokens is handled elsewhere; this
module only turns a valid token into a requester identity.
"""

from functools import wraps
from typing import Optional
import logging

import jwt
from flask import current_app, g, request


EXTENSION_KEY = "cold_mailer.auth"

class AuthGate:
    """Verifies JWTs and exposes the requester email on flask.g."""

    def __init__(self, secret: str, algorithm: str = "HS256", cookie_name: str = "token"):
        self.secret = secret
        self.algorithm = algorithm
        self.cookie_name = cookie_name
        self.logger = logging.getLogger(self.__class__.__name__)

        if not self.secret:
            self.logger.warning("JWT secret not configured; every request will be unauthenticated")

    def token_from_request(self) -> Optional[str]:
        token = request.cookies.get(self.cookie_name)
        if token:
            return token

        auth = request.headers.get("Authorization", "")
        if auth.startswith("Bearer "):
            return auth.split(None, 1)[1].strip() or None

        return None

    def identify(self, token: Optional[str]) -> Optional[str]:
        """
        Return the email carried by a valid token, otherwise None.

        The "email" claim is preferred; "sub" is accepted when it holds an
        email address.
        """
        if not token or not self.secret:
            return None

        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.InvalidTokenError as e:
            self.logger.info(f"Rejected token: {e}")
            return None

        email = payload.get("email")
        if not email:
            sub = payload.get("sub")
            email = sub if isinstance(sub, str) and "@" in sub else None

        if not isinstance(email, str) or not email.strip():
            self.logger.info("Token carries no email claim")
            return None

        return email.strip()


def resolve_identity(view):
    """Decorator storing the requester email (or None) on g.requester_email."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        gate: AuthGate = current_app.extensions[EXTENSION_KEY]
        g.requester_email = gate.identify(gate.token_from_request())
        return view(*args, **kwargs)

    return wrapper
