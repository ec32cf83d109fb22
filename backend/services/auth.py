from typing import Optional

import jwt

from config import Settings, logger
from exceptions import AuthenticationException
from models.users import Identity

BEARER_PREFIX = "Bearer "


class TokenVerifier:
    """Verifies HS256 app tokens issued by the sign-in flow."""

    def __init__(self, settings: Settings):
        self.secret = settings.APP_JWT_SECRET

    def verify(self, authorization: Optional[str]) -> Identity:
        if not authorization or not authorization.startswith(BEARER_PREFIX):
            raise AuthenticationException("Missing or invalid authorization header")
        if not self.secret:
            logger.critical("APP_JWT_SECRET not configured.")
            raise AuthenticationException("Token verification unavailable")

        token = authorization[len(BEARER_PREFIX):].strip()
        try:
            payload = jwt.decode(token, self.secret, algorithms=["HS256"])
        except jwt.PyJWTError as e:
            logger.info("Rejected app token: %s", e)
            raise AuthenticationException("Invalid or expired token")

        uid = payload.get("uid")
        if not isinstance(uid, str) or not uid:
            raise AuthenticationException("Invalid or expired token")
        return Identity(uid=uid, email=payload.get("email") or "")
