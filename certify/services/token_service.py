"""Signed bearer tokens that bind an HTTP caller to an account."""

import logging
from datetime import datetime, timedelta, timezone

import jwt

from ..domain.models import Account

logger = logging.getLogger(__name__)


class InvalidToken(Exception):
    pass


class TokenService:
    """Issues and decodes JWT access tokens for signed-in accounts."""

    def __init__(self, secret_key: str, expiration_minutes: int = 1440, algorithm: str = "HS256") -> None:
        if not secret_key:
            raise RuntimeError("SESSION_TOKEN_SECRET is not configured.")
        if secret_key == "change-me":
            logger.warning("SESSION_TOKEN_SECRET is using the default value. Configure a real secret in production.")
        self._secret_key = secret_key
        self._expiration_minutes = expiration_minutes
        self._algorithm = algorithm

    def create_token(self, account: Account) -> str:
        now = datetime.now(tz=timezone.utc)
        payload = {
            "sub": account.id,
            "role": account.role,
            "iat": now,
            "exp": now + timedelta(minutes=self._expiration_minutes),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def account_id(self, token: str) -> str:
        """Return the account id carried by ``token``.

        Raises:
            InvalidToken: If the token is malformed, expired or badly signed
        """
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except jwt.InvalidTokenError as exc:
            raise InvalidToken("Invalid token.") from exc
        subject = payload.get("sub")
        if not subject:
            raise InvalidToken("Invalid token.")
        return str(subject)
