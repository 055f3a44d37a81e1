"""Secret derivation for the credentials side table."""

import hmac
import logging

import bcrypt

logger = logging.getLogger(__name__)

SCHEME_BCRYPT = "bcrypt"
SCHEME_PLAIN = "plain"
SCHEMES = (SCHEME_BCRYPT, SCHEME_PLAIN)


class CredentialHasher:
    """Turns passwords into stored secrets and checks them back.

    The ``plain`` scheme keeps the password itself, matching stores written by
    the browser demo. It is only meant for throwaway data.
    """

    def __init__(self, scheme: str = SCHEME_BCRYPT, rounds: int = 12) -> None:
        if scheme not in SCHEMES:
            raise ValueError(f"Unknown credential scheme: {scheme}")
        if scheme == SCHEME_PLAIN:
            logger.warning("Credentials are stored in plaintext. Use the bcrypt scheme outside of demos.")
        self.scheme = scheme
        self.rounds = rounds

    def hash(self, password: str) -> str:
        if self.scheme == SCHEME_PLAIN:
            return password
        return bcrypt.hashpw(
            password.encode("utf-8"), bcrypt.gensalt(rounds=self.rounds)
        ).decode("utf-8")

    def verify(self, password: str, stored: str) -> bool:
        if self.scheme == SCHEME_PLAIN:
            return hmac.compare_digest(password.encode("utf-8"), stored.encode("utf-8"))
        try:
            return bcrypt.checkpw(password.encode("utf-8"), stored.encode("utf-8"))
        except ValueError:
            # Not a bcrypt hash, e.g. a plaintext entry left by the demo.
            return False
