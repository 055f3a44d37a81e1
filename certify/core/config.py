import os
from pathlib import Path
from typing import Optional, Sequence

from dotenv import load_dotenv

from ..services.credential_hasher import SCHEMES

STORE_BACKENDS = ("sqlite", "memory")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


class Settings:
    """Centralised application configuration sourced from environment variables."""

    def __init__(self) -> None:
        load_dotenv()
        self.store_backend = self._get_choice("STORE_BACKEND", STORE_BACKENDS, default="sqlite")
        self.database_path = Path(os.getenv("DATABASE_PATH", "data/certify.db")).resolve()
        self.credential_scheme = self._get_choice("CREDENTIAL_SCHEME", SCHEMES, default="bcrypt")
        self.bcrypt_rounds = self._get_int("BCRYPT_ROUNDS", default=12)
        self.legacy_recipient_fallback = self._get_bool("LEGACY_RECIPIENT_FALLBACK", default=False)
        self.session_token_secret = os.getenv("SESSION_TOKEN_SECRET", "change-me")
        self.session_token_exp_minutes = self._get_int("SESSION_TOKEN_EXP_MINUTES", default=60 * 24)
        self.admin_default_email = os.getenv("ADMIN_EMAIL")
        self.admin_default_password = os.getenv("ADMIN_PASSWORD")
        self.admin_default_full_name = os.getenv("ADMIN_FULL_NAME", "Administrator")
        origins = os.getenv("CORS_ALLOW_ORIGINS")
        if origins:
            self.cors_allow_origins = [item.strip() for item in origins.split(",") if item.strip()]
        else:
            self.cors_allow_origins = ["*"]

    @staticmethod
    def _get_int(key: str, default: Optional[int] = None) -> int:
        value = os.getenv(key)
        if value is None:
            if default is None:
                raise RuntimeError(f"Missing required environment variable: {key}")
            return default
        try:
            return int(value)
        except ValueError as exc:
            raise RuntimeError(f"Environment variable {key} must be an integer") from exc

    @staticmethod
    def _get_bool(key: str, default: bool) -> bool:
        value = os.getenv(key)
        if value is None:
            return default
        text = value.strip().lower()
        if text in _TRUE_VALUES:
            return True
        if text in _FALSE_VALUES:
            return False
        raise RuntimeError(f"Environment variable {key} must be a boolean")

    @staticmethod
    def _get_choice(key: str, choices: Sequence[str], default: str) -> str:
        value = os.getenv(key, default).strip().lower()
        if value not in choices:
            raise RuntimeError(f"Environment variable {key} must be one of: {', '.join(choices)}")
        return value
