from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from ...domain.errors import DuplicateEmail, InvalidCredentials, NotFound
from ...domain.models import ROLE_ADMIN, ROLES, Account
from ...domain.ports.persistence import AccountRepository, CredentialRepository
from ...services.credential_hasher import CredentialHasher
from .session_service import SessionManager

logger = logging.getLogger(__name__)


class AccountDirectory:
    """Registered accounts, their credentials and the sign-in flows."""

    def __init__(
        self,
        accounts: AccountRepository,
        credentials: CredentialRepository,
        sessions: SessionManager,
        hasher: CredentialHasher,
    ) -> None:
        self._accounts = accounts
        self._credentials = credentials
        self._sessions = sessions
        self._hasher = hasher

    # Queries ----------------------------------------------------------------
    def list_accounts(self) -> List[Account]:
        return self._accounts.load_accounts()

    def get(self, account_id: str) -> Optional[Account]:
        return next((item for item in self._accounts.load_accounts() if item.id == account_id), None)

    def get_by_email(self, email: str) -> Optional[Account]:
        return next((item for item in self._accounts.load_accounts() if item.email == email), None)

    def first_with_role(self, role: str) -> Optional[Account]:
        return next((item for item in self._accounts.load_accounts() if item.role == role), None)

    # Authentication flows ---------------------------------------------------
    async def register(self, email: str, password: str, full_name: str, role: str) -> Account:
        """
        Create an account and sign it in.

        Raises:
            DuplicateEmail: If an account already uses ``email``
            ValueError: If the email or password is empty, or the role is unknown
        """
        account = self._create_account(email, password, full_name, role)
        self._sessions.establish(account)
        return account

    async def authenticate(self, email: str, password: str) -> Account:
        account = self.get_by_email(email)
        if account is None:
            raise InvalidCredentials("Invalid email or password.")
        stored = self._credentials.load_credentials().get(email)
        if stored is None or not self._hasher.verify(password, stored):
            raise InvalidCredentials("Invalid email or password.")
        self._sessions.establish(account)
        return account

    async def update_display_name(self, account_id: str, full_name: str) -> Account:
        self._sessions.require()
        return self.rename_account(account_id, full_name)

    def rename_account(self, account_id: str, full_name: str) -> Account:
        """Rename without consulting the process session.

        Callers authenticate the actor themselves, e.g. the HTTP layer with a
        bearer token.
        """
        clean_name = full_name.strip()
        if not clean_name:
            raise ValueError("Full name cannot be empty.")

        accounts = self._accounts.load_accounts()
        for index, item in enumerate(accounts):
            if item.id == account_id:
                break
        else:
            raise NotFound(f"Account {account_id} not found.")

        updated = item.renamed(clean_name)
        accounts[index] = updated
        self._accounts.save_accounts(accounts)
        self._sessions.refresh(updated)
        logger.info("Account %s renamed", account_id)
        return updated

    def sign_out(self) -> None:
        self._sessions.sign_out()

    # Bootstrap --------------------------------------------------------------
    def ensure_default_admin(
        self,
        email: Optional[str],
        password: Optional[str],
        full_name: str = "Administrator",
    ) -> Optional[Account]:
        if not email or not password:
            return None
        existing = self.get_by_email(email)
        if existing:
            return existing
        logger.info("Creating default administrator account for %s", email)
        return self._create_account(email, password, full_name, ROLE_ADMIN)

    # Internal helpers -------------------------------------------------------
    def _create_account(self, email: str, password: str, full_name: str, role: str) -> Account:
        if not email:
            raise ValueError("Email is required.")
        if not password:
            raise ValueError("Password is required.")
        if role not in ROLES:
            raise ValueError(f"Unknown role: {role}")

        accounts = self._accounts.load_accounts()
        if any(item.email == email for item in accounts):
            raise DuplicateEmail("User with this email already exists.")
        credentials = self._credentials.load_credentials()
        credentials[email] = self._hasher.hash(password)

        account = Account(
            id=str(uuid.uuid4()),
            email=email,
            full_name=full_name.strip(),
            role=role,
            created_at=datetime.now(timezone.utc),
        )
        accounts.append(account)
        self._credentials.save_credentials(credentials)
        self._accounts.save_accounts(accounts)
        logger.info("Account %s (%s) registered as %s", account.id, email, role)
        return account
