from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ...application.services.account_service import AccountDirectory
from ...core.dependencies import get_account_directory, get_token_service
from ...domain.models import ROLE_USER, Account
from ...services.token_service import InvalidToken, TokenService

_bearer_scheme = HTTPBearer(auto_error=False)


def optional_account(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
    directory: AccountDirectory = Depends(get_account_directory),
) -> Optional[Account]:
    """Resolve the caller from its bearer token, or ``None`` when it sent none."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        return None
    try:
        account_id = tokens.account_id(credentials.credentials)
    except InvalidToken as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc
    account = directory.get(account_id)
    if account is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Account not found.")
    return account


def require_account(account: Optional[Account] = Depends(optional_account)) -> Account:
    if account is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token missing.")
    return account


def require_admin(account: Account = Depends(require_account)) -> Account:
    if not account.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Administrator role required.")
    return account


def require_user(account: Account = Depends(require_account)) -> Account:
    if account.role != ROLE_USER:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User role required.")
    return account
