from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ....application.services.account_service import AccountDirectory
from ....application.services.session_service import SessionManager
from ....core.dependencies import get_account_directory, get_session_manager, get_token_service
from ....domain.errors import DuplicateEmail, InvalidCredentials, NotFound
from ....domain.models import Account
from ....services.token_service import TokenService
from ...api.dependencies import optional_account, require_account
from ...api.schemas.auth import (
    AccountResponse,
    AuthTokenResponse,
    ProfileUpdateRequest,
    SessionResponse,
    SignInRequest,
    SignUpRequest,
)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post("/signup", response_model=AuthTokenResponse, status_code=status.HTTP_201_CREATED)
async def sign_up(
    payload: SignUpRequest,
    directory: AccountDirectory = Depends(get_account_directory),
    tokens: TokenService = Depends(get_token_service),
) -> AuthTokenResponse:
    try:
        account = await directory.register(payload.email, payload.password, payload.full_name, payload.role)
    except DuplicateEmail as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _token_response(account, tokens)


@router.post("/signin", response_model=AuthTokenResponse)
async def sign_in(
    payload: SignInRequest,
    directory: AccountDirectory = Depends(get_account_directory),
    tokens: TokenService = Depends(get_token_service),
) -> AuthTokenResponse:
    try:
        account = await directory.authenticate(payload.email, payload.password)
    except InvalidCredentials as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc
    return _token_response(account, tokens)


@router.post("/signout", status_code=status.HTTP_204_NO_CONTENT)
def sign_out(
    current: Account = Depends(require_account),
    sessions: SessionManager = Depends(get_session_manager),
    directory: AccountDirectory = Depends(get_account_directory),
) -> Response:
    # Only the caller's own process session is closed; the token itself expires on its own.
    if sessions.current is not None and sessions.current.id == current.id:
        directory.sign_out()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/session", response_model=SessionResponse)
def current_session(account: Optional[Account] = Depends(optional_account)) -> SessionResponse:
    return SessionResponse(
        authenticated=account is not None,
        account=AccountResponse.model_validate(account) if account else None,
    )


@router.patch("/profile", response_model=AccountResponse)
def update_profile(
    payload: ProfileUpdateRequest,
    current: Account = Depends(require_account),
    directory: AccountDirectory = Depends(get_account_directory),
) -> Account:
    try:
        return directory.rename_account(current.id, payload.full_name)
    except NotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


def _token_response(account: Account, tokens: TokenService) -> AuthTokenResponse:
    return AuthTokenResponse(
        access_token=tokens.create_token(account),
        account=AccountResponse.model_validate(account),
    )
