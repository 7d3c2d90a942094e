"""
Auth routes - account registration, login and profile management.
"""
import logging
from fastapi import APIRouter, Depends, Request, status

from ..auth import TokenClaims
from ..dependencies import get_auth_service, get_current_account
from ..error_handlers import unwrap
from ..errors import ErrorKind
from ..schemas import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    ProfileResponse,
    RegisterAccountRequest,
    UpdateProfileRequest,
)
from ..service import AuthService
from ..utils.event_logger import log_auth_event

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/registerAccount", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register_account(
    payload: RegisterAccountRequest,
    request: Request,
    service: AuthService = Depends(get_auth_service),
):
    result = service.register_account(
        name=payload.name,
        username=payload.username,
        email=payload.email,
        password=payload.password,
    )
    if not result.is_ok and result.error.kind == ErrorKind.DUPLICATE_ACCOUNT:
        log_auth_event("register_duplicate", request, email=payload.email)

    registered = unwrap(result)
    log_auth_event("register_success", request, account_id=registered.account_id, email=payload.email)
    return AuthResponse(
        message="Account created successfully.",
        token=registered.token,
        accountId=registered.account_id,
    )


@router.post("/login", response_model=AuthResponse)
def login(
    payload: LoginRequest,
    request: Request,
    service: AuthService = Depends(get_auth_service),
):
    result = service.login(email=payload.email, password=payload.password)
    if not result.is_ok:
        log_auth_event("login_failure", request, email=payload.email)

    logged_in = unwrap(result)
    log_auth_event("login_success", request, account_id=logged_in.account_id, email=payload.email)
    return AuthResponse(
        message="Login successful.",
        token=logged_in.token,
        accountId=logged_in.account_id,
    )


@router.get("/profile", response_model=ProfileResponse)
def get_profile(
    claims: TokenClaims = Depends(get_current_account),
    service: AuthService = Depends(get_auth_service),
):
    profile = unwrap(service.get_profile(claims.subject_id))
    return ProfileResponse(**profile.to_dict())


@router.put("/updateProfile", response_model=MessageResponse)
def update_profile(
    payload: UpdateProfileRequest,
    request: Request,
    claims: TokenClaims = Depends(get_current_account),
    service: AuthService = Depends(get_auth_service),
):
    """
    Partially update the caller's profile.

    The account comes from the verified bearer token, never from the body.
    """
    fields = payload.changed_fields()
    unwrap(service.update_profile(claims.subject_id, fields))
    log_auth_event("profile_update", request, account_id=claims.subject_id, email=claims.email)
    logger.debug("Profile fields updated for %s: %s", claims.subject_id, sorted(fields))
    return MessageResponse(message="Profile updated successfully.")
