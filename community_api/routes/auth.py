"""
Authentication API Routes
Join / login / refresh for guests, members and admins, plus member password reset.

Each role is reachable under two aliases (``member`` and ``memberUser``,
``admin`` and ``adminUser``, ``guest`` and ``guestUser``); both aliases
share the same handlers and accounts.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ConfigDict, Field
from sqlmodel import Session

from community_api.database import get_session
from community_api.services import auth_service

router = APIRouter()


# ============================================================================
# Request/Response Models
# ============================================================================


class TokenResponse(BaseModel):
    access: str
    refresh: str
    expired_at: datetime
    refreshable_until: datetime


class MemberResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    display_name: Optional[str] = None
    is_active: bool
    last_login_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class AdminResponse(MemberResponse):
    is_super_admin: bool


class GuestResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    guest_identifier: str
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: datetime


class MemberAuthorized(BaseModel):
    token: TokenResponse
    member: MemberResponse


class AdminAuthorized(BaseModel):
    token: TokenResponse
    admin: AdminResponse


class GuestAuthorized(BaseModel):
    token: TokenResponse
    guest: GuestResponse


class GuestJoinRequest(BaseModel):
    device_fingerprint: Optional[str] = None


class AccountJoinRequest(BaseModel):
    email: str = Field(min_length=3, max_length=254)
    password: str = Field(max_length=128)
    display_name: Optional[str] = Field(default=None, max_length=100)
    device_fingerprint: Optional[str] = None


class LoginRequest(BaseModel):
    email: str
    password: str
    device_fingerprint: Optional[str] = None


class RefreshRequest(BaseModel):
    refresh_token: str


class PasswordResetInitiateRequest(BaseModel):
    email: str


class PasswordResetCompleteRequest(BaseModel):
    reset_token: str
    new_password: str = Field(max_length=128)


class MessageResponse(BaseModel):
    message: str


# ============================================================================
# Guest
# ============================================================================


@router.post("/auth/guest/join", response_model=GuestAuthorized, status_code=201)
@router.post("/auth/guestUser/join", response_model=GuestAuthorized, status_code=201)
def join_guest(
    http_request: Request,
    request: Optional[GuestJoinRequest] = None,
    session: Session = Depends(get_session),
):
    """Create an anonymous guest identity and return its tokens."""
    guest, tokens = auth_service.join_guest(
        session,
        ip_address=http_request.client.host if http_request.client else None,
        user_agent=http_request.headers.get("user-agent"),
        device_fingerprint=request.device_fingerprint if request else None,
    )
    return {"token": tokens, "guest": guest}


@router.post("/auth/guest/refresh", response_model=GuestAuthorized)
@router.post("/auth/guestUser/refresh", response_model=GuestAuthorized)
def refresh_guest(request: RefreshRequest, session: Session = Depends(get_session)):
    guest, tokens = auth_service.refresh(session, "guest", request.refresh_token)
    return {"token": tokens, "guest": guest}


# ============================================================================
# Member
# ============================================================================


@router.post("/auth/member/join", response_model=MemberAuthorized, status_code=201)
@router.post("/auth/memberUser/join", response_model=MemberAuthorized, status_code=201)
def join_member(request: AccountJoinRequest, session: Session = Depends(get_session)):
    """
    Register a member account.

    - email must not already be registered (409)
    - password needs 8+ characters with a letter and a digit (400)
    """
    member, tokens = auth_service.join_account(
        session,
        "member",
        email=request.email,
        password=request.password,
        display_name=request.display_name,
        device_fingerprint=request.device_fingerprint,
    )
    return {"token": tokens, "member": member}


@router.post("/auth/member/login", response_model=MemberAuthorized)
@router.post("/auth/memberUser/login", response_model=MemberAuthorized)
def login_member(request: LoginRequest, session: Session = Depends(get_session)):
    member, tokens = auth_service.login(
        session, "member", request.email, request.password, request.device_fingerprint
    )
    return {"token": tokens, "member": member}


@router.post("/auth/member/refresh", response_model=MemberAuthorized)
@router.post("/auth/memberUser/refresh", response_model=MemberAuthorized)
def refresh_member(request: RefreshRequest, session: Session = Depends(get_session)):
    member, tokens = auth_service.refresh(session, "member", request.refresh_token)
    return {"token": tokens, "member": member}


@router.post("/auth/member/password/reset/initiate", response_model=MessageResponse, status_code=202)
def initiate_password_reset(request: PasswordResetInitiateRequest, session: Session = Depends(get_session)):
    """
    Start a password reset.

    Always answers the same way whether or not the email belongs to an
    active member. Delivery of the reset token is handled out of band.
    """
    auth_service.initiate_password_reset(session, request.email)
    return {"message": "If the email is registered, a reset token has been issued"}


@router.post("/auth/member/password/reset/complete", response_model=MessageResponse)
def complete_password_reset(request: PasswordResetCompleteRequest, session: Session = Depends(get_session)):
    auth_service.complete_password_reset(session, request.reset_token, request.new_password)
    return {"message": "Password has been reset"}


# ============================================================================
# Admin
# ============================================================================


@router.post("/auth/admin/join", response_model=AdminAuthorized, status_code=201)
@router.post("/auth/adminUser/join", response_model=AdminAuthorized, status_code=201)
def join_admin(request: AccountJoinRequest, session: Session = Depends(get_session)):
    admin, tokens = auth_service.join_account(
        session,
        "admin",
        email=request.email,
        password=request.password,
        display_name=request.display_name,
        device_fingerprint=request.device_fingerprint,
    )
    return {"token": tokens, "admin": admin}


@router.post("/auth/admin/login", response_model=AdminAuthorized)
@router.post("/auth/adminUser/login", response_model=AdminAuthorized)
def login_admin(request: LoginRequest, session: Session = Depends(get_session)):
    admin, tokens = auth_service.login(
        session, "admin", request.email, request.password, request.device_fingerprint
    )
    return {"token": tokens, "admin": admin}


@router.post("/auth/admin/refresh", response_model=AdminAuthorized)
@router.post("/auth/adminUser/refresh", response_model=AdminAuthorized)
def refresh_admin(request: RefreshRequest, session: Session = Depends(get_session)):
    admin, tokens = auth_service.refresh(session, "admin", request.refresh_token)
    return {"token": tokens, "admin": admin}
