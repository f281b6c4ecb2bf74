from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session
import logging

from linkshelf.core.database import get_db
from linkshelf.core.auth import get_current_user
from linkshelf.core.exceptions import DuplicateEmail, InvalidCredentials
from linkshelf.core.logging_config import log_security_event, get_client_ip
from linkshelf.models.user import User
from linkshelf.schemas.user import (
    AuthResponse,
    User as UserSchema,
    UserCreate,
    UserLogin,
)
from linkshelf.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    request: Request,
    payload: UserCreate,
    db: Session = Depends(get_db),
):
    """Create an account and return it with a bearer token."""
    client_ip = get_client_ip(request)
    try:
        user, token = AuthService(db).register(
            email=payload.email, password=payload.password, name=payload.name
        )
    except DuplicateEmail:
        log_security_event(
            event_type="auth.register.duplicate",
            message="Registration attempted with an existing email",
            level=logging.WARNING,
            ip_address=client_ip,
            request_method="POST",
            request_path="/api/auth/register",
            event_category="authentication",
        )
        raise

    log_security_event(
        event_type="auth.register.success",
        message="New user account created",
        user_id=user.id,
        username=user.email,
        ip_address=client_ip,
        request_method="POST",
        request_path="/api/auth/register",
        event_category="authentication",
    )

    return {"user": user, "token": token}


@router.post("/login", response_model=AuthResponse)
def login(
    request: Request,
    payload: UserLogin,
    db: Session = Depends(get_db),
):
    """Exchange email and password for a bearer token."""
    client_ip = get_client_ip(request)
    try:
        user, token = AuthService(db).login(payload.email, payload.password)
    except InvalidCredentials:
        log_security_event(
            event_type="auth.login.failure",
            message="Login failed",
            level=logging.WARNING,
            ip_address=client_ip,
            request_method="POST",
            request_path="/api/auth/login",
            event_category="authentication",
        )
        raise

    log_security_event(
        event_type="auth.login.success",
        message="User logged in successfully",
        user_id=user.id,
        username=user.email,
        ip_address=client_ip,
        request_method="POST",
        request_path="/api/auth/login",
        event_category="authentication",
    )

    return {"user": user, "token": token}


@router.get("/me", response_model=UserSchema)
def get_me(current_user: User = Depends(get_current_user)):
    """Get the authenticated user."""
    return current_user
