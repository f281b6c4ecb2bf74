from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from passlib.context import CryptContext
from sqlalchemy.orm import Session
from linkshelf.core.database import get_db
from linkshelf.core.config import settings
from linkshelf.core.exceptions import Unauthenticated
from linkshelf.core.logging_config import log_security_event, get_client_ip
from linkshelf.models.user import User
from typing import Optional
from datetime import datetime, timedelta, timezone
import logging
import uuid

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

pwd_context = CryptContext(
    schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.BCRYPT_ROUNDS
)

# Token claim carrying the user identifier
USER_ID_CLAIM = "userId"


def hash_password(password: str) -> str:
    """Salted one-way hash of a plaintext password."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed JWT access token for a user.

    Args:
        user_id: Identifier embedded in the ``userId`` claim
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token
    """
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {
        USER_ID_CLAIM: str(user_id),
        "exp": now + expires_delta,
        "iat": now,
        "jti": str(uuid.uuid4()),  # JWT ID for tracking
        "type": "access",
    }

    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict:
    """
    Decode and validate a JWT access token.

    Signature, expiry and token type are checked; any failure is reported
    to the client as the same "Invalid token" error.

    Raises:
        Unauthenticated: If the token is invalid, expired or of the wrong type
    """
    try:
        payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM]
        )
    except jwt.ExpiredSignatureError:
        logger.warning("Token expired")
        raise Unauthenticated("Invalid token")
    except JWTError as e:
        logger.warning(f"JWT decode error: {e}")
        raise Unauthenticated("Invalid token")

    if payload.get("type") != "access":
        logger.warning(f"Token type mismatch: got {payload.get('type')}")
        raise Unauthenticated("Invalid token")

    return payload


def user_id_from_payload(payload: dict) -> int:
    try:
        return int(payload[USER_ID_CLAIM])
    except (KeyError, ValueError, TypeError):
        raise Unauthenticated("Invalid token")


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the bearer token in the Authorization header to a user.

    The returned user is the request's identity; handlers pass
    ``current_user.id`` explicitly into every repository call.
    """
    if not credentials:
        raise Unauthenticated("Authentication required")

    try:
        user_id = user_id_from_payload(decode_token(credentials.credentials))
    except Unauthenticated:
        log_security_event(
            event_type="auth.token.invalid",
            message="Rejected invalid bearer token",
            level=logging.WARNING,
            ip_address=get_client_ip(request),
            request_method=request.method,
            request_path=request.url.path,
            event_category="authentication",
        )
        raise

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise Unauthenticated("User not found")

    return user
