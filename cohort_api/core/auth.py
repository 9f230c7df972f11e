"""
Authentication Utility - JWT and Password handling.

Provides:
- Password hashing with bcrypt (random salt per hash)
- JWT token creation/verification
- FastAPI dependency for protected routes
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from cohort_api.core.config import get_settings
from cohort_api.core.errors import unauthenticated

settings = get_settings()

# Password hashing
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)

# Bearer token extractor. auto_error is off so a missing header is a 401
# from our own handler instead of FastAPI's default response.
bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    return pwd_context.verify(plain_password, hashed_password)


def dummy_verify() -> None:
    """Spend the same time as a real verify (login with an unknown email)."""
    pwd_context.dummy_verify()


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(days=settings.jwt_expire_days))
    to_encode.update({"iat": now, "exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Optional[dict]:
    """Decode and verify JWT token (signature and expiry)."""
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> dict:
    """
    FastAPI dependency - decoded claims of the bearer token.

    Usage:
        @app.get("/protected")
        def route(claims: dict = Depends(get_current_user)):
            return claims
    """
    if credentials is None:
        raise unauthenticated()

    payload = decode_token(credentials.credentials)
    if not payload or not payload.get("sub"):
        raise unauthenticated()

    return payload
