"""
JWT Token-based authentication utilities for the admin console.
Provides token generation, verification, and the session lookups used by pages and the CMS API.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from fastapi import HTTPException, status, Header, Request
from portfolio.config import settings
from portfolio.utils.auth import verify_admin_password


ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60  # Token expires after 1 hour
TOKEN_COOKIE_NAME = "cms_token"


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token.

    Args:
        data: Dictionary of claims to include in token
        expires_delta: Optional custom expiration time

    Returns:
        str: Encoded JWT token
    """
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))

    to_encode.update({
        "exp": expire,
        "iat": now,
        "type": "access"
    })

    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=ALGORITHM)


def verify_token(token: str) -> dict:
    """
    Verify and decode a JWT token.

    Raises:
        HTTPException: If token is invalid, expired, or malformed
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "Invalid token", "message": "Authentication token is invalid or expired"}
        )

    if payload.get("type") != "access":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "Invalid token type", "message": "Token is not an access token"}
        )

    return payload


def verify_cms_token(
    request: Request,
    authorization: Optional[str] = Header(None, description="Bearer token for authentication (fallback to cookie)")
) -> dict:
    """
    FastAPI dependency for JWT token authentication.
    Reads the token from the httpOnly cookie (preferred) or the Authorization header.

    Raises:
        HTTPException: 401 if token is missing, invalid, or expired
    """
    token = request.cookies.get(TOKEN_COOKIE_NAME)

    if not token and authorization:
        parts = authorization.split()
        if len(parts) == 2 and parts[0].lower() == "bearer":
            token = parts[1]

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "Missing token", "message": "Authentication required"},
            headers={"WWW-Authenticate": "Bearer"}
        )

    return verify_token(token)


def get_admin_session(request: Request) -> Optional[dict]:
    """Token payload for the signed-in admin, or None. Pages redirect instead of answering 401."""
    token = request.cookies.get(TOKEN_COOKIE_NAME)
    if not token:
        return None
    try:
        return verify_token(token)
    except HTTPException:
        return None


def authenticate_user(password: str) -> dict:
    """
    Authenticate the admin with a password and return token data.

    Raises:
        HTTPException: 401 if password is invalid, 500 if no hash is configured
    """
    try:
        valid = verify_admin_password(password)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Server configuration error", "message": "Admin password is not configured"}
        )

    if not valid:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "Invalid credentials", "message": "Incorrect password"}
        )

    return {
        "role": "admin",
        "sub": "cms_admin"
    }
