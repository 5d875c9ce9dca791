"""JWT access token handling for Waaranders.

Tokens are issued by the hosted auth service and signed with the project's
shared JWT secret; the subject is the user id, which is also the volunteer id.
"""

import os
import jwt
from datetime import datetime, timedelta
from typing import Optional, Dict
from dotenv import load_dotenv

load_dotenv()

# JWT configuration
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change-me-in-production")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_AUDIENCE = os.getenv("JWT_AUDIENCE") or None
JWT_EXPIRATION_HOURS = int(os.getenv("JWT_EXPIRATION_HOURS", "24"))


def create_access_token(user_id: str, email: Optional[str] = None) -> str:
    """Create a JWT access token for a user (local development and tests).

    Args:
        user_id: User ID to encode in token
        email: Optional email claim

    Returns:
        Encoded JWT token string
    """
    payload = {
        "sub": user_id,
        "exp": datetime.utcnow() + timedelta(hours=JWT_EXPIRATION_HOURS),
        "iat": datetime.utcnow(),
    }
    if email:
        payload["email"] = email
    if JWT_AUDIENCE:
        payload["aud"] = JWT_AUDIENCE
    return jwt.encode(payload, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[Dict]:
    """Decode and validate a JWT access token.

    Args:
        token: JWT token string to decode

    Returns:
        Decoded token payload (dict with 'sub' key for user_id), or None if invalid
    """
    try:
        if JWT_AUDIENCE:
            return jwt.decode(token, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM], audience=JWT_AUDIENCE)
        return jwt.decode(
            token,
            JWT_SECRET_KEY,
            algorithms=[JWT_ALGORITHM],
            options={"verify_aud": False},
        )
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None


def get_user_id_from_token(token: str) -> Optional[str]:
    """Extract user ID from a JWT token.

    Args:
        token: JWT token string

    Returns:
        User ID string, or None if token is invalid
    """
    payload = decode_access_token(token)
    if payload:
        return payload.get("sub")
    return None
