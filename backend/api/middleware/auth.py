"""
Bearer token authentication for account-scoped endpoints.

Only account linking and the data rights endpoints need a signed-in
account; signup, verification, unsubscribe and the delivery webhook are
public. Tokens are Supabase access tokens signed with the project's JWT
secret (HS256, audience ``authenticated``).
"""

from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError

from shared.config import get_settings
from shared.models import AuthenticatedUser
from ..models.token import TokenPayload

JWT_ALGORITHM = "HS256"
JWT_AUDIENCE = "authenticated"

bearer_scheme = HTTPBearer(auto_error=False)


class AuthError(HTTPException):
    """401 with a ``WWW-Authenticate: Bearer`` challenge."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


def decode_token(token: str) -> TokenPayload:
    """
    Verify a token's signature, audience and expiry.

    Raises:
        AuthError: If the secret is not configured or the token is rejected
    """
    secret = get_settings().supabase_jwt_secret
    if not secret:
        raise AuthError("Server authentication not configured")

    try:
        claims = jwt.decode(token, secret, algorithms=[JWT_ALGORITHM], audience=JWT_AUDIENCE)
    except jwt.ExpiredSignatureError:
        raise AuthError("Token has expired")
    except JWTError as e:
        raise AuthError(f"Invalid token: {e}")

    return TokenPayload.model_validate(claims)


def get_user_from_payload(payload: TokenPayload) -> AuthenticatedUser:
    return AuthenticatedUser(
        id=payload.sub,
        email=payload.email,
        email_verified=payload.email_verified,
        last_sign_in=payload.issued_at,
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> AuthenticatedUser:
    """FastAPI dependency resolving the bearer token to its account."""
    if credentials is None:
        raise AuthError("Missing authorization header")

    return get_user_from_payload(decode_token(credentials.credentials))

