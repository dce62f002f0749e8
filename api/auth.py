"""
Bearer token authentication dependencies.

Access tokens are issued and refreshed by an external identity provider. The API
only needs to map a presented token to a user id, which is done by the active
token verifier: by default a lookup in the API_AUTH_TOKENS mapping, replaceable at
startup with set_token_verifier() (e.g. a JWT verification function).

Two dependencies are provided:
- get_optional_user_id: None for anonymous (guest) requests, 401 for invalid tokens
- get_current_user_id: like the above, but anonymous requests are rejected with 401
"""

import logging
from typing import Callable, Optional

from fastapi import Header, HTTPException, status

from api.config import AuthConfig

logger = logging.getLogger(__name__)

TokenVerifier = Callable[[str], Optional[str]]

SIGN_IN_REQUIRED_MESSAGE = "Please sign up or log in to access grocery list."


def verify_configured_token(token: str) -> Optional[str]:
    """Default verifier: look the token up in API_AUTH_TOKENS."""
    return AuthConfig.get_token_users().get(token)


_token_verifier: TokenVerifier = verify_configured_token


def set_token_verifier(verifier: Optional[TokenVerifier]) -> None:
    """
    Install the function that maps an access token to a user id.

    Passing None restores the default API_AUTH_TOKENS lookup.
    """
    global _token_verifier
    _token_verifier = verifier or verify_configured_token


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_optional_user_id(authorization: Optional[str] = Header(None)) -> Optional[str]:
    """
    Resolve the user id from the Authorization header, if any.

    Returns:
        User id, or None when no credentials were sent

    Raises:
        HTTPException 401: If credentials were sent but are malformed or not valid
    """
    if not authorization:
        return None

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise _unauthorized("Malformed Authorization header. Expected 'Bearer <token>'")

    user_id = _token_verifier(token.strip())
    if not user_id:
        logger.info("Rejected invalid or expired access token")
        raise _unauthorized("Invalid or expired access token")
    return user_id


def get_current_user_id(authorization: Optional[str] = Header(None)) -> str:
    """
    Resolve the user id, rejecting anonymous requests.

    Raises:
        HTTPException 401: If no valid credentials were sent
    """
    user_id = get_optional_user_id(authorization)
    if user_id is None:
        raise _unauthorized(SIGN_IN_REQUIRED_MESSAGE)
    return user_id
