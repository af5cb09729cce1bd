"""
Auth gate for the account routes.

The session token travels in `x-auth-token`; `Authorization: Bearer <token>`
is accepted as well. Tokens are stateless: nothing is revoked before `exp`.
"""
import logging

import jwt
from fastapi import Request
from fastapi.security.utils import get_authorization_scheme_param

from api.errors import Unauthorized
from services.auth import verify_token

logger = logging.getLogger(__name__)

TOKEN_HEADER = "x-auth-token"


def _extract_token(request: Request) -> str | None:
    token = request.headers.get(TOKEN_HEADER)
    if token:
        return token
    scheme, param = get_authorization_scheme_param(request.headers.get("Authorization"))
    if scheme.lower() == "bearer" and param:
        return param
    return None


def get_current_account_id(request: Request) -> str:
    """Resolve the session token to an account id and keep it on request.state."""
    token = _extract_token(request)
    if not token:
        raise Unauthorized("No token, authorization denied")
    try:
        account_id = verify_token(token)
    except jwt.InvalidTokenError as e:
        logger.info("Rejected session token: %s", e)
        raise Unauthorized("Token is not valid")
    request.state.account_id = account_id
    return account_id
