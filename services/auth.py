from datetime import datetime, timedelta, timezone
import secrets
import string

import jwt
from argon2 import PasswordHasher, exceptions as argon_exc

from config import settings

_ALGO = "HS256"
_ph = PasswordHasher()

_TOKEN_ALPHABET = string.ascii_lowercase + string.digits


def create_token(account_id: str, ttl_minutes: int | None = None) -> str:
    ttl = settings.jwt_ttl_minutes if ttl_minutes is None else ttl_minutes
    exp = datetime.now(timezone.utc) + timedelta(minutes=ttl)
    payload = {"sub": account_id, "exp": exp}
    return jwt.encode(payload, settings.jwt_secret, algorithm=_ALGO)


def verify_token(token: str) -> str:
    """Return the account id carried by `token`.

    Raises jwt.InvalidTokenError (or a subclass such as ExpiredSignatureError)
    when the token is malformed, expired or signed with another secret.
    """
    payload = jwt.decode(token, settings.jwt_secret, algorithms=[_ALGO])
    sub = payload.get("sub")
    if not isinstance(sub, str) or not sub:
        raise jwt.InvalidTokenError("token has no subject")
    return sub


def hash_password(password: str) -> str:
    return _ph.hash(password)


def verify_password(password: str, stored_hash: str | None) -> bool:
    if not stored_hash:
        return False
    try:
        return _ph.verify(stored_hash, password)
    except (argon_exc.VerifyMismatchError, argon_exc.VerificationError, argon_exc.InvalidHashError):
        return False


def generate_verification_token(length: int = 13) -> str:
    # opaque lookup key for the email link, not a credential
    return "".join(secrets.choice(_TOKEN_ALPHABET) for _ in range(length))
