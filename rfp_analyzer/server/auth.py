"""Bearer token handling. Tokens are issued elsewhere; this side only verifies them."""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt


class InvalidTokenError(Exception):
    """Raised when a bearer token is missing, malformed, expired or lacks a user id."""


def create_access_token(
    user_id: str,
    secret: str,
    algorithm: str = "HS256",
    expires_in: timedelta = timedelta(hours=1),
) -> str:
    payload = {
        "user_id": user_id,
        "type": "access",
        "exp": datetime.now(timezone.utc) + expires_in,
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_owner_id(token: str, secret: str, algorithm: str = "HS256") -> str:
    """Return the ``user_id`` claim of a valid token.

    Raises:
        InvalidTokenError: if the signature, expiry or claim is bad.
    """
    if not secret:
        raise InvalidTokenError("JWT secret is not configured")
    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm])
    except JWTError as exc:
        raise InvalidTokenError(str(exc)) from exc

    user_id = payload.get("user_id")
    if not user_id:
        raise InvalidTokenError("Token has no user_id claim")
    return str(user_id)
