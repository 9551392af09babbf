"""Bearer token helpers used to resolve the acting account."""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from social_notifications.config import get_settings


def create_access_token(account_id: int, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode(
        {"sub": str(account_id), "exp": expire},
        settings.secret_key,
        algorithm=settings.access_token_algorithm,
    )


def decode_access_token(token: str) -> dict:
    settings = get_settings()
    try:
        return jwt.decode(
            token, settings.secret_key, algorithms=[settings.access_token_algorithm]
        )
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


def resolve_account_id(token: str) -> int:
    """Return the account id carried in the ``sub`` claim of ``token``."""

    payload = decode_access_token(token)
    subject = payload.get("sub")
    try:
        account_id = int(subject)
    except (TypeError, ValueError) as exc:
        raise ValueError("Token subject is not an account id") from exc
    if account_id <= 0:
        raise ValueError("Token subject is not an account id")
    return account_id
