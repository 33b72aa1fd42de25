from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from papermark.config import settings
from papermark.schemas.auth import TokenData


def create_access_token(user_id: str) -> str:
    expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    payload = {"sub": user_id, "exp": expire}
    return jwt.encode(payload, settings.secret_key, algorithm=settings.access_token_algorithm)


def decode_token(token: str) -> TokenData:
    payload = jwt.decode(token, settings.secret_key, algorithms=[settings.access_token_algorithm])
    user_id: str | None = payload.get("sub")
    if user_id is None:
        raise JWTError("missing sub")
    return TokenData(user_id=user_id)
