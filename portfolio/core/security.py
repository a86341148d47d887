from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from werkzeug.security import check_password_hash, generate_password_hash

from portfolio.core.config import settings

ALGORITHM = "HS256"
ACCESS_TOKEN_COOKIE = "access_token"


def create_access_token(subject: str, expires_delta: timedelta | None = None) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    return jwt.encode({"sub": subject, "exp": expire}, settings.SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> str | None:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
    subject = payload.get("sub")
    return subject if isinstance(subject, str) else None


def is_owner_email(email: str | None) -> bool:
    if not email or not settings.OWNER_EMAIL:
        return False
    return email.strip().lower() == settings.OWNER_EMAIL.strip().lower()


def hash_password(raw_password: str) -> str:
    return generate_password_hash(raw_password, method="pbkdf2:sha256", salt_length=16)


def verify_password(raw_password: str, password_hash: str) -> bool:
    return check_password_hash(password_hash, raw_password)


def verify_owner_credentials(email: str, password: str) -> bool:
    if not settings.OWNER_EMAIL or not settings.OWNER_PASSWORD_HASH:
        return False
    if not is_owner_email(email):
        return False
    return verify_password(password, settings.OWNER_PASSWORD_HASH)
