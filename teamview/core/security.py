# teamview/core/security.py

import hashlib
import hmac
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional, Any, Dict
from jose import JWTError, jwt
from teamview.core.settings import settings

from fastapi.security import OAuth2PasswordBearer

# Настройки
ALGORITHM = settings.JWT_ALGORITHM
ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES
PASSWORD_HASH_ITERATIONS = 260_000

def create_access_token(
    data: dict,
    expires_delta: Optional[timedelta] = None
) -> tuple[str, datetime]:
    """
    Генерирует access token (JWT) и возвращает (token, expire_time)
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire, "type": "access"})
    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=ALGORITHM)
    return encoded_jwt, expire

def verify_access_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Декодирует и валидирует access token.
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
        if payload.get("type") != "access":
            return None
        return payload
    except JWTError:
        return None

def get_password_hash(password: str) -> str:
    """
    Хэш пароля в формате pbkdf2_sha256$<iterations>$<salt>$<hash>.
    """
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), PASSWORD_HASH_ITERATIONS)
    return f"pbkdf2_sha256${PASSWORD_HASH_ITERATIONS}${salt}${digest.hex()}"

def verify_password(password: str, password_hash: str) -> bool:
    try:
        algorithm, iterations, salt, expected = password_hash.split("$")
    except ValueError:
        return False
    if algorithm != "pbkdf2_sha256":
        return False
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), int(iterations))
    return hmac.compare_digest(digest.hex(), expected)

# FastAPI OAuth2 scheme (используется в Depends)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")
