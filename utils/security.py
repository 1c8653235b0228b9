import hmac
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

# bcrypt 는 72바이트까지만 사용
_BCRYPT_MAX_BYTES = 72


def _to_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 10) -> str:
    return bcrypt.hashpw(_to_bytes(password), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(_to_bytes(password), hashed.encode("utf-8"))
    except ValueError:
        # 저장된 값이 bcrypt 해시 형식이 아님
        return False


def create_access_token(payload: dict, secret: str, algorithm: str = "HS256",
                        expires_minutes: int = 60 * 24 * 7, now: datetime | None = None) -> str:
    issued = now or datetime.now(timezone.utc)
    claims = dict(payload)
    claims["iat"] = issued
    claims["exp"] = issued + timedelta(minutes=expires_minutes)
    return jwt.encode(claims, secret, algorithm=algorithm)


def decode_access_token(token: str, secret: str, algorithm: str = "HS256") -> dict:
    """서명/만료 검증 후 클레임 반환. 실패 시 jwt.InvalidTokenError 계열 예외"""
    return jwt.decode(token, secret, algorithms=[algorithm], options={"require": ["exp"]})


def secrets_match(given: str | None, expected: str | None) -> bool:
    # 타이밍 안전 비교
    if not given or not expected:
        return False
    return hmac.compare_digest(given.encode("utf-8"), expected.encode("utf-8"))
