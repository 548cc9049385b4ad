from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
from fastapi import status
import jwt
from typing import Any, Dict, Optional, Tuple
from storefront.core.config import settings
from storefront.core.errors import AuthError

CLAIM_KEYS = ('id', 'username', 'email', 'role')

pwd_ctx = CryptContext(schemes=['bcrypt'], deprecated='auto', bcrypt__rounds=settings.BCRYPT_ROUNDS)

def hash_password(p: str) -> str: return pwd_ctx.hash(p)

def verify_password(p: str, h: str) -> bool: return pwd_ctx.verify(p, h)

def now_utc() -> datetime: return datetime.now(timezone.utc)

def create_access_token(claims: Dict[str, Any], secret: Optional[str] = None, expires_in: Optional[int] = None) -> Tuple[str, datetime]:
    lifetime = settings.JWT_EXPIRES_SECONDS if expires_in is None else expires_in
    exp = now_utc() + timedelta(seconds=lifetime)
    payload = {k: claims[k] for k in CLAIM_KEYS}
    payload['exp'] = exp
    return jwt.encode(payload, secret or settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM), exp

def decode_token(token: str, secret: Optional[str] = None) -> Dict[str, Any]:
    return jwt.decode(token, secret or settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])

def verify_token(token: Optional[str]) -> Dict[str, Any]:
    """Return the identity claims carried by ``token``.

    No database lookup is made: claims are trusted as of issuance, so a role
    or password change takes effect only once older tokens expire.
    """
    if not token:
        raise AuthError('Access token required')
    try:
        payload = decode_token(token)
    except jwt.InvalidTokenError:
        raise AuthError('Invalid or expired token', status_code=status.HTTP_403_FORBIDDEN)
    if any(payload.get(k) is None for k in CLAIM_KEYS):
        raise AuthError('Invalid or expired token', status_code=status.HTTP_403_FORBIDDEN)
    return payload
