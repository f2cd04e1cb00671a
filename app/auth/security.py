# app/auth/security.py
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from jose import JWTError, jwt
from passlib.context import CryptContext
from loguru import logger

from app.core.config import settings

import uuid

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class Hasher:
    """
    Password hashing for the identity provider.
    """

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        return pwd_context.verify(plain_password, hashed_password)

    @staticmethod
    def verify_and_update(plain_password: str, hashed_password: str) -> Tuple[bool, Optional[str]]:
        """
        Verify, and return a fresh hash when the stored one uses outdated
        parameters (e.g. a lower bcrypt cost).
        """
        return pwd_context.verify_and_update(plain_password, hashed_password)

    @staticmethod
    def get_password_hash(password: str) -> str:
        return pwd_context.hash(password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Sign a bearer token. Every token carries a 'jti' so logout can revoke it.
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire, "jti": str(uuid.uuid4()), "type": "access"})

    return jwt.encode(
        to_encode, settings.JWT_SECRET_KEY.get_secret_value(), algorithm=settings.ALGORITHM
    )


def create_user_token(user) -> dict:
    """Token response body for a freshly authenticated user"""
    access_token = create_access_token(data={"sub": user.email, "user_id": user.id})
    return {"access_token": access_token, "token_type": "bearer"}


def decode_token(token: str) -> dict:
    """
    Decode and verify a token. Raises JWTError if it is invalid or expired.
    """
    try:
        return jwt.decode(
            token, settings.JWT_SECRET_KEY.get_secret_value(), algorithms=[settings.ALGORITHM]
        )
    except JWTError as e:
        logger.warning(f"JWT decoding error: {e}")
        raise


def token_expiry(payload: dict) -> Optional[datetime]:
    """The 'exp' claim as an aware datetime"""
    exp = payload.get("exp")
    if exp is None:
        return None
    return datetime.fromtimestamp(exp, tz=timezone.utc)
