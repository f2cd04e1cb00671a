# app/api/v1/endpoints/auth.py - Identity provider endpoints
from fastapi import APIRouter, Depends, HTTPException, status, Request
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession
from slowapi.util import get_remote_address
from jose import JWTError

from app.db.database import get_db
from app.auth.security import Hasher, create_user_token, decode_token, token_expiry
from app.auth.dependencies import oauth2_scheme
from app.db.crud.user import get_user_by_email, create_user_db, update_password_hash
from app.db.crud.token import add_to_blacklist, is_jti_blacklisted
from app.api.v1.schemas.auth import Token, UserCreate, UserLogin
from app.db.models import User
from app.core.config import settings
from app.core import tracing
from app.exceptions.auth import (
    InvalidCredentialsError, InactiveUserError, UserAlreadyExistsError, NotAuthenticatedError,
    TokenBlacklistedError
)
from app.middleware.rate_limiting import limiter
from app.utils.helpers import sanitize_email

router = APIRouter()


async def authenticate(db: AsyncSession, username: str, password: str, ip: str) -> User:
    user = await get_user_by_email(db, sanitize_email(username))
    if not user:
        tracing.warning("Login failed - unknown user", username=username, ip=ip)
        raise InvalidCredentialsError()

    verified, new_hash = Hasher.verify_and_update(password, user.hashed_password)
    if not verified:
        tracing.warning("Login failed - invalid credentials", username=username, ip=ip)
        raise InvalidCredentialsError()

    if not user.is_active:
        tracing.warning("Login failed - account inactive", username=username, ip=ip)
        raise InactiveUserError()

    if new_hash:
        user = await update_password_hash(db, user, new_hash)

    tracing.info("Login successful", email=user.email, user_id=user.id, ip=ip)
    return user


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def register_user(request: Request, user_in: UserCreate, db: AsyncSession = Depends(get_db)):
    ip = get_remote_address(request)
    email = sanitize_email(user_in.email)
    tracing.info("Registration attempt", email=email, ip=ip)

    existing_user = await get_user_by_email(db, email)
    if existing_user:
        tracing.warning("Registration failed - user exists", email=email, ip=ip)
        raise UserAlreadyExistsError()

    user_data = {"email": email, "hashed_password": Hasher.get_password_hash(user_in.password)}

    try:
        user = await create_user_db(db, user_data)
    except Exception as e:
        tracing.error("Failed to create user", email=email, ip=ip, error=str(e))
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Could not create user.")

    tracing.info("User registered successfully", email=user.email, user_id=user.id, ip=ip)
    return create_user_token(user)


@router.post("/login", response_model=Token)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login_for_access_token(request: Request, form_data: OAuth2PasswordRequestForm = Depends(), db: AsyncSession = Depends(get_db)):
    ip = get_remote_address(request)
    tracing.info("Login attempt", username=form_data.username, ip=ip)
    user = await authenticate(db, form_data.username, form_data.password, ip)
    return create_user_token(user)


@router.post("/login-json", response_model=Token)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login_via_json(request: Request, user_login: UserLogin, db: AsyncSession = Depends(get_db)):
    ip = get_remote_address(request)
    tracing.info("JSON login attempt", username=user_login.username, ip=ip)
    user = await authenticate(db, user_login.username, user_login.password, ip)
    return create_user_token(user)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
@limiter.limit("20/minute")
async def logout(request: Request, access_token: str = Depends(oauth2_scheme), db: AsyncSession = Depends(get_db)):
    """Revoke the presented bearer token until it would have expired anyway"""
    ip = get_remote_address(request)
    tracing.info("Logout attempt", ip=ip)

    if not access_token:
        raise NotAuthenticatedError()

    try:
        payload = decode_token(access_token)
    except JWTError:
        tracing.warning("Invalid token for logout", ip=ip)
        raise NotAuthenticatedError()

    jti = payload.get("jti")
    expires_at = token_expiry(payload)
    if jti is None or expires_at is None:
        tracing.warning("Token without jti/exp presented for logout", ip=ip)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid token for logout.")

    if await is_jti_blacklisted(db, jti):
        raise TokenBlacklistedError()

    await add_to_blacklist(db, jti, expires_at)
    tracing.info("Logout successful", email=payload.get("sub"), ip=ip)
