# app/exceptions/auth.py
from fastapi import HTTPException, status

class AuthenticationError(HTTPException):
    """Base authentication error"""
    def __init__(self, detail: str = "Authentication failed"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"}
        )

class NotAuthenticatedError(AuthenticationError):
    """No resolvable caller identity"""
    def __init__(self):
        super().__init__(detail="Not authenticated")

class InvalidCredentialsError(AuthenticationError):
    """Invalid username/password"""
    def __init__(self):
        super().__init__(detail="Incorrect username or password")

class TokenBlacklistedError(AuthenticationError):
    """Token has been blacklisted"""
    def __init__(self):
        super().__init__(detail="Token has been revoked")

class InactiveUserError(HTTPException):
    """User account is inactive"""
    def __init__(self):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is inactive"
        )

class UserAlreadyExistsError(HTTPException):
    """User already exists"""
    def __init__(self):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail="User with this email already exists"
        )
