# app/exceptions/domain.py
"""Task-domain errors, one class per failure the client must tell apart"""
from fastapi import HTTPException, status


class ProfileNotFoundError(HTTPException):
    """Authenticated, but no profile has been set up yet"""
    def __init__(self):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User profile not found"
        )


class NotAuthorizedError(HTTPException):
    """Role or ownership check failed"""
    def __init__(self, detail: str = "Not authorized to perform this action"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class NotFoundError(HTTPException):
    """Referenced record is absent"""
    def __init__(self, resource: str = "Record"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{resource} not found"
        )


class InvalidStateError(HTTPException):
    """Operation is illegal for the record's current state"""
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class ValidationError(HTTPException):
    """Payload passed schema validation but is still unacceptable"""
    def __init__(self, detail: str):
        super().__init__(status_code=422, detail=detail)
