from typing import Optional

from fastapi import HTTPException, status


class BadRequestException(HTTPException):
    """Well-formed input that breaks a business rule."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=message or "Bad Request")


class UnauthorizedException(HTTPException):
    """The actor could not be confirmed against the store."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=message or "Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenException(HTTPException):
    """The actor lacks the role or company relationship for this resource."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=message or "Forbidden")


class NotFoundException(HTTPException):
    def __init__(self, message: Optional[str] = None):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=message or "Not Found")
