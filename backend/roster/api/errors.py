from fastapi import HTTPException, status
from roster.services.exceptions import (
    RosterError,
    NotFoundError,
    AccessDeniedError,
    ValidationError,
    ShiftConflictError,
    ShiftPersistenceError,
)

STATUS_BY_ERROR = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (AccessDeniedError, status.HTTP_403_FORBIDDEN),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ShiftConflictError, status.HTTP_409_CONFLICT),
    (ShiftPersistenceError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def to_http_exception(error: RosterError) -> HTTPException:
    """Преобразовать ошибку сервиса в HTTP-ответ с сообщением для пользователя"""
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=str(error))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(error))
