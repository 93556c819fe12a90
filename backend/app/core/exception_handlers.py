from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.dto.response_format import ErrorResponse
from app.core.errors import (
    Forbidden,
    InvalidInput,
    NotFound,
    StorageError,
    TaskServerError,
    Unauthenticated,
)
from app.core.logging_config import get_loggers

STATUS_BY_ERROR: dict[type[TaskServerError], int] = {
    Unauthenticated: status.HTTP_401_UNAUTHORIZED,
    Forbidden: status.HTTP_403_FORBIDDEN,
    NotFound: status.HTTP_404_NOT_FOUND,
    InvalidInput: 422,
    StorageError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_for(exc: TaskServerError) -> int:
    for error_type, status_code in STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def register_exception_handlers(app: FastAPI):
    """Enregistre les gestionnaires d'exceptions globaux pour standardiser les réponses."""

    @app.exception_handler(TaskServerError)
    async def task_server_error_handler(request: Request, exc: TaskServerError):
        """Erreurs métier typées -> statut HTTP dédié."""
        status_code = status_for(exc)
        loggers = get_loggers()
        if status_code >= 500:
            loggers.errors.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.details)
        else:
            loggers.generic.info("%s %s rejected: %s %s", request.method, request.url.path, exc.code, exc.message)

        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse.from_detail(exc.message, code=exc.code, details=exc.details).model_dump(),
            headers=headers,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Gestionnaire pour les exceptions HTTP standards (404 de routage, 405...)."""
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse.from_detail(
                {"code": f"HTTP_{exc.status_code}", "message": exc.detail}
            ).model_dump(),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Erreurs de validation du corps de requête -> InvalidInput."""
        errors = []
        for error in exc.errors():
            errors.append(
                {
                    "field": " -> ".join(str(loc) for loc in error["loc"]),
                    "message": error["msg"],
                    "type": error["type"],
                }
            )

        return JSONResponse(
            status_code=422,
            content=ErrorResponse.from_detail(
                "Validation failed", code=InvalidInput.code, details=errors
            ).model_dump(),
        )

    # Gestionnaire pour les exceptions non capturées
    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Gestionnaire pour les exceptions non capturées."""
        get_loggers().errors.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse.from_detail(
                {"code": "INTERNAL_ERROR", "message": "An unexpected error occurred"}
            ).model_dump(),
        )
