from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.api.deps import get_store
from app.core.errors import StorageError
from app.core.settings import get_settings
from app.db.store import DocumentStore
from app.models.base.health import HealthCheck

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthCheck,
    summary="Health check de l'API",
    description="Retourne le statut de l'API et de sa base MongoDB.",
)
async def health(store: DocumentStore = Depends(get_store)) -> JSONResponse:
    """
    Health check endpoint standard

    Returns:
        200 si la base répond, 503 sinon
    """
    try:
        await store.ping()
        database = "ok"
    except StorageError as e:
        database = f"error: {e.message}"

    checks = {"database": database}
    has_errors = any(check != "ok" for check in checks.values())

    response = HealthCheck(
        status="degraded" if has_errors else "ok",
        timestamp=datetime.now(timezone.utc),
        version=get_settings().api_version,
        checks=checks,
    )
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE if has_errors else status.HTTP_200_OK

    return JSONResponse(status_code=status_code, content=response.model_dump(mode="json"))
