# backend/app/api/routes/base.py
# Routes de base, sans authentification.

from fastapi import APIRouter

router = APIRouter()


@router.get(
    "/ping",
    tags=["Health"],
    summary="Vérification de santé de l'API",
    description="Retourne un message 'pong' permettant de tester que l'API répond.",
)
async def ping():
    return {"status": "ok", "message": "pong"}
