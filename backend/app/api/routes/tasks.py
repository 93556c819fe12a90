# backend/app/api/routes/tasks.py
# Routes CRUD des Tasks : lecture pour tout jeton valide, écriture réservée aux admins.

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Body, Depends, Path, Response, status

from app.api.deps import Tasks
from app.core.security import Action, require
from app.models.task import TaskCreate, TaskUpdate
from app.models.task_dto import TaskOut

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get(
    "",
    response_model=List[TaskOut],
    summary="Lister les tâches",
    dependencies=[Depends(require(Action.LIST))],
)
async def list_tasks(tasks: Tasks):
    """Lister toutes les tâches.

    Returns:
        list[TaskOut]: Tâches dans l'ordre natif du stockage, tests unitaires inclus.
    """
    return [TaskOut.from_model(t) for t in await tasks.list()]


@router.get(
    "/{task_id}",
    response_model=TaskOut,
    summary="Détail d'une tâche",
    dependencies=[Depends(require(Action.GET))],
)
async def get_task(tasks: Tasks, task_id: str = Path(..., description="Identifiant de la tâche.")):
    return TaskOut.from_model(await tasks.get(task_id))


@router.post(
    "",
    response_model=TaskOut,
    status_code=status.HTTP_201_CREATED,
    summary="Créer une tâche",
    description="Crée une tâche (`name`, `level`) ; l'identifiant est généré par le serveur. Réservé aux admins.",
    dependencies=[Depends(require(Action.CREATE))],
)
async def create_task(
    tasks: Tasks,
    payload: TaskCreate = Body(..., description="Nom et niveau de la tâche."),
):
    """Créer une tâche.

    Args:
        tasks (TaskRepository): Dépôt des tâches.
        payload (TaskCreate): `name` non vide et `level` entier.

    Returns:
        TaskOut: Tâche créée, avec son `id`.
    """
    return TaskOut.from_model(await tasks.create(payload))


@router.put(
    "/{task_id}",
    response_model=TaskOut,
    summary="Mettre à jour une tâche (partiel)",
    description="Seuls les champs fournis sont modifiés ; `unitTests` est ignoré ici. Réservé aux admins.",
    dependencies=[Depends(require(Action.UPDATE))],
)
async def update_task(
    tasks: Tasks,
    task_id: str = Path(..., description="Identifiant de la tâche."),
    payload: TaskUpdate = Body(..., description="Champs à modifier."),
):
    return TaskOut.from_model(await tasks.update(task_id, payload))


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Supprimer une tâche et ses tests",
    dependencies=[Depends(require(Action.DELETE))],
)
async def delete_task(tasks: Tasks, task_id: str = Path(..., description="Identifiant de la tâche.")):
    await tasks.delete(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
