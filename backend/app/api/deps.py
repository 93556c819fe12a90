# backend/app/api/deps.py
# Dépendances FastAPI : stockage (créé au démarrage) et services construits par requête.

from typing import Annotated

from fastapi import Depends, Request

from app.core.logging_config import get_loggers
from app.core.settings import get_settings
from app.db.store import DocumentStore
from app.services.task_repository import TaskRepository
from app.services.unit_test_collection import UnitTestCollection


def get_store(request: Request) -> DocumentStore:
    """Stockage ouvert par le `lifespan` de l'application."""
    return request.app.state.store


def get_task_repository(store: Annotated[DocumentStore, Depends(get_store)]) -> TaskRepository:
    return TaskRepository(store, collection=get_settings().tasks_collection, logger=get_loggers().generic,
                          error_logger=get_loggers().errors)


def get_unit_test_collection(tasks: Annotated[TaskRepository, Depends(get_task_repository)]) -> UnitTestCollection:
    return UnitTestCollection(tasks, logger=get_loggers().generic)


Tasks = Annotated[TaskRepository, Depends(get_task_repository)]
UnitTests = Annotated[UnitTestCollection, Depends(get_unit_test_collection)]
