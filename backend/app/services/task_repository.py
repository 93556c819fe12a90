# backend/app/services/task_repository.py
# CRUD des Tasks (niveau document) au-dessus du port `DocumentStore`.

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, TypeVar, Union

from bson import ObjectId
from pydantic import BaseModel, ValidationError

from app.core.bson_utils import dump_mongo, parse_object_id
from app.core.errors import InvalidInput, NotFound, StorageError
from app.db.store import DocumentStore
from app.models.task import Task, TaskCreate, TaskUpdate

M = TypeVar("M", bound=BaseModel)


def coerce_payload(model_cls: type[M], fields: Union[M, Mapping[str, Any]]) -> M:
    """Valide un payload (modèle déjà construit ou mapping brut).

    Raises:
        InvalidInput: Si la validation Pydantic échoue.
    """
    if isinstance(fields, model_cls):
        return fields
    if not isinstance(fields, Mapping):
        raise InvalidInput(f"{model_cls.__name__} payload must be an object")
    try:
        return model_cls.model_validate(dict(fields))
    except ValidationError as e:
        details = [
            {"field": ".".join(str(loc) for loc in err["loc"]), "message": err["msg"], "type": err["type"]}
            for err in e.errors()
        ]
        raise InvalidInput("Validation failed", details=details) from e


class TaskRepository:
    """Propriétaire des Tasks.

    Description:
        Chaque opération relit le document depuis le stockage (aucun état en mémoire),
        puis écrit en un seul appel. Pas de verrou ni de contrôle de version : en cas
        d'écritures concurrentes, la dernière gagne.

    Args:
        store (DocumentStore): Stockage documentaire.
        collection (str): Nom de la collection des Tasks.
        logger (logging.Logger | None): Logger injecté.
        error_logger (logging.Logger | None): Logger des erreurs (documents illisibles).
    """

    def __init__(self, store: DocumentStore, collection: str = "tasks", logger: Optional[logging.Logger] = None,
                 error_logger: Optional[logging.Logger] = None):
        self.store = store
        self.collection = collection
        self.logger = logger or logging.getLogger(__name__)
        self.error_logger = error_logger or self.logger

    async def list(self) -> list[Task]:
        """Toutes les Tasks, dans l'ordre natif du stockage."""
        docs = await self.store.find_all(self.collection)
        return [self._parse(d) for d in docs]

    async def get(self, task_id: Any) -> Task:
        """Task d'identifiant `task_id`.

        Raises:
            NotFound: Aucune Task ne correspond (ou id mal formé).
        """
        oid = parse_object_id(task_id, what="Task")
        doc = await self.store.find_by_id(self.collection, oid)
        if doc is None:
            raise NotFound(f"Task {task_id} not found")
        return self._parse(doc)

    def _parse(self, doc: dict) -> Task:
        """Document stocké -> Task.

        Raises:
            StorageError: Le document ne correspond pas au modèle (données héritées ou écrites par un tiers).
        """
        try:
            return Task.model_validate(doc)
        except ValidationError as e:
            self.error_logger.error("Task document %s in %s has an unexpected shape: %s", doc.get("_id"), self.collection, e)
            errors = [
                {"field": ".".join(str(loc) for loc in err["loc"]), "type": err["type"]}
                for err in e.errors()
            ]
            raise StorageError(
                "Unexpected document shape",
                details={"collection": self.collection, "id": str(doc.get("_id")), "errors": errors},
            ) from e

    async def create(self, fields: Union[TaskCreate, Mapping[str, Any]]) -> Task:
        """Crée une Task avec un nouvel id et une séquence de tests vide.

        Raises:
            InvalidInput: `name` absent/vide ou `level` absent/non entier.
        """
        payload = coerce_payload(TaskCreate, fields)
        task = Task(_id=ObjectId(), name=payload.name, level=payload.level)
        await self.store.insert(self.collection, dump_mongo(task))
        self.logger.info("Task %s created (name=%r, level=%s)", task.id, task.name, task.level)
        return task

    async def update(self, task_id: Any, partial_fields: Union[TaskUpdate, Mapping[str, Any]]) -> Task:
        """Fusionne les seuls champs fournis (`name`, `level`).

        Description:
            `unitTests` n'est jamais modifié par ce chemin.

        Raises:
            NotFound: Task inconnue.
            InvalidInput: Champ fourni invalide.
        """
        task = await self.get(task_id)
        update = coerce_payload(TaskUpdate, partial_fields)
        changes = update.changes()
        if not changes:
            return task

        merged = task.model_copy(update=changes)
        to_set = merged.model_dump(by_alias=True, include=set(changes))
        matched = await self.store.update_by_id(self.collection, task.id, to_set)
        if not matched:
            raise NotFound(f"Task {task_id} not found")
        self.logger.info("Task %s updated (%s)", task.id, ", ".join(sorted(to_set)))
        return merged

    async def delete(self, task_id: Any) -> None:
        """Supprime la Task et, avec elle, ses tests embarqués.

        Raises:
            NotFound: Task inconnue (y compris déjà supprimée).
        """
        oid = parse_object_id(task_id, what="Task")
        deleted = await self.store.delete_by_id(self.collection, oid)
        if not deleted:
            raise NotFound(f"Task {task_id} not found")
        self.logger.info("Task %s deleted", oid)
