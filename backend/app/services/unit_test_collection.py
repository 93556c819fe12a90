# backend/app/services/unit_test_collection.py
# Gestion de la séquence ordonnée `unitTests` embarquée dans une Task.

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from bson import ObjectId

from app.core.bson_utils import parse_object_id
from app.core.errors import NotFound
from app.models.task import Task, UnitTest, UnitTestCreate, UnitTestUpdate
from app.services.task_repository import TaskRepository, coerce_payload


class UnitTestCollection:
    """Opérations sur les tests unitaires d'une Task, adressés par `(task_id, test_id)`.

    Description:
        Les tests n'existent qu'à l'intérieur de leur Task : toute lecture passe par
        la Task propriétaire, toute écriture réécrit son tableau `unitTests` en un seul
        `update_by_id`. La suppression de la Task emporte donc ses tests.

    Args:
        tasks (TaskRepository): Accès aux Tasks propriétaires.
        logger (logging.Logger | None): Logger injecté.
    """

    def __init__(self, tasks: TaskRepository, logger: Optional[logging.Logger] = None):
        self.tasks = tasks
        self.logger = logger or logging.getLogger(__name__)

    async def list(self, task_id: Any) -> list[UnitTest]:
        """Tests de la Task, dans l'ordre stocké."""
        task = await self.tasks.get(task_id)
        return list(task.unit_tests)

    async def get(self, task_id: Any, test_id: Any) -> UnitTest:
        task = await self.tasks.get(task_id)
        return task.unit_tests[self._index_of(task, test_id)]

    async def append(self, task_id: Any, fields: Union[UnitTestCreate, Mapping[str, Any]]) -> UnitTest:
        """Ajoute un test en fin de séquence.

        Raises:
            NotFound: Task inconnue.
            InvalidInput: `initCode`, `testCode`, `language` absents ou `scoreFactor` non numérique ou négatif.
        """
        task = await self.tasks.get(task_id)
        payload = coerce_payload(UnitTestCreate, fields)

        sibling_ids = {t.id for t in task.unit_tests}
        new_id = ObjectId()
        while new_id in sibling_ids:
            new_id = ObjectId()

        unit_test = UnitTest(_id=new_id, **payload.model_dump())
        await self._save(task, [*task.unit_tests, unit_test])
        self.logger.info("UnitTest %s appended to task %s", unit_test.id, task.id)
        return unit_test

    async def update(self, task_id: Any, test_id: Any, partial_fields: Union[UnitTestUpdate, Mapping[str, Any]]) -> UnitTest:
        """Fusionne les seuls champs fournis dans le test `test_id`.

        Raises:
            NotFound: Task ou test inconnu.
            InvalidInput: Champ fourni invalide.
        """
        task = await self.tasks.get(task_id)
        index = self._index_of(task, test_id)
        update = coerce_payload(UnitTestUpdate, partial_fields)

        changes = update.changes()
        unit_test = task.unit_tests[index].model_copy(update=changes)
        if changes:
            unit_tests = list(task.unit_tests)
            unit_tests[index] = unit_test
            await self._save(task, unit_tests)
            self.logger.info("UnitTest %s of task %s updated (%s)", unit_test.id, task.id, ", ".join(sorted(changes)))
        return unit_test

    async def remove(self, task_id: Any, test_id: Any) -> None:
        """Retire le test sans réordonner les autres.

        Raises:
            NotFound: Task ou test inconnu.
        """
        task = await self.tasks.get(task_id)
        index = self._index_of(task, test_id)
        removed = task.unit_tests[index]
        await self._save(task, task.unit_tests[:index] + task.unit_tests[index + 1:])
        self.logger.info("UnitTest %s removed from task %s", removed.id, task.id)

    @staticmethod
    def _index_of(task: Task, test_id: Any) -> int:
        oid = parse_object_id(test_id, what="UnitTest")
        index = task.find_unit_test(oid)
        if index is None:
            raise NotFound(f"UnitTest {test_id} not found in task {task.id}")
        return index

    async def _save(self, task: Task, unit_tests: list[UnitTest]) -> None:
        docs = [t.model_dump(by_alias=True) for t in unit_tests]
        matched = await self.tasks.store.update_by_id(self.tasks.collection, task.id, {"unitTests": docs})
        if not matched:
            # Task supprimée entre la lecture et l'écriture
            raise NotFound(f"Task {task.id} not found")
