# backend/app/models/task_dto.py
# Schémas de sortie API (id exposé sous `id`, champs en camelCase).

from __future__ import annotations

from typing import List

from app.core.bson_utils import CamelModel, PyObjectId
from app.models.task import Task, UnitTest


class UnitTestOut(CamelModel):
    """Sortie d'un test unitaire.

    Attributes:
        id (PyObjectId): Id local à la Task.
        init_code (str): Code d'initialisation.
        test_code (str): Code de vérification.
        language (str): Langage cible.
        score_factor (float): Poids dans le score.
    """

    id: PyObjectId
    init_code: str
    test_code: str
    language: str
    score_factor: float

    @classmethod
    def from_model(cls, unit_test: UnitTest) -> "UnitTestOut":
        return cls.model_validate(unit_test.model_dump())


class TaskOut(CamelModel):
    """Sortie d'une Task, tests unitaires inclus dans leur ordre."""

    id: PyObjectId
    name: str
    level: int
    unit_tests: List[UnitTestOut]

    @classmethod
    def from_model(cls, task: Task) -> "TaskOut":
        return cls.model_validate(task.model_dump())
