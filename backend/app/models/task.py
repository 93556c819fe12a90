# backend/app/models/task.py
# Documents Mongo Task / UnitTest et payloads typés de création / mise à jour partielle.

from __future__ import annotations

from typing import Any, Optional

from pydantic import Field, StrictFloat, StrictInt, model_validator

from app.core.bson_utils import CamelModel, MongoBaseModel, PyObjectId


class _PartialUpdate(CamelModel):
    """Base des payloads de mise à jour partielle.

    Description:
        Seuls les champs explicitement fournis (`model_fields_set`) sont fusionnés.
        Un champ fourni à `null` est refusé : on ne peut pas effacer un champ requis.
    """

    @model_validator(mode="after")
    def _reject_explicit_nulls(self):
        for name in self.model_fields_set:
            if getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """Champs fournis, indexés par nom d'attribut Python."""
        return {name: getattr(self, name) for name in self.model_fields_set}


class UnitTestCreate(CamelModel):
    """Payload d'ajout d'un test unitaire.

    Attributes:
        init_code (str): Code d'initialisation (`initCode`).
        test_code (str): Code de vérification (`testCode`).
        language (str): Langage cible (ex. 'java').
        score_factor (float): Poids du test dans le score, >= 0 (`scoreFactor`).
    """

    init_code: str
    test_code: str
    language: str = Field(min_length=1)
    score_factor: StrictFloat = Field(ge=0, allow_inf_nan=False)


class UnitTestUpdate(_PartialUpdate):
    """Mise à jour partielle d'un test unitaire."""

    init_code: Optional[str] = None
    test_code: Optional[str] = None
    language: Optional[str] = Field(default=None, min_length=1)
    score_factor: Optional[StrictFloat] = Field(default=None, ge=0, allow_inf_nan=False)


class UnitTest(MongoBaseModel, UnitTestCreate):
    """Test unitaire embarqué dans une Task.

    Description:
        N'existe qu'à l'intérieur du tableau `unitTests` de sa Task ; son `_id` est
        unique parmi ses voisins.
    """

    id: PyObjectId = Field(alias="_id")


class TaskCreate(CamelModel):
    """Payload de création d'une Task.

    Attributes:
        name (str): Libellé non vide.
        level (int): Niveau de difficulté.
    """

    name: str = Field(min_length=1)
    level: StrictInt


class TaskUpdate(_PartialUpdate):
    """Mise à jour partielle d'une Task.

    Description:
        `unitTests` ne fait pas partie de ce payload : la collection se gère via
        les routes `/tasks/{id}/tests`.
    """

    name: Optional[str] = Field(default=None, min_length=1)
    level: Optional[StrictInt] = None


class Task(MongoBaseModel, TaskCreate):
    """Document Mongo d'une Task.

    Attributes:
        unit_tests (list[UnitTest]): Tests ordonnés (`unitTests`), vide par défaut.
    """

    id: PyObjectId = Field(alias="_id")
    unit_tests: list[UnitTest] = Field(default_factory=list)

    def find_unit_test(self, test_id) -> Optional[int]:
        """Index du test `test_id` dans la séquence, ou None."""
        for index, unit_test in enumerate(self.unit_tests):
            if unit_test.id == test_id:
                return index
        return None
