# backend/app/core/bson_utils.py
# Helpers Pydantic v2 pour ObjectId, modèles Mongo en camelCase et conversion d'identifiants.
from __future__ import annotations

from typing import Any, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import BaseModel, ConfigDict, Field, GetCoreSchemaHandler
from pydantic.alias_generators import to_camel
from pydantic.json_schema import GetJsonSchemaHandler, JsonSchemaValue
from pydantic_core import core_schema

from app.core.errors import NotFound


class PyObjectId(ObjectId):
    """ObjectId compatible Pydantic v2 et OpenAPI.

    Description:
        Accepte une chaîne hex de 24 caractères ou un `ObjectId`, et se sérialise
        en chaîne dans les réponses JSON.
    """

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: GetCoreSchemaHandler) -> core_schema.CoreSchema:
        return core_schema.json_or_python_schema(
            json_schema=core_schema.no_info_plain_validator_function(cls._validate),
            python_schema=core_schema.no_info_plain_validator_function(cls._validate),
            serialization=core_schema.plain_serializer_function_ser_schema(str, when_used="json"),
        )

    @classmethod
    def __get_pydantic_json_schema__(cls, core_schema_obj: core_schema.CoreSchema, handler: GetJsonSchemaHandler) -> JsonSchemaValue:
        return {
            "type": "string",
            "format": "objectid",
            "pattern": "^[a-fA-F0-9]{24}$",
            "examples": ["507f1f77bcf86cd799439011"],
        }

    @classmethod
    def _validate(cls, v: Any) -> ObjectId:
        """Valide et convertit en ObjectId.

        Raises:
            ValueError: Si la valeur n'est pas un ObjectId valide.
        """
        if isinstance(v, ObjectId):
            return v
        if isinstance(v, str) and ObjectId.is_valid(v):
            return ObjectId(v)
        raise ValueError(f"Invalid ObjectId: {v!r}")


class CamelModel(BaseModel):
    """BaseModel exposé en camelCase (`score_factor` <-> `scoreFactor`)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )


class MongoBaseModel(CamelModel):
    """BaseModel Pydantic pour documents Mongo.

    Description:
        Champ `_id` exposé en Python sous `id` (type `PyObjectId`), autres champs
        stockés en camelCase.
    """

    id: Optional[PyObjectId] = Field(default=None, alias="_id")


def dump_mongo(model: BaseModel, *, exclude_none: bool = True) -> dict:
    """Dump d'un modèle pour Mongo (dict).

    Description:
        Respecte les alias (`_id`, camelCase) et conserve les `ObjectId` natifs.

    Args:
        model (BaseModel): Modèle Pydantic à sérialiser.
        exclude_none (bool): Exclure les champs None.

    Returns:
        dict: Document prêt à insérer/mettre à jour.
    """
    return model.model_dump(by_alias=True, exclude_none=exclude_none)


def parse_object_id(raw: Any, *, what: str = "Resource") -> ObjectId:
    """Convertit un identifiant reçu (chemin d'URL) en ObjectId.

    Description:
        Un identifiant mal formé ne peut désigner aucun document : on lève `NotFound`
        plutôt qu'une erreur de validation.

    Args:
        raw (Any): Valeur reçue (str ou ObjectId).
        what (str): Libellé utilisé dans le message d'erreur.

    Returns:
        ObjectId: Identifiant converti.

    Raises:
        NotFound: Si `raw` n'est pas un ObjectId valide.
    """
    if isinstance(raw, ObjectId):
        return raw
    try:
        return ObjectId(str(raw))
    except (InvalidId, TypeError) as e:
        raise NotFound(f"{what} {raw} not found") from e
