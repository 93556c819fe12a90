# backend/app/db/mongodb.py
# Client MongoDB (motor) et implémentation du port `DocumentStore`.

from __future__ import annotations

import logging

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from app.core.errors import StorageError
from app.core.settings import Settings
from app.db.store import Document

logger = logging.getLogger(__name__)


def create_client(settings: Settings) -> AsyncIOMotorClient:
    """Crée le client motor à partir des settings (connexion paresseuse)."""
    return AsyncIOMotorClient(settings.mongodb_uri)


class MongoDocumentStore:
    """`DocumentStore` adossé à une base MongoDB.

    Description:
        Toute `PyMongoError` est convertie en `StorageError` ; aucune relance
        automatique n'est tentée.

    Args:
        db (AsyncIOMotorDatabase): Base cible.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db

    def get_collection(self, name: str) -> AsyncIOMotorCollection:
        """Retourne une collection MongoDB par son nom.

        Description:
            Si la collection n'existe pas encore côté serveur, MongoDB la créera
            à la première insertion.
        """
        return self.db[name]

    async def find_all(self, collection: str) -> list[Document]:
        try:
            cursor = self.get_collection(collection).find({})
            return await cursor.to_list(length=None)
        except PyMongoError as e:
            raise _storage_error("find_all", collection, e) from e

    async def find_by_id(self, collection: str, doc_id: ObjectId) -> Document | None:
        try:
            return await self.get_collection(collection).find_one({"_id": doc_id})
        except PyMongoError as e:
            raise _storage_error("find_by_id", collection, e) from e

    async def insert(self, collection: str, doc: Document) -> ObjectId:
        try:
            res = await self.get_collection(collection).insert_one(doc)
        except PyMongoError as e:
            raise _storage_error("insert", collection, e) from e
        return res.inserted_id

    async def update_by_id(self, collection: str, doc_id: ObjectId, partial: Document) -> bool:
        """Applique `$set` sur les champs fournis.

        Returns:
            bool: True si un document correspondait.
        """
        if not partial:
            return await self.find_by_id(collection, doc_id) is not None
        try:
            res = await self.get_collection(collection).update_one({"_id": doc_id}, {"$set": partial})
        except PyMongoError as e:
            raise _storage_error("update_by_id", collection, e) from e
        return res.matched_count == 1

    async def delete_by_id(self, collection: str, doc_id: ObjectId) -> bool:
        try:
            res = await self.get_collection(collection).delete_one({"_id": doc_id})
        except PyMongoError as e:
            raise _storage_error("delete_by_id", collection, e) from e
        return res.deleted_count == 1

    async def ping(self) -> None:
        try:
            await self.db.command("ping")
        except PyMongoError as e:
            raise _storage_error("ping", "-", e) from e


def _storage_error(operation: str, collection: str, exc: Exception) -> StorageError:
    logger.error("MongoDB %s on %s failed: %s", operation, collection, exc)
    return StorageError("Storage unavailable", details={"operation": operation, "collection": collection})
