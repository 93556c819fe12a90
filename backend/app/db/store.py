# backend/app/db/store.py
# Port de persistance documentaire utilisé par les services (implémenté par `MongoDocumentStore`).

from __future__ import annotations

from typing import Any, Protocol

from bson import ObjectId

Document = dict[str, Any]


class DocumentStore(Protocol):
    """Accès documentaire minimal.

    Description:
        Chaque appel est atomique au niveau d'un document. Les implémentations lèvent
        `StorageError` si le stockage est indisponible.
    """

    async def find_all(self, collection: str) -> list[Document]: ...

    async def find_by_id(self, collection: str, doc_id: ObjectId) -> Document | None: ...

    async def insert(self, collection: str, doc: Document) -> ObjectId: ...

    async def update_by_id(self, collection: str, doc_id: ObjectId, partial: Document) -> bool: ...

    async def delete_by_id(self, collection: str, doc_id: ObjectId) -> bool: ...

    async def ping(self) -> None: ...
