# backend/app/core/errors.py
# Erreurs métier typées, traduites en statuts HTTP par `exception_handlers`.

from __future__ import annotations

from typing import Any


class TaskServerError(Exception):
    """Erreur de base du serveur de tâches.

    Attributes:
        code (str): Code stable exposé aux clients (ex. `NOT_FOUND`).
        message (str): Message lisible.
        details (Any | None): Détails optionnels (ex. erreurs par champ).
    """

    code = "TASK_SERVER_ERROR"

    def __init__(self, message: str, details: Any | None = None):
        super().__init__(message)
        self.message = message
        self.details = details


class Unauthenticated(TaskServerError):
    """Jeton absent, mal formé, expiré ou mal signé."""

    code = "UNAUTHENTICATED"


class Forbidden(TaskServerError):
    """Jeton valide mais privilège insuffisant."""

    code = "FORBIDDEN"


class NotFound(TaskServerError):
    """Task ou UnitTest introuvable (y compris id imbriqué sous le mauvais parent)."""

    code = "NOT_FOUND"


class InvalidInput(TaskServerError):
    """Champ requis manquant ou mal formé."""

    code = "INVALID_INPUT"


class StorageError(TaskServerError):
    """Le stockage est indisponible ou a renvoyé une erreur inattendue."""

    code = "STORAGE_ERROR"
