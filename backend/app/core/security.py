# backend/app/core/security.py
# Vérification des jetons JWT (Bearer), politique d'autorisation lecture/écriture et dépendances FastAPI.

from __future__ import annotations

import datetime as dt
import enum
from dataclasses import dataclass, field
from typing import Annotated, Any

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from app.core.errors import Forbidden, Unauthenticated
from app.core.settings import get_settings

bearer_scheme = HTTPBearer(auto_error=False)


class Action(str, enum.Enum):
    """Opération demandée par l'appelant."""

    LIST = "list"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"

    @property
    def is_mutating(self) -> bool:
        return self in (Action.CREATE, Action.UPDATE, Action.DELETE)


@dataclass(frozen=True)
class Caller:
    """Identité vérifiée extraite du jeton.

    Attributes:
        subject (str): Claim `sub`.
        is_admin (bool): Claim `admin` (seul `true` donne le privilège d'écriture).
        claims (dict): Autres claims, purement informatives.
    """

    subject: str
    is_admin: bool = False
    claims: dict[str, Any] = field(default_factory=dict)


class AuthGate:
    """Vérifie un jeton Bearer et décide si une action est permise.

    Description:
        Fonction de décision pure : aucun état partagé n'est modifié.
        - lecture (`list`, `get`) : tout jeton valide
        - écriture (`create`, `update`, `delete`) : jeton valide avec `admin: true`

    Args:
        secret_key (str): Secret de signature partagé.
        algorithm (str): Algorithme JWT (ex. HS256).
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256"):
        self.secret_key = secret_key
        self.algorithm = algorithm

    def verify(self, token: str | None) -> Caller:
        """Décode et vérifie le jeton (signature et `exp` s'il est présent).

        Raises:
            Unauthenticated: Jeton absent, mal formé, mal signé, expiré, ou sans `sub`.
        """
        if not token:
            raise Unauthenticated("Missing bearer token")
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            raise Unauthenticated("Could not validate credentials") from e

        subject = payload.pop("sub", None)
        if not isinstance(subject, str) or not subject:
            raise Unauthenticated("Could not validate credentials")
        is_admin = payload.pop("admin", False) is True

        return Caller(subject=subject, is_admin=is_admin, claims=payload)

    def authorize(self, caller: Caller, action: Action) -> Caller:
        """Applique la politique d'autorisation.

        Raises:
            Forbidden: Action d'écriture sans privilège admin.
        """
        if action.is_mutating and not caller.is_admin:
            raise Forbidden(f"Admin privilege required to {action.value}")
        return caller

    def check(self, token: str | None, action: Action) -> Caller:
        return self.authorize(self.verify(token), action)

    def create_access_token(
        self,
        subject: str,
        *,
        admin: bool = False,
        expires_delta: dt.timedelta | None = None,
        extra: dict[str, Any] | None = None,
    ) -> str:
        """Crée un jeton d'accès signé.

        Description:
            Utile aux tests et aux opérateurs ; l'émission normale des jetons est
            assurée par un service d'identité partageant le secret.

        Args:
            subject (str): Claim `sub`.
            admin (bool): Claim `admin`.
            expires_delta (datetime.timedelta | None): Durée de validité (60 min par défaut).
            extra (dict | None): Claims additionnelles (informatives).

        Returns:
            str: Jeton JWT signé.
        """
        to_encode = dict(extra or {})
        to_encode.update({
            "sub": subject,
            "admin": admin,
            "exp": dt.datetime.now(dt.timezone.utc) + (expires_delta or dt.timedelta(minutes=60)),
        })
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)


def get_auth_gate() -> AuthGate:
    settings = get_settings()
    return AuthGate(settings.jwt_secret_key, settings.jwt_algorithm)


def create_access_token(subject: str, *, admin: bool = False, expires_delta: dt.timedelta | None = None, **extra) -> str:
    """Raccourci : jeton signé avec les settings courants."""
    settings = get_settings()
    return get_auth_gate().create_access_token(
        subject,
        admin=admin,
        expires_delta=expires_delta or dt.timedelta(minutes=settings.jwt_expiration_minutes),
        extra=extra,
    )


def get_current_caller(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    gate: Annotated[AuthGate, Depends(get_auth_gate)],
) -> Caller:
    """Dépendance FastAPI : appelant vérifié depuis l'en-tête `Authorization: Bearer`."""
    token = credentials.credentials if credentials else None
    return gate.verify(token)


def require(action: Action):
    """Fabrique une dépendance FastAPI qui autorise `action` pour l'appelant courant.

    Description:
        S'exécute avant la validation du corps de requête et avant tout appel au stockage.
    """

    def _authorized_caller(
        caller: Annotated[Caller, Depends(get_current_caller)],
        gate: Annotated[AuthGate, Depends(get_auth_gate)],
    ) -> Caller:
        return gate.authorize(caller, action)

    return _authorized_caller
