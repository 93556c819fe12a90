from typing import Any, Optional, Union

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Format standardisé pour les réponses d'erreur."""

    success: bool = False
    error: dict[str, Any]

    @classmethod
    def from_detail(cls, detail: Union[str, dict[str, Any]], code: str = "INVALID_INPUT", details: Optional[Any] = None):
        """Créer une réponse d'erreur à partir d'un détail."""
        if isinstance(detail, str):
            error = {"code": code, "message": detail}
        else:
            error = {"code": code, **detail}
        if details is not None:
            error["details"] = details
        return cls(error=error)
