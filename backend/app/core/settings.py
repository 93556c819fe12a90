# backend/app/core/settings.py
# Configuration de l'application (variables d'environnement, .env, fichier JSON optionnel).

import os
from functools import lru_cache

from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)


class Settings(BaseSettings):
    # === App settings ===
    app_name: str = "Task Server"
    environment: str = "development"  # or "production"
    api_version: str = "0.1.0"

    # === MongoDB ===
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "tasks"
    tasks_collection: str = "tasks"

    # === JWT ===
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    jwt_expiration_minutes: int = 60

    # === LOGS ===
    log_dir: str = "logs"
    log_level: str = "DEBUG"
    log_retention_days: int = 30

    # === STATIC ===
    static_dir: str = "static"

    # === BODY ===
    max_body_kb: int = 1024

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Ajoute le fichier JSON `CONFIG_FILE` comme source de plus faible priorité.

        Description:
            Ordre de priorité : init > env > .env > secrets > JSON (si `CONFIG_FILE` est défini).
        """
        sources = [init_settings, env_settings, dotenv_settings, file_secret_settings]
        config_file = os.getenv("CONFIG_FILE")
        if config_file:
            sources.append(JsonConfigSettingsSource(settings_cls, json_file=config_file))
        return tuple(sources)

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def max_body_bytes(self) -> int:
        return self.max_body_kb * 1024


@lru_cache
def get_settings() -> Settings:
    """Instance unique des settings (chargée au premier appel)."""
    return Settings()
