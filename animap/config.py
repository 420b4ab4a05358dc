"""
Configuration de l'application via pydantic-settings.

La configuration est chargee depuis les variables d'environnement avec le
prefixe ANIMAP_, et peut optionnellement etre fournie via un fichier .env.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from animap.utils.constants import DEFAULT_MATCH_THRESHOLD, DEFAULT_SEARCH_LIMIT

# Fichier .env a la racine du projet (parent de animap/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Parametres de l'application avec support des variables d'environnement.

    Tous les parametres peuvent etre surcharges via des variables
    d'environnement avec le prefixe ANIMAP_.
    Exemple : ANIMAP_MATCH_THRESHOLD=60
    """

    model_config = SettingsConfigDict(
        env_prefix="ANIMAP_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Fournisseurs
    anilist_url: str = Field(default="https://graphql.anilist.co")
    anicrush_api_url: str = Field(default="https://api.anicrush.to")
    anicrush_site_url: str = Field(default="https://anicrush.to")
    request_timeout: float = Field(default=20.0, gt=0)

    # Resolution
    search_limit: int = Field(default=DEFAULT_SEARCH_LIMIT, ge=1, le=100)
    match_threshold: float = Field(default=DEFAULT_MATCH_THRESHOLD, ge=0, le=100)

    # Cache disque des reponses API
    cache_enabled: bool = Field(default=True)
    cache_dir: Path = Field(default=Path(".cache/api"))

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de retention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/animap.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("cache_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Etend ~ vers le repertoire home dans les chemins."""
        return Path(v).expanduser()

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        """Normalise le niveau de log en majuscules."""
        return v.upper()
