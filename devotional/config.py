"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe DEVOTIONAL_,
et peut optionnellement être fournie via un fichier .env.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env à la racine du projet (parent de devotional/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe DEVOTIONAL_.
    Exemple : DEVOTIONAL_LOG_LEVEL=DEBUG

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="DEVOTIONAL_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Base de données
    database_url: str = Field(default="sqlite:///devotional.db")

    # Stockage des médias (URL publique dérivée de media_dir si non fournie)
    media_dir: Path = Field(default=Path("~/Videos/devotional"))
    media_base_url: Optional[str] = Field(default=None)

    # Téléchargement
    download_dir: Path = Field(default=Path("~/Downloads"))
    download_timeout: float = Field(default=30.0, gt=0)

    # Soumission (contrôle taille/type uniquement)
    max_upload_size_mb: int = Field(default=50, ge=1)
    allowed_video_types: list[str] = Field(default=["video/mp4", "video/webm"])
    title_max_length: int = Field(default=50, ge=1)
    description_max_length: int = Field(default=200, ge=0)

    # Modération : écriture conditionnelle (uniquement si le statut est encore pending)
    moderation_conditional_update: bool = Field(default=True)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/devotional.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("media_dir", "download_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @property
    def max_upload_size_bytes(self) -> int:
        """Taille maximale d'un fichier soumis, en octets."""
        return self.max_upload_size_mb * 1024 * 1024

    @property
    def public_media_url(self) -> str:
        """URL de base des médias déposés (file:// de media_dir par défaut)."""
        if self.media_base_url:
            return self.media_base_url.rstrip("/")
        return self.media_dir.resolve().as_uri()
