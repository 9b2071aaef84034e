"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Les ports sont les frontières de l'architecture hexagonale. Ils définissent
ce dont le domaine a besoin du monde extérieur sans spécifier
comment ces besoins sont satisfaits.

Ports repository : Contrat du store de contenu
- IVideoRepository : Stockage des vidéos
- FetchError / UpdateError : Erreurs de lecture et d'écriture

Ports média : Contrats pour les fichiers vidéo
- IMediaStorage : Dépôt des binaires
- IMediaElement : Elément de lecture de l'hôte
- IMediaDownloader : Récupération des binaires
"""

from devotional.core.ports.repositories import (
    FetchError,
    IVideoRepository,
    StaleStatusError,
    UpdateError,
    VideoNotFoundError,
)
from devotional.core.ports.media import (
    AutoplayRejected,
    DownloadError,
    IMediaDownloader,
    IMediaElement,
    IMediaStorage,
)

__all__ = [
    # Repositories
    "IVideoRepository",
    "FetchError",
    "UpdateError",
    "VideoNotFoundError",
    "StaleStatusError",
    # Médias
    "IMediaStorage",
    "IMediaElement",
    "IMediaDownloader",
    "AutoplayRejected",
    "DownloadError",
]
