"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI et pour
toute interface qui consomme la bibliotheque.
"""

from dependency_injector import containers, providers

from .adapters.media.http_downloader import HttpMediaDownloader
from .adapters.media.local_storage import LocalMediaStorage
from .config import Settings
from .infrastructure.persistence.database import get_session, init_db
from .infrastructure.persistence.repositories import SQLModelVideoRepository
from .services.download import DownloadService
from .services.feed import FeedService
from .services.moderation import ModerationQueueController, ModerationService
from .services.submission import SubmissionService


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Initialise la DB une fois
        feed = container.feed_service().load_feed()
        controller = container.moderation_controller(notify=console.print)
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Database - Resource pour initialisation unique
    database = providers.Resource(init_db)

    # Session factory - nouvelle session a chaque appel
    session = providers.Factory(lambda: next(get_session()))

    # Repository - Factory pour nouvelle instance avec session fraiche
    video_repository = providers.Factory(
        SQLModelVideoRepository,
        session=session,
    )

    # Adapters media
    media_storage = providers.Singleton(
        LocalMediaStorage,
        media_dir=config.provided.media_dir,
        base_url=config.provided.public_media_url,
    )
    media_downloader = providers.Singleton(
        HttpMediaDownloader,
        timeout=config.provided.download_timeout,
    )

    # Services
    submission_service = providers.Factory(
        SubmissionService,
        video_repo=video_repository,
        storage=media_storage,
        settings=config,
    )
    moderation_service = providers.Factory(
        ModerationService,
        video_repo=video_repository,
        conditional_update=config.provided.moderation_conditional_update,
    )
    # Une instance par vue moderateur ; notify/on_change fournis par l'appelant
    moderation_controller = providers.Factory(
        ModerationQueueController,
        video_repo=video_repository,
        conditional_update=config.provided.moderation_conditional_update,
    )
    feed_service = providers.Factory(
        FeedService,
        video_repo=video_repository,
    )
    download_service = providers.Factory(
        DownloadService,
        downloader=media_downloader,
        download_dir=config.provided.download_dir,
    )
