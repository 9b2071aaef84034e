"""
Commandes CLI du fil public (feed, download).
"""

from typing import Annotated

import typer

from devotional.adapters.cli.helpers import (
    async_command,
    console,
    notify,
    render_videos_table,
    with_container,
)
from devotional.core.ports.media import DownloadError
from devotional.core.ports.repositories import FetchError
from devotional.services.visibility import is_publicly_visible


def feed() -> None:
    """Affiche le fil public : videos approuvees, plus recentes d'abord."""
    _feed()


@with_container()
def _feed(container) -> None:
    try:
        videos = container.feed_service().load_feed()
    except FetchError:
        notify("Impossible de charger le fil.")
        raise typer.Exit(code=1)

    if not videos:
        console.print("[yellow]Aucune video pour le moment.[/yellow]")
        return
    console.print(render_videos_table(videos, "Fil public"))


@async_command
async def download(
    video_id: Annotated[str, typer.Argument(help="ID de la video a telecharger")],
) -> None:
    """Telecharge une video approuvee dans le repertoire de telechargement."""
    await _download(video_id)


@with_container()
async def _download(container, video_id: str) -> None:
    try:
        video = container.video_repository().get_by_id(video_id)
    except FetchError:
        notify("Impossible de lire la video.")
        raise typer.Exit(code=1)

    if video is None or not is_publicly_visible(video.status):
        notify(f"Video introuvable dans le fil: {video_id}")
        raise typer.Exit(code=1)

    downloader = container.media_downloader()
    try:
        path = await container.download_service().save(video)
    except DownloadError:
        notify("Echec du telechargement de la video.")
        raise typer.Exit(code=1)
    finally:
        await downloader.close()

    console.print(f"[green]Video enregistree:[/green] {path}")
