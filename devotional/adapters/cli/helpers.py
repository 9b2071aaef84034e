"""
Utilitaires partages pour les commandes CLI de Devotional.

Ce module fournit :
- console : instance Rich Console partagee
- with_container : decorateur injectant un container initialise
- async_command : decorateur transformant une fonction async en commande sync
- notify : notification utilisateur ponctuelle (equivalent d'une alerte)
- render_videos_table : tableau Rich d'une liste de videos
"""

import asyncio
import inspect
from functools import wraps

from rich.console import Console
from rich.table import Table

from devotional.container import Container
from devotional.core.entities.video import Video

console = Console()


def notify(message: str) -> None:
    """Affiche une notification d'erreur a l'utilisateur."""
    console.print(f"[bold red]{message}[/bold red]")


def with_container(requires_db: bool = True):
    """
    Decorateur qui injecte un container initialise en premier argument.

    Fonctionne pour les fonctions sync et async.

    Args:
        requires_db: Si True (defaut), initialise la base de donnees.

    Usage:
        @with_container()
        def my_command(container, ...):
            config = container.config()
    """
    def decorator(func):
        def _build() -> Container:
            container = Container()
            if requires_db:
                container.database.init()
            return container

        if inspect.iscoroutinefunction(func):
            @wraps(func)
            async def async_wrapper(*args, **kwargs):
                return await func(_build(), *args, **kwargs)
            return async_wrapper

        @wraps(func)
        def wrapper(*args, **kwargs):
            return func(_build(), *args, **kwargs)
        return wrapper
    return decorator


def async_command(func):
    """
    Transforme une fonction async en commande sync via asyncio.run().

    Usage:
        @async_command
        async def my_command(...):
            ...
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        return asyncio.run(func(*args, **kwargs))
    return wrapper


def render_videos_table(videos: list[Video], title: str) -> Table:
    """Construit un tableau Rich : ID, titre, auteur, date, likes."""
    table = Table(title=title, show_lines=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Titre")
    table.add_column("Auteur", style="magenta")
    table.add_column("Soumise le")
    table.add_column("Likes", justify="right")

    for position, video in enumerate(videos, start=1):
        created = video.created_at.strftime("%d/%m/%Y %H:%M") if video.created_at else "-"
        table.add_row(
            str(position),
            video.id,
            video.title or "(sans titre)",
            video.owner,
            created,
            str(video.likes_count),
        )
    return table
