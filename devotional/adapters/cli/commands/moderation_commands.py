"""
Commandes CLI de moderation (queue, approve, ban, moderate).
"""

from typing import Annotated

import typer
from rich.prompt import Prompt

from devotional.adapters.cli.helpers import (
    console,
    notify,
    render_videos_table,
    with_container,
)
from devotional.core.entities.video import ModerationDecision
from devotional.core.ports.repositories import FetchError, UpdateError, VideoNotFoundError
from devotional.services.moderation import ModerationQueueController
from devotional.services.visibility import IllegalTransitionError

# Choix de la boucle interactive : (a)pprouver, (b)annir, (p)asser, (q)uitter
_CHOICES = {"a": ModerationDecision.APPROVE, "b": ModerationDecision.BAN}


def queue() -> None:
    """Liste les videos en attente de moderation."""
    _queue()


@with_container()
def _queue(container) -> None:
    service = container.moderation_service()
    try:
        pending = service.list_pending()
    except FetchError:
        notify("Impossible de charger la file de moderation.")
        raise typer.Exit(code=1)

    if not pending:
        console.print("[yellow]Aucune video en attente de moderation.[/yellow]")
        return
    console.print(render_videos_table(pending, f"{len(pending)} video(s) en attente"))


def approve(
    video_id: Annotated[str, typer.Argument(help="ID de la video a approuver")],
) -> None:
    """Approuve une video en attente : elle apparait dans le fil public."""
    _review(video_id, ModerationDecision.APPROVE)


def ban(
    video_id: Annotated[str, typer.Argument(help="ID de la video a bannir")],
) -> None:
    """Bannit une video en attente : elle est definitivement masquee."""
    _review(video_id, ModerationDecision.BAN)


@with_container()
def _review(container, video_id: str, decision: ModerationDecision) -> None:
    service = container.moderation_service()
    try:
        video = service.review(video_id, decision)
    except VideoNotFoundError:
        notify(f"Video introuvable: {video_id}")
        raise typer.Exit(code=1)
    except IllegalTransitionError as e:
        notify(f"Decision refusee: la video est deja {e.current.value}.")
        raise typer.Exit(code=1)
    except (FetchError, UpdateError):
        notify("Echec de la mise a jour du statut.")
        raise typer.Exit(code=1)

    console.print(f"[green]{video.title or video.id}[/green] -> {video.status.value}")


def moderate() -> None:
    """Revue interactive de la file : approuver, bannir ou passer chaque video."""
    _moderate()


@with_container()
def _moderate(container) -> None:
    controller: ModerationQueueController = container.moderation_controller(notify=notify)
    try:
        controller.load_queue()
    except FetchError:
        notify("Impossible de charger la file de moderation. Relancez la commande.")
        raise typer.Exit(code=1)

    skipped: set[str] = set()
    decided = 0
    while True:
        remaining = [video for video in controller.queue if video.id not in skipped]
        if not remaining:
            break

        video = remaining[0]
        console.rule(f"{len(remaining)} restante(s)")
        console.print(f"[bold]{video.title or '(sans titre)'}[/bold] par [magenta]{video.owner}[/magenta]")
        if video.description:
            console.print(video.description)
        console.print(f"[dim]{video.media_reference}[/dim]")

        choice = Prompt.ask(
            "(a)pprouver, (b)annir, (p)asser, (q)uitter",
            choices=["a", "b", "p", "q"],
            default="p",
        )
        if choice == "q":
            break
        if choice == "p":
            skipped.add(video.id)
            continue
        if controller.decide(video.id, _CHOICES[choice]):
            decided += 1

    console.print(f"\n[bold]{decided}[/bold] decision(s) enregistree(s), {len(controller)} en attente.")
