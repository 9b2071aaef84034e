"""
Commande CLI de soumission d'une video.
"""

from pathlib import Path
from typing import Annotated

import typer

from devotional.adapters.cli.helpers import console, notify, with_container
from devotional.services.submission import SubmissionError


def submit(
    file: Annotated[Path, typer.Argument(help="Fichier video (MP4 ou WebM, 50 Mo max)")],
    title: Annotated[str, typer.Option("--title", "-t", help="Titre (50 caracteres max)")],
    owner: Annotated[
        str, typer.Option("--owner", "-o", envvar="DEVOTIONAL_USER", help="Identifiant de l'auteur")
    ],
    description: Annotated[
        str, typer.Option("--description", "-d", help="Description (200 caracteres max)")
    ] = "",
) -> None:
    """Soumet une video. Elle restera invisible jusqu'a sa moderation."""
    _submit(file, title, owner, description)


@with_container()
def _submit(container, file: Path, title: str, owner: str, description: str) -> None:
    service = container.submission_service()
    try:
        video = service.submit(owner, file.expanduser(), title, description)
    except SubmissionError as e:
        notify(str(e))
        raise typer.Exit(code=1)

    console.print(f"[green]Video soumise[/green] ({video.id}), en attente de moderation.")
