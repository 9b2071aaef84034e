"""
Point d'entrée CLI de Devotional.

Configure le logging et monte les commandes CLI.
"""

from typing import Annotated

import typer

from .adapters.cli.commands import approve, ban, download, feed, moderate, queue, submit
from .config import Settings
from .logging_config import configure_logging

app = typer.Typer(
    name="devotional",
    help="Fil video vertical avec moderation",
)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Afficher les logs DEBUG"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Mode silencieux (aucun log console)"),
    ] = False,
) -> None:
    """Devotional - Fil video vertical avec moderation."""
    settings = Settings()
    configure_logging(
        log_level="DEBUG" if verbose else settings.log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
        console=not quiet,
    )


# Fil public
app.command()(feed)
app.command()(download)

# Soumission
app.command()(submit)

# Moderation
app.command()(queue)
app.command()(approve)
app.command()(ban)
app.command()(moderate)


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = Settings()
    typer.echo(f"Base de données : {config.database_url}")
    typer.echo(f"Médias : {config.media_dir}")
    typer.echo(f"URL publique des médias : {config.public_media_url}")
    typer.echo(f"Téléchargements : {config.download_dir}")
    typer.echo(f"Taille max : {config.max_upload_size_mb} Mo")
    typer.echo(f"Types acceptés : {', '.join(config.allowed_video_types)}")
    typer.echo(
        "Mise à jour conditionnelle : "
        f"{'activée' if config.moderation_conditional_update else 'désactivée'}"
    )
    typer.echo(f"Niveau de log : {config.log_level}")


if __name__ == "__main__":
    app()
