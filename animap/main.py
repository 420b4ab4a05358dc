"""
Point d'entree CLI d'animap.

Configure le logging depuis les parametres et monte les commandes CLI.
"""

from typing import Annotated

import typer
from loguru import logger

from . import __version__
from .adapters.cli.commands import episodes, map_anime
from .config import Settings
from .logging_config import configure_logging

app = typer.Typer(
    name="animap",
    help="Resolution d'un anime AniList vers sa fiche anicrush",
)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Affiche le detail des recherches"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Mode silencieux (erreurs uniquement)"),
    ] = False,
) -> None:
    """animap - correspondance AniList / anicrush."""
    settings = Settings()
    level = settings.log_level
    if quiet:
        level = "ERROR"
    elif verbose:
        level = "DEBUG"
    configure_logging(
        log_level=level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )


app.command(name="map")(map_anime)
app.command()(episodes)


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = Settings()
    logger.info("Configuration animap")
    typer.echo(f"AniList : {config.anilist_url}")
    typer.echo(f"anicrush : {config.anicrush_api_url}")
    typer.echo(f"Seuil d'acceptation : {config.match_threshold}")
    typer.echo(f"Resultats par recherche : {config.search_limit}")
    typer.echo(f"Cache : {config.cache_dir if config.cache_enabled else 'desactive'}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"animap v{__version__}")


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Adresse d'ecoute")] = "127.0.0.1",
    port: Annotated[int, typer.Option(help="Port d'ecoute")] = 8000,
    reload: Annotated[bool, typer.Option(help="Rechargement automatique")] = False,
) -> None:
    """Lance l'API HTTP animap."""
    import uvicorn

    typer.echo(f"Demarrage du serveur sur {host}:{port}")
    uvicorn.run("animap.web.app:app", host=host, port=port, reload=reload)


def main() -> None:
    """Point d'entree de l'application."""
    app()


if __name__ == "__main__":
    main()
