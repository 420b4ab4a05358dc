"""
Commandes CLI de resolution et de consultation des episodes.

- map : resout un ID AniList vers la fiche anicrush
- episodes : liste les episodes d'une fiche anicrush
"""

import asyncio
import json
from typing import Annotated

import typer
from rich.table import Table

from animap.adapters.cli.helpers import console, print_error, with_container
from animap.core.entities.media import Episode, MatchResult
from animap.core.errors import MappingError, ProviderError


def map_anime(
    anilist_id: Annotated[int, typer.Argument(help="ID AniList de l'anime")],
    as_json: Annotated[
        bool, typer.Option("--json", help="Affiche le resultat en JSON")
    ] = False,
) -> None:
    """Resout un anime AniList vers sa fiche anicrush."""
    try:
        result = asyncio.run(_map_async(anilist_id))
    except MappingError as e:
        print_error(e)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        console.print(_match_table(result))


@with_container()
async def _map_async(container, anilist_id: int) -> MatchResult:
    """Implementation async de la commande map."""
    resolver = container.match_resolver()
    return await resolver.resolve(anilist_id)


def episodes(
    movie_id: Annotated[str, typer.Argument(help="ID anicrush de la fiche")],
) -> None:
    """Liste les episodes d'une fiche anicrush."""
    try:
        items = asyncio.run(_episodes_async(movie_id))
    except ProviderError as e:
        print_error(e)

    if not items:
        console.print("[yellow]Aucun episode[/yellow]")
        return
    console.print(_episodes_table(items))


@with_container()
async def _episodes_async(container, movie_id: str) -> list[Episode]:
    """Implementation async de la commande episodes."""
    return await container.anicrush_client().get_episode_list(movie_id)


def _match_table(result: MatchResult) -> Table:
    """Tableau Rich d'une correspondance."""
    table = Table(title=f"AniList {result.source_id} -> anicrush {result.candidate_id}")
    table.add_column("Champ", style="cyan")
    table.add_column("Valeur")
    table.add_row("Romaji", result.titles.romaji or "-")
    table.add_row("Anglais", result.titles.english or "-")
    table.add_row("Natif", result.titles.native or "-")
    table.add_row("anicrush", result.titles.candidate_name or "-")
    table.add_row("anicrush (anglais)", result.titles.candidate_name_english or "-")
    table.add_row("Type", result.type_label or "-")
    table.add_row("Annee", str(result.year) if result.year else "-")
    table.add_row("Score", f"{result.score:.2f}")
    table.add_row("Recherche", result.matched_variant or "-")
    return table


def _episodes_table(items: list[Episode]) -> Table:
    """Tableau Rich d'une liste d'episodes."""
    table = Table(title=f"{len(items)} episode(s)")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Titre")
    table.add_column("Titre anglais")
    table.add_column("Filler", justify="center")
    for ep in items:
        table.add_row(
            str(ep.number),
            ep.name or "",
            ep.name_english or "",
            "[yellow]oui[/yellow]" if ep.is_filler else "",
        )
    return table
