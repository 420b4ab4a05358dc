"""
Outils communs aux commandes CLI d'animap.

- console : console Rich unique
- print_error : message d'erreur en rouge puis sortie en code 1
- with_container : injection du Container dans une implementation async
"""

from functools import wraps
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from animap.container import Container, close_container

console = Console()


def print_error(error: Exception) -> NoReturn:
    """Affiche l'erreur et termine la commande avec le code 1."""
    console.print(f"[red]Erreur:[/red] {escape(str(error))}", highlight=False)
    raise typer.Exit(code=1)


def with_container():
    """
    Fournit un Container neuf en premier argument de la coroutine decoree.

    Clients HTTP et cache sont fermes au retour, exception comprise.

    Usage:
        @with_container()
        async def _map_async(container, anilist_id):
            return await container.match_resolver().resolve(anilist_id)
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            container = Container()
            try:
                return await func(container, *args, **kwargs)
            finally:
                await close_container(container)
        return wrapper
    return decorator
