"""
Application FastAPI d'animap.

Initialise le Container DI au demarrage, le ferme a l'arret
et monte les routes de l'API.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from .. import __version__
from ..container import Container, close_container
from .routes.mapper import router as mapper_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Cree le Container DI au demarrage et libere les clients a l'arret."""
    container = Container()
    app.state.container = container
    try:
        yield
    finally:
        await close_container(container)


app = FastAPI(title="animap", version=__version__, lifespan=lifespan)


@app.get("/health")
async def health() -> dict:
    """Sonde de disponibilite."""
    return {"status": "ok"}


app.include_router(mapper_router)
