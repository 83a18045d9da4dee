"""
Application FastAPI d'EpiSync.

Initialise l'application web avec le Container DI existant
et monte les routes JSON.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from ..container import Container
from .routes.episodes import router as episodes_router
from .routes.missing import router as missing_router
from .routes.series import router as series_router


def create_app(container: Optional[Container] = None) -> FastAPI:
    """
    Construit l'application.

    Args:
        container: Container deja configure (tests), sinon un nouveau
                   container est cree et la base initialisee au demarrage.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialise le Container DI au démarrage, ferme le client TVDB à l'arrêt."""
        app_container = container or Container()
        if container is None:
            app_container.database.init()
        app.state.container = app_container
        yield
        if container is None:
            await app_container.tvdb_client().close()

    application = FastAPI(title="EpiSync", lifespan=lifespan)
    application.include_router(missing_router)
    application.include_router(series_router)
    application.include_router(episodes_router)
    return application


app = create_app()
