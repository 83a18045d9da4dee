"""
Dépendances partagées de l'application web.

Le Container DI est créé au démarrage (lifespan) et stocké dans app.state.
"""

from fastapi import Request

from ..container import Container


def get_container(request: Request) -> Container:
    """Retourne le Container DI de l'application."""
    return request.app.state.container
