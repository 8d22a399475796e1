"""
Dépendances FastAPI communes aux routers.
- get_settings: Settings immuable construit par create_app() (app.state.settings)
- get_http_client: un httpx.AsyncClient par requête entrante, fermé en fin de requête
"""
from typing import AsyncIterator

import httpx
from fastapi import Depends, Request

from sio_capture.config import Settings


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_http_client(settings: Settings = Depends(get_settings)) -> AsyncIterator[httpx.AsyncClient]:
    # Aucun état partagé entre runs: pas de pool ni de cache de token global.
    # Le timeout du transport est le seul timeout appliqué au workflow.
    async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as client:
        yield client
