"""
Factory d’application recommandée pour les entrypoints (ex: sio_capture.asgi).
Ordonne les étapes d’initialisation de manière lisible et testable.
"""
from typing import Optional
from fastapi import FastAPI
from sio_capture import __version__
from sio_capture.config import Settings, load_settings
from .lifespan import lifespan
from .middlewares import register_basic_middlewares, register_security_middleware
from .exceptions import register_exception_handlers
from .routers import register_routers

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Construit l’app FastAPI:
      1) Settings immuable (depuis l’environnement si non fourni) -> app.state.settings
      2) middlewares de base (CORS, proxy headers) et en-têtes de sécurité
      3) gestionnaires d’exceptions (CaptureError, validation)
      4) routers (PayPal, health)
    Retour:
      FastAPI prêt à être utilisé par le serveur ASGI.
    """
    app = FastAPI(title="SIO Capture API", version=__version__, lifespan=lifespan)
    app.state.settings = settings or load_settings()
    register_basic_middlewares(app)
    register_security_middleware(app)
    register_exception_handlers(app)
    register_routers(app)
    return app
