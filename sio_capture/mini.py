"""
Mini app de diagnostic: uniquement /health, sans dépendance PayPal/systeme.io.
Sert à vérifier qu'un process démarre (ex: uvicorn sio_capture.mini:app --port 3001).
"""
import logging
from fastapi import FastAPI
from sio_capture.health.router import router as health_router

logger = logging.getLogger("uvicorn.error")

def create_mini_app() -> FastAPI:
    app = FastAPI(title="SIO Capture mini")
    app.include_router(health_router)
    logger.info("Mini server boot")
    return app

app = create_mini_app()
