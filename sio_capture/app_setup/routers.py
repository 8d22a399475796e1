"""
Registre central des routers.
- PayPal: capture + provisioning, création d’order
- Health: /health, /health/rate-limit
"""
from fastapi import FastAPI
from sio_capture.capture.views import router as capture_router
from sio_capture.health.router import router as health_router

def register_routers(app: FastAPI) -> None:
    app.include_router(capture_router)
    app.include_router(health_router)
