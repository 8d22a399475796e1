"""
Gestionnaires d’exceptions.
- CaptureError: code HTTP et corps public portés par l’erreur (400 détaillé, 500 générique).
- RequestValidationError: corps JSON invalide -> 400 {ok: false, msg: "invalid payload"}.
"""
import logging
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from sio_capture.errors import CaptureError

logger = logging.getLogger(__name__)

def register_exception_handlers(app: FastAPI) -> None:
    """
    Enregistre les handlers.
    - 4xx: journalisés en warning (état acheteur/fournisseur, pas un bug).
    - 5xx: journalisés avec traceback; le détail brut n’est jamais renvoyé à l’appelant.
    """
    @app.exception_handler(CaptureError)
    async def capture_error_handler(request: Request, exc: CaptureError):
        if exc.status_code >= 500:
            logger.error("capture failed stage=%s path=%s: %s", exc.stage.value, request.url.path, exc, exc_info=exc)
        else:
            logger.warning("capture rejected stage=%s path=%s: %s", exc.stage.value, request.url.path, exc)
        return JSONResponse(status_code=exc.status_code, content=exc.public_payload())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"ok": False, "msg": "invalid payload", "errors": jsonable_encoder(exc.errors())},
        )
