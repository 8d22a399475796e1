import logging
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from sio_capture.config import Settings
from sio_capture.dependencies import get_http_client, get_settings
from sio_capture.errors import GENERIC_CAPTURE_ERROR, CaptureError
from sio_capture.utils.rate_limit import optional_rate_limit

from .models import CaptureOrderBody, CreateOrderBody
from .service import CaptureCommand, capture_and_provision, create_paypal_order as create_order_service

logger = logging.getLogger(__name__)
router = APIRouter(tags=["PayPal"])


async def checkout_rate_limit(request: Request, response: Response):
    """Rate limit des routes de paiement: CAPTURE_RATE_LIMIT requêtes / 60s / client."""
    times = request.app.state.settings.capture_rate_limit
    return await optional_rate_limit(times=times, seconds=60)(request, response)


# module sio_capture.capture.views
@router.post("/capture-paypal-order", dependencies=[Depends(checkout_rate_limit)])
async def capture_paypal_order(
    body: Optional[CaptureOrderBody] = None,
    settings: Settings = Depends(get_settings),
    http: httpx.AsyncClient = Depends(get_http_client),
):
    """
    Capture l'order PayPal puis inscrit l'acheteur sur systeme.io.
    - Entrée JSON: { "orderID": "...", "expectedAmount"?: "19.00", "email"?: "..." }
    - 200: {ok, status: "COMPLETED", contactId, amount} (+ warning si montant hors palier)
    - 400: orderID manquant, paiement non complété, écart de montant
    - 500: {ok: false, error} (détail uniquement dans les logs)
    """
    body = body or CaptureOrderBody()
    command = CaptureCommand(order_id=body.order_id, expected_amount=body.expected_amount, email=body.email)
    try:
        result = await capture_and_provision(command, settings, http)
    except CaptureError:
        # Rendu par le handler CaptureError (app_setup.exceptions)
        raise
    except Exception:
        logger.exception("Erreur capture_paypal_order order_id=%s", command.order_id)
        return JSONResponse(status_code=500, content={"ok": False, "error": GENERIC_CAPTURE_ERROR})
    return result.to_payload()


@router.post("/create-paypal-order", dependencies=[Depends(checkout_rate_limit)])
async def create_paypal_order(
    body: Optional[CreateOrderBody] = None,
    settings: Settings = Depends(get_settings),
    http: httpx.AsyncClient = Depends(get_http_client),
):
    """
    Création d'order côté serveur (optionnelle: le front peut aussi la créer lui-même).
    - Entrée JSON: { "amount"?: "19.00", "hasBump"?: true }
    - 200: {id}; 400: corps d'erreur PayPal; 500: {error: "create order failed"}
    """
    body = body or CreateOrderBody()
    try:
        return await create_order_service(body.amount, body.has_bump, settings, http)
    except CaptureError as e:
        if e.status_code < 500:
            raise
        logger.error("Erreur create_paypal_order: %s", e)
    except Exception:
        logger.exception("Erreur create_paypal_order")
    return JSONResponse(status_code=500, content={"error": "create order failed"})
