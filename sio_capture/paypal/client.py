"""
Adaptateur PayPal (REST, Orders v2): centralise les appels et la configuration PayPal.
- Authentification OAuth2 client-credentials (un token par run, jamais mis en cache)
- Création et capture d'order
"""
import logging
from typing import Any, Dict, Tuple
from urllib.parse import quote

import httpx

from sio_capture.config import Settings
from sio_capture.errors import AuthError, OrderCreationError
from sio_capture.utils.http import response_json

from .status import is_completed

logger = logging.getLogger(__name__)


# module sio_capture.paypal.client
class PayPalClient:
    def __init__(self, settings: Settings, http: httpx.AsyncClient) -> None:
        self.base_url = settings.paypal_base_url
        self.client_id = settings.paypal_client_id
        self.client_secret = settings.paypal_client_secret
        self.http = http

    def _bearer(self, token: str) -> Dict[str, str]:
        return {"Authorization": f"Bearer {token}", "Content-Type": "application/json"}

    async def get_access_token(self) -> str:
        """
        POST /v1/oauth2/token (Basic client_id:client_secret, grant_type=client_credentials).
        Soulève AuthError(status, body) si PayPal refuse; pas de retry.
        """
        response = await self.http.post(
            f"{self.base_url}/v1/oauth2/token",
            auth=(self.client_id, self.client_secret),
            data={"grant_type": "client_credentials"},
            headers={"Accept": "application/json"},
        )
        if not response.is_success:
            raise AuthError(response.status_code, response.text)
        token = response_json(response).get("access_token")
        if not token:
            raise AuthError(response.status_code, "access_token absent de la réponse")
        return token

    async def capture_order(self, order_id: str, token: str) -> Tuple[Dict[str, Any], bool]:
        """
        POST /v2/checkout/orders/{order_id}/capture.
        Retour: (details bruts, completed). completed est faux si HTTP non-2xx
        ou si aucun des deux statuts n'est "COMPLETED".
        """
        response = await self.http.post(
            f"{self.base_url}/v2/checkout/orders/{quote(order_id, safe='')}/capture",
            headers=self._bearer(token),
        )
        details = response_json(response)
        completed = response.is_success and is_completed(details)
        logger.info(
            "paypal.capture order_id=%s http=%s status=%s completed=%s",
            order_id, response.status_code, details.get("status"), completed,
        )
        return details, completed

    async def create_order(self, payload: Dict[str, Any], token: str) -> Dict[str, Any]:
        """
        POST /v2/checkout/orders. Soulève OrderCreationError (corps PayPal attaché) si refus.
        """
        response = await self.http.post(
            f"{self.base_url}/v2/checkout/orders",
            json=payload,
            headers=self._bearer(token),
        )
        body = response_json(response)
        if not response.is_success:
            raise OrderCreationError(body, response.status_code)
        return body
