"""
Helpers du transport HTTP sortant (httpx), partagés par les clients PayPal et systeme.io.
"""
from typing import Any, Dict

import httpx

# module sio_capture.utils.http
def response_json(response: httpx.Response) -> Dict[str, Any]:
    """
    Corps JSON de la réponse, toujours sous forme de dict.
    - Corps vide -> {}
    - Corps non JSON (ou JSON non objet) -> {"raw": <texte ou valeur>}
    """
    if not response.content:
        return {}
    try:
        data = response.json()
    except ValueError:
        return {"raw": response.text}
    return data if isinstance(data, dict) else {"raw": data}
