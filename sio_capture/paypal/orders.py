"""
Construction du payload de création d'order PayPal (intent CAPTURE, EUR).
"""
from typing import Any, Dict, Optional

from sio_capture import catalog
from sio_capture.utils.amounts import normalize_amount

# module sio_capture.paypal.orders
def order_total(amount: Optional[Any], has_bump: bool) -> str:
    """Montant explicite de l'appelant, sinon 24.00 avec bump, 19.00 sans."""
    explicit = normalize_amount(amount)
    if explicit:
        return explicit
    return catalog.BUNDLE_PRICE if has_bump else catalog.STARTER_PRICE


def build_order_payload(amount: Optional[Any] = None, has_bump: bool = False) -> Dict[str, Any]:
    """
    Payload POST /v2/checkout/orders.
    - reference_id distingue le bundle (Starter + Mini) du Starter seul
    """
    return {
        "intent": "CAPTURE",
        "purchase_units": [
            {
                "reference_id": catalog.BUNDLE_REFERENCE if has_bump else catalog.STARTER_REFERENCE,
                "amount": {"currency_code": catalog.CURRENCY, "value": order_total(amount, has_bump)},
            }
        ],
    }
