"""
Lecture du statut et du montant d'une capture PayPal (Orders v2).
Deux formes valides coexistent: statut au niveau de l'order, ou statut de la capture imbriquée.
"""
from typing import Any, Dict, Optional

from sio_capture.utils.payloads import as_text, dig

COMPLETED = "COMPLETED"

# module sio_capture.paypal.status
def is_completed(details: Any) -> bool:
    """
    Vrai si details.status == "COMPLETED" ou si la première capture du premier
    purchase unit est "COMPLETED". Un chemin imbriqué absent vaut False.
    """
    if dig(details, "status") == COMPLETED:
        return True
    return dig(details, "purchase_units", 0, "payments", "captures", 0, "status") == COMPLETED


def captured_amount(details: Dict[str, Any]) -> Optional[str]:
    """
    Montant payé tel que rapporté par PayPal:
    capture imbriquée > amount du purchase unit > None.
    """
    for path in (
        ("purchase_units", 0, "payments", "captures", 0, "amount", "value"),
        ("purchase_units", 0, "amount", "value"),
    ):
        value = as_text(dig(details, *path))
        if value:
            return value
    return None
