"""
Extraction du profil acheteur depuis la réponse de capture PayPal.
Fonction pure: pas d'appel réseau, jamais de None dans le résultat.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from sio_capture.utils.payloads import as_text, dig


@dataclass(frozen=True)
class BuyerProfile:
    email: str = ""
    given_name: str = ""
    surname: str = ""
    address_line: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country_code: str = ""


def _buyer_address(details: Dict[str, Any]) -> Dict[str, Any]:
    # Adresse de livraison du purchase unit, sinon adresse de facturation du payer
    for path in (("purchase_units", 0, "shipping", "address"), ("payer", "address")):
        addr = dig(details, *path)
        if isinstance(addr, dict) and addr:
            return addr
    return {}


def join_address_lines(*lines: Any) -> str:
    """Concatène les lignes non vides avec un seul espace (pas d'espace en bord)."""
    return " ".join(part for part in (as_text(line) for line in lines) if part)


# module sio_capture.paypal.buyer
def extract_buyer_profile(details: Dict[str, Any], email_override: Optional[str] = None) -> BuyerProfile:
    """
    Construit le BuyerProfile.
    - email: override appelant > payer.email_address > ""
    - nom: payer.name.given_name / payer.name.surname
    - adresse: shipping du purchase unit > payer.address > {}
    """
    addr = _buyer_address(details)
    return BuyerProfile(
        email=as_text(email_override) or as_text(dig(details, "payer", "email_address")),
        given_name=as_text(dig(details, "payer", "name", "given_name")),
        surname=as_text(dig(details, "payer", "name", "surname")),
        address_line=join_address_lines(addr.get("address_line_1"), addr.get("address_line_2")),
        city=as_text(addr.get("admin_area_2")),
        state=as_text(addr.get("admin_area_1")),
        postal_code=as_text(addr.get("postal_code")),
        country_code=as_text(addr.get("country_code")),
    )
