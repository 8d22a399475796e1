"""
Module 'paypal' (feature-first): point d'entrée public.
Réunit le client REST PayPal, la lecture de statut/montant et l'extraction acheteur.
"""

from .client import PayPalClient
from .status import is_completed, captured_amount
from .buyer import BuyerProfile, extract_buyer_profile, join_address_lines
from .orders import build_order_payload, order_total

__all__ = [
    # client
    "PayPalClient",
    # status
    "is_completed",
    "captured_amount",
    # buyer
    "BuyerProfile",
    "extract_buyer_profile",
    "join_address_lines",
    # orders
    "build_order_payload",
    "order_total",
]
