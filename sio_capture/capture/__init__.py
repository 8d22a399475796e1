"""
Module 'capture' (feature-first): point d'entrée public.
Réunit l'orchestrateur capture -> provisioning et les schémas d'entrée HTTP.
"""

from .models import CaptureOrderBody, CreateOrderBody
from .service import (
    CaptureCommand,
    CaptureResult,
    capture_and_provision,
    create_paypal_order,
    resolve_paid_amount,
    verify_amount,
)

__all__ = [
    # models
    "CaptureOrderBody",
    "CreateOrderBody",
    # service
    "CaptureCommand",
    "CaptureResult",
    "capture_and_provision",
    "create_paypal_order",
    "resolve_paid_amount",
    "verify_amount",
]
