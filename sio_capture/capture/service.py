"""
Cas d'usage 'capture': orchestre PayPal (token, capture) puis systeme.io (contact, inscriptions).

Machine à états d'un run (chaque étape dépend strictement de la précédente):
  received -> authenticate -> capture -> verify_amount -> upsert_contact -> enroll -> done
Toute erreur arrête le run à l'étape courante (CaptureError.stage); aucune relance automatique.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from sio_capture import catalog
from sio_capture.config import Settings
from sio_capture.errors import (
    AmountMismatchError,
    CaptureStage,
    ContactUpsertError,
    MissingOrderIdError,
    PaymentNotCompletedError,
    UnexpectedAmountWarning,
)
from sio_capture.paypal import PayPalClient, build_order_payload, captured_amount, extract_buyer_profile
from sio_capture.systeme import CourseIds, SystemeClient, enroll_for_amount, upsert_contact
from sio_capture.utils.amounts import normalize_amount

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CaptureCommand:
    order_id: Optional[str]
    expected_amount: Optional[str] = None
    email: Optional[str] = None


@dataclass(frozen=True)
class CaptureResult:
    contact_id: Any
    amount: str
    warning: Optional[UnexpectedAmountWarning] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "ok": True,
            "status": "COMPLETED",
            "contactId": self.contact_id,
            "amount": self.amount,
        }
        if self.warning is not None:
            payload["warning"] = str(self.warning)
        return payload


# module sio_capture.capture.service
def resolve_paid_amount(details: Dict[str, Any], expected_amount: Optional[str]) -> str:
    """
    Montant payé: capture imbriquée > purchase unit > expectedAmount > 19.00, normalisé à deux décimales.
    """
    raw = captured_amount(details) or expected_amount or catalog.DEFAULT_PAID_AMOUNT
    return normalize_amount(raw) or catalog.DEFAULT_PAID_AMOUNT


def verify_amount(paid: str, expected_amount: Optional[str]) -> None:
    """
    Contrôle best-effort: uniquement si l'appelant a fourni expectedAmount.
    Soulève AmountMismatchError(paid, expectedAmount) en cas d'écart.
    """
    if not expected_amount:
        return
    if normalize_amount(expected_amount) != paid:
        raise AmountMismatchError(paid, expected_amount)


def _log_stage(stage: CaptureStage, order_id: str, **extra: Any) -> None:
    suffix = " ".join(f"{k}={v}" for k, v in extra.items())
    logger.info("capture.stage=%s order_id=%s %s", stage.value, order_id, suffix)


async def capture_and_provision(command: CaptureCommand, settings: Settings, http: httpx.AsyncClient) -> CaptureResult:
    """
    Exécute un run complet pour un orderID PayPal.
    - 400: MissingOrderIdError, PaymentNotCompletedError, AmountMismatchError, MissingBuyerEmailError
    - 500: AuthError, ContactUpsertError/ContactNotFoundError, EnrollmentError, erreurs transport httpx
    """
    order_id = (command.order_id or "").strip()
    if not order_id:
        # Précondition: aucun appel distant
        raise MissingOrderIdError()

    paypal = PayPalClient(settings, http)
    token = await paypal.get_access_token()
    _log_stage(CaptureStage.AUTHENTICATE, order_id, mode=settings.paypal_mode_label)

    details, completed = await paypal.capture_order(order_id, token)
    if not completed:
        raise PaymentNotCompletedError(details)
    _log_stage(CaptureStage.CAPTURE, order_id)

    paid = resolve_paid_amount(details, command.expected_amount)
    verify_amount(paid, command.expected_amount)
    _log_stage(CaptureStage.VERIFY_AMOUNT, order_id, paid=paid)

    systeme = SystemeClient(settings, http)
    profile = extract_buyer_profile(details, command.email)
    contact = await upsert_contact(systeme, profile)
    contact_id = contact.get("id")
    if contact_id is None:
        raise ContactUpsertError("contact sans id", str(contact))
    _log_stage(CaptureStage.UPSERT_CONTACT, order_id, contact_id=contact_id)

    courses = CourseIds(starter=settings.sio_course_id_starter, mini=settings.sio_course_id_mini)
    enrollment = await enroll_for_amount(systeme, contact_id, paid, courses)
    _log_stage(CaptureStage.ENROLL, order_id, courses=",".join(enrollment.enrolled) or "-")

    return CaptureResult(contact_id=contact_id, amount=paid, warning=enrollment.warning)


async def create_paypal_order(amount: Any, has_bump: bool, settings: Settings, http: httpx.AsyncClient) -> Dict[str, Any]:
    """
    Crée l'order PayPal côté serveur (passe-plat): total 19.00 ou 24.00 par défaut.
    Retour: {"id": <order id>}. OrderCreationError si PayPal refuse.
    """
    paypal = PayPalClient(settings, http)
    token = await paypal.get_access_token()
    payload = build_order_payload(amount, has_bump)
    order = await paypal.create_order(payload, token)
    logger.info(
        "paypal.order.created id=%s reference=%s total=%s",
        order.get("id"), payload["purchase_units"][0]["reference_id"], payload["purchase_units"][0]["amount"]["value"],
    )
    return {"id": order.get("id")}
