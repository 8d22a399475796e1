"""
Erreurs du workflow capture -> provisioning.

Chaque erreur porte l'étape (CaptureStage) où le run s'est arrêté et le code HTTP
renvoyé à l'appelant:
- 400: état acheteur/fournisseur ou entrée invalide (détail brut renvoyé)
- 500: défaut interne ou dépendance injoignable (détail journalisé, message générique)
"""
from enum import Enum
from typing import Any, Dict

GENERIC_CAPTURE_ERROR = "capture/enroll failed"


class CaptureStage(str, Enum):
    RECEIVED = "received"
    AUTHENTICATE = "authenticate"
    CAPTURE = "capture"
    VERIFY_AMOUNT = "verify_amount"
    UPSERT_CONTACT = "upsert_contact"
    ENROLL = "enroll"
    CREATE_ORDER = "create_order"


class CaptureError(Exception):
    """Base: arrête le run à `stage`."""
    stage: CaptureStage = CaptureStage.RECEIVED
    status_code: int = 500

    def public_payload(self) -> Dict[str, Any]:
        # 500: le détail brut reste dans les logs
        return {"ok": False, "error": GENERIC_CAPTURE_ERROR}


class MissingOrderIdError(CaptureError):
    stage = CaptureStage.RECEIVED
    status_code = 400

    def __init__(self):
        super().__init__("orderID missing")

    def public_payload(self) -> Dict[str, Any]:
        return {"ok": False, "msg": "orderID missing"}


class AuthError(CaptureError):
    """Échange client-credentials refusé par PayPal."""
    stage = CaptureStage.AUTHENTICATE

    def __init__(self, status_code: int, body: str):
        self.provider_status = status_code
        self.body = body
        super().__init__(f"[paypal token] {status_code} {body}")


class PaymentNotCompletedError(CaptureError):
    stage = CaptureStage.CAPTURE
    status_code = 400

    def __init__(self, details: Dict[str, Any]):
        self.details = details
        super().__init__(f"payment not completed (status={details.get('status')})")

    def public_payload(self) -> Dict[str, Any]:
        return {"ok": False, "msg": "not completed", "details": self.details}


class AmountMismatchError(CaptureError):
    stage = CaptureStage.VERIFY_AMOUNT
    status_code = 400

    def __init__(self, paid: str, expected_amount: str):
        self.paid = paid
        self.expected_amount = expected_amount
        super().__init__(f"amount mismatch paid={paid} expected={expected_amount}")

    def public_payload(self) -> Dict[str, Any]:
        return {
            "ok": False,
            "msg": "amount mismatch",
            "paid": self.paid,
            "expectedAmount": self.expected_amount,
        }


class MissingBuyerEmailError(CaptureError):
    """Ni PayPal ni l'appelant ne fournissent d'email: aucun contact ne peut être rattaché."""
    stage = CaptureStage.UPSERT_CONTACT
    status_code = 400

    def __init__(self):
        super().__init__("buyer email missing")

    def public_payload(self) -> Dict[str, Any]:
        return {"ok": False, "msg": "buyer email missing"}


class ContactUpsertError(CaptureError):
    """Création puis repli (lookup + patch) en échec côté systeme.io."""
    stage = CaptureStage.UPSERT_CONTACT

    def __init__(self, message: str, body: str = ""):
        self.body = body
        super().__init__(f"[sio upsert] {message} {body}".strip())


class ContactNotFoundError(ContactUpsertError):
    def __init__(self, email: str):
        self.email = email
        super().__init__(f"not found after create (email={email!r})")


class EnrollmentError(CaptureError):
    stage = CaptureStage.ENROLL

    def __init__(self, course_id: str, contact_id: Any, body: str):
        self.course_id = course_id
        self.contact_id = contact_id
        self.body = body
        super().__init__(f"[sio enroll] course={course_id} contact={contact_id} {body}")


class OrderCreationError(CaptureError):
    """Création d'order refusée par PayPal: le corps fournisseur est renvoyé tel quel (400)."""
    stage = CaptureStage.CREATE_ORDER
    status_code = 400

    def __init__(self, body: Dict[str, Any], provider_status: int):
        self.body = body
        self.provider_status = provider_status
        super().__init__(f"[paypal create order] {provider_status}")

    def public_payload(self) -> Dict[str, Any]:
        return self.body


class UnexpectedAmountWarning(UserWarning):
    """Montant hors paliers connus: non bloquant, à réconcilier manuellement."""

    def __init__(self, amount: str):
        self.amount = amount
        super().__init__(f"Unexpected amount: {amount}")
