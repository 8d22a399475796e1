"""
Cas d'usage 'enrollments': montant payé -> inscriptions aux formations.

Paliers (correspondance exacte sur le montant normalisé à deux décimales):
- 19.00: Starter
- 24.00: Starter puis Mini (dans cet ordre)
- autre: aucune inscription + UnexpectedAmountWarning (non bloquant)
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

from sio_capture import catalog
from sio_capture.errors import EnrollmentError, UnexpectedAmountWarning
from sio_capture.utils.amounts import normalize_amount
from sio_capture.utils.http import response_json

from .client import SystemeClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CourseIds:
    starter: str
    mini: str


@dataclass
class EnrollmentResult:
    amount: str
    enrolled: list = field(default_factory=list)
    warning: Optional[UnexpectedAmountWarning] = None


# module sio_capture.systeme.enrollments
def plan_for_amount(amount: Any, courses: CourseIds) -> Optional[Tuple[str, ...]]:
    """
    Plan ordonné des course ids pour un montant; None si aucun palier ne correspond.
    """
    tier = normalize_amount(amount)
    if tier == catalog.STARTER_PRICE:
        return (courses.starter,)
    if tier == catalog.BUNDLE_PRICE:
        return (courses.starter, courses.mini)
    return None


async def enroll(client: SystemeClient, contact_id: Any, course_id: str) -> dict:
    """Une inscription; EnrollmentError avec le texte brut de la réponse si refus."""
    response = await client.enroll(course_id, contact_id)
    if not response.is_success:
        raise EnrollmentError(course_id, contact_id, response.text)
    logger.info("sio.enroll ok course=%s contact=%s", course_id, contact_id)
    return response_json(response)


async def enroll_for_amount(client: SystemeClient, contact_id: Any, amount: str, courses: CourseIds) -> EnrollmentResult:
    """
    Exécute le plan dans l'ordre; la première erreur interrompt la suite (pas de rollback).
    """
    result = EnrollmentResult(amount=amount)
    plan = plan_for_amount(amount, courses)
    if plan is None:
        result.warning = UnexpectedAmountWarning(amount)
        logger.warning("[capture] Unexpected amount: %s (contact=%s) - réconciliation manuelle", amount, contact_id)
        return result

    for course_id in plan:
        await enroll(client, contact_id, course_id)
        result.enrolled.append(course_id)
    return result
