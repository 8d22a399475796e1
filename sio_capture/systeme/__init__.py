"""
Module 'systeme' (feature-first): point d'entrée public.
Réunit le client systeme.io, l'upsert de contact et les inscriptions par palier.
"""

from .client import SystemeClient
from .contacts import (
    address_fields,
    contact_create_payload,
    contact_patch_payload,
    create_contact,
    update_existing_contact,
    upsert_contact,
)
from .enrollments import CourseIds, EnrollmentResult, plan_for_amount, enroll, enroll_for_amount

__all__ = [
    # client
    "SystemeClient",
    # contacts
    "address_fields",
    "contact_create_payload",
    "contact_patch_payload",
    "create_contact",
    "update_existing_contact",
    "upsert_contact",
    # enrollments
    "CourseIds",
    "EnrollmentResult",
    "plan_for_amount",
    "enroll",
    "enroll_for_amount",
]
