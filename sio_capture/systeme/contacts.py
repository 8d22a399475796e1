"""
Cas d'usage 'contacts': upsert idempotent d'un contact systeme.io par email.

Algorithme en deux branches explicites:
  A) création (POST /contacts) -> contact créé si 2xx
  B) sinon: recherche par email (premier résultat, email identique à la casse près) puis merge-patch des champs adresse
"""
import logging
from typing import Any, Dict, List, Optional

from sio_capture.errors import ContactNotFoundError, ContactUpsertError, MissingBuyerEmailError
from sio_capture.paypal.buyer import BuyerProfile
from sio_capture.utils.http import response_json
from sio_capture.utils.payloads import as_text

from .client import SystemeClient

logger = logging.getLogger(__name__)

# Slugs des champs personnalisés côté systeme.io
ADDRESS_FIELD_SLUGS = ("address", "city", "state", "postal_code", "country")


# module sio_capture.systeme.contacts
def address_fields(profile: BuyerProfile) -> List[Dict[str, Optional[str]]]:
    """
    Champs personnalisés [{slug, value}]; une chaîne vide devient null (sentinelle attendue par l'API).
    """
    values = (profile.address_line, profile.city, profile.state, profile.postal_code, profile.country_code)
    return [{"slug": slug, "value": value or None} for slug, value in zip(ADDRESS_FIELD_SLUGS, values)]


def contact_create_payload(profile: BuyerProfile) -> Dict[str, Any]:
    """Payload de création; prénom/nom omis s'ils sont vides."""
    payload: Dict[str, Any] = {"email": profile.email}
    if profile.given_name:
        payload["firstName"] = profile.given_name
    if profile.surname:
        payload["lastName"] = profile.surname
    payload["fields"] = address_fields(profile)
    return payload


def contact_patch_payload(profile: BuyerProfile) -> Dict[str, Any]:
    """Merge-patch: uniquement les champs adresse, le reste du contact est conservé."""
    return {"fields": address_fields(profile)}


async def create_contact(client: SystemeClient, profile: BuyerProfile) -> Optional[Dict[str, Any]]:
    """Branche A: renvoie le contact créé, ou None si systeme.io refuse (ex: email déjà existant)."""
    response = await client.create_contact(contact_create_payload(profile))
    if response.is_success:
        return response_json(response)
    logger.info("sio.contacts.create rejected http=%s email=%s", response.status_code, profile.email)
    return None


async def update_existing_contact(client: SystemeClient, profile: BuyerProfile) -> Dict[str, Any]:
    """
    Branche B: recherche par email (limit=1) puis merge-patch.
    - ContactNotFoundError si la recherche ne renvoie rien, ou un contact d'un autre email
    - ContactUpsertError si la recherche ou le patch échouent côté HTTP
    """
    lookup = await client.find_contacts(profile.email, limit=1)
    if not lookup.is_success:
        raise ContactUpsertError(f"lookup failed http={lookup.status_code}", lookup.text)
    items = response_json(lookup).get("items")
    contact = items[0] if isinstance(items, list) and items else None
    if not isinstance(contact, dict) or contact.get("id") is None:
        raise ContactNotFoundError(profile.email)
    if as_text(contact.get("email")).lower() != profile.email.lower():
        # Correspondance exacte exigée, casse ignorée
        raise ContactNotFoundError(profile.email)

    patch = await client.patch_contact(contact["id"], contact_patch_payload(profile))
    if not patch.is_success:
        raise ContactUpsertError(f"patch failed http={patch.status_code} id={contact['id']}", patch.text)
    logger.info("sio.contacts.patched id=%s email=%s", contact["id"], profile.email)
    return contact


async def upsert_contact(client: SystemeClient, profile: BuyerProfile) -> Dict[str, Any]:
    """
    Crée ou met à jour le contact (clé naturelle: email). 1 à 3 écritures/lectures distantes.
    MissingBuyerEmailError (400) sans email: aucun appel distant.
    """
    if not profile.email:
        raise MissingBuyerEmailError()
    created = await create_contact(client, profile)
    if created is not None:
        logger.info("sio.contacts.created id=%s email=%s", created.get("id"), profile.email)
        return created
    return await update_existing_contact(client, profile)
