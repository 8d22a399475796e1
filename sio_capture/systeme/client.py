"""
Adaptateur systeme.io (API publique, authentification X-API-Key).
Méthodes minces: renvoient la réponse httpx, la décision (succès/repli) reste aux cas d'usage.
"""
from typing import Any, Dict
from urllib.parse import quote

import httpx

from sio_capture.config import Settings


# module sio_capture.systeme.client
class SystemeClient:
    def __init__(self, settings: Settings, http: httpx.AsyncClient) -> None:
        self.base_url = settings.sio_base_url.rstrip("/")
        self.api_key = settings.sio_api_key
        self.http = http

    def _headers(self, content_type: str = "application/json") -> Dict[str, str]:
        return {"Content-Type": content_type, "X-API-Key": self.api_key}

    async def create_contact(self, payload: Dict[str, Any]) -> httpx.Response:
        """POST /contacts (échoue typiquement en 4xx si l'email existe déjà)."""
        return await self.http.post(f"{self.base_url}/contacts", json=payload, headers=self._headers())

    async def find_contacts(self, email: str, limit: int = 1) -> httpx.Response:
        """GET /contacts?email=...&limit=... (correspondance exacte sur l'email)."""
        return await self.http.get(
            f"{self.base_url}/contacts",
            params={"email": email, "limit": limit},
            headers={"X-API-Key": self.api_key},
        )

    async def patch_contact(self, contact_id: Any, payload: Dict[str, Any]) -> httpx.Response:
        """PATCH /contacts/{id} en merge-patch: seuls les champs fournis sont modifiés."""
        return await self.http.patch(
            f"{self.base_url}/contacts/{quote(str(contact_id), safe='')}",
            json=payload,
            headers=self._headers("application/merge-patch+json"),
        )

    async def enroll(self, course_id: str, contact_id: Any) -> httpx.Response:
        """POST /school/courses/{course_id}/enrollments {contactId}."""
        return await self.http.post(
            f"{self.base_url}/school/courses/{quote(str(course_id), safe='')}/enrollments",
            json={"contactId": contact_id},
            headers=self._headers(),
        )
