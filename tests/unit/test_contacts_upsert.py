import json
from dataclasses import replace

import httpx
import pytest

from conftest import CONTACTS_PATH
from sio_capture.errors import ContactNotFoundError, ContactUpsertError, MissingBuyerEmailError
from sio_capture.paypal import BuyerProfile
from sio_capture.systeme import SystemeClient, contact_create_payload, upsert_contact

PROFILE = BuyerProfile(
    email="buyer@example.com",
    given_name="Ada",
    surname="",
    address_line="12 rue de la Paix",
    city="Paris",
    state="",
    postal_code="75002",
    country_code="FR",
)


def test_create_payload_uses_null_for_empty_fields_and_omits_empty_names():
    payload = contact_create_payload(PROFILE)
    assert payload["email"] == "buyer@example.com"
    assert payload["firstName"] == "Ada"
    assert "lastName" not in payload
    assert payload["fields"] == [
        {"slug": "address", "value": "12 rue de la Paix"},
        {"slug": "city", "value": "Paris"},
        {"slug": "state", "value": None},
        {"slug": "postal_code", "value": "75002"},
        {"slug": "country", "value": "FR"},
    ]


@pytest.mark.asyncio
async def test_create_branch_single_call(settings, remote):
    remote.json("POST", CONTACTS_PATH, 201, {"id": 42, "email": "buyer@example.com"})
    async with remote.client() as http:
        contact = await upsert_contact(SystemeClient(settings, http), PROFILE)

    assert contact["id"] == 42
    assert remote.paths() == ["POST /api/contacts"]
    assert remote.calls[0].headers["x-api-key"] == "sio-key"


@pytest.mark.asyncio
async def test_fallback_branch_lookup_then_merge_patch(settings, remote):
    remote.json("POST", CONTACTS_PATH, 422, {"detail": "email: This value is already used."})
    remote.json("GET", CONTACTS_PATH, 200, {"items": [{"id": 7, "email": "buyer@example.com"}]})
    remote.json("PATCH", f"{CONTACTS_PATH}/7", 200, {"id": 7})
    async with remote.client() as http:
        contact = await upsert_contact(SystemeClient(settings, http), PROFILE)

    assert contact["id"] == 7
    assert remote.paths() == ["POST /api/contacts", "GET /api/contacts", "PATCH /api/contacts/7"]
    lookup = remote.calls[1]
    assert lookup.url.params["email"] == "buyer@example.com"
    assert lookup.url.params["limit"] == "1"
    patch = remote.calls[2]
    assert patch.headers["content-type"] == "application/merge-patch+json"
    body = json.loads(patch.content)
    assert set(body) == {"fields"}
    assert [f["slug"] for f in body["fields"]] == ["address", "city", "state", "postal_code", "country"]


@pytest.mark.asyncio
async def test_upsert_twice_same_email_returns_same_id(settings, remote):
    created = {"id": 99, "email": "buyer@example.com"}
    remote.on(
        "POST",
        CONTACTS_PATH,
        httpx.Response(201, json=created),
        httpx.Response(422, json={"detail": "already used"}),
    )
    remote.json("GET", CONTACTS_PATH, 200, {"items": [created]})
    remote.json("PATCH", f"{CONTACTS_PATH}/99", 200, created)

    async with remote.client() as http:
        client = SystemeClient(settings, http)
        first = await upsert_contact(client, PROFILE)
        second = await upsert_contact(client, PROFILE)

    assert first["id"] == second["id"] == 99
    # Le second appel passe par la branche lookup + patch
    assert remote.paths()[1:] == ["POST /api/contacts", "GET /api/contacts", "PATCH /api/contacts/99"]


@pytest.mark.asyncio
async def test_fallback_lookup_empty_raises_contact_not_found(settings, remote):
    remote.json("POST", CONTACTS_PATH, 422, {"detail": "already used"})
    remote.json("GET", CONTACTS_PATH, 200, {"items": []})
    async with remote.client() as http:
        with pytest.raises(ContactNotFoundError) as exc:
            await upsert_contact(SystemeClient(settings, http), PROFILE)

    assert exc.value.email == "buyer@example.com"
    assert exc.value.status_code == 500
    assert [c for c in remote.calls if c.method == "PATCH"] == []


@pytest.mark.asyncio
async def test_fallback_patch_failure_raises_upsert_error(settings, remote):
    remote.json("POST", CONTACTS_PATH, 422, {})
    remote.json("GET", CONTACTS_PATH, 200, {"items": [{"id": 7, "email": "buyer@example.com"}]})
    remote.on("PATCH", f"{CONTACTS_PATH}/7", httpx.Response(500, text="boom"))
    async with remote.client() as http:
        with pytest.raises(ContactUpsertError) as exc:
            await upsert_contact(SystemeClient(settings, http), PROFILE)
    assert "boom" in str(exc.value)


@pytest.mark.asyncio
async def test_fallback_lookup_other_email_is_not_a_match(settings, remote):
    remote.json("POST", CONTACTS_PATH, 422, {"detail": "already used"})
    remote.json("GET", CONTACTS_PATH, 200, {"items": [{"id": 5, "email": "stranger@example.com"}]})
    remote.json("PATCH", f"{CONTACTS_PATH}/5", 200, {"id": 5})
    async with remote.client() as http:
        with pytest.raises(ContactNotFoundError):
            await upsert_contact(SystemeClient(settings, http), PROFILE)

    assert remote.calls_to("PATCH", f"{CONTACTS_PATH}/5") == []


@pytest.mark.asyncio
async def test_fallback_lookup_email_match_ignores_case(settings, remote):
    remote.json("POST", CONTACTS_PATH, 422, {"detail": "already used"})
    remote.json("GET", CONTACTS_PATH, 200, {"items": [{"id": 7, "email": "Buyer@Example.COM"}]})
    remote.json("PATCH", f"{CONTACTS_PATH}/7", 200, {"id": 7})
    async with remote.client() as http:
        contact = await upsert_contact(SystemeClient(settings, http), PROFILE)
    assert contact["id"] == 7


@pytest.mark.asyncio
async def test_profile_without_email_makes_no_remote_call(settings, remote):
    remote.json("POST", CONTACTS_PATH, 422, {})
    remote.json("GET", CONTACTS_PATH, 200, {"items": [{"id": 5, "email": ""}]})
    async with remote.client() as http:
        with pytest.raises(MissingBuyerEmailError) as exc:
            await upsert_contact(SystemeClient(settings, http), replace(PROFILE, email=""))

    assert exc.value.status_code == 400
    assert exc.value.public_payload() == {"ok": False, "msg": "buyer email missing"}
    assert remote.calls == []
