from fastapi.testclient import TestClient
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.store_settings import StoreSettings

PROFILE = {
    "store_name": "Bazar Osiedlowy",
    "contact_phone": "+48 22 000 00 00",
    "store_description": "Local classifieds for the neighbourhood",
}


def test_defaults_come_from_config_before_first_save(client: TestClient) -> None:
    response = client.get("/settings")

    assert response.status_code == 200
    assert response.json()["store_name"] == settings.store_name
    assert response.json()["contact_phone"] == settings.store_contact_phone


def test_update_requires_admin(client: TestClient) -> None:
    assert client.put("/settings", json=PROFILE).status_code == 401


def test_update_creates_then_overwrites_single_row(
    client: TestClient, admin_headers: dict[str, str], db_session: Session
) -> None:
    first = client.put("/settings", json=PROFILE, headers=admin_headers)
    second = client.put(
        "/settings", json={**PROFILE, "store_name": "Bazar 2"}, headers=admin_headers
    )

    assert first.status_code == 200
    assert second.status_code == 200
    assert client.get("/settings").json()["store_name"] == "Bazar 2"
    assert db_session.scalar(select(func.count()).select_from(StoreSettings)) == 1


def test_update_rejects_partial_or_unknown_payloads(
    client: TestClient, admin_headers: dict[str, str]
) -> None:
    missing = {key: value for key, value in PROFILE.items() if key != "contact_phone"}

    assert client.put("/settings", json=missing, headers=admin_headers).status_code == 422
    assert (
        client.put("/settings", json={**PROFILE, "theme": "dark"}, headers=admin_headers)
        .status_code
        == 422
    )
    assert (
        client.put("/settings", json={**PROFILE, "store_name": ""}, headers=admin_headers)
        .status_code
        == 422
    )
