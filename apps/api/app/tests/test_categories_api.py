from fastapi.testclient import TestClient


def _create(client: TestClient, headers: dict[str, str], name: str) -> int:
    response = client.post("/categories", json={"name": name}, headers=headers)
    assert response.status_code == 201
    return response.json()["id"]


def test_public_list_shows_active_categories_by_name(
    client: TestClient, admin_headers: dict[str, str]
) -> None:
    _create(client, admin_headers, "sport")
    _create(client, admin_headers, "books")
    client.post(
        "/categories", json={"name": "archive", "is_active": False}, headers=admin_headers
    )

    response = client.get("/categories")

    assert response.status_code == 200
    assert [item["name"] for item in response.json()] == ["books", "sport"]


def test_category_writes_require_admin(client: TestClient) -> None:
    assert client.post("/categories", json={"name": "sport"}).status_code == 401
    assert client.put("/categories/1", json={"name": "x"}).status_code == 401
    assert client.delete("/categories/1").status_code == 401


def test_duplicate_name_conflicts(client: TestClient, admin_headers: dict[str, str]) -> None:
    _create(client, admin_headers, "sport")
    books_id = _create(client, admin_headers, "books")

    created = client.post("/categories", json={"name": "sport"}, headers=admin_headers)
    renamed = client.put(
        f"/categories/{books_id}", json={"name": "sport"}, headers=admin_headers
    )

    assert created.status_code == 409
    assert created.json()["detail"]["code"] == "CATEGORY_ALREADY_EXISTS"
    assert renamed.status_code == 409
    assert [item["name"] for item in client.get("/categories").json()] == ["books", "sport"]


def test_update_changes_only_given_fields(
    client: TestClient, admin_headers: dict[str, str]
) -> None:
    category_id = _create(client, admin_headers, "sport")

    response = client.put(
        f"/categories/{category_id}",
        json={"description": "Bikes, skis and the rest"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["name"] == "sport"
    assert response.json()["description"] == "Bikes, skis and the rest"
    null_name = client.put(
        f"/categories/{category_id}", json={"name": None}, headers=admin_headers
    )
    assert null_name.status_code == 422


def test_delete_hides_category_but_keeps_it(
    client: TestClient, admin_headers: dict[str, str]
) -> None:
    category_id = _create(client, admin_headers, "sport")

    deleted = client.delete(f"/categories/{category_id}", headers=admin_headers)

    assert deleted.status_code == 204
    assert client.get("/categories").json() == []
    restored = client.put(
        f"/categories/{category_id}", json={"is_active": True}, headers=admin_headers
    )
    assert restored.status_code == 200
    assert [item["id"] for item in client.get("/categories").json()] == [category_id]


def test_unknown_category_is_not_found(client: TestClient, admin_headers: dict[str, str]) -> None:
    deleted = client.delete("/categories/999", headers=admin_headers)
    updated = client.put("/categories/999", json={"name": "x"}, headers=admin_headers)

    assert deleted.status_code == 404
    assert deleted.json()["detail"]["code"] == "CATEGORY_NOT_FOUND"
    assert updated.status_code == 404
