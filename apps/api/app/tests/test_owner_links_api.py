from collections.abc import Callable
from datetime import timedelta

from fastapi.testclient import TestClient
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.product_tokens import ProductTokenCodec
from app.models.product import Product
from app.tests.conftest import FakeClock


def test_token_validation_reports_product_then_not_found_after_deletion(
    client: TestClient,
    token_codec: ProductTokenCodec,
    make_product: Callable[..., Product],
    admin_headers: dict[str, str],
) -> None:
    make_product(product_id=42, title="Desk lamp")
    token = token_codec.mint(42)

    first = client.get(f"/token-validation/{token}")
    assert first.status_code == 200
    assert first.json() == {
        "valid": True,
        "status": "valid",
        "product_id": 42,
        "product_title": "Desk lamp",
    }

    deleted = client.delete("/products/42", headers=admin_headers)
    assert deleted.status_code == 204

    second = client.get(f"/token-validation/{token}")
    assert second.status_code == 200
    assert second.json()["valid"] is False
    assert second.json()["status"] == "not_found"
    assert second.json()["product_id"] is None


def test_token_validation_invalid_token(client: TestClient) -> None:
    response = client.get("/token-validation/definitely-not-a-token")

    assert response.status_code == 200
    assert response.json() == {
        "valid": False,
        "status": "invalid",
        "product_id": None,
        "product_title": None,
    }


def test_token_validation_expired_token_is_invalid(
    client: TestClient,
    token_codec: ProductTokenCodec,
    clock: FakeClock,
    make_product: Callable[..., Product],
) -> None:
    product = make_product()
    token = token_codec.mint(product.id)
    clock.advance(timedelta(days=31))

    response = client.get(f"/token-validation/{token}")

    assert response.json()["status"] == "invalid"


def test_sale_confirmation_acts_on_token_product_not_body_product(
    client: TestClient,
    token_codec: ProductTokenCodec,
    make_product: Callable[..., Product],
    db_session: Session,
) -> None:
    product_a = make_product(title="A")
    product_b = make_product(title="B")

    response = client.post(
        "/sale-confirmations",
        json={
            "token": token_codec.mint(product_a.id),
            "comment": "Sold to a neighbour",
            "product_id": product_b.id,
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["product_id"] == product_a.id
    assert body["is_sold"] is True
    assert body["sale_verified"] is True
    assert body["comment"] == "Sold to a neighbour"
    assert body["already_verified"] is False

    db_session.expire_all()
    assert db_session.get(Product, product_a.id).sale_verified is True
    untouched = db_session.get(Product, product_b.id)
    assert untouched.is_sold is False
    assert untouched.sale_verified is False


def test_sale_confirmation_twice_is_idempotent(
    client: TestClient,
    token_codec: ProductTokenCodec,
    make_product: Callable[..., Product],
) -> None:
    product = make_product()
    token = token_codec.mint(product.id)

    first = client.post("/sale-confirmations", json={"token": token, "comment": "first"})
    second = client.post("/sale-confirmations", json={"token": token, "comment": "second"})

    assert first.status_code == 200
    assert second.status_code == 200
    assert second.json()["already_verified"] is True
    assert second.json()["comment"] == "first"
    assert second.json()["sale_verified_at"] == first.json()["sale_verified_at"]


def test_sale_confirmation_rejects_invalid_forged_and_expired_links_alike(
    client: TestClient,
    token_codec: ProductTokenCodec,
    clock: FakeClock,
    make_product: Callable[..., Product],
) -> None:
    product = make_product()
    forged = ProductTokenCodec("another-secret-that-is-long-enough-000").mint(product.id)
    valid = token_codec.mint(product.id)
    clock.advance(timedelta(days=31))

    for token in ("garbage", forged, valid):
        response = client.post("/sale-confirmations", json={"token": token})
        assert response.status_code == 403
        assert response.json()["detail"]["code"] == "INVALID_OR_EXPIRED_LINK"


def test_sale_confirmation_for_deleted_product_is_not_found(
    client: TestClient,
    token_codec: ProductTokenCodec,
    make_product: Callable[..., Product],
    admin_headers: dict[str, str],
) -> None:
    product = make_product()
    token = token_codec.mint(product.id)
    assert client.delete(f"/products/{product.id}", headers=admin_headers).status_code == 204

    response = client.post("/sale-confirmations", json={"token": token})

    assert response.status_code == 404
    assert response.json()["detail"]["code"] == "PRODUCT_NOT_FOUND"


def test_sale_confirmation_rejects_unknown_fields(
    client: TestClient,
    token_codec: ProductTokenCodec,
    make_product: Callable[..., Product],
) -> None:
    product = make_product()

    response = client.post(
        "/sale-confirmations",
        json={"token": token_codec.mint(product.id), "price": 1},
    )

    assert response.status_code == 422


def test_sale_confirmation_keeps_deletion_possible(
    client: TestClient,
    token_codec: ProductTokenCodec,
    make_product: Callable[..., Product],
) -> None:
    product = make_product()
    token = token_codec.mint(product.id)

    assert client.post("/sale-confirmations", json={"token": token}).status_code == 200
    response = client.post("/deletion-requests", json={"token": token})

    assert response.status_code == 201


def test_product_listing_reflects_verified_sale(
    client: TestClient,
    token_codec: ProductTokenCodec,
    make_product: Callable[..., Product],
    db_session: Session,
) -> None:
    product = make_product()
    client.post("/sale-confirmations", json={"token": token_codec.mint(product.id)})

    response = client.get(f"/products/{product.id}")

    assert response.json()["is_sold"] is True
    assert response.json()["sale_verified"] is True
    db_session.expire_all()
    stored = db_session.scalar(select(Product).where(Product.id == product.id))
    assert stored is not None
    assert stored.sale_verified_at is not None


def test_oversized_token_gets_the_generic_link_error(client: TestClient) -> None:
    token = "A" * 600

    response = client.post("/sale-confirmations", json={"token": token})

    assert response.status_code == 403
    assert response.json()["detail"]["code"] == "INVALID_OR_EXPIRED_LINK"
    assert token not in response.text
