from fastapi import APIRouter, Request, Response, status

from app.api.deps import Admin, DbSession
from app.core.openapi import ADMIN_ERROR_RESPONSES
from app.modules.catalog.service import (
    InteractionKind,
    create_product,
    delete_product,
    get_product_or_404,
    list_products,
    record_interaction,
    update_product,
)
from app.schemas.product import (
    ProductCreateRequest,
    ProductResponse,
    ProductSort,
    ProductStatsResponse,
    ProductUpdateRequest,
)

router = APIRouter(tags=["products"])


@router.get("/products", response_model=list[ProductResponse], summary="List Products")
def list_products_endpoint(db: DbSession, sort: ProductSort = "newest") -> list[ProductResponse]:
    return [ProductResponse.model_validate(item) for item in list_products(db, sort=sort)]


@router.get("/products/{product_id}", response_model=ProductResponse, summary="Get Product")
def get_product_endpoint(product_id: int, db: DbSession) -> ProductResponse:
    return ProductResponse.model_validate(get_product_or_404(db, product_id))


@router.post(
    "/products",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Product",
    responses=ADMIN_ERROR_RESPONSES,
)
def create_product_endpoint(
    payload: ProductCreateRequest, _: Admin, db: DbSession
) -> ProductResponse:
    return ProductResponse.model_validate(create_product(db, payload))


@router.put(
    "/products/{product_id}",
    response_model=ProductResponse,
    summary="Update Product",
    responses=ADMIN_ERROR_RESPONSES,
)
def update_product_endpoint(
    product_id: int, payload: ProductUpdateRequest, _: Admin, db: DbSession
) -> ProductResponse:
    return ProductResponse.model_validate(update_product(db, product_id, payload))


@router.delete(
    "/products/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Product",
    responses=ADMIN_ERROR_RESPONSES,
)
def delete_product_endpoint(product_id: int, _: Admin, db: DbSession) -> Response:
    delete_product(db, product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _record(request: Request, db: DbSession, product_id: int, kind: InteractionKind) -> Response:
    record_interaction(
        db,
        product_id,
        kind=kind,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/products/{product_id}/view",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Record Product View",
    description="Counted once per client address.",
)
def record_view_endpoint(product_id: int, request: Request, db: DbSession) -> Response:
    return _record(request, db, product_id, "view")


@router.post(
    "/products/{product_id}/click",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Record Contact Click",
    description="Counted once per client address.",
)
def record_click_endpoint(product_id: int, request: Request, db: DbSession) -> Response:
    return _record(request, db, product_id, "click")


@router.get(
    "/products/{product_id}/stats",
    response_model=ProductStatsResponse,
    summary="Get Product Stats",
)
def get_product_stats_endpoint(product_id: int, db: DbSession) -> ProductStatsResponse:
    return ProductStatsResponse.model_validate(get_product_or_404(db, product_id))
