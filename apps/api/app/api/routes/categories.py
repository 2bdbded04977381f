from fastapi import APIRouter, Response, status

from app.api.deps import Admin, DbSession
from app.core.openapi import ADMIN_ERROR_RESPONSES
from app.modules.categories.service import (
    create_category,
    deactivate_category,
    list_active_categories,
    update_category,
)
from app.schemas.category import CategoryCreateRequest, CategoryResponse, CategoryUpdateRequest

router = APIRouter(tags=["categories"])


@router.get("/categories", response_model=list[CategoryResponse], summary="List Categories")
def list_categories_endpoint(db: DbSession) -> list[CategoryResponse]:
    return [CategoryResponse.model_validate(item) for item in list_active_categories(db)]


@router.post(
    "/categories",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Category",
    responses=ADMIN_ERROR_RESPONSES,
)
def create_category_endpoint(
    payload: CategoryCreateRequest, _: Admin, db: DbSession
) -> CategoryResponse:
    return CategoryResponse.model_validate(create_category(db, payload))


@router.put(
    "/categories/{category_id}",
    response_model=CategoryResponse,
    summary="Update Category",
    responses=ADMIN_ERROR_RESPONSES,
)
def update_category_endpoint(
    category_id: int, payload: CategoryUpdateRequest, _: Admin, db: DbSession
) -> CategoryResponse:
    return CategoryResponse.model_validate(update_category(db, category_id, payload))


@router.delete(
    "/categories/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Deactivate Category",
    description="Hides the category from the public list; the row is kept.",
    responses=ADMIN_ERROR_RESPONSES,
)
def deactivate_category_endpoint(category_id: int, _: Admin, db: DbSession) -> Response:
    deactivate_category(db, category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
