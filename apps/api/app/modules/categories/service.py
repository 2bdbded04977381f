import logging
from typing import NoReturn

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import raise_http_error
from app.models.category import Category
from app.schemas.category import CategoryCreateRequest, CategoryUpdateRequest

logger = logging.getLogger("spotted.categories")


def _raise_category_not_found() -> NoReturn:
    raise_http_error(404, "CATEGORY_NOT_FOUND", "Category not found")


def _commit_or_conflict(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise_http_error(409, "CATEGORY_ALREADY_EXISTS", "A category with this name already exists")


def list_active_categories(db: Session) -> list[Category]:
    return list(
        db.scalars(
            select(Category).where(Category.is_active.is_(True)).order_by(Category.name.asc())
        ).all()
    )


def get_category_or_404(db: Session, category_id: int) -> Category:
    category = db.get(Category, category_id)
    if category is None:
        _raise_category_not_found()
    return category


def create_category(db: Session, payload: CategoryCreateRequest) -> Category:
    category = Category(**payload.model_dump())
    db.add(category)
    _commit_or_conflict(db)
    db.refresh(category)
    logger.info(
        "category_created",
        extra={"event_name": "category_created", "category_id": category.id},
    )
    return category


def update_category(db: Session, category_id: int, payload: CategoryUpdateRequest) -> Category:
    category = get_category_or_404(db, category_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(category, field, value)
    _commit_or_conflict(db)
    db.refresh(category)
    return category


def deactivate_category(db: Session, category_id: int) -> None:
    # Products keep their category text; the category only leaves the public list.
    result = db.execute(
        update(Category).where(Category.id == category_id).values(is_active=False)
    )
    if result.rowcount == 0:
        db.rollback()
        _raise_category_not_found()
    db.commit()
    logger.info(
        "category_deactivated",
        extra={"event_name": "category_deactivated", "category_id": category_id},
    )
