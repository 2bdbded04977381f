import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.store_settings import STORE_SETTINGS_ID, StoreSettings
from app.schemas.store_settings import StoreSettingsUpdateRequest

logger = logging.getLogger("spotted.store_settings")


def _default_store_settings() -> StoreSettings:
    return StoreSettings(
        id=STORE_SETTINGS_ID,
        store_name=settings.store_name,
        contact_phone=settings.store_contact_phone,
        store_description=settings.store_description,
    )


def get_store_settings(db: Session) -> StoreSettings:
    """Return the saved store profile, or an unsaved one built from config."""
    stored = db.get(StoreSettings, STORE_SETTINGS_ID)
    return stored if stored is not None else _default_store_settings()


def current_store_name(db: Session) -> str:
    return get_store_settings(db).store_name


def update_store_settings(db: Session, payload: StoreSettingsUpdateRequest) -> StoreSettings:
    values = payload.model_dump()
    stored = db.get(StoreSettings, STORE_SETTINGS_ID)
    if stored is None:
        stored = StoreSettings(id=STORE_SETTINGS_ID, **values)
        db.add(stored)
        try:
            db.commit()
        except IntegrityError:
            # Another admin created the row first; overwrite it instead.
            db.rollback()
            stored = db.get(StoreSettings, STORE_SETTINGS_ID)
            if stored is None:
                raise
            for field, value in values.items():
                setattr(stored, field, value)
            db.commit()
    else:
        for field, value in values.items():
            setattr(stored, field, value)
        db.commit()
    db.refresh(stored)

    logger.info("store_settings_updated", extra={"event_name": "store_settings_updated"})
    return stored
