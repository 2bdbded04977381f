from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.auth import AdminContext, get_admin_context
from app.core.product_tokens import ProductTokenCodec, get_product_token_codec
from app.db.session import get_db

DbSession = Annotated[Session, Depends(get_db)]
TokenCodec = Annotated[ProductTokenCodec, Depends(get_product_token_codec)]
Admin = Annotated[AdminContext, Depends(get_admin_context)]
