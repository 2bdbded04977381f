from app.models.category import Category
from app.models.deletion_request import DeletionRequest
from app.models.product import Product
from app.models.product_interaction import ProductInteraction
from app.models.product_request import ProductRequest
from app.models.store_settings import StoreSettings

__all__ = [
    "Category",
    "DeletionRequest",
    "Product",
    "ProductInteraction",
    "ProductRequest",
    "StoreSettings",
]
