# app/routers/products.py
from fastapi import APIRouter, Depends

from app.database import get_storage
from app.schemas.product import CategoryRead, ProductDetailRead, ProductRead
from app.services.product_service import ProductService
from app.storage.base import Storage

categories_router = APIRouter(prefix="/categories", tags=["Categories"])
router = APIRouter(prefix="/products", tags=["Products"])

service = ProductService()


# -------- Categories --------


@categories_router.get("", response_model=list[CategoryRead])
def list_categories(storage: Storage = Depends(get_storage)):
    """List all categories (public)."""
    return service.list_categories(storage)


@categories_router.get("/{slug}", response_model=CategoryRead)
def get_category(slug: str, storage: Storage = Depends(get_storage)):
    """Get a category by slug (public)."""
    return service.get_category_by_slug(storage, slug)


# -------- Products --------


@router.get("", response_model=list[ProductRead])
def list_products(
    category_id: int | None = None,
    storage: Storage = Depends(get_storage),
):
    """
    List products.

    - Public endpoint.
    - `category_id` narrows the list to one category.
    """
    return service.list_products(storage, category_id=category_id)


@router.get("/{slug}", response_model=ProductDetailRead)
def get_product(slug: str, storage: Storage = Depends(get_storage)):
    """
    Get a single product by slug, with its category.
    """
    return service.get_product_by_slug(storage, slug)
