# app/services/product_service.py
from fastapi import HTTPException, status

from app.models.category import Category
from app.models.product import Product
from app.schemas.product import CategoryRead, ProductDetailRead
from app.storage.base import Storage


class ProductService:
    """
    Read-side catalog logic for categories and products.
    """

    # ----- Categories -----

    def list_categories(self, storage: Storage) -> list[Category]:
        return storage.list_categories()

    def get_category_by_slug(self, storage: Storage, slug: str) -> Category:
        category = storage.get_category_by_slug(slug)
        if not category:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Category not found",
            )
        return category

    # ----- Products -----

    def list_products(
        self,
        storage: Storage,
        category_id: int | None = None,
    ) -> list[Product]:
        if category_id:
            return storage.list_products_by_category(category_id)
        return storage.list_products()

    def get_product_by_slug(self, storage: Storage, slug: str) -> ProductDetailRead:
        """
        Product with its category embedded. A dangling category_id gives
        category=None rather than an error.
        """
        product = storage.get_product_by_slug(slug)
        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )

        category = storage.get_category(product.category_id) if product.category_id else None
        return ProductDetailRead(
            **product.model_dump(),
            category=CategoryRead.model_validate(category) if category else None,
        )
