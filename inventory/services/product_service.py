from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from typing import List, Optional, Tuple
import logging
import math

from inventory.exceptions import NotFoundError
from inventory.models.product import Product, utcnow
from inventory.schemas.product import ActiveFilter, ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)

# Range of the 64-bit integer primary key
MIN_ID = -(2 ** 63)
MAX_ID = 2 ** 63 - 1


class ProductService:
    """
    Service class for Product CRUD operations.

    This service handles:
    - Creating new products
    - Reading a single product
    - Listing products with pagination and an active filter
    - Replacing products
    - Deleting products
    """

    def __init__(self, db: Session):
        self.db = db

    def create(self, product_data: ProductCreate) -> Product:
        """
        Create a new product.

        Args:
            product_data: Validated product payload

        Returns:
            Created product instance
        """
        product = Product(**product_data.model_dump())
        self.db.add(product)
        self._commit()
        self.db.refresh(product)

        logger.info(f"Product #{product.id} created")
        return product

    def get_by_id(self, product_id: int) -> Optional[Product]:
        """Get a product by ID, or None if it doesn't exist."""
        if not MIN_ID <= product_id <= MAX_ID:
            return None
        return self.db.query(Product).filter(Product.id == product_id).first()

    def get_or_404(self, product_id: int) -> Product:
        """
        Get a product by ID.

        Raises:
            NotFoundError: If no product has this ID
        """
        product = self.get_by_id(product_id)
        if not product:
            raise NotFoundError()
        return product

    def get_all(
        self,
        page: int = 1,
        limit: int = 10,
        active: ActiveFilter = "true",
    ) -> Tuple[List[Product], int, int]:
        """
        Get paginated list of products, most recently created first.

        Args:
            page: Page number (1-indexed)
            limit: Number of items per page
            active: "true" or "false" to filter on the active flag, "all" for no filter

        Returns:
            Tuple of (products list, total count, total pages)
        """
        query = self.db.query(Product)

        if active != "all":
            query = query.filter(Product.active == (active == "true"))

        total = query.count()
        total_pages = math.ceil(total / limit)

        offset = (page - 1) * limit
        products = (
            query.order_by(Product.created_at.desc(), Product.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )

        return products, total, total_pages

    def update(self, product_id: int, product_data: ProductUpdate) -> Product:
        """
        Replace every mutable field of an existing product.

        Args:
            product_id: ID of product to update
            product_data: Full replacement payload

        Returns:
            Updated product

        Raises:
            NotFoundError: If no product has this ID
        """
        product = self.get_or_404(product_id)

        for field, value in product_data.model_dump().items():
            setattr(product, field, value)
        product.updated_at = utcnow()

        self._commit()
        self.db.refresh(product)

        logger.info(f"Product #{product_id} updated")
        return product

    def delete(self, product_id: int) -> None:
        """
        Permanently delete a product.

        Raises:
            NotFoundError: If no product has this ID
        """
        product = self.get_or_404(product_id)

        self.db.delete(product)
        self._commit()

        logger.info(f"Product #{product_id} deleted")

    def _commit(self) -> None:
        """Commit the session, rolling back on database errors."""
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error while saving product: {e}")
            raise
