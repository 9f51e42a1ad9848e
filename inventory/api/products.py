from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from inventory.api.deps import RequireAuth
from inventory.database import get_db
from inventory.services.product_service import ProductService
from inventory.schemas.product import (
    ActiveFilter,
    Pagination,
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductListResponse
)

# Every product route requires a valid bearer token; the check runs
# before body and query validation
router = APIRouter(prefix="/products", tags=["Products"], dependencies=[RequireAuth])


@router.get("/", include_in_schema=False, response_model=ProductListResponse)
@router.get(
    "",
    response_model=ProductListResponse,
    summary="List products",
    description="Get a paginated list of products, most recently created first."
)
def list_products(
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(10, ge=1, description="Items per page"),
    active: ActiveFilter = Query("true", description="'true', 'false' or 'all'"),
    db: Session = Depends(get_db)
):
    """
    Get paginated list of products.

    Requesting a page past the end returns an empty list, not an error.
    """
    service = ProductService(db)
    products, total, total_pages = service.get_all(page, limit, active)

    return ProductListResponse(
        products=[ProductResponse.model_validate(p) for p in products],
        pagination=Pagination(
            total=total,
            page=page,
            limit=limit,
            total_pages=total_pages
        )
    )


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    summary="Get product by ID",
    description="Get detailed information about a specific product."
)
def get_product(
    product_id: int,
    db: Session = Depends(get_db)
):
    """Get a product by ID."""
    service = ProductService(db)
    return service.get_or_404(product_id)


@router.post("/", include_in_schema=False, response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new product",
    description="Create a new product. All fields are validated together."
)
def create_product(
    product_data: ProductCreate,
    db: Session = Depends(get_db)
):
    """
    Create a new product.

    - **name**: Product name, 1-255 characters (required)
    - **description**: Free text (optional)
    - **price**: Unit price, must be non-negative (required)
    - **category**: Product category (required)
    - **stock**: Initial stock quantity, must be non-negative (default 0)
    - **active**: Visibility flag (default true)
    """
    service = ProductService(db)
    return service.create(product_data)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    summary="Replace a product",
    description="Replace every mutable field of a product. Omitted optional fields reset to their defaults."
)
def update_product(
    product_id: int,
    product_data: ProductUpdate,
    db: Session = Depends(get_db)
):
    """Replace a product."""
    service = ProductService(db)
    return service.update(product_id, product_data)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a product",
    description="Permanently delete a product by ID."
)
def delete_product(
    product_id: int,
    db: Session = Depends(get_db)
):
    """Delete a product."""
    service = ProductService(db)
    service.delete(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
