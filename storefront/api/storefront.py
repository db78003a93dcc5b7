"""Public storefront endpoints.

No session required. Provides the category tree, faceted product
filtering, name search and the home page content.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Query

from storefront.api.converters import (
    banner_to_response,
    collection_to_response,
    discount_to_response,
    node_to_response,
    product_to_response,
    sale_to_response,
)
from storefront.api.dependencies import CatalogServiceDep, PromotionServiceDep
from storefront.api.schemas import (
    CategoryTreeNode,
    ErrorResponse,
    HomeResponse,
    ProductListResponse,
)
from storefront.application.storefront_service import load_home_page
from storefront.catalog.filters import MAX_PRICE, ProductFilterSpec

router = APIRouter(prefix="/storefront", tags=["Storefront"])


@router.get(
    "/categories",
    response_model=list[CategoryTreeNode],
    summary="Category tree",
    description="Root categories with subcategories nested under their parents.",
)
async def category_tree(
    service: CatalogServiceDep,
    store_id: str | None = Query(default=None),
) -> list[CategoryTreeNode]:
    return [node_to_response(n) for n in await service.category_tree(store_id)]


@router.get(
    "/products",
    response_model=ProductListResponse,
    responses={422: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Filter products",
)
async def filter_products(
    service: CatalogServiceDep,
    categories: list[str] = Query(default=[], description="Category IDs"),
    variants: list[str] = Query(default=[], description="Variant IDs"),
    min_price: int = Query(default=0, le=MAX_PRICE, description="Minimum price in cents"),
    max_price: int = Query(default=MAX_PRICE, le=MAX_PRICE, description="Maximum price in cents"),
    on_sale: bool = Query(default=False),
    on_discount: bool = Query(default=False),
) -> ProductListResponse:
    """Filter products by category, variant, price and promotion facets.

    A product matches a category when it is in that category or in one of
    its direct subcategories. All facets must match.

    Returns:
        Matching products.
    """
    spec = ProductFilterSpec(
        categories=tuple(categories),
        variants=tuple(variants),
        min_price=min_price,
        max_price=max_price,
        on_sale=on_sale,
        on_discount=on_discount,
    )
    products = await service.filter_products(spec)
    now = datetime.now(timezone.utc)
    return ProductListResponse(
        items=[product_to_response(p, now) for p in products],
        total=len(products),
    )


@router.get(
    "/search",
    response_model=ProductListResponse,
    summary="Search products by name",
    description='category_id limits the search to a category subtree; "all" searches everything.',
)
async def search_products(
    service: CatalogServiceDep,
    q: str = Query(default="", max_length=200, description="Name substring"),
    category_id: str | None = Query(default=None),
) -> ProductListResponse:
    products = await service.search_products(q, category_id)
    now = datetime.now(timezone.utc)
    return ProductListResponse(
        items=[product_to_response(p, now) for p in products],
        total=len(products),
    )


@router.get("/home", response_model=HomeResponse, summary="Home page content")
async def home(
    catalog: CatalogServiceDep,
    promotions: PromotionServiceDep,
    store_id: str | None = Query(default=None),
) -> HomeResponse:
    page = await load_home_page(catalog, promotions, store_id)
    return HomeResponse(
        banners=[banner_to_response(b) for b in page.banners],
        collections=[collection_to_response(c) for c in page.collections],
        discounts=[discount_to_response(d) for d in page.discounts],
        sales=[sale_to_response(s) for s in page.sales],
        categories=[node_to_response(n) for n in page.categories],
    )
