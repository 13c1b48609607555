from fastapi import APIRouter
from starlette import status
from schemas.catalog_schemas import CatalogResponse, UpdateFiltersRequest
from services.app_controller import AppController
from utils.deps import controller_dependency


router = APIRouter(
    prefix="/catalog",
    tags=["catalog"]
)


def _catalog_response(controller: AppController) -> CatalogResponse:
    products = controller.visible_products
    return CatalogResponse(
        products=products,
        categories=controller.catalog.categories,
        filters=controller.filters,
        result_count=len(products),
        is_loading=controller.catalog.is_loading,
        error=controller.catalog.error
    )


@router.get("", response_model=CatalogResponse)
async def get_catalog(controller: controller_dependency):
    return _catalog_response(controller)


@router.put("/filters", response_model=CatalogResponse)
async def update_filters(body: UpdateFiltersRequest, controller: controller_dependency):
    """Only the fields present in the body change."""
    if body.search_query is not None:
        controller.search(body.search_query)
    if body.category is not None:
        controller.select_category(body.category)
    if body.price_range is not None:
        controller.set_price_range(body.price_range.min, body.price_range.max)
    if body.sort_by is not None:
        controller.set_sort(body.sort_by)

    return _catalog_response(controller)


@router.delete("/filters", status_code=status.HTTP_200_OK, response_model=CatalogResponse)
async def clear_filters(controller: controller_dependency):
    controller.clear_filters()
    return _catalog_response(controller)
