from fastapi import APIRouter, Request
from starlette import status
from schemas.cart_schemas import AddToCartRequest, CartPanelRequest, CartResponse, UpdateQuantityRequest
from services.app_controller import AppController
from utils.deps import controller_dependency, user_dependency
from middleware.rate_limiter import limiter


router = APIRouter(
    prefix="/cart",
    tags=["cart"]
)


def _cart_response(controller: AppController) -> CartResponse:
    return CartResponse(
        lines=controller.cart.lines(),
        item_count=controller.cart.item_count(),
        total=controller.cart.calculate_total(),
        is_open=controller.is_cart_open,
        is_loading=controller.cart.is_loading
    )


@router.get("", response_model=CartResponse)
async def get_cart(controller: controller_dependency):
    return _cart_response(controller)


@router.put("/panel", response_model=CartResponse)
async def set_cart_panel(body: CartPanelRequest, controller: controller_dependency):
    if body.is_open:
        controller.open_cart()
    else:
        controller.close_cart()
    return _cart_response(controller)


@router.post("/items", status_code=status.HTTP_200_OK, response_model=CartResponse)
@limiter.limit("60/minute")
async def add_to_cart(request: Request, body: AddToCartRequest,
                      user: user_dependency, controller: controller_dependency):
    await controller.add_to_cart(body.product_id)
    return _cart_response(controller)


@router.patch("/items/{item_id}", response_model=CartResponse)
async def update_quantity(item_id: str, body: UpdateQuantityRequest,
                          user: user_dependency, controller: controller_dependency):
    await controller.update_quantity(item_id, body.quantity)
    return _cart_response(controller)


@router.delete("/items/{item_id}", response_model=CartResponse)
async def remove_item(item_id: str, user: user_dependency, controller: controller_dependency):
    await controller.remove_item(item_id)
    return _cart_response(controller)


@router.delete("", response_model=CartResponse)
async def clear_cart(user: user_dependency, controller: controller_dependency):
    await controller.clear_cart()
    return _cart_response(controller)
