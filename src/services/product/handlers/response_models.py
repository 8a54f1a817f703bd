from pydantic import BaseModel

from services.product.applications import ProductAvailability
from services.product.domain import Product


class ProductData(BaseModel):
    """商品のレスポンスモデル"""

    product_id: int
    scope: str
    name: str
    pricing_type: str
    initial_price: str
    additional_price: str | None
    total_quantity: int
    reserved_quantity: int
    place_id: int | None
    room_id: int | None


class AvailableProductData(BaseModel):
    product_id: int
    name: str
    scope: str
    unit_price: str
    available_quantity: int
    total_quantity: int


class SuccessResponse(BaseModel):
    status: str = "success"
    data: ProductData


class ProductListResponse(BaseModel):
    status: str = "success"
    data: list[ProductData]


class AvailabilityResponse(BaseModel):
    status: str = "success"
    place_id: int
    room_id: int
    data: list[AvailableProductData]


def to_data(product: Product) -> ProductData:
    strategy = product.pricing_strategy
    return ProductData(
        product_id=product.product_id.value,
        scope=product.scope.value,
        name=product.name,
        pricing_type=strategy.pricing_type.value,
        initial_price=str(strategy.initial_price),
        additional_price=(
            str(strategy.additional_price) if strategy.additional_price is not None else None
        ),
        total_quantity=product.total_quantity,
        reserved_quantity=product.reserved_quantity,
        place_id=product.place_id.value if product.place_id else None,
        room_id=product.room_id.value if product.room_id else None,
    )


def to_response(product: Product) -> dict:
    return SuccessResponse(data=to_data(product)).model_dump()


def to_list_response(products: list[Product]) -> dict:
    return ProductListResponse(data=[to_data(p) for p in products]).model_dump()


def to_availability_response(
    place_id: int, room_id: int, availabilities: list[ProductAvailability]
) -> dict:
    return AvailabilityResponse(
        place_id=place_id,
        room_id=room_id,
        data=[
            AvailableProductData(
                product_id=a.product.product_id.value,
                name=a.product.name,
                scope=a.product.scope.value,
                unit_price=str(a.product.pricing_strategy.initial_price),
                available_quantity=a.available_quantity,
                total_quantity=a.product.total_quantity,
            )
            for a in availabilities
        ],
    ).model_dump()
