import os
from collections.abc import Sequence
from datetime import datetime

import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import ClientError

from services.product.domain import (
    PricingStrategy,
    PricingType,
    Product,
    ProductRepository,
    ProductScope,
)
from services.shared.domain import (
    BusinessRuleViolationException,
    Money,
    PlaceId,
    ProductId,
    RoomId,
)
from services.shared.domain.exception import ErrorCode
from services.shared.infrastructure.dynamodb import (
    is_conditional_check_failure,
    query_all,
)

_BATCH_GET_LIMIT = 100


def product_key(product_id: ProductId) -> dict:
    return {"PK": f"PRODUCT#{product_id}", "SK": "PRODUCT"}


def slot_key(product: Product, slot_time: datetime) -> dict:
    """時間スコープの商品のスロット別在庫カウンタのキー"""
    if product.scope == ProductScope.ROOM:
        owner = f"ROOM#{product.room_id}"
    elif product.scope == ProductScope.PLACE:
        owner = f"PLACE#{product.place_id}"
    else:
        raise ValueError(f"{product.scope.value} products have no time slot stock")
    return {
        "PK": f"PRODUCT#{product.product_id}",
        "SK": f"SLOT#{owner}#{slot_time.isoformat(timespec='minutes')}",
    }


def to_item(product: Product) -> dict:
    """Product -> DynamoDB アイテム"""
    strategy = product.pricing_strategy
    item = {
        **product_key(product.product_id),
        "entity_type": "PRODUCT",
        "product_id": product.product_id.value,
        "scope": product.scope.value,
        "name": product.name,
        "pricing_type": strategy.pricing_type.value,
        "initial_price": str(strategy.initial_price),
        "total_quantity": product.total_quantity,
        "reserved_quantity": product.reserved_quantity,
        "available_quantity": product.available_quantity,
        "GSI2PK": f"SCOPE#{product.scope.value}",
        "GSI2SK": f"PRODUCT#{product.product_id}",
    }
    if strategy.additional_price is not None:
        item["additional_price"] = str(strategy.additional_price)
    if product.place_id is not None:
        item["place_id"] = product.place_id.value
        item["GSI1PK"] = f"PLACE#{product.place_id}"
        item["GSI1SK"] = f"PRODUCT#{product.product_id}"
    if product.room_id is not None:
        item["room_id"] = product.room_id.value
    return item


def to_entity(item: dict) -> Product:
    """DynamoDB アイテム -> Product"""
    additional = item.get("additional_price")
    strategy = PricingStrategy(
        pricing_type=PricingType(item["pricing_type"]),
        initial_price=Money.of(item["initial_price"]),
        additional_price=Money.of(additional) if additional is not None else None,
    )
    place_id = item.get("place_id")
    room_id = item.get("room_id")
    return Product(
        id=ProductId(value=int(item["product_id"])),
        scope=ProductScope(item["scope"]),
        name=item["name"],
        pricing_strategy=strategy,
        total_quantity=int(item["total_quantity"]),
        place_id=PlaceId(value=int(place_id)) if place_id is not None else None,
        room_id=RoomId(value=int(room_id)) if room_id is not None else None,
        reserved_quantity=int(item.get("reserved_quantity", 0)),
    )


class DynamoDBProductRepository(ProductRepository):
    """サービス共通テーブルを使う ProductRepository

    reserve を1回の条件付き更新で行うため、reserved_quantity と並べて
    available_quantity を保持する（DynamoDB の条件式では演算できない）。
    """

    def __init__(self, table_name: str | None = None) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        self.dynamodb = boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)

    def save(self, product: Product) -> Product:
        """登録、または確保済み在庫に触れずにカタログ項目を更新する"""
        strategy = product.pricing_strategy
        try:
            self.table.update_item(
                Key=product_key(product.product_id),
                UpdateExpression=(
                    "SET #name = :name, pricing_type = :pricing_type, "
                    "initial_price = :initial_price, additional_price = :additional_price, "
                    "total_quantity = :total, available_quantity = :total - reserved_quantity"
                ),
                ConditionExpression=Attr("PK").exists()
                & Attr("reserved_quantity").lte(product.total_quantity),
                ExpressionAttributeNames={"#name": "name"},
                ExpressionAttributeValues={
                    ":name": product.name,
                    ":pricing_type": strategy.pricing_type.value,
                    ":initial_price": str(strategy.initial_price),
                    ":additional_price": (
                        str(strategy.additional_price)
                        if strategy.additional_price is not None
                        else None
                    ),
                    ":total": product.total_quantity,
                },
                ReturnValuesOnConditionCheckFailure="ALL_OLD",
            )
        except ClientError as e:
            if not is_conditional_check_failure(e):
                raise
            if "Item" in e.response:
                raise BusinessRuleViolationException(
                    f"Total quantity {product.total_quantity} is below reserved stock "
                    f"of product {product.product_id}",
                    error_code=ErrorCode.TOTAL_QUANTITY_BELOW_RESERVED,
                ) from e
            self.table.put_item(
                Item=to_item(product), ConditionExpression=Attr("PK").not_exists()
            )
        return product

    def find_by_id(self, product_id: ProductId) -> Product | None:
        response = self.table.get_item(Key=product_key(product_id), ConsistentRead=True)
        item = response.get("Item")
        if item is None:
            return None
        return to_entity(item)

    def find_all_by_id(self, product_ids: Sequence[ProductId]) -> list[Product]:
        keys = [product_key(pid) for pid in dict.fromkeys(product_ids)]
        items: list[dict] = []
        for start in range(0, len(keys), _BATCH_GET_LIMIT):
            request = {
                self.table_name: {
                    "Keys": keys[start : start + _BATCH_GET_LIMIT],
                    "ConsistentRead": True,
                }
            }
            while request:
                response = self.dynamodb.batch_get_item(RequestItems=request)
                items.extend(response.get("Responses", {}).get(self.table_name, []))
                request = response.get("UnprocessedKeys") or {}
        return [to_entity(item) for item in items]

    def find_by_place_id(self, place_id: PlaceId) -> list[Product]:
        items = query_all(
            self.table,
            IndexName="GSI1",
            KeyConditionExpression=Key("GSI1PK").eq(f"PLACE#{place_id}")
            & Key("GSI1SK").begins_with("PRODUCT#"),
        )
        return [to_entity(item) for item in items]

    def find_by_room_id(self, room_id: RoomId) -> list[Product]:
        items = query_all(
            self.table,
            IndexName="GSI2",
            KeyConditionExpression=Key("GSI2PK").eq(f"SCOPE#{ProductScope.ROOM.value}"),
            FilterExpression=Attr("room_id").eq(room_id.value),
        )
        return [to_entity(item) for item in items]

    def find_by_scope(self, scope: ProductScope) -> list[Product]:
        items = query_all(
            self.table,
            IndexName="GSI2",
            KeyConditionExpression=Key("GSI2PK").eq(f"SCOPE#{scope.value}"),
        )
        return [to_entity(item) for item in items]

    def find_accessible_products(self, place_id: PlaceId, room_id: RoomId) -> list[Product]:
        place_products = [
            product
            for product in self.find_by_place_id(place_id)
            if product.scope == ProductScope.PLACE or product.room_id == room_id
        ]
        return place_products + self.find_by_scope(ProductScope.RESERVATION)

    def delete_by_id(self, product_id: ProductId) -> None:
        """商品の行をスロット別在庫カウンタごと削除する"""
        items = query_all(
            self.table,
            KeyConditionExpression=Key("PK").eq(product_key(product_id)["PK"]),
            ProjectionExpression="PK, SK",
        )
        with self.table.batch_writer() as batch:
            for item in items:
                batch.delete_item(Key={"PK": item["PK"], "SK": item["SK"]})

    def exists_by_id(self, product_id: ProductId) -> bool:
        response = self.table.get_item(
            Key=product_key(product_id),
            ProjectionExpression="PK",
            ConsistentRead=True,
        )
        return "Item" in response

    def reserve_quantity(self, product_id: ProductId, quantity: int) -> bool:
        return self._conditional_add(
            key=product_key(product_id),
            update=(
                "SET reserved_quantity = reserved_quantity + :q, "
                "available_quantity = available_quantity - :q"
            ),
            condition=Attr("available_quantity").gte(quantity),
            quantity=quantity,
        )

    def release_quantity(self, product_id: ProductId, quantity: int) -> bool:
        return self._conditional_add(
            key=product_key(product_id),
            update=(
                "SET reserved_quantity = reserved_quantity - :q, "
                "available_quantity = available_quantity + :q"
            ),
            condition=Attr("reserved_quantity").gte(quantity),
            quantity=quantity,
        )

    def reserve_time_slot_quantity(
        self, product: Product, slot_time: datetime, quantity: int
    ) -> bool:
        limit = product.total_quantity - quantity
        if limit < 0:
            return False
        return self._conditional_add(
            key=slot_key(product, slot_time),
            update="ADD reserved_quantity :q SET entity_type = :entity_type",
            condition=Attr("reserved_quantity").not_exists()
            | Attr("reserved_quantity").lte(limit),
            quantity=quantity,
            extra_values={":entity_type": "PRODUCT_SLOT_STOCK"},
        )

    def release_time_slot_quantity(
        self, product: Product, slot_time: datetime, quantity: int
    ) -> bool:
        return self._conditional_add(
            key=slot_key(product, slot_time),
            update="SET reserved_quantity = reserved_quantity - :q",
            condition=Attr("reserved_quantity").gte(quantity),
            quantity=quantity,
        )

    def _conditional_add(
        self,
        key: dict,
        update: str,
        condition,
        quantity: int,
        extra_values: dict | None = None,
    ) -> bool:
        """1回の条件付き更新（条件で弾かれたら False）"""
        if quantity <= 0:
            raise ValueError(f"Quantity must be positive: {quantity}")
        try:
            self.table.update_item(
                Key=key,
                UpdateExpression=update,
                ConditionExpression=condition,
                ExpressionAttributeValues={":q": quantity, **(extra_values or {})},
            )
        except ClientError as e:
            if is_conditional_check_failure(e):
                return False
            raise
        return True
