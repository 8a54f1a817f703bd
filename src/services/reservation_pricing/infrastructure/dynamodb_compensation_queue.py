import os
from collections.abc import Callable
from datetime import datetime, timezone

import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import ClientError

from services.reservation_pricing.domain import (
    CompensationQueue,
    InventoryCompensationTask,
)
from services.reservation_pricing.infrastructure.compensation_alerts import (
    alert_dropped,
    alert_enqueued,
)
from services.shared.domain import ProductId, RoomId
from services.shared.infrastructure.dynamodb import is_conditional_check_failure

QUEUE_PK = "COMPENSATION_QUEUE"


def to_item(task: InventoryCompensationTask, enqueued_at: datetime) -> dict:
    """InventoryCompensationTask -> DynamoDB アイテム

    行はキュー投入時刻でソートされるため、失敗後に戻したタスクは
    待機中のタスクすべての後ろに並ぶ。created_at は最初の失敗時刻のまま。
    """
    item = {
        "PK": QUEUE_PK,
        "SK": f"TASK#{enqueued_at.isoformat()}#{task.task_id}",
        "entity_type": "INVENTORY_COMPENSATION_TASK",
        "task_id": task.task_id,
        "product_id": task.product_id.value,
        "quantity": task.quantity,
        "time_slots": [slot.isoformat() for slot in task.time_slots],
        "retry_count": task.retry_count,
        "original_error": task.original_error,
        "created_at": task.created_at.isoformat(),
        "enqueued_at": enqueued_at.isoformat(),
    }
    if task.room_id is not None:
        item["room_id"] = task.room_id.value
    return item


def to_entity(item: dict) -> InventoryCompensationTask:
    room_id = item.get("room_id")
    return InventoryCompensationTask(
        task_id=item["task_id"],
        product_id=ProductId(value=int(item["product_id"])),
        quantity=int(item["quantity"]),
        room_id=RoomId(value=int(room_id)) if room_id is not None else None,
        time_slots=tuple(datetime.fromisoformat(s) for s in item.get("time_slots", [])),
        retry_count=int(item["retry_count"]),
        original_error=item["original_error"],
        created_at=datetime.fromisoformat(item["created_at"]),
    )


class DynamoDBCompensationQueue(CompensationQueue):
    """サービス共通テーブルを使う永続的な補償キュー

    全タスクはキュー投入時刻でソートされる1つのパーティションに置く。
    取り出しは条件付き削除で行い、同じタスクを2つのコンシューマが取ることはない。
    """

    def __init__(
        self,
        table_name: str | None = None,
        capacity: int = 1000,
        warning_size: int = 10,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        self.dynamodb = boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)
        self._capacity = capacity
        self._warning_size = warning_size
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def enqueue(self, task: InventoryCompensationTask) -> None:
        size = self.size()
        if size >= self._capacity:
            alert_dropped(task, self._capacity)
            return
        self.table.put_item(Item=to_item(task, self._clock()))
        alert_enqueued(task, size + 1, self._warning_size)

    def dequeue(self) -> InventoryCompensationTask | None:
        start_key = None
        while True:
            kwargs = {
                "KeyConditionExpression": Key("PK").eq(QUEUE_PK)
                & Key("SK").begins_with("TASK#"),
                "Limit": 10,
                "ConsistentRead": True,
            }
            if start_key:
                kwargs["ExclusiveStartKey"] = start_key
            response = self.table.query(**kwargs)
            for item in response.get("Items", []):
                if self._take(item):
                    return to_entity(item)
            start_key = response.get("LastEvaluatedKey")
            if not start_key:
                return None

    def size(self) -> int:
        count = 0
        kwargs = {
            "KeyConditionExpression": Key("PK").eq(QUEUE_PK)
            & Key("SK").begins_with("TASK#"),
            "Select": "COUNT",
            "ConsistentRead": True,
        }
        while True:
            response = self.table.query(**kwargs)
            count += response.get("Count", 0)
            if "LastEvaluatedKey" not in response:
                return count
            kwargs["ExclusiveStartKey"] = response["LastEvaluatedKey"]

    def _take(self, item: dict) -> bool:
        try:
            self.table.delete_item(
                Key={"PK": item["PK"], "SK": item["SK"]},
                ConditionExpression=Attr("PK").exists(),
            )
        except ClientError as e:
            if is_conditional_check_failure(e):
                return False
            raise
        return True
