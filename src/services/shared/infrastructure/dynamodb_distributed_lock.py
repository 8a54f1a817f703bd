import os
import socket
import uuid
from datetime import datetime, timedelta, timezone

import boto3
from boto3.dynamodb.conditions import Attr
from botocore.exceptions import ClientError

from services.shared.utils.distributed_lock import DistributedLock


class DynamoDBDistributedLock(DistributedLock):
    """サービス共通テーブルへの条件付き put による DistributedLock"""

    def __init__(self, table_name: str | None = None, owner: str | None = None) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        self.dynamodb = boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)
        self.owner = owner or f"{socket.gethostname()}:{uuid.uuid4()}"

    def try_acquire(self, name: str, lock_at_most_for: timedelta) -> bool:
        now = datetime.now(timezone.utc)
        item = {
            "PK": f"LOCK#{name}",
            "SK": "LOCK",
            "entity_type": "LOCK",
            "locked_by": self.owner,
            "locked_at": now.isoformat(),
            "lock_until": (now + lock_at_most_for).isoformat(),
            # テーブルの TTL 属性用のエポック秒
            "expires_at": int((now + lock_at_most_for).timestamp()),
        }
        try:
            self.table.put_item(
                Item=item,
                ConditionExpression=Attr("PK").not_exists()
                | Attr("lock_until").lte(now.isoformat()),
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                return False
            raise
        return True

    def release(self, name: str) -> None:
        try:
            self.table.delete_item(
                Key={"PK": f"LOCK#{name}", "SK": "LOCK"},
                ConditionExpression=Attr("locked_by").eq(self.owner),
            )
        except ClientError as e:
            # 期限切れで他のインスタンスに取得済み
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                return
            raise
