from datetime import timedelta
from unittest.mock import patch

import pytest
from botocore.exceptions import ClientError

from services.shared.infrastructure import DynamoDBDistributedLock


def _conditional_failure(operation: str) -> ClientError:
    return ClientError(
        {"Error": {"Code": "ConditionalCheckFailedException", "Message": "failed"}},
        operation,
    )


@pytest.fixture
def lock():
    with patch("services.shared.infrastructure.dynamodb_distributed_lock.boto3"):
        yield DynamoDBDistributedLock(table_name="pricing-table", owner="worker-1")


class TestDynamoDBDistributedLock:
    def test_acquire_puts_lock_item(self, lock):
        assert lock.try_acquire("expire", timedelta(minutes=5)) is True

        kwargs = lock.table.put_item.call_args.kwargs
        assert kwargs["Item"]["PK"] == "LOCK#expire"
        assert kwargs["Item"]["locked_by"] == "worker-1"
        assert "ConditionExpression" in kwargs

    def test_acquire_returns_false_when_held(self, lock):
        lock.table.put_item.side_effect = _conditional_failure("PutItem")
        assert lock.try_acquire("expire", timedelta(minutes=5)) is False

    def test_acquire_propagates_other_errors(self, lock):
        lock.table.put_item.side_effect = ClientError(
            {"Error": {"Code": "ProvisionedThroughputExceededException", "Message": ""}},
            "PutItem",
        )
        with pytest.raises(ClientError):
            lock.try_acquire("expire", timedelta(minutes=5))

    def test_release_ignores_lock_taken_over(self, lock):
        lock.table.delete_item.side_effect = _conditional_failure("DeleteItem")
        lock.release("expire")
        lock.table.delete_item.assert_called_once()
