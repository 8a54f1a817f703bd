from datetime import datetime, timezone
from unittest.mock import patch

import pytest
from boto3.dynamodb.conditions import Attr
from botocore.exceptions import ClientError

from services.reservation_pricing.domain import ReservationStatus
from services.reservation_pricing.infrastructure.dynamodb_reservation_pricing_repository import (
    DynamoDBReservationPricingRepository,
    to_entity,
    to_item,
)
from services.shared.domain import (
    DuplicateResourceException,
    ErrorCode,
    OptimisticLockException,
    PlaceId,
    ReservationId,
    ResourceNotFoundException,
    RoomId,
)


@pytest.fixture
def repository():
    with patch(
        "services.reservation_pricing.infrastructure.dynamodb_reservation_pricing_repository.boto3"
    ):
        yield DynamoDBReservationPricingRepository(table_name="pricing-table")


CONDITIONAL_FAILURE = ClientError(
    {"Error": {"Code": "ConditionalCheckFailedException", "Message": "failed"}},
    "PutItem",
)


@pytest.fixture
def stored_repository(table):
    """部屋10の料金ポリシーを持つインメモリテーブル上の Repository"""
    table.put_item(Item={"PK": "ROOM#10", "SK": "PRICING_POLICY", "place_id": 1})
    with patch(
        "services.reservation_pricing.infrastructure.dynamodb_reservation_pricing_repository.boto3"
    ):
        repository = DynamoDBReservationPricingRepository(table_name="pricing-table")
    repository.table = table
    return repository


class TestReservationPricingMapping:
    def test_index_keys(self, create_reservation):
        item = to_item(create_reservation(), PlaceId(value=1))

        assert item["PK"] == "RESERVATION#1000"
        assert item["GSI1PK"] == "PLACE#1"
        assert item["GSI2PK"] == "ROOM#10"
        assert item["GSI2SK"] == "START#2025-01-06T10:00#RESERVATION#1000"
        assert item["GSI3PK"] == "STATUS#PENDING"
        assert item["GSI3SK"] == "2025-01-01T09:20:00+00:00"
        assert item["slot_start"] == "2025-01-06T10:00"
        assert item["slot_end"] == "2025-01-06T12:00"

    def test_round_trip(self, create_reservation, create_product):
        reservation = create_reservation(
            status=ReservationStatus.CONFIRMED,
            product_breakdowns=(create_product().calculate_price(3),),
        )

        restored = to_entity(to_item(reservation, PlaceId(value=1)))

        assert restored.status == ReservationStatus.CONFIRMED
        assert restored.time_slot_breakdown == reservation.time_slot_breakdown
        assert restored.product_breakdowns == reservation.product_breakdowns
        assert restored.total_price == reservation.total_price
        assert restored.expires_at is None
        assert restored.calculated_at == reservation.calculated_at


class TestDynamoDBReservationPricingRepository:
    def test_save_resolves_place_from_policy(self, repository, create_reservation):
        repository.table.get_item.return_value = {"Item": {"place_id": 3}}

        repository.save(create_reservation())

        item = repository.table.put_item.call_args.kwargs["Item"]
        assert item["place_id"] == 3
        assert item["GSI1PK"] == "PLACE#3"

    def test_save_without_policy(self, repository, create_reservation):
        repository.table.get_item.return_value = {}

        with pytest.raises(ResourceNotFoundException) as exc_info:
            repository.save(create_reservation())
        assert exc_info.value.error_code == ErrorCode.RESERVATION_PRICING_POLICY_NOT_FOUND
        repository.table.put_item.assert_not_called()

    def test_overlap_query(self, repository, create_reservation):
        repository.table.query.return_value = {
            "Items": [to_item(create_reservation(), PlaceId(value=1))]
        }

        found = repository.find_by_room_id_and_time_range(
            RoomId(value=10),
            datetime(2025, 1, 6, 11),
            datetime(2025, 1, 6, 13),
            ReservationStatus.active(),
        )

        assert [r.reservation_id for r in found] == [ReservationId(value=1000)]
        kwargs = repository.table.query.call_args.kwargs
        assert kwargs["IndexName"] == "GSI2"

    def test_overlap_query_without_statuses(self, repository):
        found = repository.find_by_place_id_and_time_range(
            PlaceId(value=1), datetime(2025, 1, 6, 11), datetime(2025, 1, 6, 13), ()
        )
        assert found == []
        repository.table.query.assert_not_called()

    def test_find_by_status_in_queries_each_status(self, repository):
        repository.table.query.return_value = {"Items": []}

        repository.find_by_status_in(
            [ReservationStatus.PENDING, ReservationStatus.CONFIRMED, ReservationStatus.PENDING]
        )

        assert repository.table.query.call_count == 2

    def test_find_expired(self, repository, create_reservation):
        repository.table.query.return_value = {
            "Items": [to_item(create_reservation(), PlaceId(value=1))]
        }

        found = repository.find_expired_pending_reservations(
            datetime(2025, 1, 1, 10, tzinfo=timezone.utc)
        )

        assert len(found) == 1
        assert repository.table.query.call_args.kwargs["IndexName"] == "GSI3"

    def test_save_is_insert_only(self, repository, create_reservation):
        repository.table.get_item.return_value = {"Item": {"place_id": 3}}
        repository.table.put_item.side_effect = CONDITIONAL_FAILURE

        with pytest.raises(DuplicateResourceException) as exc_info:
            repository.save(create_reservation())
        assert exc_info.value.http_status == 409
        kwargs = repository.table.put_item.call_args.kwargs
        assert kwargs["ConditionExpression"] == Attr("PK").not_exists()

    def test_update_is_conditional_on_version(self, repository, create_reservation):
        repository.table.get_item.return_value = {"Item": {"place_id": 3}}
        reservation = create_reservation()

        repository.update(reservation)

        kwargs = repository.table.put_item.call_args.kwargs
        assert kwargs["ConditionExpression"] == Attr("version").eq(0)
        assert kwargs["Item"]["version"] == 1
        assert reservation.version == 1

    def test_update_conflict(self, repository, create_reservation):
        repository.table.get_item.return_value = {"Item": {"place_id": 3}}
        repository.table.put_item.side_effect = CONDITIONAL_FAILURE
        reservation = create_reservation()

        with pytest.raises(OptimisticLockException):
            repository.update(reservation)
        assert reservation.version == 0


class TestReservationPricingConcurrentWrites:
    def test_stale_cancel_after_confirm_is_rejected(self, stored_repository, create_reservation):
        stored_repository.save(create_reservation())
        first = stored_repository.find_by_id(ReservationId(value=1000))
        stale = stored_repository.find_by_id(ReservationId(value=1000))

        first.confirm()
        stored_repository.update(first)
        stale.cancel()

        with pytest.raises(OptimisticLockException):
            stored_repository.update(stale)
        stored = stored_repository.find_by_id(ReservationId(value=1000))
        assert stored.status == ReservationStatus.CONFIRMED
        assert stored.version == 1

    def test_only_one_of_two_cancels_wins(self, stored_repository, create_reservation):
        stored_repository.save(create_reservation())
        copies = [stored_repository.find_by_id(ReservationId(value=1000)) for _ in range(2)]
        for reservation in copies:
            reservation.cancel()

        stored_repository.update(copies[0])
        with pytest.raises(OptimisticLockException):
            stored_repository.update(copies[1])

    def test_duplicate_insert_keeps_first_row(self, stored_repository, create_reservation):
        stored_repository.save(create_reservation(slot_count=1))

        with pytest.raises(DuplicateResourceException):
            stored_repository.save(create_reservation(slot_count=2))
        stored = stored_repository.find_by_id(ReservationId(value=1000))
        assert stored.time_slot_breakdown.slot_count == 1
