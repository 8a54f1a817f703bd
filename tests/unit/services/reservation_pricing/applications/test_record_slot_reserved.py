from datetime import date, datetime, time

import pytest

from services.reservation_pricing.applications import RecordSlotReservedService
from services.reservation_pricing.domain import ReservationStatus
from services.shared.domain import Money, ReservationId, RoomId


@pytest.fixture
def record_service(reservation_repository, quoter, publisher):
    return RecordSlotReservedService(
        reservation_repository, quoter, publisher, pending_timeout_minutes=10
    )


class TestRecordSlotReservedService:
    def test_records_pending_reservation(self, record_service, reservation_repository):
        reservation = record_service.record(
            ReservationId(value=7), RoomId(value=10), date(2025, 1, 6), [time(21), time(22)]
        )

        assert reservation.status == ReservationStatus.PENDING
        assert reservation.time_slot_breakdown.slot_times == [
            datetime(2025, 1, 6, 21),
            datetime(2025, 1, 6, 22),
        ]
        assert reservation.total_price == Money.of("25000")
        assert reservation_repository.find_by_id(ReservationId(value=7)).total_price == reservation.total_price

    def test_replayed_message_is_ignored(self, record_service, reservation_repository, publisher):
        first = record_service.record(
            ReservationId(value=7), RoomId(value=10), date(2025, 1, 6), [time(10)]
        )
        second = record_service.record(
            ReservationId(value=7), RoomId(value=10), date(2025, 1, 6), [time(10), time(11)]
        )

        assert second is None
        assert reservation_repository.find_by_status_in(ReservationStatus.active()) == [first]
        assert publisher.publish_all.call_count == 1

    def test_concurrent_duplicate_is_ignored(self, record_service, reservation_repository, publisher):
        record_service.record(ReservationId(value=7), RoomId(value=10), date(2025, 1, 6), [time(10)])
        # 最初の登録より前に存在チェックを通過した2つ目のコンシューマ
        reservation_repository.exists_by_id = lambda reservation_id: False

        second = record_service.record(
            ReservationId(value=7), RoomId(value=10), date(2025, 1, 6), [time(10)]
        )

        assert second is None
        assert publisher.publish_all.call_count == 1
