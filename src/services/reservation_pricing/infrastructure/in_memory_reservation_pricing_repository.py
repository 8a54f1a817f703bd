import copy
import threading
from collections.abc import Sequence
from datetime import datetime

from services.reservation_pricing.domain import (
    ReservationPricing,
    ReservationPricingRepository,
    ReservationStatus,
)
from services.shared.domain import (
    DuplicateResourceException,
    OptimisticLockException,
    PlaceId,
    ReservationId,
    RoomId,
)


class InMemoryReservationPricingRepository(ReservationPricingRepository):
    """ローカル実行・テスト用のプロセス内 ReservationPricingRepository

    行はコピーで保存・返却するため、同じ予約を読んだ2者は実際のテーブルと
    同じく別々のオブジェクトを持つ。部屋とプレイスの対応は register_room で
    登録する（DynamoDB 実装の料金ポリシー参照の代わり）。
    """

    def __init__(self) -> None:
        self._rows: dict[ReservationId, ReservationPricing] = {}
        self._places: dict[RoomId, PlaceId] = {}
        self._lock = threading.Lock()

    def register_room(self, room_id: RoomId, place_id: PlaceId) -> None:
        self._places[room_id] = place_id

    def save(self, reservation: ReservationPricing) -> ReservationPricing:
        with self._lock:
            if reservation.reservation_id in self._rows:
                raise DuplicateResourceException(
                    f"Reservation pricing already exists: {reservation.reservation_id}"
                )
            self._rows[reservation.reservation_id] = self._copy(reservation)
        return reservation

    def update(self, reservation: ReservationPricing) -> ReservationPricing:
        with self._lock:
            stored = self._rows.get(reservation.reservation_id)
            stored_version = stored.version if stored is not None else None
            if stored_version != reservation.version:
                raise OptimisticLockException(
                    f"Reservation pricing was changed concurrently: "
                    f"expected version {reservation.version}, "
                    f"reservation_id={reservation.reservation_id}"
                )
            reservation.increment_version()
            self._rows[reservation.reservation_id] = self._copy(reservation)
        return reservation

    def find_by_id(self, reservation_id: ReservationId) -> ReservationPricing | None:
        with self._lock:
            stored = self._rows.get(reservation_id)
            return self._copy(stored) if stored is not None else None

    def find_by_room_id_and_time_range(
        self,
        room_id: RoomId,
        start: datetime,
        end: datetime,
        statuses: Sequence[ReservationStatus],
    ) -> list[ReservationPricing]:
        return self._select(
            lambda r: r.room_id == room_id
            and r.status in statuses
            and self._overlaps(r, start, end)
        )

    def find_by_place_id_and_time_range(
        self,
        place_id: PlaceId,
        start: datetime,
        end: datetime,
        statuses: Sequence[ReservationStatus],
    ) -> list[ReservationPricing]:
        return self._select(
            lambda r: self._places.get(r.room_id) == place_id
            and r.status in statuses
            and self._overlaps(r, start, end)
        )

    def find_by_status_in(
        self, statuses: Sequence[ReservationStatus]
    ) -> list[ReservationPricing]:
        return self._select(lambda r: r.status in statuses)

    def find_expired_pending_reservations(
        self, now: datetime
    ) -> list[ReservationPricing]:
        return self._select(lambda r: r.is_expired(now))

    def delete_by_id(self, reservation_id: ReservationId) -> None:
        with self._lock:
            self._rows.pop(reservation_id, None)

    def exists_by_id(self, reservation_id: ReservationId) -> bool:
        with self._lock:
            return reservation_id in self._rows

    def _select(self, predicate) -> list[ReservationPricing]:
        with self._lock:
            return [self._copy(r) for r in self._rows.values() if predicate(r)]

    @staticmethod
    def _copy(reservation: ReservationPricing) -> ReservationPricing:
        stored = copy.deepcopy(reservation)
        stored.flush_domain_events()
        return stored

    @staticmethod
    def _overlaps(reservation: ReservationPricing, start: datetime, end: datetime) -> bool:
        breakdown = reservation.time_slot_breakdown
        return breakdown.start < end and breakdown.end > start
