from abc import abstractmethod
from collections.abc import Sequence
from datetime import datetime

from services.reservation_pricing.domain.entity import ReservationPricing
from services.reservation_pricing.domain.enum import ReservationStatus
from services.shared.domain import PlaceId, Repository, ReservationId, RoomId


class ReservationPricingRepository(Repository[ReservationPricing, ReservationId]):
    @abstractmethod
    def save(self, reservation: ReservationPricing) -> ReservationPricing:
        """新しい予約を登録する

        同じIDが保存済みなら DuplicateResourceException を送出する。
        """
        raise NotImplementedError

    @abstractmethod
    def update(self, reservation: ReservationPricing) -> ReservationPricing:
        """読み込み後に他から更新されていなければ変更を保存する

        保存済みの version が reservation.version と異なれば
        OptimisticLockException を送出する。成功時は version を加算する。
        """
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, reservation_id: ReservationId) -> ReservationPricing | None:
        raise NotImplementedError

    @abstractmethod
    def find_by_room_id_and_time_range(
        self,
        room_id: RoomId,
        start: datetime,
        end: datetime,
        statuses: Sequence[ReservationStatus],
    ) -> list[ReservationPricing]:
        """部屋の予約のうちスロットが [start, end) と重なるもの"""
        raise NotImplementedError

    @abstractmethod
    def find_by_place_id_and_time_range(
        self,
        place_id: PlaceId,
        start: datetime,
        end: datetime,
        statuses: Sequence[ReservationStatus],
    ) -> list[ReservationPricing]:
        """プレイス内の全部屋の予約のうちスロットが [start, end) と重なるもの"""
        raise NotImplementedError

    @abstractmethod
    def find_by_status_in(
        self, statuses: Sequence[ReservationStatus]
    ) -> list[ReservationPricing]:
        raise NotImplementedError

    @abstractmethod
    def find_expired_pending_reservations(
        self, now: datetime
    ) -> list[ReservationPricing]:
        """expires_at <= now の PENDING の予約"""
        raise NotImplementedError

    @abstractmethod
    def delete_by_id(self, reservation_id: ReservationId) -> None:
        raise NotImplementedError

    @abstractmethod
    def exists_by_id(self, reservation_id: ReservationId) -> bool:
        raise NotImplementedError
