from abc import abstractmethod

from services.pricing_policy.domain.entity import PricingPolicy
from services.shared.domain import PlaceId, Repository, RoomId


class PricingPolicyRepository(Repository[PricingPolicy, RoomId]):
    """料金ポリシーの Repository（部屋IDがキー）"""

    @abstractmethod
    def save(self, policy: PricingPolicy) -> PricingPolicy:
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, room_id: RoomId) -> PricingPolicy | None:
        raise NotImplementedError

    @abstractmethod
    def delete_by_id(self, room_id: RoomId) -> None:
        raise NotImplementedError

    @abstractmethod
    def exists_by_id(self, room_id: RoomId) -> bool:
        raise NotImplementedError

    @abstractmethod
    def find_all_by_place_id(self, place_id: PlaceId) -> list[PricingPolicy]:
        """プレイス内の全部屋の料金ポリシー"""
        raise NotImplementedError
