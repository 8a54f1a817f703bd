from datetime import date, time

from services.pricing_policy.domain import PricingPolicy, PricingPolicyRepository
from services.shared.domain import Money, PlaceId, ResourceNotFoundException, RoomId
from services.shared.domain.exception import ErrorCode


class GetPricingPolicyService:
    """料金ポリシーの参照"""

    def __init__(self, repository: PricingPolicyRepository) -> None:
        self._repository = repository

    def get(self, room_id: RoomId) -> PricingPolicy:
        policy = self._repository.find_by_id(room_id)
        if policy is None:
            raise ResourceNotFoundException(
                f"Pricing policy not found for roomId: {room_id}",
                error_code=ErrorCode.PRICING_POLICY_NOT_FOUND,
            )
        return policy

    def get_prices_for_date(self, room_id: RoomId, target: date) -> dict[time, Money]:
        """1日分のスロット開始時刻 -> 料金の表"""
        return self.get(room_id).prices_for_date(target)

    def list_by_place(self, place_id: PlaceId) -> list[PricingPolicy]:
        return self._repository.find_all_by_place_id(place_id)
