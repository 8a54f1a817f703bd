from services.pricing_policy.applications.get_pricing_policy import (
    GetPricingPolicyService,
)
from services.pricing_policy.domain import PricingPolicy, PricingPolicyRepository
from services.pricing_policy.domain.factory import (
    PricingPolicyFactory,
    TimeRangePriceDetails,
)
from services.shared.domain import Money, RoomId, TimeSlot


class UpdatePricingPolicyService:
    """管理者による部屋の料金変更"""

    def __init__(
        self,
        repository: PricingPolicyRepository,
        factory: PricingPolicyFactory,
    ) -> None:
        self._repository = repository
        self._factory = factory
        self._reader = GetPricingPolicyService(repository)

    def update_default_price(self, room_id: RoomId, default_price: Money) -> PricingPolicy:
        policy = self._reader.get(room_id)
        policy.update_default_price(default_price)
        return self._repository.save(policy)

    def update_time_range_prices(
        self, room_id: RoomId, details: list[TimeRangePriceDetails]
    ) -> PricingPolicy:
        """時間帯別料金をすべて置き換える（重複するエントリはエラー）"""
        policy = self._reader.get(room_id)
        policy.reset_prices(self._factory.create_time_range_prices(details))
        return self._repository.save(policy)

    def update_time_slot(self, room_id: RoomId, time_slot: TimeSlot) -> PricingPolicy:
        policy = self._reader.get(room_id)
        policy.update_time_slot(time_slot)
        return self._repository.save(policy)
