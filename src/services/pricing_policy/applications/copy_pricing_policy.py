from services.pricing_policy.domain import PricingPolicy, PricingPolicyRepository
from services.shared.domain import ResourceNotFoundException, RoomId
from services.shared.domain.exception import ErrorCode
from services.shared.utils import get_logger

logger = get_logger("pricing-policy")


class CopyPricingPolicyService:
    """同じプレイス内の部屋間で料金をコピーする"""

    def __init__(self, repository: PricingPolicyRepository) -> None:
        self._repository = repository

    def copy_from_room(self, target_room_id: RoomId, source_room_id: RoomId) -> PricingPolicy:
        source = self._find(source_room_id, "Source")
        target = self._find(target_room_id, "Target")

        target.copy_prices_from(source)
        saved = self._repository.save(target)
        logger.info(
            "Copied pricing policy",
            extra={
                "source_room_id": source_room_id.value,
                "target_room_id": target_room_id.value,
            },
        )
        return saved

    def _find(self, room_id: RoomId, role: str) -> PricingPolicy:
        policy = self._repository.find_by_id(room_id)
        if policy is None:
            raise ResourceNotFoundException(
                f"{role} pricing policy not found for roomId: {room_id}",
                error_code=ErrorCode.PRICING_POLICY_NOT_FOUND,
            )
        return policy
