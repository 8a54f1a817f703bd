from services.pricing_policy.domain import PricingPolicy, PricingPolicyRepository
from services.pricing_policy.domain.factory import PricingPolicyFactory
from services.shared.domain import DuplicateResourceException, PlaceId, RoomId
from services.shared.domain.exception import ErrorCode
from services.shared.utils import get_logger

logger = get_logger("pricing-policy")


class CreatePricingPolicyService:
    """部屋の登録時にデフォルトの料金ポリシーを作成する"""

    def __init__(
        self,
        repository: PricingPolicyRepository,
        factory: PricingPolicyFactory,
    ) -> None:
        self._repository = repository
        self._factory = factory

    def create_default_policy(
        self, room_id: RoomId, place_id: PlaceId, time_slot: str
    ) -> PricingPolicy:
        if self._repository.exists_by_id(room_id):
            raise DuplicateResourceException(
                f"Pricing policy already exists for roomId: {room_id}",
                error_code=ErrorCode.PRICING_POLICY_ALREADY_EXISTS,
            )

        policy = self._factory.create_default(room_id, place_id, time_slot)
        saved = self._repository.save(policy)
        logger.info(
            "Created default pricing policy",
            extra={"room_id": room_id.value, "place_id": place_id.value},
        )
        return saved
