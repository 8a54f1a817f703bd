from decimal import Decimal

import pytest

from services.pricing_policy.applications.copy_pricing_policy import (
    CopyPricingPolicyService,
)
from services.pricing_policy.applications.create_pricing_policy import (
    CreatePricingPolicyService,
)
from services.pricing_policy.applications.get_pricing_policy import (
    GetPricingPolicyService,
)
from services.pricing_policy.applications.update_pricing_policy import (
    UpdatePricingPolicyService,
)
from services.pricing_policy.domain import PricingPolicyFactory
from services.shared.domain import (
    BusinessRuleViolationException,
    DuplicateResourceException,
    ErrorCode,
    Money,
    PlaceId,
    ResourceNotFoundException,
    RoomId,
    TimeSlot,
)


@pytest.fixture
def saving_repository(mock_repository):
    mock_repository.save.side_effect = lambda policy: policy
    return mock_repository


class TestCreatePricingPolicyService:
    def test_creates_default_policy(self, saving_repository):
        saving_repository.exists_by_id.return_value = False
        service = CreatePricingPolicyService(saving_repository, PricingPolicyFactory())

        policy = service.create_default_policy(RoomId(value=10), PlaceId(value=1), "HOUR")

        assert policy.time_slot == TimeSlot.HOUR
        assert policy.default_price == Money.ZERO
        saving_repository.save.assert_called_once_with(policy)

    def test_rejects_existing_policy(self, saving_repository):
        saving_repository.exists_by_id.return_value = True
        service = CreatePricingPolicyService(saving_repository, PricingPolicyFactory())

        with pytest.raises(DuplicateResourceException) as exc_info:
            service.create_default_policy(RoomId(value=10), PlaceId(value=1), "HOUR")
        assert exc_info.value.error_code == ErrorCode.PRICING_POLICY_ALREADY_EXISTS
        saving_repository.save.assert_not_called()


class TestGetPricingPolicyService:
    def test_missing_policy(self, mock_repository):
        mock_repository.find_by_id.return_value = None
        with pytest.raises(ResourceNotFoundException) as exc_info:
            GetPricingPolicyService(mock_repository).get(RoomId(value=10))
        assert exc_info.value.error_code == ErrorCode.PRICING_POLICY_NOT_FOUND

    def test_list_by_place(self, mock_repository, create_policy):
        policies = [create_policy(room_id=10), create_policy(room_id=11)]
        mock_repository.find_all_by_place_id.return_value = policies

        assert GetPricingPolicyService(mock_repository).list_by_place(PlaceId(value=1)) == policies


class TestUpdatePricingPolicyService:
    def test_update_time_range_prices(self, saving_repository, create_policy):
        saving_repository.find_by_id.return_value = create_policy(overrides=[])
        service = UpdatePricingPolicyService(saving_repository, PricingPolicyFactory())

        policy = service.update_time_range_prices(
            RoomId(value=10),
            [
                {
                    "day_of_week": "SATURDAY",
                    "start_time": "09:00",
                    "end_time": "18:00",
                    "price_per_slot": Decimal("12000"),
                }
            ],
        )

        assert len(policy.time_range_prices) == 1
        saving_repository.save.assert_called_once()

    def test_invalid_time_range(self, saving_repository, create_policy):
        saving_repository.find_by_id.return_value = create_policy()
        service = UpdatePricingPolicyService(saving_repository, PricingPolicyFactory())

        with pytest.raises(BusinessRuleViolationException) as exc_info:
            service.update_time_range_prices(
                RoomId(value=10),
                [
                    {
                        "day_of_week": "SATURDAY",
                        "start_time": "18:00",
                        "end_time": "09:00",
                        "price_per_slot": Decimal("12000"),
                    }
                ],
            )
        assert exc_info.value.error_code == ErrorCode.INVALID_TIME_RANGE
        saving_repository.save.assert_not_called()

    def test_update_default_price(self, saving_repository, create_policy):
        saving_repository.find_by_id.return_value = create_policy()
        service = UpdatePricingPolicyService(saving_repository, PricingPolicyFactory())

        policy = service.update_default_price(RoomId(value=10), Money.of("8000"))
        assert policy.default_price == Money.of("8000")


class TestCopyPricingPolicyService:
    def test_copies_from_source_room(self, saving_repository, create_policy):
        source = create_policy(room_id=11, default_price="30000")
        target = create_policy(room_id=12, overrides=[])
        saving_repository.find_by_id.side_effect = lambda room_id: {
            RoomId(value=11): source,
            RoomId(value=12): target,
        }.get(room_id)

        copied = CopyPricingPolicyService(saving_repository).copy_from_room(
            RoomId(value=12), RoomId(value=11)
        )

        assert copied.default_price == Money.of("30000")
        saving_repository.save.assert_called_once_with(target)

    def test_missing_source(self, saving_repository):
        saving_repository.find_by_id.return_value = None
        with pytest.raises(ResourceNotFoundException):
            CopyPricingPolicyService(saving_repository).copy_from_room(
                RoomId(value=12), RoomId(value=11)
            )
