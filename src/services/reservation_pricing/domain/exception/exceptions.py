from services.reservation_pricing.domain.enum import ReservationStatus
from services.shared.domain import BusinessRuleViolationException, ProductId
from services.shared.domain.exception import ErrorCode


class InvalidReservationStatusException(BusinessRuleViolationException):
    """許可されていないステータスからの遷移"""

    default_error_code = ErrorCode.INVALID_RESERVATION_STATUS

    def __init__(self, current_status: ReservationStatus, action: str) -> None:
        self.current_status = current_status
        self.action = action
        super().__init__(
            f"Cannot {action} reservation: current status is {current_status.value}"
        )

    def to_dict(self) -> dict:
        return {
            **super().to_dict(),
            "current_status": self.current_status.value,
            "action": self.action,
        }


class ProductNotAvailableException(BusinessRuleViolationException):
    default_error_code = ErrorCode.PRODUCT_NOT_AVAILABLE

    def __init__(self, product_id: ProductId, quantity: int) -> None:
        self.product_id = product_id
        self.quantity = quantity
        super().__init__(
            f"Product not available: productId={product_id}, quantity={quantity}"
        )

    def to_dict(self) -> dict:
        return {
            **super().to_dict(),
            "product_id": self.product_id.value,
            "quantity": self.quantity,
        }
