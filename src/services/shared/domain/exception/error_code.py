from enum import Enum


class ErrorKind(str, Enum):
    """ドメインエラーの分類（通信方式に依存しない）"""

    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    VALIDATION = "VALIDATION"
    INVALID_STATE_TRANSITION = "INVALID_STATE_TRANSITION"
    PRODUCT_NOT_AVAILABLE = "PRODUCT_NOT_AVAILABLE"


class ErrorCode(Enum):
    """ドメインエラーごとのエラーコード・種別・HTTP ステータス"""

    RESOURCE_NOT_FOUND = ("COMMON_001", ErrorKind.NOT_FOUND, 404, "Resource not found")
    BUSINESS_RULE_VIOLATION = (
        "COMMON_002",
        ErrorKind.VALIDATION,
        400,
        "Business rule violated",
    )
    DUPLICATE_RESOURCE = ("COMMON_003", ErrorKind.CONFLICT, 409, "Resource already exists")
    OPTIMISTIC_LOCK = ("COMMON_004", ErrorKind.CONFLICT, 409, "Concurrent update detected")

    PRICING_POLICY_NOT_FOUND = (
        "PRICING_001",
        ErrorKind.NOT_FOUND,
        404,
        "Pricing policy not found",
    )
    PRICING_POLICY_ALREADY_EXISTS = (
        "PRICING_002",
        ErrorKind.CONFLICT,
        409,
        "Pricing policy already exists",
    )
    CANNOT_COPY_DIFFERENT_PLACE = (
        "PRICING_003",
        ErrorKind.VALIDATION,
        400,
        "Cannot copy pricing policy between different places",
    )
    INVALID_TIME_RANGE = ("PRICING_004", ErrorKind.VALIDATION, 400, "Invalid time range")
    TIME_RANGE_OVERLAP = (
        "PRICING_005",
        ErrorKind.VALIDATION,
        400,
        "Time ranges overlap",
    )

    RESERVATION_NOT_FOUND = (
        "RESERVATION_001",
        ErrorKind.NOT_FOUND,
        404,
        "Reservation not found",
    )
    PRODUCT_NOT_AVAILABLE = (
        "RESERVATION_002",
        ErrorKind.PRODUCT_NOT_AVAILABLE,
        400,
        "Product not available",
    )
    INVALID_RESERVATION_STATUS = (
        "RESERVATION_003",
        ErrorKind.INVALID_STATE_TRANSITION,
        400,
        "Invalid reservation status",
    )
    RESERVATION_PRICING_POLICY_NOT_FOUND = (
        "RESERVATION_004",
        ErrorKind.NOT_FOUND,
        404,
        "Pricing policy not found for reservation",
    )
    RESERVATION_PRODUCT_NOT_FOUND = (
        "RESERVATION_005",
        ErrorKind.NOT_FOUND,
        404,
        "Product not found for reservation",
    )

    PRODUCT_NOT_FOUND = ("PRODUCT_001", ErrorKind.NOT_FOUND, 404, "Product not found")
    TOTAL_QUANTITY_BELOW_RESERVED = (
        "PRODUCT_002",
        ErrorKind.VALIDATION,
        400,
        "Total quantity cannot be lower than reserved quantity",
    )

    def __init__(
        self, code: str, kind: ErrorKind, http_status: int, message: str
    ) -> None:
        self.code = code
        self.kind = kind
        self.http_status = http_status
        self.message = message
