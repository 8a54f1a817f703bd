from .error_code import ErrorCode


class DomainException(Exception):
    """ドメイン層が送出する例外の基底クラス

    ErrorCode を持つため、アダプタは例外の型を見ずにステータスへ変換できる。
    """

    default_error_code = ErrorCode.BUSINESS_RULE_VIOLATION

    def __init__(
        self, message: str | None = None, error_code: ErrorCode | None = None
    ) -> None:
        self.error_code = error_code or self.default_error_code
        self.message = message or self.error_code.message
        super().__init__(self.message)

    @property
    def http_status(self) -> int:
        return self.error_code.http_status

    def to_dict(self) -> dict:
        return {
            "code": self.error_code.code,
            "kind": self.error_code.kind.value,
            "message": self.message,
        }


class ResourceNotFoundException(DomainException):
    """集約またはエンティティが存在しない"""

    default_error_code = ErrorCode.RESOURCE_NOT_FOUND


class BusinessRuleViolationException(DomainException):
    default_error_code = ErrorCode.BUSINESS_RULE_VIOLATION


class DuplicateResourceException(DomainException):
    """アイテムが既に存在するため条件付き書き込みに失敗した"""

    default_error_code = ErrorCode.DUPLICATE_RESOURCE


class OptimisticLockException(DomainException):
    """楽観ロックの競合エラー（保存済みの状態が期待値と異なる場合）"""

    default_error_code = ErrorCode.OPTIMISTIC_LOCK
