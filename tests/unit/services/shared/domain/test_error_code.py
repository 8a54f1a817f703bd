from services.shared.domain import (
    BusinessRuleViolationException,
    DuplicateResourceException,
    ErrorCode,
    ErrorKind,
    ResourceNotFoundException,
)


class TestDomainException:
    def test_defaults_to_category_code(self):
        error = ResourceNotFoundException("missing")
        assert error.error_code == ErrorCode.RESOURCE_NOT_FOUND
        assert error.http_status == 404
        assert error.message == "missing"

    def test_explicit_code_overrides_default(self):
        error = BusinessRuleViolationException(error_code=ErrorCode.TIME_RANGE_OVERLAP)
        assert error.http_status == 400
        assert error.to_dict() == {
            "code": "PRICING_005",
            "kind": ErrorKind.VALIDATION.value,
            "message": ErrorCode.TIME_RANGE_OVERLAP.message,
        }

    def test_conflict_codes(self):
        error = DuplicateResourceException(
            error_code=ErrorCode.PRICING_POLICY_ALREADY_EXISTS
        )
        assert error.http_status == 409
        assert error.error_code.kind == ErrorKind.CONFLICT

    def test_codes_are_unique(self):
        codes = [member.code for member in ErrorCode]
        assert len(codes) == len(set(codes))
