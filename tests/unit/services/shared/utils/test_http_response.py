import json
from unittest.mock import MagicMock

from pydantic import BaseModel, Field

from services.shared.domain import ErrorCode, ResourceNotFoundException
from services.shared.utils import api_error_boundary, api_response


class _Request(BaseModel):
    quantity: int = Field(..., gt=0)


def _handler_raising(error: Exception):
    @api_error_boundary(MagicMock())
    def handler(event, context):
        raise error

    return handler


class TestApiErrorBoundary:
    def test_passes_through_success(self):
        @api_error_boundary(MagicMock())
        def handler(event, context):
            return api_response(200, {"ok": True})

        response = handler({}, None)
        assert response["statusCode"] == 200
        assert json.loads(response["body"]) == {"ok": True}

    def test_domain_exception_uses_error_code_status(self):
        handler = _handler_raising(
            ResourceNotFoundException(
                "gone", error_code=ErrorCode.RESERVATION_NOT_FOUND
            )
        )
        response = handler({}, None)
        assert response["statusCode"] == 404
        assert json.loads(response["body"])["code"] == "RESERVATION_001"

    def test_validation_error_is_400(self):
        @api_error_boundary(MagicMock())
        def handler(event, context):
            _Request.model_validate({"quantity": 0})

        response = handler({}, None)
        assert response["statusCode"] == 400
        assert json.loads(response["body"])["code"] == "VALIDATION"

    def test_value_error_is_400(self):
        response = _handler_raising(ValueError("bad slot"))({}, None)
        assert response["statusCode"] == 400
        assert json.loads(response["body"])["message"] == "bad slot"

    def test_unexpected_error_is_500(self):
        logger = MagicMock()

        @api_error_boundary(logger)
        def handler(event, context):
            raise RuntimeError("boom")

        response = handler({}, None)
        assert response["statusCode"] == 500
        logger.exception.assert_called_once()
