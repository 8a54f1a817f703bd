import functools
import json
from collections.abc import Callable

from aws_lambda_powertools import Logger
from pydantic import ValidationError

from services.shared.domain.exception import DomainException


def api_response(status_code: int, body: dict) -> dict:
    """API Gateway HTTP API のレスポンスを生成"""
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body, default=str),
    }


def error_response(error: DomainException) -> dict:
    """ドメインエラーを HTTP ステータスとエラー本文に変換する"""
    return api_response(error.http_status, error.to_dict())


def api_error_boundary(logger: Logger) -> Callable:
    """API handler の例外を HTTP レスポンスに変換する

    DomainException -> ErrorCode のステータス、不正な入力 -> 400、
    それ以外 -> 500。
    """

    def decorator(handler: Callable[..., dict]) -> Callable[..., dict]:
        @functools.wraps(handler)
        def wrapper(event, context) -> dict:
            try:
                return handler(event, context)
            except DomainException as e:
                logger.warning(
                    "Request rejected",
                    extra={"error_code": e.error_code.code, "reason": e.message},
                )
                return error_response(e)
            except ValidationError as e:
                return api_response(
                    400,
                    {
                        "code": "VALIDATION",
                        "message": "Invalid request",
                        "errors": e.errors(include_url=False, include_context=False),
                    },
                )
            except ValueError as e:
                return api_response(400, {"code": "VALIDATION", "message": str(e)})
            except Exception:
                logger.exception("Unhandled error")
                return api_response(500, {"message": "Internal server error"})

        return wrapper

    return decorator
