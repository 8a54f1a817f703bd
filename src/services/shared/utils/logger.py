from aws_lambda_powertools import Logger


def get_logger(service_name: str) -> Logger:
    """サービス名付きの Logger（handler 以外のモジュール用）"""
    return Logger(service=service_name)
