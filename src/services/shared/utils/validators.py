from datetime import datetime
from decimal import Decimal


def to_decimal(v: object) -> Decimal:
    """値を Decimal に変換する

    pydantic の field_validator(mode="before") 用。Decimal はそのまま返し、
    それ以外は str を経由して float の表示値を保つ。
    """
    if isinstance(v, Decimal):
        return v
    return Decimal(str(v))


def to_naive_datetime(v: object) -> datetime:
    """ISO 8601 の値を naive な現地日時に変換する

    スロットの時刻は施設の現地時刻のため、オフセットは捨てる。
    """
    if isinstance(v, datetime):
        value = v
    else:
        try:
            value = datetime.fromisoformat(str(v).replace("Z", "+00:00"))
        except ValueError as e:
            raise ValueError(f"Invalid ISO 8601 datetime: {v}") from e
    return value.replace(tzinfo=None)
