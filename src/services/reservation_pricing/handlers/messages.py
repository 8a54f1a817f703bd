"""予約料金コンシューマの受信メッセージ

全メッセージは event_type で判別する InboundMessage のメンバー。
MESSAGE_HANDLERS で種類ごとに処理関数を対応付ける。
"""

from collections.abc import Callable
from datetime import date, time
from typing import Annotated, Literal, Union

from aws_lambda_powertools.utilities.data_classes.sqs_event import SQSRecord
from pydantic import BaseModel, Field, TypeAdapter

from services.pricing_policy.applications.create_pricing_policy import (
    CreatePricingPolicyService,
)
from services.reservation_pricing.applications import (
    CancelReservationPricingService,
    ConfirmReservationPricingService,
    RecordSlotReservedService,
)
from services.shared.domain import (
    DuplicateResourceException,
    PlaceId,
    ReservationId,
    RoomId,
    TimeSlot,
)
from services.shared.utils import get_logger

logger = get_logger("reservation-pricing")


class RoomCreated(BaseModel):
    event_type: Literal["RoomCreated"]
    room_id: int = Field(..., gt=0)
    place_id: int = Field(..., gt=0)
    time_slot: TimeSlot = TimeSlot.HOUR


class SlotReserved(BaseModel):
    event_type: Literal["SlotReserved"]
    reservation_id: int = Field(..., gt=0)
    room_id: int = Field(..., gt=0)
    reservation_date: date = Field(..., alias="date")
    start_times: list[time] = Field(..., min_length=1)


class PaymentCompleted(BaseModel):
    event_type: Literal["PaymentCompleted"]
    reservation_id: int = Field(..., gt=0)


class ReservationRefund(BaseModel):
    event_type: Literal["ReservationRefund"]
    reservation_id: int = Field(..., gt=0)


class RefundCompleted(BaseModel):
    event_type: Literal["RefundCompleted"]
    reservation_id: int = Field(..., gt=0)


InboundMessage = Annotated[
    Union[RoomCreated, SlotReserved, PaymentCompleted, ReservationRefund, RefundCompleted],
    Field(discriminator="event_type"),
]

inbound_message_adapter: TypeAdapter[InboundMessage] = TypeAdapter(InboundMessage)


def parse_message(body: str) -> InboundMessage:
    return inbound_message_adapter.validate_json(body)


class MessageServices:
    """コンシューマが呼び出すユースケース"""

    def __init__(
        self,
        create_policy: CreatePricingPolicyService,
        record_slot_reserved: RecordSlotReservedService,
        confirm: ConfirmReservationPricingService,
        cancel: CancelReservationPricingService,
    ) -> None:
        self.create_policy = create_policy
        self.record_slot_reserved = record_slot_reserved
        self.confirm = confirm
        self.cancel = cancel


def _on_room_created(message: RoomCreated, services: MessageServices) -> None:
    try:
        services.create_policy.create_default_policy(
            RoomId(value=message.room_id),
            PlaceId(value=message.place_id),
            message.time_slot.value,
        )
    except DuplicateResourceException:
        logger.info(
            "Pricing policy already exists, skipping", extra={"room_id": message.room_id}
        )


def _on_slot_reserved(message: SlotReserved, services: MessageServices) -> None:
    services.record_slot_reserved.record(
        ReservationId(value=message.reservation_id),
        RoomId(value=message.room_id),
        message.reservation_date,
        message.start_times,
    )


def _on_payment_completed(message: PaymentCompleted, services: MessageServices) -> None:
    services.confirm.confirm(ReservationId(value=message.reservation_id))


def _on_refund(
    message: ReservationRefund | RefundCompleted, services: MessageServices
) -> None:
    services.cancel.refund(ReservationId(value=message.reservation_id))


MESSAGE_HANDLERS: dict[type[BaseModel], Callable[..., None]] = {
    RoomCreated: _on_room_created,
    SlotReserved: _on_slot_reserved,
    PaymentCompleted: _on_payment_completed,
    ReservationRefund: _on_refund,
    RefundCompleted: _on_refund,
}


def dispatch(message: InboundMessage, services: MessageServices) -> None:
    MESSAGE_HANDLERS[type(message)](message, services)


def apply_record(record: SQSRecord, services: MessageServices) -> None:
    """SQS レコードを1件パースして処理する（例外でレコードを失敗扱いにする）"""
    try:
        message = parse_message(record.body)
        logger.info(
            "Received message",
            extra={"event_type": message.event_type, "message_id": record.message_id},
        )
        dispatch(message, services)
    except Exception:
        logger.exception("Failed to apply message", extra={"message_id": record.message_id})
        raise
