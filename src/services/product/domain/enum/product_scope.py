from enum import Enum


class ProductScope(str, Enum):
    """商品の在庫を共有する範囲

    - PLACE: プレイス内の全部屋で共有する在庫（スロット単位）
    - ROOM: 部屋ごとの在庫（スロット単位）
    - RESERVATION: 時間に依存しない全体の在庫
    """

    PLACE = "PLACE"
    ROOM = "ROOM"
    RESERVATION = "RESERVATION"

    def requires_time_slots(self) -> bool:
        return self != ProductScope.RESERVATION
