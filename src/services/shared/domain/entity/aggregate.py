from typing import TypeVar

from .entity import Entity

ID = TypeVar("ID")


class AggregateRoot(Entity[ID]):
    """集約ルート基底クラス

    - 子要素へは集約ルート経由でのみアクセスする
    - トランザクション境界 == 集約境界
    - 状態変更はドメインイベントとして記録し、アプリケーション層で取り出す
    """

    def __init__(self, id: ID) -> None:
        super().__init__(id)
        self._domain_events: list = []

    def add_domain_event(self, event: object) -> None:
        self._domain_events.append(event)

    def flush_domain_events(self) -> list:
        """記録したイベントを返してクリアする"""
        events = self._domain_events.copy()
        self._domain_events.clear()
        return events
