import os
import threading
import time

# 2024-01-01T00:00:00Z（ミリ秒）
_EPOCH_MS = 1704067200000
_NODE_BITS = 10
_SEQUENCE_BITS = 12
_MAX_SEQUENCE = (1 << _SEQUENCE_BITS) - 1


class SnowflakeIdGenerator:
    """時刻順の63ビットID（ミリ秒 | ノード | 連番）"""

    def __init__(self, node_id: int | None = None) -> None:
        if node_id is None:
            node_id = int(os.getenv("NODE_ID", os.getpid())) % (1 << _NODE_BITS)
        if not 0 <= node_id < (1 << _NODE_BITS):
            raise ValueError(f"node_id out of range: {node_id}")
        self._node_id = node_id
        self._last_ms = -1
        self._sequence = 0
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            now = self._now_ms()
            if now < self._last_ms:
                now = self._last_ms
            if now == self._last_ms:
                self._sequence = (self._sequence + 1) & _MAX_SEQUENCE
                if self._sequence == 0:
                    while now <= self._last_ms:
                        now = self._now_ms()
            else:
                self._sequence = 0
            self._last_ms = now
            return (
                ((now - _EPOCH_MS) << (_NODE_BITS + _SEQUENCE_BITS))
                | (self._node_id << _SEQUENCE_BITS)
                | self._sequence
            )

    @staticmethod
    def _now_ms() -> int:
        return time.time_ns() // 1_000_000
