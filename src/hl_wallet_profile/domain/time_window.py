# src/hl_wallet_profile/domain/time_window.py
import time
from dataclasses import dataclass
from typing import Optional

DAY_MS = 24 * 60 * 60 * 1000

@dataclass(frozen=True)
class TimeWindow:
    start_ms: int
    end_ms: int

    @classmethod
    def last_days(cls, days: int, now_ms: Optional[int] = None) -> "TimeWindow":
        end = int(now_ms) if now_ms is not None else int(time.time() * 1000)
        return cls(end - int(days) * DAY_MS, end)

    # both ends inclusive, like userFillsByTime endTime; every source filters this way
    def contains(self, ts_ms: int) -> bool:
        return self.start_ms <= ts_ms <= self.end_ms
