# src/hl_wallet_profile/services/profile/stats_aggregator.py
import logging
from collections import Counter
from datetime import datetime, timezone, tzinfo
from decimal import Decimal
from typing import List, Optional, Sequence
from ...domain.models import Session, TradingStats

TOP_N = 3

def median(values: Sequence[Decimal]) -> Decimal:
    """Middle value for odd counts, mean of the two middle values for even; 0 when empty."""
    if not values:
        return Decimal("0")
    ordered = sorted(values)
    n = len(ordered)
    mid = n // 2
    if n % 2:
        return ordered[mid]
    return (ordered[mid - 1] + ordered[mid]) / 2

def hour_label(hour: int) -> str:
    return f"{hour}–{hour + 1}h"

class StatsAggregator:
    """Reduces a session list into a TradingStats snapshot."""
    def __init__(self, tz: Optional[tzinfo] = None):
        # UTC unless told otherwise, so a profile does not depend on where it runs
        self.tz = tz or timezone.utc

    def aggregate(self, sessions: Sequence[Session]) -> TradingStats:
        if not sessions:
            return TradingStats.empty()

        n = len(sessions)
        stats = TradingStats(
            top_markets=self._top_markets(sessions),
            median_position_size_usd=median([s.position_size_usd for s in sessions]),
            median_leverage=median([s.leverage for s in sessions if s.has_leverage]),
            avg_hold_minutes=sum(s.duration_min for s in sessions) / n,
            win_rate=sum(1 for s in sessions if s.pnl_usd > 0) / n,
            time_windows=self._time_windows(sessions),
        )
        logging.debug("sessions=%d top_markets=%s win_rate=%.3f", n, stats.top_markets, stats.win_rate)
        return stats

    def _top_markets(self, sessions: Sequence[Session]) -> List[str]:
        # Counter keeps first-seen order; sorted() is stable, so ties stay in that order
        counts = Counter(s.market for s in sessions)
        ranked = sorted(counts.items(), key=lambda kv: -kv[1])
        return [market for market, _ in ranked[:TOP_N]]

    def _time_windows(self, sessions: Sequence[Session]) -> List[str]:
        counts = Counter(self.hour_of(s.start_ms) for s in sessions)
        ranked = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
        return [hour_label(hour) for hour, _ in ranked[:TOP_N]]

    def hour_of(self, ts_ms: int) -> int:
        return datetime.fromtimestamp(ts_ms / 1000, tz=self.tz).hour
