# src/hl_wallet_profile/services/profile/pipeline.py
from datetime import tzinfo
from typing import Iterable, Optional
from ...domain.models import Fill, TradingProfile
from .session_grouper import SessionGrouper, DEFAULT_GAP_MINUTES
from .stats_aggregator import StatsAggregator
from .strategy_detector import StrategyDetector

def build_profile(fills: Iterable[Fill], *, gap_minutes: float = DEFAULT_GAP_MINUTES,
                  tz: Optional[tzinfo] = None) -> TradingProfile:
    """Fills -> sessions -> stats -> strategies. No I/O, same input gives same output."""
    sessions = SessionGrouper(gap_minutes).group(fills)
    stats = StatsAggregator(tz).aggregate(sessions)
    strategies = StrategyDetector().detect(sessions, stats)
    return TradingProfile(sessions=sessions, stats=stats, strategies=strategies)
