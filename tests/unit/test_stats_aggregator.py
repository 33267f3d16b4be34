# tests/unit/test_stats_aggregator.py
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from zoneinfo import ZoneInfo
from hl_wallet_profile.domain.models import Session, TradingStats
from hl_wallet_profile.services.profile.stats_aggregator import StatsAggregator, median, hour_label

def _at(hour, minute=0):
    return int(datetime(2024, 1, 1, hour, minute, tzinfo=timezone.utc).timestamp() * 1000)

def _session(market="BTC", *, hour=0, size="100", pnl="0", lev=None, duration=0.0):
    start = _at(hour)
    return Session(
        market=market,
        start_ms=start,
        end_ms=start + int(duration * 60_000),
        duration_min=duration,
        position_size_usd=Decimal(size),
        pnl_usd=Decimal(pnl),
        leverage=Decimal(lev) if lev is not None else None,
    )

def test_empty_sessions_give_zeroed_stats():
    stats = StatsAggregator().aggregate([])
    assert stats == TradingStats.empty()
    assert stats.top_markets == [] and stats.time_windows == []
    assert stats.median_position_size_usd == 0
    assert stats.median_leverage == 0
    assert stats.avg_hold_minutes == 0
    assert stats.win_rate == 0

def test_median_odd_and_even():
    assert median([Decimal("30"), Decimal("10"), Decimal("20")]) == Decimal("20")
    assert median([Decimal("40"), Decimal("10"), Decimal("30"), Decimal("20")]) == Decimal("25")
    assert median([]) == 0

def test_median_position_size():
    stats = StatsAggregator().aggregate([_session(size=s) for s in ("10", "20", "30", "40")])
    assert stats.median_position_size_usd == Decimal("25")

def test_median_leverage_ignores_unknown_leverage():
    sessions = [_session(lev="3"), _session(lev=None), _session(lev="0"), _session(lev="10"), _session(lev="20")]
    assert StatsAggregator().aggregate(sessions).median_leverage == Decimal("10")

def test_median_leverage_zero_without_leverage_data():
    sessions = [_session(lev=None), _session(lev="0")]
    assert StatsAggregator().aggregate(sessions).median_leverage == 0

def test_avg_hold_minutes():
    sessions = [_session(duration=0), _session(duration=30), _session(duration=90)]
    assert StatsAggregator().aggregate(sessions).avg_hold_minutes == 40

def test_win_rate_counts_strictly_positive_pnl():
    sessions = [_session(pnl="5"), _session(pnl="0"), _session(pnl="-3"), _session(pnl="0.01")]
    assert StatsAggregator().aggregate(sessions).win_rate == 0.5

def test_win_rate_bounds():
    agg = StatsAggregator()
    assert agg.aggregate([_session(pnl="-1"), _session(pnl="0")]).win_rate == 0
    assert agg.aggregate([_session(pnl="1"), _session(pnl="2")]).win_rate == 1

def test_top_markets_by_session_count_up_to_three():
    sessions = [_session(m) for m in ["ETH", "BTC", "BTC", "SOL", "BTC", "ETH", "ARB"]]
    assert StatsAggregator().aggregate(sessions).top_markets == ["BTC", "ETH", "SOL"]

def test_top_markets_ties_keep_first_encountered_order():
    sessions = [_session(m) for m in ["SOL", "ETH", "BTC", "ETH", "SOL", "BTC"]]
    assert StatsAggregator().aggregate(sessions).top_markets == ["SOL", "ETH", "BTC"]

def test_time_windows_most_active_hours():
    hours = [14, 14, 14, 9, 9, 22, 3]
    stats = StatsAggregator().aggregate([_session(hour=h) for h in hours])
    assert stats.time_windows[:2] == ["14–15h", "9–10h"]
    # 3 and 22 tie on one session each, lower hour wins
    assert stats.time_windows[2] == "3–4h"

def test_time_windows_ties_break_by_hour():
    stats = StatsAggregator().aggregate([_session(hour=h) for h in (23, 5, 11, 0)])
    assert stats.time_windows == ["0–1h", "5–6h", "11–12h"]

def test_hour_label_last_hour():
    assert hour_label(23) == "23–24h"

def test_time_windows_follow_configured_timezone():
    sessions = [_session(hour=14)]
    assert StatsAggregator().aggregate(sessions).time_windows == ["14–15h"]
    # UTC+9, no DST
    assert StatsAggregator(ZoneInfo("Asia/Tokyo")).aggregate(sessions).time_windows == ["23–24h"]
    assert StatsAggregator(timezone(timedelta(hours=-5))).aggregate(sessions).time_windows == ["9–10h"]
