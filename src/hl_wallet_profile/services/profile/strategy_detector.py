# src/hl_wallet_profile/services/profile/strategy_detector.py
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, List, Optional, Sequence
from ...domain.models import Session, Strategy, TradingStats

QUICK_IN_OUT = "Quick in/out"
HOLD_LONGER = "Hold a bit longer"
FOCUSED_MARKET = "Focused market"
SIMILAR_SIZING = "Similar sizing"
HIGH_LEVERAGE = "High leverage"
DIVERSIFIED = "Diversified"

QUICK_MAX_MIN = 20
HOLD_MAX_MIN = 240
HIGH_LEVERAGE_X = Decimal("5")
DIVERSIFIED_MIN_MARKETS = 5
DIVERSIFIED_MIN_SESSIONS = 10

def _pct(part: int, total: int) -> float:
    return part * 100 / total if total else 0.0

def _fmt_pct(pct: float) -> str:
    # whole percent, half-up
    return str(Decimal(str(pct)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

class StrategyDetector:
    """
    Threshold rules over sessions + stats. Rules are independent and run in a
    fixed order, so identical input always yields the same list.
    """
    def __init__(self):
        self._rules: List[Callable[[Sequence[Session], TradingStats], Optional[Strategy]]] = [
            self._quick_in_out,
            self._hold_longer,
            self._focused_market,
            self._similar_sizing,
            self._high_leverage,
            self._diversified,
        ]

    def detect(self, sessions: Sequence[Session], stats: TradingStats) -> List[Strategy]:
        if not sessions:
            return []
        out: List[Strategy] = []
        for rule in self._rules:
            hit = rule(sessions, stats)
            if hit is not None:
                out.append(hit)
        return out

    def _quick_in_out(self, sessions, stats) -> Optional[Strategy]:
        pct = _pct(sum(1 for s in sessions if s.duration_min < QUICK_MAX_MIN), len(sessions))
        if pct > 60:
            return Strategy(QUICK_IN_OUT, f"{_fmt_pct(pct)}% of sessions last < {QUICK_MAX_MIN} min")
        return None

    def _hold_longer(self, sessions, stats) -> Optional[Strategy]:
        n = sum(1 for s in sessions if QUICK_MAX_MIN <= s.duration_min <= HOLD_MAX_MIN)
        pct = _pct(n, len(sessions))
        if pct > 60:
            return Strategy(HOLD_LONGER, f"{_fmt_pct(pct)}% of sessions last {QUICK_MAX_MIN}–{HOLD_MAX_MIN} min")
        return None

    def _focused_market(self, sessions, stats) -> Optional[Strategy]:
        if not stats.top_markets:
            return None
        top = stats.top_markets[0]
        pct = _pct(sum(1 for s in sessions if s.market == top), len(sessions))
        if pct > 60:
            return Strategy(FOCUSED_MARKET, f"{_fmt_pct(pct)}% of sessions in {top}")
        return None

    def _similar_sizing(self, sessions, stats) -> Optional[Strategy]:
        if len(sessions) < 2:
            return None
        sizes = [Decimal(s.position_size_usd) for s in sessions]
        mean = sum(sizes) / len(sizes)
        if mean <= 0:
            return None
        variance = sum((x - mean) ** 2 for x in sizes) / len(sizes)
        stdev = variance.sqrt()
        if stdev < mean / 2:
            spread = float(stdev / mean * 100)
            return Strategy(SIMILAR_SIZING, f"Position size spread is {_fmt_pct(spread)}% of the mean")
        return None

    def _high_leverage(self, sessions, stats) -> Optional[Strategy]:
        n = sum(1 for s in sessions if s.has_leverage and s.leverage > HIGH_LEVERAGE_X)
        pct = _pct(n, len(sessions))
        if pct > 50:
            return Strategy(HIGH_LEVERAGE, f"{_fmt_pct(pct)}% of sessions use >{HIGH_LEVERAGE_X}x leverage")
        return None

    def _diversified(self, sessions, stats) -> Optional[Strategy]:
        markets = len({s.market for s in sessions})
        if markets >= DIVERSIFIED_MIN_MARKETS and len(sessions) >= DIVERSIFIED_MIN_SESSIONS:
            return Strategy(DIVERSIFIED, f"Trades across {markets} different markets")
        return None
