from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

@dataclass(frozen=True)
class Fill:
    # one executed leg for a wallet on a perp market
    wallet: str
    market: str
    side: str                 # "buy" | "sell"
    px: Decimal
    sz: Decimal
    ts_ms: int
    notional_usd: Optional[Decimal] = None  # px * sz when missing
    leverage: Optional[Decimal] = None      # None/0 = unknown, not 1x
    closed_pnl: Optional[Decimal] = None    # None = 0
    hash: Optional[str] = None
    tid: Optional[int] = None

    @property
    def notional(self) -> Decimal:
        if self.notional_usd is not None:
            return self.notional_usd
        return self.px * self.sz

    @property
    def pnl(self) -> Decimal:
        return self.closed_pnl if self.closed_pnl is not None else Decimal("0")

    @property
    def has_leverage(self) -> bool:
        return self.leverage is not None and self.leverage > 0

@dataclass
class Session:
    """Run of same-market fills with no gap above the inactivity threshold."""
    market: str
    start_ms: int
    end_ms: int
    duration_min: float = 0.0
    position_size_usd: Decimal = Decimal("0")
    pnl_usd: Decimal = Decimal("0")
    leverage: Optional[Decimal] = None
    fills: List[Fill] = field(default_factory=list)

    @classmethod
    def open(cls, fill: Fill) -> "Session":
        s = cls(market=fill.market, start_ms=fill.ts_ms, end_ms=fill.ts_ms)
        s.add(fill)
        return s

    def add(self, fill: Fill) -> None:
        self.fills.append(fill)
        self.end_ms = fill.ts_ms
        self.duration_min = (self.end_ms - self.start_ms) / 60_000
        self.position_size_usd += abs(fill.notional)
        self.pnl_usd += fill.pnl
        # sticky-latest: unknown leverage never clears a known one
        if fill.has_leverage:
            self.leverage = fill.leverage

    @property
    def has_leverage(self) -> bool:
        return self.leverage is not None and self.leverage > 0

@dataclass(frozen=True)
class TradingStats:
    top_markets: List[str]
    median_position_size_usd: Decimal
    median_leverage: Decimal
    avg_hold_minutes: float
    win_rate: float
    time_windows: List[str]

    @classmethod
    def empty(cls) -> "TradingStats":
        return cls(
            top_markets=[],
            median_position_size_usd=Decimal("0"),
            median_leverage=Decimal("0"),
            avg_hold_minutes=0.0,
            win_rate=0.0,
            time_windows=[],
        )

@dataclass(frozen=True)
class Strategy:
    name: str
    reason: str

@dataclass(frozen=True)
class TradingProfile:
    sessions: List[Session]
    stats: TradingStats
    strategies: List[Strategy]
