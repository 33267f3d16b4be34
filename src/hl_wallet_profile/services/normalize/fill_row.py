from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Optional
from ...domain.models import Fill

_DEC6 = Decimal("0.000001")

def _q6(x: Decimal) -> Decimal:
    # 6 decimal places, same precision as numeric(18,6) in the fills table
    return x.quantize(_DEC6, rounding=ROUND_HALF_UP)

def _dec(v: Any) -> Optional[Decimal]:
    if v is None or v == "":
        return None
    return Decimal(str(v))

def _side_from_hl(raw: Dict[str, Any]) -> str:
    """
    HL info: side "B" (bid) is a buy and "A" (ask) a sell.
    'dir' ("Open Long", "Close Short", ...) wins when it names a long.
    """
    direction = str(raw.get("dir") or "")
    side_raw = str(raw.get("side") or "").lower()
    if "Long" in direction or side_raw in ("b", "bid", "buy"):
        return "buy"
    return "sell"

def _iso_to_ms(ts: str) -> int:
    # fromisoformat() on older interpreters does not accept a trailing "Z"
    if ts.endswith("Z"):
        ts = ts[:-1] + "+00:00"
    dt = datetime.fromisoformat(ts)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)

def fill_from_hl(wallet: str, raw: Dict[str, Any]) -> Optional[Fill]:
    """Raw userFills / userFillsByTime row -> Fill. Spot rows (coin "@N") give None."""
    coin = str(raw.get("coin", ""))
    if coin.startswith("@"):
        return None

    px = Decimal(str(raw.get("px")))
    sz = Decimal(str(raw.get("sz")))
    tid = raw.get("tid")
    return Fill(
        wallet=wallet,
        market=coin,
        side=_side_from_hl(raw),
        px=px,
        sz=sz,
        ts_ms=int(raw.get("time")),
        notional_usd=_q6(px * sz),
        leverage=None,  # HL fills carry no leverage
        closed_pnl=_dec(raw.get("closedPnl")),
        hash=raw.get("hash"),
        tid=int(tid) if tid is not None else None,
    )

def fill_from_record(rec: Dict[str, Any]) -> Fill:
    """
    Stored fill record (fixture file / fills table) -> Fill.
    Keys: hl_address, market, side, price, qty, notional_usd?, leverage?, pnl_usd?, ts.
    """
    px = Decimal(str(rec["price"]))
    sz = Decimal(str(rec["qty"]))
    notional = _dec(rec.get("notional_usd"))
    ts = rec["ts"]
    return Fill(
        wallet=str(rec.get("hl_address", "")),
        market=str(rec["market"]),
        side=str(rec.get("side", "buy")).lower(),
        px=px,
        sz=sz,
        ts_ms=_iso_to_ms(ts) if isinstance(ts, str) else int(ts),
        notional_usd=notional if notional is not None else _q6(px * sz),
        leverage=_dec(rec.get("leverage")),
        closed_pnl=_dec(rec.get("pnl_usd")),
        hash=rec.get("hash"),
    )
