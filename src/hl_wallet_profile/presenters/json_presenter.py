from ..ports.presenter import Presenter
from ..domain.models import Session, TradingProfile
from decimal import Decimal
from typing import Any, Dict
import json

def _num(x: Any) -> Any:
    return float(x) if isinstance(x, Decimal) else x

def session_to_dict(s: Session) -> Dict[str, Any]:
    return {
        "market": s.market,
        "start_ms": s.start_ms,
        "end_ms": s.end_ms,
        "duration_min": s.duration_min,
        "position_size_usd": _num(s.position_size_usd),
        "pnl_usd": _num(s.pnl_usd),
        "leverage": _num(s.leverage),
        "fills": len(s.fills),
    }

def profile_to_dict(profile: TradingProfile, include_sessions: bool = False) -> Dict[str, Any]:
    st = profile.stats
    out: Dict[str, Any] = {
        "profile": {
            "top_markets": list(st.top_markets),
            "median_position_size_usd": _num(st.median_position_size_usd),
            "median_leverage": _num(st.median_leverage),
            "avg_hold_minutes": st.avg_hold_minutes,
            "win_rate": st.win_rate,
            "time_windows": list(st.time_windows),
        },
        "strategies": [{"name": s.name, "reason": s.reason} for s in profile.strategies],
        "sessions": len(profile.sessions),
    }
    if include_sessions:
        out["session_list"] = [session_to_dict(s) for s in profile.sessions]
    return out

class JsonPresenter(Presenter):
    def __init__(self, indent: int = 2):
        self.indent = indent

    def render(self, result: Dict[str, Any]) -> None:
        print(json.dumps(result, default=str, ensure_ascii=False, indent=self.indent))
