import logging
from datetime import tzinfo
from typing import Optional
from ..domain.models import TradingProfile
from ..domain.time_window import TimeWindow
from ..ports.fill_provider import FillProvider
from ..services.profile.pipeline import build_profile
from ..services.profile.session_grouper import DEFAULT_GAP_MINUTES

def run(wallet: str, window: TimeWindow, provider: FillProvider, coin: Optional[str] = None,
        *, gap_minutes: float = DEFAULT_GAP_MINUTES, tz: Optional[tzinfo] = None) -> TradingProfile:
    fills = list(provider.fetch_fills(wallet, window, coin))
    profile = build_profile(fills, gap_minutes=gap_minutes, tz=tz)
    logging.info("wallet=%s fills=%d sessions=%d strategies=%s", wallet, len(fills),
                 len(profile.sessions), [s.name for s in profile.strategies])
    return profile
