# src/hl_wallet_profile/services/profile/session_grouper.py
import logging
from typing import Dict, Iterable, List
from ...domain.models import Fill, Session

DEFAULT_GAP_MINUTES = 45

class SessionGrouper:
    """
    Splits fills into per-market sessions by an inactivity gap.

    Each market has at most one open session at a time. A fill joins it when it
    arrives no more than ``gap_minutes`` after the session's last fill; otherwise
    it opens a new session for that market and the old one is left as is.
    """
    def __init__(self, gap_minutes: float = DEFAULT_GAP_MINUTES):
        self.gap_minutes = gap_minutes
        self._gap_ms = int(gap_minutes * 60_000)

    def group(self, fills: Iterable[Fill]) -> List[Session]:
        # sorted() is stable, equal timestamps keep input order
        ordered = sorted(fills, key=lambda f: f.ts_ms)
        if not ordered:
            return []

        sessions: List[Session] = []
        open_by_market: Dict[str, Session] = {}

        for fill in ordered:
            current = open_by_market.get(fill.market)
            if current is not None and fill.ts_ms - current.end_ms <= self._gap_ms:
                current.add(fill)
                continue
            session = Session.open(fill)
            sessions.append(session)
            open_by_market[fill.market] = session

        logging.debug("fills=%d sessions=%d markets=%d", len(ordered), len(sessions), len(open_by_market))
        # sessions are opened in time order, the stable sort keeps it that way
        return sorted(sessions, key=lambda s: s.start_ms)
