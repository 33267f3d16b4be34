# src/hl_wallet_profile/adapters/fallback_fill_provider.py
import logging
from typing import List, Optional
from ..ports.fill_provider import FillProvider
from ..domain.models import Fill
from ..domain.time_window import TimeWindow
from ..errors import FillSourceError

class FallbackFillProvider(FillProvider):
    """Primary source first; the fallback when it fails or comes back empty."""
    def __init__(self, primary: FillProvider, fallback: FillProvider):
        self.primary = primary
        self.fallback = fallback

    def fetch_fills(self, wallet: str, window: TimeWindow, coin: Optional[str] = None) -> List[Fill]:
        try:
            rows = list(self.primary.fetch_fills(wallet, window, coin))
        except FillSourceError as e:
            logging.warning("wallet=%s primary source failed (%s), using fallback", wallet, e)
            return list(self.fallback.fetch_fills(wallet, window, coin))
        if rows:
            return rows
        logging.info("wallet=%s primary source empty, using fallback", wallet)
        return list(self.fallback.fetch_fills(wallet, window, coin))
