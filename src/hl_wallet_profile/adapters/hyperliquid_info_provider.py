# src/hl_wallet_profile/adapters/hyperliquid_info_provider.py
from typing import Callable, List, Optional
from ..ports.fill_provider import FillProvider
from ..domain.models import Fill
from ..domain.time_window import TimeWindow
from .hyperliquid_client import HLClient, DEFAULT_INFO_URL
from ..services.backfill.hl_backfill import HLBackfillService

class HyperliquidInfoProvider(FillProvider):
    def __init__(self, base_url: str = DEFAULT_INFO_URL, timeout_sec: float = 15.0, retries: int = 5,
                 client_factory: Optional[Callable[[], HLClient]] = None):
        self._base = base_url.rstrip("/")
        self._timeout = timeout_sec
        self._retries = retries
        self._client_factory = client_factory or (lambda: HLClient(self._base, timeout=self._timeout))

    def fetch_fills(self, wallet: str, window: TimeWindow, coin: Optional[str] = None) -> List[Fill]:
        # userFillsByTime has no coin filter, so filter after the fetch
        with self._client_factory() as client:
            svc = HLBackfillService(client, retries=self._retries, timeout_sec=self._timeout)
            rows = svc.fetch_fills(wallet, window)
        if coin:
            rows = [r for r in rows if r.market == coin]
        return rows
