# src/hl_wallet_profile/ports/fill_provider.py
from abc import ABC, abstractmethod
from typing import Iterable, Optional
from ..domain.models import Fill
from ..domain.time_window import TimeWindow

class FillProvider(ABC):
    """Source of a wallet's fills (HL API, fixtures, warehouse)."""
    @abstractmethod
    def fetch_fills(self, wallet: str, window: TimeWindow, coin: Optional[str] = None) -> Iterable[Fill]: ...
