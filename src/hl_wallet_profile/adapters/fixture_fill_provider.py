# src/hl_wallet_profile/adapters/fixture_fill_provider.py
import json, logging
from pathlib import Path
from typing import List, Optional, Union
from ..ports.fill_provider import FillProvider
from ..domain.models import Fill
from ..domain.time_window import TimeWindow
from ..errors import FixtureError
from ..services.normalize.fill_row import fill_from_record

class FixtureFillProvider(FillProvider):
    """Fills from a JSON file of stored records, filtered by address and window."""
    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    def _load(self) -> list:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise FixtureError(f"fixture not found: {self._path}") from e
        except json.JSONDecodeError as e:
            raise FixtureError(f"invalid fixture json: {self._path}: {e}") from e
        if not isinstance(data, list):
            raise FixtureError(f"fixture must be a JSON array: {self._path}")
        return data

    def fetch_fills(self, wallet: str, window: TimeWindow, coin: Optional[str] = None) -> List[Fill]:
        out: List[Fill] = []
        for rec in self._load():
            if str(rec.get("hl_address") or "").lower() != wallet.lower():
                continue
            f = fill_from_record(rec)
            if not window.contains(f.ts_ms):
                continue
            if coin and f.market != coin:
                continue
            out.append(f)
        logging.info("fixture=%s wallet=%s rows=%d", self._path.name, wallet, len(out))
        return out
