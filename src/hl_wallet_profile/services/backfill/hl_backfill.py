# src/hl_wallet_profile/services/backfill/hl_backfill.py
import json, random, time, logging
from typing import List, Optional, Dict, Any, Iterator
from ...domain.models import Fill
from ...domain.time_window import TimeWindow
from ...adapters.hyperliquid_client import HLClient
from ...errors import HLRequestError, HLRateLimitError
from ..normalize.fill_row import fill_from_hl

RETRY_STATUSES = {403, 407, 429, 500, 502, 503, 504}

class HLBackfillService:
    def __init__(
        self,
        client: HLClient,
        *,
        retries: int = 5,
        timeout_sec: float = 15.0,
        tol_sleep_cap: float = 5.0,
        sleep=time.sleep,
    ):
        self.client = client
        self.retries = retries
        self.timeout_sec = timeout_sec
        self.tol_sleep_cap = tol_sleep_cap
        self._sleep = sleep

    def _backoff(self, attempt: int) -> None:
        self._sleep(min(2 ** attempt, self.tol_sleep_cap) + random.random())

    # ---------- low-level page fetch ----------
    def fetch_page(self, wallet: str, start_ms: int, end_ms: Optional[int] = None) -> List[Dict[str, Any]]:
        payload: Dict[str, Any] = {
            "type": "userFillsByTime",
            "user": wallet,
            "startTime": int(start_ms),
            "aggregateByTime": False,
        }
        if end_ms is not None:
            payload["endTime"] = int(end_ms)

        last_err = None
        last_status = None
        for a in range(self.retries):
            try:
                r = self.client.request_info(payload, timeout=self.timeout_sec)
            except Exception as e:
                # transport errors (timeouts, resets) are retried like 5xx
                last_err = str(e)
                logging.warning("wallet=%s attempt=%d error=%s", wallet, a + 1, last_err)
                self._backoff(a)
                continue

            status = getattr(r, "status_code", None)
            data = r.text
            if status == 200:
                return json.loads(data) or []
            if status in RETRY_STATUSES:
                last_err, last_status = f"http {status}", status
                logging.warning("wallet=%s attempt=%d status=%s", wallet, a + 1, status)
                self._backoff(a)
                continue
            raise HLRequestError(f"HTTP {status}: {str(data)[:200]}")

        if last_status == 429:
            raise HLRateLimitError(last_err)
        raise HLRequestError(last_err or "request failed")

    # ---------- paginated fills for one window ----------
    def iter_fills(self, wallet: str, window: TimeWindow) -> Iterator[Fill]:
        cursor = int(window.start_ms)
        total = 0
        skipped = 0
        last_cursor: Optional[int] = None

        while True:
            page = self.fetch_page(wallet, cursor, window.end_ms)
            if not page:
                break

            for f_raw in page:
                parsed = fill_from_hl(wallet, f_raw)
                if parsed is None:
                    skipped += 1
                    continue
                total += 1
                yield parsed

            last_time = int(page[-1]["time"])
            cursor = last_time + 1

            if last_cursor is not None and cursor <= last_cursor:
                logging.warning("cursor did not advance, breaking to avoid loop")
                break
            last_cursor = cursor
            if cursor > window.end_ms:
                break

        logging.info("wallet=%s rows=%d skipped_spot=%d", wallet, total, skipped)

    def fetch_fills(self, wallet: str, window: TimeWindow) -> List[Fill]:
        return list(self.iter_fills(wallet, window))
