# src/hl_wallet_profile/adapters/hyperliquid_client.py
from typing import Dict, Any, Optional
import httpx

DEFAULT_INFO_URL = "https://api.hyperliquid.xyz/info"

class HLClient:
    """Thin client for Hyperliquid /info (JSON POST)."""
    def __init__(self, base_url: str = DEFAULT_INFO_URL, timeout: float = 15.0,
                 transport: Optional[httpx.BaseTransport] = None):
        self._base = base_url.rstrip("/")
        self._client = httpx.Client(
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    def request_info(self, payload: Dict[str, Any], timeout: Optional[float] = None) -> httpx.Response:
        if timeout is None:
            return self._client.post(self._base, json=payload)
        return self._client.post(self._base, json=payload, timeout=timeout)

    def close(self) -> None:
        self._client.close()

    def __enter__(self): return self
    def __exit__(self, exc_type, exc, tb): self.close()
