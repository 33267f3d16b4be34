# tests/unit/test_app.py
import json
from datetime import timezone
from zoneinfo import ZoneInfo
from decimal import Decimal
from hl_wallet_profile.app import lambda_handler, _build_provider
from hl_wallet_profile.adapters.fallback_fill_provider import FallbackFillProvider
from hl_wallet_profile.adapters.fixture_fill_provider import FixtureFillProvider
from hl_wallet_profile.adapters.hyperliquid_info_provider import HyperliquidInfoProvider
from hl_wallet_profile.config import Config
from hl_wallet_profile.domain.models import Fill
from hl_wallet_profile.ports.fill_provider import FillProvider
from hl_wallet_profile.errors import HLRequestError

T0 = 1_704_067_200_000
MIN = 60_000

class ListProvider(FillProvider):
    def __init__(self, rows):
        self.rows = rows
        self.calls = []
    def fetch_fills(self, wallet, window, coin=None):
        self.calls.append((wallet, window, coin))
        return [r for r in self.rows if coin is None or r.market == coin]

def _fills():
    return [
        Fill(wallet="0xabc", market="BTC", side="buy", px=Decimal("100"), sz=Decimal("1"), ts_ms=T0),
        Fill(wallet="0xabc", market="BTC", side="sell", px=Decimal("105"), sz=Decimal("1"),
             ts_ms=T0 + 10 * MIN, closed_pnl=Decimal("5")),
        Fill(wallet="0xabc", market="ETH", side="buy", px=Decimal("50"), sz=Decimal("2"),
             ts_ms=T0 + 120 * MIN, leverage=Decimal("10")),
    ]

def _cfg(**kw):
    return Config(profile_tz="UTC", session_gap_minutes=45, **kw)

def test_missing_wallet_is_400():
    out = lambda_handler({}, cfg=_cfg(), provider=ListProvider([]))
    assert out["statusCode"] == 400

def test_unknown_source_is_400():
    out = lambda_handler({"wallet": "0xabc", "source": "ftp"}, cfg=_cfg(), provider=ListProvider([]))
    assert out["statusCode"] == 400

def test_bad_lookback_is_400():
    out = lambda_handler({"wallet": "0xabc", "lookback_days": -1}, cfg=_cfg(), provider=ListProvider([]))
    assert out["statusCode"] == 400

def test_no_fills_is_404():
    out = lambda_handler({"wallet": "0xabc", "lookback_days": 7}, cfg=_cfg(), provider=ListProvider([]))
    assert out["statusCode"] == 404

def test_profile_response():
    provider = ListProvider(_fills())
    out = lambda_handler(
        {"wallet": "0xabc", "start_ms": T0, "end_ms": T0 + 1000 * MIN, "include_sessions": True},
        cfg=_cfg(), provider=provider,
    )
    assert out["statusCode"] == 200
    body = json.loads(out["body"])
    assert body["window"] == {"start_ms": T0, "end_ms": T0 + 1000 * MIN}
    assert body["sessions"] == 2
    assert body["profile"]["top_markets"] == ["BTC", "ETH"]
    assert body["profile"]["median_leverage"] == 10
    assert body["profile"]["win_rate"] == 0.5
    assert [s["name"] for s in body["strategies"]] == ["Quick in/out", "Similar sizing"]
    assert body["session_list"][0]["position_size_usd"] == 205
    assert provider.calls[0][0] == "0xabc"

def test_coin_is_forwarded_to_provider():
    provider = ListProvider(_fills())
    out = lambda_handler({"wallet": "0xabc", "coin": "ETH", "lookback_days": 30}, cfg=_cfg(), provider=provider)
    body = json.loads(out["body"])
    assert provider.calls[0][2] == "ETH"
    assert body["profile"]["top_markets"] == ["ETH"]

def test_provider_selection():
    assert isinstance(_build_provider("hl", _cfg(fills_fixture_path="")), HyperliquidInfoProvider)
    assert isinstance(_build_provider("hl", _cfg(fills_fixture_path="fills.json")), FallbackFillProvider)
    assert isinstance(_build_provider("fixture", _cfg(fills_fixture_path="fills.json")), FixtureFillProvider)

def test_config_reads_environment(monkeypatch):
    monkeypatch.setenv("SESSION_GAP_MINUTES", "30")
    monkeypatch.setenv("PROFILE_TZ", "Europe/Berlin")
    cfg = Config()
    assert cfg.session_gap_minutes == 30
    assert cfg.profile_tzinfo() == ZoneInfo("Europe/Berlin")
    assert _cfg().profile_tzinfo() is timezone.utc

class FailingProvider(FillProvider):
    def __init__(self, exc):
        self.exc = exc
    def fetch_fills(self, wallet, window, coin=None):
        raise self.exc

def test_zero_lookback_is_400():
    out = lambda_handler({"wallet": "0xabc", "lookback_days": 0}, cfg=_cfg(), provider=ListProvider(_fills()))
    assert out["statusCode"] == 400

def test_lookback_defaults_from_config():
    provider = ListProvider(_fills())
    lambda_handler({"wallet": "0xabc"}, cfg=_cfg(default_lookback_days=7), provider=provider)
    window = provider.calls[0][1]
    assert window.end_ms - window.start_ms == 7 * 24 * 60 * MIN

def test_failed_source_is_500():
    out = lambda_handler({"wallet": "0xabc", "lookback_days": 7}, cfg=_cfg(),
                         provider=FailingProvider(HLRequestError("HTTP 500")))
    assert out["statusCode"] == 500
    assert json.loads(out["body"]) == {"error": "Internal server error"}

def test_missing_fixture_source_is_500(tmp_path):
    cfg = _cfg(fills_fixture_path=str(tmp_path / "missing.json"))
    out = lambda_handler({"wallet": "0xabc", "source": "fixture", "lookback_days": 7}, cfg=cfg)
    assert out["statusCode"] == 500
