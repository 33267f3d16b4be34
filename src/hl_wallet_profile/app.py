import json, logging
from typing import Any, Dict, Optional
from .config import Config, load_config
from .domain.time_window import TimeWindow
from .ports.fill_provider import FillProvider
from .errors import FillSourceError
from .adapters.hyperliquid_info_provider import HyperliquidInfoProvider
from .adapters.fixture_fill_provider import FixtureFillProvider
from .adapters.fallback_fill_provider import FallbackFillProvider
from .adapters.redshift_data_api_provider import RedshiftDataApiProvider
from .presenters.json_presenter import profile_to_dict
from .orchestrators.profile_wallet_usecase import run

SOURCES = ("hl", "fixture", "redshift")

def _build_provider(source: str, cfg: Config) -> FillProvider:
    if source == "fixture":
        return FixtureFillProvider(cfg.fills_fixture_path)
    if source == "redshift":
        return RedshiftDataApiProvider(
            workgroup_or_cluster=cfg.redshift_workgroup_or_cluster,
            database=cfg.redshift_database,
            secret_arn=cfg.redshift_secret_arn,
            schema=cfg.redshift_schema,
            table=cfg.redshift_table_fills,
        )
    hl = HyperliquidInfoProvider(
        base_url=cfg.hl_info_url,
        timeout_sec=cfg.hl_timeout_sec,
        retries=cfg.hl_retries,
    )
    if cfg.fills_fixture_path:
        # API first, stored fixtures when it fails or returns nothing
        return FallbackFillProvider(hl, FixtureFillProvider(cfg.fills_fixture_path))
    return hl

def _window(event: Dict[str, Any], cfg: Config) -> TimeWindow:
    if event.get("start_ms") is not None and event.get("end_ms") is not None:
        return TimeWindow(int(event["start_ms"]), int(event["end_ms"]))
    if "lookback_days" in event:
        days = int(event["lookback_days"])
    else:
        days = cfg.default_lookback_days
    if days <= 0:
        raise ValueError("lookback_days must be positive")
    return TimeWindow.last_days(days)

def _response(status: int, body: Dict[str, Any]) -> Dict[str, Any]:
    return {"statusCode": status, "body": json.dumps(body, ensure_ascii=False)}

def lambda_handler(event, _context=None, *, cfg: Optional[Config] = None,
                   provider: Optional[FillProvider] = None):
    """
    event:
      {
        "wallet": "0x...",
        "lookback_days": 30,          # or start_ms + end_ms
        "coin": null,
        "source": "hl" | "fixture" | "redshift",
        "include_sessions": false
      }
    """
    cfg = cfg or load_config()

    wallet = event.get("wallet")
    source = (event.get("source") or "hl").lower()
    if not wallet:
        return _response(400, {"error": "Missing required field: wallet"})
    if source not in SOURCES:
        return _response(400, {"error": f"Unknown source: {source}"})
    try:
        window = _window(event, cfg)
    except (TypeError, ValueError) as e:
        return _response(400, {"error": f"Invalid window: {e}"})

    provider = provider or _build_provider(source, cfg)
    try:
        profile = run(wallet, window, provider, event.get("coin"),
                      gap_minutes=cfg.session_gap_minutes, tz=cfg.profile_tzinfo())
    except FillSourceError:
        logging.exception("wallet=%s source=%s fill source failed", wallet, source)
        return _response(500, {"error": "Internal server error"})
    if not profile.sessions:
        return _response(404, {"error": "No trading data found for this address"})

    return _response(200, {
        "wallet": wallet,
        "source": source,
        "window": {"start_ms": window.start_ms, "end_ms": window.end_ms},
        **profile_to_dict(profile, include_sessions=bool(event.get("include_sessions"))),
    })

if __name__ == "__main__":
    # local run: JSON event on stdin
    import sys
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    payload = json.loads(sys.stdin.read())
    out = lambda_handler(payload, None)
    print(out["body"])
