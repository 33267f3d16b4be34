# scripts/profile_wallet_demo.py
import argparse, logging

from hl_wallet_profile.adapters.hyperliquid_info_provider import HyperliquidInfoProvider
from hl_wallet_profile.adapters.fixture_fill_provider import FixtureFillProvider
from hl_wallet_profile.adapters.fallback_fill_provider import FallbackFillProvider
from hl_wallet_profile.domain.time_window import TimeWindow
from hl_wallet_profile.orchestrators.profile_wallet_usecase import run
from hl_wallet_profile.presenters.json_presenter import JsonPresenter, profile_to_dict

def main():
    p = argparse.ArgumentParser(description="Trading profile for a Hyperliquid wallet (sessions, stats, strategies)")
    p.add_argument("--wallet", required=True, help="Wallet address to profile")
    p.add_argument("--days", type=int, default=30, help="Lookback in days. Default=30")
    p.add_argument("--coin", default=None, help="Only this market")
    p.add_argument("--base-url", default="https://api.hyperliquid.xyz/info", help="HL info URL")
    p.add_argument("--timeout", type=float, default=15.0)
    p.add_argument("--retries", type=int, default=5)
    p.add_argument("--gap-minutes", type=float, default=45.0, help="Session inactivity gap")
    p.add_argument("--fixture", default=None, help="JSON fixture used when the API fails or is empty")
    p.add_argument("--sessions", action="store_true", help="Also print every session")
    args = p.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")

    window = TimeWindow.last_days(args.days)
    print(f"[i] Profiling wallet={args.wallet}, window=[{window.start_ms}, {window.end_ms}]")

    provider = HyperliquidInfoProvider(args.base_url, timeout_sec=args.timeout, retries=args.retries)
    if args.fixture:
        provider = FallbackFillProvider(provider, FixtureFillProvider(args.fixture))

    profile = run(args.wallet, window, provider, args.coin, gap_minutes=args.gap_minutes)
    JsonPresenter().render({"wallet": args.wallet, **profile_to_dict(profile, include_sessions=args.sessions)})

if __name__ == "__main__":
    main()
