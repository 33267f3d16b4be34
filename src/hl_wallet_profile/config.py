# src/hl_wallet_profile/config.py
import os
from datetime import timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo
from pydantic import BaseModel, Field

def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(name, default)

class Config(BaseModel):
    hl_info_url: str = Field(default_factory=lambda: _env("HL_INFO_URL", "https://api.hyperliquid.xyz/info"))
    hl_timeout_sec: float = Field(default_factory=lambda: float(_env("HL_TIMEOUT_SEC", "15")))
    hl_retries: int = Field(default_factory=lambda: int(_env("HL_RETRIES", "5")))

    # profile
    session_gap_minutes: float = Field(default_factory=lambda: float(_env("SESSION_GAP_MINUTES", "45")))
    profile_tz: str = Field(default_factory=lambda: _env("PROFILE_TZ", "UTC"))
    default_lookback_days: int = Field(default_factory=lambda: int(_env("LOOKBACK_DAYS", "30")))

    # fixture fallback (empty = none)
    fills_fixture_path: str = Field(default_factory=lambda: _env("FILLS_FIXTURE_PATH", ""))

    # warehouse
    redshift_workgroup_or_cluster: str = Field(default_factory=lambda: _env("REDSHIFT_WORKGROUP_OR_CLUSTER", ""))
    redshift_database: str = Field(default_factory=lambda: _env("REDSHIFT_DATABASE", ""))
    redshift_secret_arn: str = Field(default_factory=lambda: _env("REDSHIFT_SECRET_ARN", ""))
    redshift_schema: str = Field(default_factory=lambda: _env("REDSHIFT_SCHEMA", "public"))
    redshift_table_fills: str = Field(default_factory=lambda: _env("REDSHIFT_TABLE_FILLS", "fills"))

    def profile_tzinfo(self) -> tzinfo:
        if self.profile_tz.upper() == "UTC":
            return timezone.utc
        return ZoneInfo(self.profile_tz)

def load_config() -> Config:
    return Config()
