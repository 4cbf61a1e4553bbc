import os
from dataclasses import dataclass, field

DEFAULT_ALLOWED_ORIGINS = [
    "https://linguaquiz12.netlify.app",
    "http://localhost:3000",
]


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() not in ("0", "false", "no", "off", "")


@dataclass(frozen=True)
class Settings:
    supabase_url: str = ""
    supabase_key: str = ""
    users_table: str = "users"
    allowed_origins: list[str] = field(default_factory=lambda: list(DEFAULT_ALLOWED_ORIGINS))
    log_level: str = "INFO"
    rate_limits_enabled: bool = True


def load_settings() -> Settings:
    origins = os.environ.get("LANGLINK_ALLOWED_ORIGINS")
    return Settings(
        supabase_url=os.environ.get("SUPABASE_URL", ""),
        supabase_key=os.environ.get("SUPABASE_SERVICE_KEY", ""),
        users_table=os.environ.get("LANGLINK_USERS_TABLE", "users"),
        allowed_origins=(
            [o.strip() for o in origins.split(",") if o.strip()]
            if origins else list(DEFAULT_ALLOWED_ORIGINS)
        ),
        log_level=os.environ.get("LANGLINK_LOG_LEVEL", "INFO").upper(),
        rate_limits_enabled=_env_flag("LANGLINK_RATE_LIMITS", True),
    )
