import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field


def _int_env(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer: {raw!r}") from e
    if value <= 0:
        raise ValueError(f"{name} must be positive: {raw!r}")
    return value


def _json_mapping_env(environ: Mapping[str, str], name: str) -> dict[str, str]:
    raw = environ.get(name)
    if not raw:
        return {}
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"{name} must be a JSON object: {raw!r}") from e
    if not isinstance(value, dict):
        raise ValueError(f"{name} must be a JSON object: {raw!r}")
    return {str(k): str(v) for k, v in value.items()}


@dataclass(frozen=True)
class Settings:
    """環境変数から読み込むプロセス単位の設定

    Lambda のコールドスタート時に一度だけ from_env() で生成する。
    シークレットの値そのものは保持せず、名前だけを持つ。
    """

    table_name: str
    catalog_cache_ttl_seconds: int = 900
    availability_horizon_days: int = 60
    default_timezone: str = "UTC"
    tenant_timezones: dict[str, str] = field(default_factory=dict)
    currency: str = "USD"
    public_base_url: str = "http://localhost:5173"
    checkout_session_ttl_minutes: int = 60
    pending_booking_ttl_minutes: int = 120
    stripe_secret_name: str | None = None
    stripe_webhook_secret_name: str | None = None
    stripe_timeout_seconds: int = 8
    calendar_api_key_secret_name: str | None = None
    calendar_ids_parameter_name: str | None = None
    calendar_timeout_seconds: int = 3
    mail_from_address: str | None = None
    storage_connect_timeout_seconds: int = 2
    storage_read_timeout_seconds: int = 5

    def __post_init__(self) -> None:
        if not self.table_name:
            raise ValueError("TABLE_NAME is required")
        # Stripe のセッション期限より先に pending を失効させると確定通知と競合する
        if self.pending_booking_ttl_minutes <= self.checkout_session_ttl_minutes:
            raise ValueError(
                "PENDING_BOOKING_TTL_MINUTES must be longer than "
                "CHECKOUT_SESSION_TTL_MINUTES"
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            table_name=env.get("TABLE_NAME", ""),
            catalog_cache_ttl_seconds=_int_env(env, "CATALOG_CACHE_TTL_SECONDS", 900),
            availability_horizon_days=_int_env(env, "AVAILABILITY_HORIZON_DAYS", 60),
            default_timezone=env.get("DEFAULT_TIMEZONE") or "UTC",
            tenant_timezones=_json_mapping_env(env, "TENANT_TIMEZONES"),
            currency=env.get("CURRENCY") or "USD",
            public_base_url=(
                env.get("PUBLIC_BASE_URL") or "http://localhost:5173"
            ).rstrip("/"),
            checkout_session_ttl_minutes=_int_env(
                env, "CHECKOUT_SESSION_TTL_MINUTES", 60
            ),
            pending_booking_ttl_minutes=_int_env(
                env, "PENDING_BOOKING_TTL_MINUTES", 120
            ),
            stripe_secret_name=env.get("STRIPE_SECRET_NAME") or None,
            stripe_webhook_secret_name=env.get("STRIPE_WEBHOOK_SECRET_NAME") or None,
            stripe_timeout_seconds=_int_env(env, "STRIPE_TIMEOUT_SECONDS", 8),
            calendar_api_key_secret_name=(
                env.get("CALENDAR_API_KEY_SECRET_NAME") or None
            ),
            calendar_ids_parameter_name=(
                env.get("CALENDAR_IDS_PARAMETER_NAME") or None
            ),
            calendar_timeout_seconds=_int_env(env, "CALENDAR_TIMEOUT_SECONDS", 3),
            mail_from_address=env.get("MAIL_FROM_ADDRESS") or None,
            storage_connect_timeout_seconds=_int_env(
                env, "STORAGE_CONNECT_TIMEOUT_SECONDS", 2
            ),
            storage_read_timeout_seconds=_int_env(
                env, "STORAGE_READ_TIMEOUT_SECONDS", 5
            ),
        )
