"""Environment-based configuration using Pydantic Settings.

Values are loaded from environment variables and .env files; an unset
variable falls back to the default declared here.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class GatewaySettings(BaseSettings):
    """Settings for the NLP gateway."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── General ───────────────────────────────
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    service_name: str = "nlp_gateway"
    service_port: int = 8080

    # ── API keys ──────────────────────────────
    api_key: str = ""
    upstream_api_key: str | None = None

    # ── Upstream NLP services ─────────────────
    rake_url: str = "http://localhost:8081"
    prose_url: str = "http://localhost:8082"
    lang_url: str = "http://localhost:8083"
    upstream_timeout: float = 30.0

    # ── Key-value store ───────────────────────
    redis_url: str = "redis://localhost:6379/0"
    record_key_prefix: str = "record"
    record_ttl_seconds: int | None = None

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def json_logs(self) -> bool:
        return self.is_production

    @property
    def outbound_api_key(self) -> str:
        """Key sent to upstreams; defaults to the gateway's own key."""
        if self.upstream_api_key is not None:
            return self.upstream_api_key
        return self.api_key

    @property
    def upstreams(self) -> dict[str, str]:
        return {
            "rake": self.rake_url.rstrip("/"),
            "prose": self.prose_url.rstrip("/"),
            "lang": self.lang_url.rstrip("/"),
        }


settings = GatewaySettings()
