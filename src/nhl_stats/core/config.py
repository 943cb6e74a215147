from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", env_prefix="NHL_")

    # upstream hosts
    web_api_base_url: str = "https://api-web.nhle.com/v1"
    stats_api_base_url: str = "https://api.nhle.com/stats/rest/en"
    user_agent: str = "nhl-stats-app/1.0"

    # transport
    timeout_s: float = 30.0
    connect_timeout_s: float = 10.0

    # resolution
    season_id: str = Field(default="20242025", pattern=r"^\d{8}$")
    max_concurrency: int = Field(default=1, ge=1, le=8)
    leaders_max_limit: int = Field(default=50, ge=1, le=50)

    log_level: str = "WARNING"

    def url_context(self) -> dict[str, str]:
        """Placeholders shared by every source URL template."""
        return {
            "web": self.web_api_base_url.rstrip("/"),
            "stats": self.stats_api_base_url.rstrip("/"),
            "season_id": self.season_id,
        }


settings = Settings()
