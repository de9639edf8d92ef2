from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    app_name: str = "Top Movers"
    app_version: str = "0.1.0"
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    alpha_vantage_api_key: Optional[str] = None
    alpha_vantage_url: str = "https://www.alphavantage.co/query"

    yahoo_screener_url: str = "https://query1.finance.yahoo.com/v1/finance/screener/predefined/saved"
    yahoo_screener_id: str = "day_gainers"
    yahoo_screener_count: int = 25

    request_timeout_seconds: float = 10.0

    public_dir: Path = PROJECT_ROOT / "public"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")


settings = Settings()
