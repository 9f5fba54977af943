from pathlib import Path

from pydantic_settings import BaseSettings

PACKAGE_DIR = Path(__file__).parent


class Settings(BaseSettings):
    APP_NAME: str = "filmquote"
    COMPANY_NAME: str = "Vizta Tint of North Jersey"
    LOG_LEVEL: str = "INFO"

    # Rate table JSON, loaded once per process
    PRICING_CONFIG_PATH: Path = PACKAGE_DIR / "data" / "pricing.json"

    CORS_ORIGINS: list[str] = ["*"]

    class Config:
        env_file = ".env"


settings = Settings()
