# turfbook/config.py

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    redis_url: str | None = None

    # When unset, the role guard falls back to unverified claim decoding
    jwt_secret: str | None = None
    jwt_algorithms: list[str] = ["HS256"]

    default_slot_price: float = 500

    # Browser navigations carry the token in a cookie rather than a header
    token_cookie_name: str = "token"
    route_policy_path: Path | None = None
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_prefix="TURFBOOK_",
        extra="ignore",
    )

    @property
    def verifies_tokens(self) -> bool:
        return bool(self.jwt_secret)


@lru_cache
def get_settings() -> Settings:
    return Settings()
