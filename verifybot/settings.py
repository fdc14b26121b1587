from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    log_level: str = "INFO"

    # Infra
    redis_url: str = "redis://redis:6379/0"
    discord_api_base_url: str = "https://discord.com/api/v10"
    http_timeout_seconds: float = 5.0

    # Discord application
    discord_public_key: str = ""
    discord_bot_token: str = ""
    discord_application_id: str = ""
    guild_id: str = ""
    verified_role_id: str = ""

    # Codes
    code_ttl_seconds: int = 600
    account_index_ttl_seconds: int = 600
    code_key_prefix: str = "code:"
    account_key_prefix: str = "user:"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
