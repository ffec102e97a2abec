from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    api_base_url: str = "https://api.mojang.com"
    request_timeout_seconds: float = Field(default=5.0, gt=0)
    user_agent: str = "mojangid/0.1.0"
    log_level: str = "info"

    @field_validator("api_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    model_config = {
        "env_prefix": "MOJANGID_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


settings = Settings()
