from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Map storage
    maps_dir: str = "maps"

    # Pagination
    svg_chunk_size: int = 5000  # characters per SVG chunk
    record_chunk_size: int = 1000  # identifiers / geometry records per chunk

    # Extraction
    identifier_tag: str = "path"
    container_tag: str = "g"
    geometry_container_id: str = "paths"
    exclusion_rules_file: str | None = None  # JSON file replacing the built-in rules

    @field_validator("svg_chunk_size", "record_chunk_size")
    @classmethod
    def check_chunk_size(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("chunk size must be positive")
        return v

    # Notifications
    tokens_file: str = "tokens.json"
    push_api_url: str = "https://exp.host/--/api/v2/push/send"
    notification_batch_size: int = 100
    push_timeout_seconds: float = 30.0

    # Frontend
    cors_origins: list[str] = ["*"]

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
