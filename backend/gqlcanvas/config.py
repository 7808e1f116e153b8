"""Application configuration via environment variables."""
from pydantic_settings import BaseSettings

from .engine.graph import LayoutMode


class Settings(BaseSettings):
    app_name: str = "GraphQL Canvas"
    debug: bool = True
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    layout_mode: LayoutMode = LayoutMode.PRECOMPUTED
    max_results: int = 20
    log_level: str = "INFO"

    model_config = {"env_prefix": "GQLCANVAS_"}


settings = Settings()
