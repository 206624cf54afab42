from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Optional JSON file replacing the embedded RGB order table
    rgb_orders_file: str = ""
    log_level: str = "INFO"
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
