"""Configuration settings for the package."""
import logging
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Package settings."""
    
    debug: bool = False
    log_level: str = "INFO"
    
    # Drop unset optional fields from outbound payloads instead of sending null
    wire_exclude_none: bool = False
    
    class Config:
        env_file = ".env"
        env_prefix = "WALLET_"
        case_sensitive = False


settings = Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for applications embedding the models."""
    level_name = (level or settings.log_level).upper()
    if settings.debug:
        level_name = "DEBUG"
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
