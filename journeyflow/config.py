"""
Configuration settings for the Journey Engine.
"""

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""
    
    # Application
    APP_NAME: str = "JourneyFlow"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = True
    
    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    
    # Journey Engine
    MAX_HOPS: int = 100  # Internal transitions allowed in a single call
    STRICT_GRAPH: bool = False  # Reject duplicate/reserved event names at build time
    SERIALIZE_JOURNEYS: bool = True  # Per-journey lock around each call
    
    # Journey Store
    JOURNEY_KEY_PREFIX: str = "FSM_JOURNEY_"
    JOURNEY_EXPIRY_MINUTES: Optional[int] = 30
    
    # Logging
    LOG_LEVEL: str = "INFO"
    
    class Config:
        env_file = ".env"
        case_sensitive = True


# Global settings instance
settings = Settings()
