import os
import logging
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Configuration settings for the store API"""

    # Database settings. Without MONGODB_URI the API serves fallback data.
    MONGODB_URI: Optional[str] = os.getenv("MONGODB_URI") or None
    DATABASE_NAME: str = os.getenv("DATABASE_NAME", "kaaya")
    SERVER_SELECTION_TIMEOUT_MS: int = int(os.getenv("MONGODB_TIMEOUT_MS", "30000"))
    MAX_POOL_SIZE: int = int(os.getenv("MONGODB_MAX_POOL_SIZE", "10"))

    # HTTP settings
    PORT: int = int(os.getenv("PORT", "8000"))
    CORS_ALLOW_ORIGINS: List[str] = [
        origin.strip() for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
        if origin.strip()
    ]

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


def setup_logging():
    """Configure logging settings"""
    log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    logging.basicConfig(
        level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
        format=log_format,
        handlers=[logging.StreamHandler()]
    )
