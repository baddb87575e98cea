"""
Centralized application configuration
"""
import json
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings, loaded from environment and .env"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # API Settings
    API_TITLE: str = "Location Discovery API"
    API_VERSION: str = "1.0.0"
    API_DESCRIPTION: str = "Discover nearby businesses and their products"

    # CORS - Can be string (comma-separated) or JSON array
    # Example: "http://localhost:3000,https://yourdomain.com" or '["http://localhost:3000"]'
    ALLOWED_ORIGINS: Optional[str] = "http://localhost:3000"

    # Database
    DATABASE_URL: str = ""
    DB_CONNECT_MAX_RETRIES: int = 3
    DB_CONNECT_RETRY_DELAY: float = 1.0
    DB_CONNECT_TIMEOUT: int = 10

    # Discovery
    DISCOVERY_DEFAULT_RADIUS_KM: float = 10.0
    DISCOVERY_DEFAULT_LIMIT: int = 10
    # Upper bound on rows loaded for in-memory distance filtering
    DISCOVERY_MAX_SCAN_ROWS: int = 5000

    LOG_LEVEL: str = "INFO"

    def get_allowed_origins(self) -> List[str]:
        """Parse ALLOWED_ORIGINS string into list"""
        if not self.ALLOWED_ORIGINS:
            return ["http://localhost:3000"]

        # Try JSON parse first (for array format)
        try:
            origins = json.loads(self.ALLOWED_ORIGINS)
            if isinstance(origins, list):
                return origins
        except (json.JSONDecodeError, ValueError):
            pass

        # Fall back to comma-separated string
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]


settings = Settings()
