"""
Configuration settings for the RepoHub Dashboard API.
"""

from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic_settings import BaseSettings


class Platform(str, Enum):
    GITHUB = "github"
    GITLAB = "gitlab"
    REPLIT = "replit"
    LOVABLE = "lovable"


class RepositoryStatus(str, Enum):
    CONNECTED = "connected"
    FAILED = "failed"
    PENDING = "pending"


class Settings(BaseSettings):
    """Application settings."""

    # API configuration
    API_ENV: Literal["development", "staging", "production", "test", "local"] = "development"
    API_DEBUG: bool = True
    SECRET_KEY: str = (
        "f2hCPmuCDiBpAmuZD00ZX4fEXFb-H0WoReklDhJD3bA="  # Only for local/testing
    )

    # SUPABASE settings
    SUPABASE_URL: str = "https://your-project.supabase.co"
    SUPABASE_SECRET_KEY: str = "test-supabase-key"

    SUPABASE_REST_API: bool = True

    SUPABASE_HOST: str = "https://locahost"
    SUPABASE_USER: str = "postgres"
    SUPABASE_PASSWORD: str = "test"
    SUPABASE_PORT: int = 5432
    SUPABASE_DB_NAME: str = "postgres"

    DB_MIN_CONNECTIONS: int = 1
    DB_MAX_CONNECTIONS: int = 10

    CLERK_API_KEY: str = "test-clerk-key"

    CLERK_WEBHOOK_SECRET: str = "whsec_Q0hBTkdFX01FX0lOX1BST0RVQ1RJT04="

    # CORS settings
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    # Server settings
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Code hosting platforms
    GITHUB_API_BASE_URL: str = "https://api.github.com"
    GITLAB_API_BASE_URL: str = "https://gitlab.com/api/v4"
    PLATFORM_API_USER_AGENT: str = "RepoHubDashboard/1.0"
    # None means outbound platform calls never time out
    PLATFORM_API_TIMEOUT_SECONDS: Optional[float] = None

    # Repository connection rules
    MAX_REPOSITORIES_PER_USER: int = 10
    MIN_PLATFORM_TOKEN_LENGTH: int = 10

    # Version
    VERSION: str = "0.1.0"

    class Config:
        """Pydantic config class."""

        env_file = ".env"
        case_sensitive = True


# Initialize settings instance
settings = Settings()


def get_database_config() -> Dict[str, Any]:
    """
    Returns the appropriate database configuration based on available credentials.
    Uses the Supabase project host when SUPABASE_REST_API is True, otherwise uses direct PostgreSQL.
    """
    base_credentials = {
        "minsize": settings.DB_MIN_CONNECTIONS,
        "maxsize": settings.DB_MAX_CONNECTIONS,
        "ssl": "require",
    }

    if settings.SUPABASE_REST_API:

        # Supabase URL format: https://your-project.supabase.co
        if not settings.SUPABASE_URL.startswith(
            "https://"
        ) or not settings.SUPABASE_URL.endswith(".supabase.co"):
            raise ValueError(f"Invalid Supabase URL format: {settings.SUPABASE_URL}")

        project_id = settings.SUPABASE_URL.replace("https://", "").replace(
            ".supabase.co", ""
        )
        if not project_id:
            raise ValueError("Unable to extract project ID from Supabase URL")
        credentials = {
            **base_credentials,
            "host": project_id,
            "port": 5432,
            "user": "postgres",
            "password": settings.SUPABASE_SECRET_KEY,
            "database": "postgres",
        }

    else:
        credentials = {
            **base_credentials,
            "host": settings.SUPABASE_HOST,
            "port": settings.SUPABASE_PORT,
            "user": settings.SUPABASE_USER,
            "password": settings.SUPABASE_PASSWORD,
            "database": settings.SUPABASE_DB_NAME,
        }

    return {"engine": "tortoise.backends.asyncpg", "credentials": credentials}


def get_tortoise_config():
    db_config = get_database_config()

    return {
        "connections": {"default": db_config},
        "apps": {
            "models": {
                "models": [
                    "app.models",
                    "aerich.models",  # Required for aerich migrations
                ],
                "default_connection": "default",
            }
        },
        "use_tz": True,
        "timezone": "UTC",
    }


TORTOISE_ORM = get_tortoise_config()
