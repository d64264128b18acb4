"""HTTP API configuration."""

import os

from dotenv import load_dotenv

from clipfolio.common.base_clipfolio_model import BaseClipfolioModel

load_dotenv()

DEFAULT_CORS_ORIGINS = ("http://localhost:5173", "http://localhost:3000")


class ApiConfig(BaseClipfolioModel):
    """Settings for the FastAPI application."""

    cors_origins: list[str]


def get_api_config() -> ApiConfig:
    """Get API configuration from environment variables.

    Environment variables:
        CLIPFOLIO_CORS_ORIGINS: Comma-separated allowed origins
    """
    raw = os.environ.get("CLIPFOLIO_CORS_ORIGINS", "")
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return ApiConfig(cors_origins=origins or list(DEFAULT_CORS_ORIGINS))
