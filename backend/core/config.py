# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Application configuration.
Connection strings, paths and validation limits are loaded from environment
variables (via etc/app.conf).  Handler code never carries literals for them.
"""

from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings

# Project root is two levels up from this file  (backend/core/config.py → project/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    # Database
    database_url: str = "mysql+pymysql://root:@localhost:3306/vacation_backend"

    # Uploaded vacation images.  The directory is also served read-only at
    # image_url_path.
    image_dir: str = str(_PROJECT_ROOT / "images")
    image_url_path: str = "/images"

    # Browser origins allowed to call the API (JSON list in the env var)
    cors_origins: List[str] = ["http://localhost:3000"]

    # bcrypt cost factor
    bcrypt_rounds: int = 10

    # Validation limits
    min_password_length: int = 4
    max_price: float = 10000

    # app.conf lives in etc/ – resolved relative to the project root so that
    # the file is found regardless of the working directory.
    model_config = {"env_file": str(_PROJECT_ROOT / "etc" / "app.conf")}


# Module-level singleton – import this everywhere: from core.config import settings
settings = Settings()
