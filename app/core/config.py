from pathlib import Path
from typing import List, Literal

from pydantic_settings import BaseSettings

APP_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    app_name: str = "Scene Browser"
    version: str = "1.0.0"
    description: str = (
        "Browse remote-sensing scenes by product, date range and region of interest"
    )

    # Catalog
    catalog_backend: Literal["fixture", "database", "remote"] = "fixture"
    catalog_fixture_path: str = str(APP_DIR / "data" / "catalog.json")
    catalog_url: str = "http://localhost:8000/api/v1/catalog"
    catalog_timeout: float = 30.0

    # Database (catalog store when catalog_backend == "database")
    database_url: str = "sqlite:///./catalog.db"

    # Search defaults
    default_roi_bbox: List[float] = [126.5, 36.0, 127.5, 37.0]
    default_page: int = 1
    default_limit: int = 20
    max_limit: int = 200

    # ROI drawing
    roi_min_drag_px: float = 5.0
    roi_auto_search: Literal["never", "drag", "manual", "always"] = "never"

    # JWT (identity only, tokens are issued elsewhere)
    secret_key: str = "your-secret-key-here"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 30

    # API
    api_v1_prefix: str = "/api/v1"

    # Environment
    environment: str = "development"
    debug: bool = True

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"


settings = Settings()
