from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Pick up a local .env when present; real environment variables win
load_dotenv()

DEFAULT_PORT = 3000


def _port(raw: Optional[str]) -> int:
    if not raw:
        return DEFAULT_PORT
    try:
        return int(raw)
    except ValueError:
        logger.warning("Invalid PORT %r, using %d", raw, DEFAULT_PORT)
        return DEFAULT_PORT


@dataclass
class Settings:
    gist_id: str = ""
    gist_token: str = ""
    gist_filename: str = "db.json"
    gist_api_url: str = "https://api.github.com"
    cloudinary_cloud_name: Optional[str] = None
    cloudinary_api_key: Optional[str] = None
    cloudinary_api_secret: Optional[str] = None
    audio_folder: str = "untranslatable"
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            gist_id=os.getenv("GIST_ID", ""),
            gist_token=os.getenv("GIST_TOKEN", ""),
            gist_filename=os.getenv("GIST_FILENAME", "db.json"),
            gist_api_url=os.getenv("GIST_API_URL", "https://api.github.com"),
            cloudinary_cloud_name=os.getenv("CLOUDINARY_CLOUD_NAME"),
            cloudinary_api_key=os.getenv("CLOUDINARY_API_KEY"),
            cloudinary_api_secret=os.getenv("CLOUDINARY_API_SECRET"),
            audio_folder=os.getenv("AUDIO_FOLDER", "untranslatable"),
            host=os.getenv("HOST", "0.0.0.0"),
            port=_port(os.getenv("PORT")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


settings = Settings.from_env()
