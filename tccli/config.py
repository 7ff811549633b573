from datetime import timedelta
from pathlib import Path
from pydantic_settings import BaseSettings
from typing import Optional

PING_URLS_CACHE_PATH = Path("cmds") / "status" / "pingURLs.json"


class Settings(BaseSettings):
    manifest_url: str = "https://references.taskcluster.net/manifest.json"
    auth_url: str = "https://auth.taskcluster.net/v1"
    cache_dir: Path = Path.home() / ".cache" / "taskcluster" / "taskcluster-cli"
    cache_max_age_hours: float = 24  # Ping urls are re-scraped after this long
    http_timeout: Optional[float] = None  # None keeps the httpx default
    log_level: str = "INFO"

    class Config:
        env_prefix = "TCCLI_"
        env_file = ".env"
        extra = "ignore"

    @property
    def cache_path(self) -> Path:
        """Full path of the ping url cache file"""
        return self.cache_dir / PING_URLS_CACHE_PATH

    @property
    def cache_max_age(self) -> timedelta:
        return timedelta(hours=self.cache_max_age_hours)
