"""Service configuration pulled from environment variables via pydantic."""
from urllib.parse import urlparse

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="config")


class Settings(BaseSettings):
    """Environment-driven configuration for the radar data service."""
    model_config = SettingsConfigDict(env_prefix="RADAR_", extra="ignore")

    data_source: str = "mrms"  # options: mrms, sample
    mrms_base_url: str = "https://mrms.ncep.noaa.gov/2D/ReflectivityAtLowestAltitude/"
    mrms_latest_file: str = "MRMS_ReflectivityAtLowestAltitude.latest.grib2.gz"
    fetch_timeout_seconds: float = 15.0
    cache_ttl_seconds: int = 300
    grid_stride: int = 10
    random_point_count: int = 1000
    min_compressed_bytes: int = 1000
    cors_origins: list[str] = Field(
        default_factory=lambda: [
            "http://213.136.72.33:3003",
            "http://localhost:3000",
            "http://localhost:3003",
        ]
    )
    log_level: str = "INFO"

    @field_validator("mrms_base_url", mode="after")
    @classmethod
    def ensure_trailing_slash(cls, v: str) -> str:
        """Normalize the directory URL so the file name can be appended."""
        return str(v).rstrip("/") + "/"

    @field_validator("grid_stride", mode="after")
    @classmethod
    def positive_stride(cls, v: int) -> int:
        """Reject strides that would never advance through the grid."""
        if v < 1:
            raise ValueError("grid_stride must be >= 1")
        return v

    @property
    def latest_snapshot_url(self) -> str:
        """Full URL of the rolling 'latest' snapshot file."""
        return f"{self.mrms_base_url}{self.mrms_latest_file}"

    @property
    def mrms_host(self) -> str:
        """Host name used to recognize responses that came from MRMS."""
        return urlparse(self.mrms_base_url).hostname or ""


settings = Settings()


if __name__ == "__main__":
    logger.setLevel("DEBUG")
    logger.debug(f"Loaded settings: {settings.model_dump_json(indent=4)}")
