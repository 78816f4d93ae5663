from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings

from tubestats.services.color_service import DEFAULT_PALETTE


class Settings(BaseSettings):
    port: int = 8080
    log_level: str = "info"
    environment: str = "development"
    cors_origins: str = "*"

    data_dir: Path = Path("data")
    videos_file: str = "videos.csv"
    trending_file: str = "trending_videos.geojson"
    channel_palette: list[str] = list(DEFAULT_PALETTE)

    model_config = {"env_file": ".env"}

    @field_validator("channel_palette")
    @classmethod
    def _palette_not_empty(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("channel_palette must contain at least one color")
        return value

    @property
    def videos_path(self) -> Path:
        return self.data_dir / self.videos_file

    @property
    def trending_path(self) -> Path:
        return self.data_dir / self.trending_file


settings = Settings()
