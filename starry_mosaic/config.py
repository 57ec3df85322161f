"""Configuration management."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings, overridable with STARRY_MOSAIC_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="STARRY_MOSAIC_", env_file=".env", extra="ignore"
    )

    # Builder defaults
    default_image_width: int = Field(default=640, ge=1, description="Default image width")
    default_image_height: int = Field(default=640, ge=1, description="Default image height")
    default_corners_count: int = Field(
        default=8, ge=3, description="Corners of the default regular polygon shape"
    )
    minimum_scale: float = Field(default=0.001, gt=0.0, description="Smallest scale magnitude")
    maximum_scale: float = Field(default=1000.0, gt=0.0, description="Largest scale magnitude")

    # Rendering
    render_workers: int = Field(
        default=1, ge=1, description="Worker processes used to render bands"
    )
    render_band_height: int = Field(
        default=64, ge=1, description="Rows per independently rendered band"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(default="json", description="Log renderer: json or console")


settings = Settings()
