from pathlib import Path
from dotenv import dotenv_values
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

import os

# Explicitly load .env for local/dev environments only if values are missing from the environment
BASE_DIR = Path(__file__).resolve().parent.parent.parent
env_file = BASE_DIR / ".env"

if env_file.exists():
    file_env = dotenv_values(env_file)
    missing_keys = {k: v for k, v in file_env.items() if k not in os.environ and v is not None}
    for k, v in missing_keys.items():
        os.environ[k] = v


class Settings(BaseSettings):
    """Library settings pulled from PY_VORONOI_* environment variables."""

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Logging format (json or console)")

    # Default clipping bound
    bound_left: float = Field(default=0.0, description="Default bound left edge")
    bound_top: float = Field(default=0.0, description="Default bound top edge")
    bound_right: float = Field(default=960.0, description="Default bound right edge")
    bound_bottom: float = Field(default=500.0, description="Default bound bottom edge")

    # Degenerate geometry tunables
    degenerate_center_scale: float = Field(
        default=1e8, gt=0, description="Offset factor for circumcenters of zero-area triangles"
    )
    near_degenerate_threshold: float = Field(
        default=1e-8, ge=0, description="Doubled triangle area under which the A-C midpoint is used"
    )
    collinear_epsilon: float = Field(
        default=1e-10, ge=0, description="Triangle cross product under which input counts as collinear"
    )
    jitter_scale: float = Field(
        default=1e-8, gt=0, description="Jitter radius relative to the extent of collinear input"
    )

    model_config = SettingsConfigDict(
        env_prefix="PY_VORONOI_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return value

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, value: str) -> str:
        value = value.lower()
        if value not in {"json", "console"}:
            raise ValueError(f"log_format must be 'json' or 'console', got {value!r}")
        return value

    def default_bound(self):
        """Default clipping bound as a ``Bound``."""
        from ..core.geometry import Bound
        return Bound(self.bound_left, self.bound_top, self.bound_right, self.bound_bottom)

    def voronoi_options(self):
        """Degenerate triangle tunables as ``VoronoiOptions``."""
        from ..core.circumcenters import VoronoiOptions
        return VoronoiOptions(
            degenerate_center_scale=self.degenerate_center_scale,
            near_degenerate_threshold=self.near_degenerate_threshold,
        )


# Instantiate singleton settings object
settings = Settings()
