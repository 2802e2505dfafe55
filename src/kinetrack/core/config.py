"""Engine configuration via Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AthleteSettings(BaseSettings):
    """Physical attributes of the tracked athlete."""

    model_config = SettingsConfigDict(env_prefix="ATHLETE_")

    height_m: float = Field(default=1.75, gt=0)
    mass_kg: float = Field(default=70.0, gt=0)


class CalibrationSettings(BaseSettings):
    """Pixel-to-meter calibration settings."""

    model_config = SettingsConfigDict(env_prefix="CALIBRATION_")

    default_pixels_per_meter: float = Field(default=500.0, gt=0)
    min_keypoint_confidence: float = 0.5


class CenterOfMassSettings(BaseSettings):
    """Center of mass estimation settings."""

    model_config = SettingsConfigDict(env_prefix="COM_")

    min_keypoint_confidence: float = 0.3


class KinematicsSettings(BaseSettings):
    """Speed, distance and acceleration settings."""

    model_config = SettingsConfigDict(env_prefix="KINEMATICS_")

    min_frames: int = 2
    explosive_threshold: float = 15.0


class GaitSettings(BaseSettings):
    """Step detection and gait cycle model parameters."""

    model_config = SettingsConfigDict(env_prefix="GAIT_")

    min_frames: int = 30
    min_ankle_confidence: float = 0.3
    # Fixed duty-cycle split of the step period, not a measurement.
    ground_contact_fraction: float = 0.35
    flight_fraction: float = 0.15


class JumpDetectionSettings(BaseSettings):
    """Jump detection state machine parameters (velocities in m/s)."""

    model_config = SettingsConfigDict(env_prefix="JUMP_")

    min_frames: int = 10
    takeoff_velocity_threshold: float = -1.0
    landing_velocity_threshold: float = 0.5


class EngineSettings(BaseSettings):
    """History buffer and recomputation throttle."""

    model_config = SettingsConfigDict(env_prefix="ENGINE_")

    history_size: int = Field(default=120, gt=0)
    recompute_interval_ms: float = 33.0


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = "INFO"
    file: str | None = None


class Settings(BaseSettings):
    """Root settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    athlete: AthleteSettings = Field(default_factory=AthleteSettings)
    calibration: CalibrationSettings = Field(default_factory=CalibrationSettings)
    center_of_mass: CenterOfMassSettings = Field(default_factory=CenterOfMassSettings)
    kinematics: KinematicsSettings = Field(default_factory=KinematicsSettings)
    gait: GaitSettings = Field(default_factory=GaitSettings)
    jump: JumpDetectionSettings = Field(default_factory=JumpDetectionSettings)
    engine: EngineSettings = Field(default_factory=EngineSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
