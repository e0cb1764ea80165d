"""Configuration settings for kerndeterminer."""

from pathlib import Path

from pydantic import BaseModel, Field


class SolverConfig(BaseModel):
    """Configuration for the kern search.

    All distances are in font design units.
    """

    tolerance: float = Field(
        default=0.01,
        gt=0.0,
        le=1.0,
        description="Width of the final bisection bracket",
    )
    min_step: float = Field(
        default=1.0,
        gt=0.0,
        le=50.0,
        description="Smallest step taken while marching towards the target distance",
    )
    max_iterations: int = Field(
        default=64,
        ge=8,
        le=200,
        description="Bisection iteration budget",
    )
    max_march_steps: int = Field(
        default=4096,
        ge=16,
        description="Distance evaluations allowed while marching towards the target",
    )
    exit_anchor: str = Field(
        default="exit",
        description="Anchor on the left glyph that offsets positive heights",
    )


class ProcessingConfig(BaseModel):
    """Configuration for batch kern queries."""

    max_workers: int | None = Field(
        default=None,
        ge=1,
        description="Max worker threads for determine_kerns (None = auto)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    configure: bool = Field(
        default=False,
        description="Install log handlers when a KernDeterminer is created",
    )
    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class KernSettings(BaseModel):
    """Main library settings."""

    solver: SolverConfig = Field(default_factory=SolverConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> KernSettings:
    """Get default settings."""
    return KernSettings()
