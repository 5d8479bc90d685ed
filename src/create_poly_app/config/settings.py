"""Runtime configuration settings for create-poly-app.

This module uses Pydantic Settings for configuration that can be
overridden via environment variables. This provides:
- Type validation
- Environment variable support (LOG_ and CPA_ prefixes)
- Default values
- Easy testing via dependency injection
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from create_poly_app.config.paths import LOG_FILE_NAME


class LoggingSettings(BaseSettings):
    """Logging settings.

    Can be overridden via environment variables with LOG_ prefix
    (LOG_LEVEL, LOG_CONSOLE, LOG_FILE, LOG_FILE_PATH).
    """

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = Field(default="INFO", description="Log level name")
    console: bool = Field(default=False, description="Also log to stderr")
    file: bool = Field(default=True, description="Log to a file in the working directory")
    file_path: str = Field(default=LOG_FILE_NAME, description="Log file path")


class ExecutionSettings(BaseSettings):
    """Stage execution settings.

    Can be overridden via environment variables with CPA_ prefix.
    """

    model_config = SettingsConfigDict(env_prefix="CPA_")

    script_timeout_seconds: float = Field(
        default=600.0,
        gt=0,
        description="Maximum run time of a single stage script",
    )
    shell_executable: str | None = Field(
        default=None,
        description="Shell used for stage scripts (platform default when unset)",
    )
    use_catalog: bool = Field(
        default=False,
        description="Write dependency versions to the pnpm workspace catalog",
    )


# Singleton instances for easy import
logging_settings = LoggingSettings()
execution_settings = ExecutionSettings()
