"""Configuration management for modrepo.

Only the command line interface reads configuration; commands themselves are
configured entirely through their builders and the context they are applied to.

Configuration Priority (highest to lowest):
1. Environment variables
2. Project configuration file (.modrepo/config.toml or modrepo.toml)
3. User configuration file (~/.config/modrepo/config.toml)
4. System configuration file (/etc/modrepo/config.toml)
5. Default values

Environment Variable Naming:
- Nested fields: MODREPO_<SECTION>__<FIELD> (e.g., MODREPO_LOGGING__LOG_LEVEL)
"""

import logging
from pathlib import Path

import platformdirs
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from modrepo.infrastructure.errors import InvalidArgumentError
from modrepo.infrastructure.version import ManagementVersion

logger = logging.getLogger(__name__)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}, got {v}")
        return v_upper


class ServerConfig(BaseModel):
    """Defaults describing the target server when previewing commands."""

    management_version: str = Field(
        default="2.0.0",
        description="Management protocol version of the target server",
    )

    domain: bool = Field(
        default=False,
        description="Whether the target server runs in domain (managed) mode",
    )

    @field_validator("management_version")
    @classmethod
    def validate_management_version(cls, v: str) -> str:
        """Validate and normalize the management version."""
        try:
            return str(ManagementVersion.parse(v))
        except InvalidArgumentError as e:
            raise ValueError(str(e)) from e


class ModrepoConfig(BaseSettings):
    """Main modrepo configuration.

    Environment Variables:
        - MODREPO_LOGGING__LOG_LEVEL: Logging level
        - MODREPO_SERVER__MANAGEMENT_VERSION: Default server management version
        - MODREPO_SERVER__DOMAIN: Default server topology
    """

    model_config = SettingsConfigDict(
        env_prefix="MODREPO_",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging configuration",
    )

    server: ServerConfig = Field(
        default_factory=ServerConfig,
        description="Target server defaults",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize the sources and their priority for settings.

        Priority order (highest to lowest):
        1. Environment variables
        2. Project configuration file
        3. User configuration file
        4. System configuration file
        5. Init settings (programmatic)
        """
        config_files = find_config_files()

        # pydantic-settings gives sources on the left priority over those on
        # the right, so collect from lowest to highest and reverse below
        toml_sources = []
        for level in ("system", "user", "project"):
            config_file = config_files[level]
            if config_file:
                try:
                    toml_sources.append(
                        TomlConfigSettingsSource(settings_cls, toml_file=config_file)
                    )
                    logger.debug(f"Loaded {level} config: {config_file}")
                except Exception as e:
                    logger.debug(f"Could not load {level} config: {e}")

        return (
            env_settings,
            *reversed(toml_sources),
            init_settings,
        )


def find_config_files() -> dict[str, Path | None]:
    """Find configuration files in standard locations.

    Returns:
        Dictionary with keys 'system', 'user', 'project', each containing
        a Path to the config file if it exists, or None otherwise.
    """
    config_files: dict[str, Path | None] = {
        "system": None,
        "user": None,
        "project": None,
    }

    system_config = Path("/etc/modrepo/config.toml")
    if system_config.exists():
        config_files["system"] = system_config

    user_config_dir = Path(platformdirs.user_config_dir("modrepo", appauthor=False))
    user_config = user_config_dir / "config.toml"
    if user_config.exists():
        config_files["user"] = user_config

    # .modrepo/config.toml wins over modrepo.toml
    cwd = Path.cwd()
    for project_config in (cwd / ".modrepo" / "config.toml", cwd / "modrepo.toml"):
        if project_config.exists():
            config_files["project"] = project_config
            break

    return config_files


def get_config_file_locations() -> dict[str, Path]:
    """Get the standard configuration file locations.

    Returns:
        Dictionary with keys 'system', 'user', 'project', each containing
        the Path where the config file should be located (may not exist).
    """
    user_config_dir = Path(platformdirs.user_config_dir("modrepo", appauthor=False))
    return {
        "system": Path("/etc/modrepo/config.toml"),
        "user": user_config_dir / "config.toml",
        "project": Path.cwd() / ".modrepo" / "config.toml",
    }


# Lazily initialized on first access
_config: ModrepoConfig | None = None


def get_config(reload: bool = False) -> ModrepoConfig:
    """Get the global configuration instance.

    Args:
        reload: If True, reload the configuration from files and environment.
    """
    global _config

    if _config is None or reload:
        _config = ModrepoConfig()

    return _config


def create_example_config() -> str:
    """Create an example configuration file content."""
    return """# modrepo Configuration File
#
# Configuration files are loaded from (in priority order):
#   1. .modrepo/config.toml or modrepo.toml (project directory)
#   2. ~/.config/modrepo/config.toml (user directory)
#   3. /etc/modrepo/config.toml (system directory, Linux/Unix only)
#
# Environment variables can override any setting (highest priority).
# Nested settings use double underscores: MODREPO_<SECTION>__<KEY>

[logging]
# Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL
# Environment variable: MODREPO_LOGGING__LOG_LEVEL
log_level = "INFO"

[server]
# Management protocol version of the target server.
# From 2.0.0 on, --resource-delimiter is emitted by 'module add'.
# Environment variable: MODREPO_SERVER__MANAGEMENT_VERSION
management_version = "2.0.0"

# Whether the target server runs in domain mode
# Environment variable: MODREPO_SERVER__DOMAIN
domain = false
"""


def write_example_config(location: str = "user") -> Path:
    """Write an example configuration file to a standard location.

    Args:
        location: One of "user", "project" or "system".

    Returns:
        Path to the created configuration file.

    Raises:
        ValueError: If location is invalid.
        PermissionError: If cannot write to the location.
    """
    locations = get_config_file_locations()

    if location not in locations:
        raise ValueError(f"Invalid location '{location}'. Must be one of: user, project, system")

    config_path = locations[location]
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(create_example_config())

    logger.info(f"Created example configuration at: {config_path}")

    return config_path
