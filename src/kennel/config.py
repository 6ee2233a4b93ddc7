"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass

_LOG_LEVELS = ("critical", "error", "warning", "info", "debug")


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(port=8080, seed=False)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 5000
    debug: bool = False

    # Logging
    log_level: str = "info"

    # Pre-load example records into the stores at startup
    seed: bool = True

    # Limits
    max_content_length: int = 1024 * 1024  # 1 MB

    def __post_init__(self) -> None:
        from kennel.errors import ConfigurationError

        if not 0 < self.port < 65536:
            msg = f"port must be between 1 and 65535, got {self.port}"
            raise ConfigurationError(msg)
        if self.log_level.lower() not in _LOG_LEVELS:
            msg = f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {self.log_level!r}"
            raise ConfigurationError(msg)
        if self.max_content_length <= 0:
            msg = "max_content_length must be positive"
            raise ConfigurationError(msg)

    @property
    def effective_log_level(self) -> str:
        """Log level name for ``logging``; debug mode forces DEBUG."""
        return "DEBUG" if self.debug else self.log_level.upper()
