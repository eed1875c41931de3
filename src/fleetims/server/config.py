"""Backend server configuration."""

import os
from dataclasses import dataclass, field

MEMORY_DATABASE = ":memory:"


@dataclass
class ServerConfig:
    """Inventory server configuration.

    Environment:
        Every field can be read from a ``FLEETIMS_*`` variable through
        ``from_env``. ``FLEETIMS_CORS_ORIGINS`` is a comma-separated list.
    """

    database_path: str = MEMORY_DATABASE
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    def __post_init__(self) -> None:
        self.log_level = self.log_level.upper()
        if not 0 < self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}")

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "ServerConfig":
        """Build a configuration from environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``.

        Returns:
            The configuration, with defaults for unset variables.
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        origins = env.get("FLEETIMS_CORS_ORIGINS")
        cors_origins = (
            [origin.strip() for origin in origins.split(",") if origin.strip()]
            if origins is not None
            else defaults.cors_origins
        )

        return cls(
            database_path=env.get("FLEETIMS_DATABASE_PATH", defaults.database_path),
            host=env.get("FLEETIMS_HOST", defaults.host),
            port=int(env.get("FLEETIMS_PORT", defaults.port)),
            log_level=env.get("FLEETIMS_LOG_LEVEL", defaults.log_level),
            cors_origins=cors_origins,
        )
