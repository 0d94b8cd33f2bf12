"""Configuration management for smb-file-check."""

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from smb_file_check.exceptions import UsageError

DEFAULT_CONFIG_PATHS = [
    "smb-file-check.yaml",
    "smb-file-check.yml",
    "~/.config/smb-file-check/config.yaml",
]

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ConnectionConfig:
    """Connection settings for the file transport."""

    transport: str = "smb"
    username: str | None = None
    password: str | None = None
    workgroup: str | None = None
    kerberos: bool = False
    port: int | None = None  # Protocol default when unset
    timeout: int = 15
    key_file: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConnectionConfig":
        if not isinstance(data, dict):
            raise UsageError("Config section 'connection' must be a mapping")
        for key in ("port", "timeout"):
            value = data.get(key)
            if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
                raise UsageError(f"Config value 'connection.{key}' must be an integer: {value!r}")
        return cls(
            transport=data.get("transport", "smb"),
            username=data.get("username"),
            password=data.get("password"),
            workgroup=data.get("workgroup"),
            kerberos=data.get("kerberos", False),
            port=data.get("port"),
            timeout=data.get("timeout", 15),
            key_file=data.get("key_file"),
        )

    def merged(self, **overrides: Any) -> "ConnectionConfig":
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"transport": self.transport}
        for key in ("username", "password", "workgroup", "port", "key_file"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        if self.kerberos:
            data["kerberos"] = True
        data["timeout"] = self.timeout
        return data


@dataclass
class Config:
    """Main configuration for smb-file-check."""

    connection: ConnectionConfig = field(default_factory=ConnectionConfig)
    log_level: str = "WARNING"

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """Load configuration from YAML file.

        Raises:
            FileNotFoundError: if the file does not exist.
            UsageError: if the file cannot be read or parsed.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise UsageError(f"Invalid config file {path}: {e}") from e
        except OSError as e:
            raise UsageError(f"Cannot read config file {path}: {e.strerror}") from e

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        """Create configuration from dictionary."""
        if not isinstance(data, dict):
            raise UsageError("Config file must contain a mapping")

        log_level = str(data.get("log_level", "WARNING")).upper()
        if log_level not in LOG_LEVELS:
            raise UsageError(
                f"Invalid log_level '{data['log_level']}' (expected one of {', '.join(LOG_LEVELS)})"
            )

        return cls(
            connection=ConnectionConfig.from_dict(
                {} if data.get("connection") is None else data["connection"]
            ),
            log_level=log_level,
        )

    @classmethod
    def find(cls) -> "Config":
        """Load the first config file found in the default locations, else defaults."""
        for default_path in DEFAULT_CONFIG_PATHS:
            path = Path(default_path).expanduser()
            if path.exists():
                return cls.from_yaml(path)
        return cls()

    def to_yaml(self, path: str | Path) -> None:
        """Save configuration to YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "connection": self.connection.to_dict(),
            "log_level": self.log_level,
        }
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)


def create_example_config() -> Config:
    """Create an example configuration for documentation."""
    return Config(
        connection=ConnectionConfig(
            transport="smb",
            username="monitor",
            password="changeme",
            workgroup="EXAMPLE",
            timeout=15,
        ),
        log_level="WARNING",
    )
