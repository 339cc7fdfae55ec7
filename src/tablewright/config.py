"""Configuration management for tablewright projects."""

import os
from pathlib import Path
from typing import Optional, Dict, Any
import toml
from pydantic import Field

from tablewright.errors import UnsupportedTypeError
from tablewright.models import ConnectionSettings, Table, TablewrightBaseModel
from tablewright.utils.type_utils import normalize_kind

CONFIG_FILENAME = "tablewright.toml"

# Environment variable -> connection setting
ENV_OVERRIDES = {
    "TABLEWRIGHT_BACKEND": "backend",
    "TABLEWRIGHT_SQLITE_PATH": "path",
    "TABLEWRIGHT_ADDRESS": "address",
    "TABLEWRIGHT_DATABASE": "database_name",
    "TABLEWRIGHT_USER": "user",
    "TABLEWRIGHT_PASSWORD": "password",
}


class ProjectConfig(TablewrightBaseModel):
    """Configuration for a tablewright project stored in tablewright.toml."""

    connection: ConnectionSettings = Field(
        default_factory=ConnectionSettings, description="Connection settings"
    )
    tables: Dict[str, Table] = Field(
        default_factory=dict, description="Table definitions by name"
    )


class Config:
    """Manages tablewright project configuration."""

    def __init__(self, project_dir: Optional[Path] = None):
        """Initialize config manager.

        Args:
            project_dir: Path to project directory. If None, uses TABLEWRIGHT_PROJECT_DIR env var or current directory.
        """
        if project_dir is None:
            env_dir = os.environ.get("TABLEWRIGHT_PROJECT_DIR")
            if env_dir:
                project_dir = Path(env_dir)

        self.project_dir = Path(project_dir) if project_dir else Path.cwd()
        self.config_path = self.project_dir / CONFIG_FILENAME
        self._config: Optional[ProjectConfig] = None

    @property
    def exists(self) -> bool:
        """Check if config file exists."""
        return self.config_path.exists()

    def load(self) -> ProjectConfig:
        """Load configuration from disk, with environment variable overrides.

        Raises:
            FileNotFoundError: If the config file does not exist
            pydantic.ValidationError: If the file content is invalid
        """
        if not self.exists:
            raise FileNotFoundError(f"Config file not found at {self.config_path}")

        with open(self.config_path, "r") as f:
            data = toml.load(f)

        self._apply_env_overrides(data)
        self._normalize_kinds(data)

        self._config = ProjectConfig(**data)
        return self._config

    def _normalize_kinds(self, data: Dict[str, Any]) -> None:
        """Rewrite type aliases such as ``text`` or ``integer`` to value kinds.

        Unknown names are left alone; they fail when the table is registered.
        """
        for table in data.get("tables", {}).values():
            for column in table.get("columns", {}).values():
                column_type = column.get("type")
                if not isinstance(column_type, dict) or "kind" not in column_type:
                    continue
                try:
                    column_type["kind"] = normalize_kind(column_type["kind"])
                except (UnsupportedTypeError, AttributeError):
                    continue

    def _apply_env_overrides(self, data: Dict[str, Any]) -> None:
        """Apply environment variable overrides to configuration data."""
        connection = data.setdefault("connection", {})
        for env_name, field_name in ENV_OVERRIDES.items():
            if value := os.environ.get(env_name):
                connection[field_name] = value

    def save(self, config: Optional[ProjectConfig] = None) -> None:
        """Save configuration to disk.

        Args:
            config: Configuration to save. If None, saves current config.
        """
        if config:
            self._config = config

        if not self._config:
            raise ValueError("No configuration to save")

        self.project_dir.mkdir(parents=True, exist_ok=True)

        # TOML has no null, so unset fields are left out
        config_dict = self._config.model_dump(exclude_none=True)

        with open(self.config_path, "w") as f:
            toml.dump(config_dict, f)

    def init_project(self, sqlite_path: str = "tablewright.db") -> ProjectConfig:
        """Write a default configuration for a new project.

        Args:
            sqlite_path: SQLite database file, relative to the project directory

        Raises:
            FileExistsError: If the project is already initialized
        """
        if self.exists:
            raise FileExistsError(f"Project already exists at {self.config_path}")

        config = ProjectConfig(connection=ConnectionSettings(backend="sqlite", path=sqlite_path))
        self.save(config)
        return config

    def connection_settings(self) -> ConnectionSettings:
        """Connection settings with relative SQLite paths resolved against the project."""
        config = self._config or self.load()
        settings = config.connection
        if settings.backend == "sqlite" and settings.path != ":memory:":
            path = Path(settings.path)
            if not path.is_absolute():
                settings = settings.model_copy(update={"path": str(self.project_dir / path)})
        return settings
