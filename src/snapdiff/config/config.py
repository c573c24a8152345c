"""Configuration management for snapdiff."""

import os
import tomllib
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, ClassVar

from snapdiff.config.file_ops import write_text_file
from snapdiff.config.paths import default_config_path, default_tmp_dir
from snapdiff.config.settings import DEFAULT_ENDPOINT
from snapdiff.platform.logging import logger
from snapdiff.shared import ConfigError, Credentials


def _path_field(default: Path | None = None) -> Any:
    """Create a field for Path objects with proper conversion.

    Args:
        default: Default value for the field.

    Returns:
        Field with proper metadata for path handling.
    """
    return field(default=default, metadata={"path": True})


def _path_list_field() -> Any:
    """Create a list field whose string items are converted to ``Path``."""
    return field(default_factory=list, metadata={"path_list": True})


@dataclass
class Config:
    """Application configuration."""

    # Comparison service
    endpoint: str = DEFAULT_ENDPOINT
    api_key: str | None = None
    api_secret: str | None = None
    project: str | None = None

    # Example discovery and bundling
    root_dir: Path | None = _path_field()
    include: str = "**/*-snapdiff.js"
    bundle_command: list[str] = field(default_factory=list)
    watch_interval: float = 1.0
    tmpdir: Path | None = _path_field()

    # Rendering
    prerender: bool = True
    stylesheets: list[str | dict[str, Any]] = field(default_factory=list)
    public_folders: list[Path] = _path_list_field()
    plugins: list[str] = field(default_factory=list)
    dom_provider: str | None = None
    targets: dict[str, dict[str, Any]] = field(default_factory=dict)

    # Log file path
    log_file: Path | None = _path_field()

    _instance: ClassVar["Config | None"] = None
    _loaded_from: ClassVar[Path | None] = None

    def __post_init__(self) -> None:
        """Convert string paths to ``Path`` objects using field metadata."""
        for f in fields(self):
            value = getattr(self, f.name)
            if f.metadata.get("path", False) and isinstance(value, str):
                setattr(self, f.name, Path(value) if value else None)
            elif f.metadata.get("path_list", False):
                setattr(self, f.name, [Path(item) for item in value if item])

    @property
    def loaded_from(self) -> Path | None:
        """Return the file this configuration was read from, if any."""
        return type(self)._loaded_from if type(self)._instance is self else None

    def resolved_root_dir(self) -> Path:
        """Return the directory examples and relative paths are resolved against."""
        if self.root_dir is not None:
            return self.root_dir.expanduser().resolve()
        loaded_from = self.loaded_from
        if loaded_from is not None:
            return loaded_from.parent
        return Path.cwd()

    def resolved_tmpdir(self) -> Path:
        """Return the scratch directory, relative entries resolved against the root."""
        if self.tmpdir is None:
            return default_tmp_dir()
        if self.tmpdir.is_absolute():
            return self.tmpdir
        return (self.resolved_root_dir() / self.tmpdir).resolve()

    def resolved_public_folders(self) -> list[Path]:
        """Return public folders as absolute paths."""
        root = self.resolved_root_dir()
        return [folder if folder.is_absolute() else (root / folder).resolve() for folder in self.public_folders]

    def credentials(self) -> Credentials:
        """Return API credentials, falling back to the environment.

        Raises:
            ConfigError: If either half of the key pair is missing.
        """
        api_key = self.api_key or os.environ.get("SNAPDIFF_API_KEY")
        api_secret = self.api_secret or os.environ.get("SNAPDIFF_API_SECRET")
        if not api_key or not api_secret:
            raise ConfigError(
                "Missing API credentials: set api_key/api_secret or "
                "SNAPDIFF_API_KEY/SNAPDIFF_API_SECRET"
            )
        return Credentials(api_key=api_key, api_secret=api_secret)

    def validate(self) -> None:
        """Check settings that would otherwise fail deep inside a run.

        Raises:
            ConfigError: On the first inconsistent setting found.
        """
        if not self.targets:
            raise ConfigError("No targets configured")
        for name, options in self.targets.items():
            if not isinstance(options, dict):
                raise ConfigError(f"Target {name} must be a table")
            if "factory" not in options and "viewport" not in options:
                raise ConfigError(f"Target {name} needs a viewport")
        if self.watch_interval <= 0:
            raise ConfigError("watch_interval must be positive")

    def save(self, path: Path | None = None) -> None:
        """Save configuration to file."""
        config_dict = asdict(self)

        for key, value in config_dict.items():
            if isinstance(value, Path):
                config_dict[key] = str(value)
            elif isinstance(value, list) and value and all(isinstance(v, Path) for v in value):
                config_dict[key] = [str(v) for v in value]

        try:
            target = path or default_config_path()
            content = self._render_toml(config_dict)
            write_text_file(target, content)
            logger.info("Configuration saved to %s", target)
        except Exception as e:
            logger.error("Failed to save configuration: %s", e)
            raise

    def _render_toml(self, config: dict[str, Any]) -> str:
        """Render configuration as TOML with inline guidance."""

        lines: list[str] = []

        lines.append("# snapdiff configuration file")
        lines.append("")

        lines.append("# Comparison service endpoint and credentials")
        lines.append("# Credentials may also come from SNAPDIFF_API_KEY / SNAPDIFF_API_SECRET")
        lines.append(f"endpoint = {self._format_toml_value(config['endpoint'])}")
        for key in ("api_key", "api_secret", "project"):
            if config[key] is not None:
                lines.append(f"{key} = {self._format_toml_value(config[key])}")
        lines.append("")

        lines.append("# Example discovery and bundling")
        lines.append('# Example: bundle_command = ["npx", "webpack", "--config", "snapdiff.webpack.js"]')
        lines.append(f"include = {self._format_toml_value(config['include'])}")
        lines.append(f"bundle_command = {self._format_toml_value(config['bundle_command'])}")
        lines.append(f"watch_interval = {self._format_toml_value(config['watch_interval'])}")
        for key in ("root_dir", "tmpdir", "log_file"):
            if config[key] is not None:
                lines.append(f"{key} = {self._format_toml_value(config[key])}")
        lines.append("")

        lines.append("# Rendering")
        lines.append("# prerender = true renders examples locally before uploading them")
        lines.append(f"prerender = {self._format_toml_value(config['prerender'])}")
        lines.append(f"stylesheets = {self._format_toml_value(config['stylesheets'])}")
        lines.append(f"public_folders = {self._format_toml_value(config['public_folders'])}")
        lines.append(f"plugins = {self._format_toml_value(config['plugins'])}")
        if config["dom_provider"] is not None:
            lines.append(f"dom_provider = {self._format_toml_value(config['dom_provider'])}")
        lines.append("")

        lines.append("# Targets, one table per rendering environment")
        lines.append("# Example:")
        lines.append("# [targets.chrome-desktop]")
        lines.append('# viewport = "1024x768"')
        lines.append('# browser_type = "chrome"')
        for name, options in config["targets"].items():
            lines.append("")
            lines.append(f"[targets.{self._format_toml_key(name)}]")
            for key, value in options.items():
                lines.append(f"{self._format_toml_key(key)} = {self._format_toml_value(value)}")
        lines.append("")

        return "\n".join(lines)

    @staticmethod
    def _format_toml_key(key: str) -> str:
        if key.replace("-", "").replace("_", "").isalnum():
            return key
        return f'"{key}"'

    def _format_toml_value(self, value: Any) -> str:
        """Format a value for TOML serialization.

        Args:
            value: Value to format

        Returns:
            str: Formatted value
        """
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (str, Path)):
            escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
            return f'"{escaped}"'
        if isinstance(value, (list, tuple)):
            return "[" + ", ".join(self._format_toml_value(item) for item in value) + "]"
        if isinstance(value, dict):
            items = ", ".join(
                f"{self._format_toml_key(str(k))} = {self._format_toml_value(v)}" for k, v in value.items()
            )
            return "{ " + items + " }" if items else "{}"
        return str(value)

    @classmethod
    def load(cls, path: Path | str | None = None) -> "Config":
        """Load configuration from file.

        Args:
            path: Explicit config file; defaults to the portable location.

        Returns:
            Config: Loaded configuration object.

        Raises:
            ConfigError: If the file is not valid TOML or holds unknown keys.
        """
        config_file = default_config_path(path)

        if cls._instance is not None and cls._loaded_from == config_file:
            return cls._instance

        if not config_file.exists():
            config = cls()
            config.save(config_file)
            logger.info("Created default configuration at %s", config_file)
            cls._instance = config
            cls._loaded_from = config_file
            return config

        try:
            with open(config_file, "rb") as f:
                config_dict = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            logger.error("Failed to load configuration: %s", e)
            raise ConfigError(f"Invalid configuration file {config_file}: {e}") from e

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config_dict) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys in {config_file}: {', '.join(unknown)}")

        for key, value in config_dict.items():
            if key.endswith("_dir") or key == "tmpdir" or key == "log_file":
                config_dict[key] = str(value) if value and str(value).strip() else None

        logger.debug("Configuration loaded from %s", config_file)
        instance = cls(**config_dict)
        cls._instance = instance
        cls._loaded_from = config_file
        return instance


__all__ = ["Config"]
