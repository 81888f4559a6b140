"""Configuration management for asyncfs."""

import tomllib
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, ClassVar

from asyncfs.config.file_ops import write_text_file
from asyncfs.config.paths import default_config_path
from asyncfs.platform.logging import logger


def _path_field(default: Path | None = None) -> Any:
    """Create a field for Path objects with proper conversion.

    Args:
        default: Default value for the field.

    Returns:
        Field with proper metadata for path handling.
    """
    return field(default=default, metadata={"path": True})


@dataclass
class Config:
    """Library configuration."""

    # Log file path; console logging only when unset
    log_file: Path | None = _path_field()

    # Encoding used by text reads and writes when the caller gives none
    default_encoding: str = "utf-8"

    # Directory listing
    listing_backend: str = "walk"
    find_executable: str = "find"
    strict_listing: bool = False

    _instance: ClassVar["Config | None"] = None
    _loaded_from: ClassVar[Path | None] = None

    def __post_init__(self) -> None:
        """Convert string paths to ``Path`` objects using field metadata."""
        for f in fields(self):
            if not f.metadata.get("path", False):
                continue
            value = getattr(self, f.name)
            if isinstance(value, str):
                setattr(self, f.name, Path(value) if value.strip() else None)

    def save(self, target: Path | None = None) -> Path:
        """Save configuration to file and return the written path."""
        config_dict = asdict(self)

        for key, value in config_dict.items():
            if isinstance(value, Path):
                config_dict[key] = str(value)

        destination = target or default_config_path()
        try:
            write_text_file(destination, self._render_toml(config_dict))
            logger.info("Configuration saved to %s", destination)
        except OSError as e:
            logger.error("Failed to save configuration: %s", e)
            raise
        return destination

    def _render_toml(self, config: dict[str, Any]) -> str:
        """Render configuration as TOML with inline guidance."""

        lines: list[str] = []

        lines.append("# asyncfs Configuration File")
        lines.append("")

        lines.append("# Log file path (optional)")
        lines.append('# Example: log_file = "/path/to/logs/asyncfs.log"')
        if config["log_file"] is not None:
            lines.append(f"log_file = {self._format_toml_value(config['log_file'])}")
        lines.append("")

        lines.append("# Encoding for text reads and writes")
        lines.append(f"default_encoding = {self._format_toml_value(config['default_encoding'])}")
        lines.append("")

        lines.append('# Directory listing backend: "walk" (native) or "find" (external process)')
        lines.append(f"listing_backend = {self._format_toml_value(config['listing_backend'])}")
        lines.append(f"find_executable = {self._format_toml_value(config['find_executable'])}")
        lines.append("# Raise instead of returning an empty list when a listing fails")
        lines.append(f"strict_listing = {self._format_toml_value(config['strict_listing'])}")
        lines.append("")

        return "\n".join(lines)

    def _format_toml_value(self, value: Any) -> str:
        """Format a value for TOML serialization."""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (str, Path)):
            escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
            return f'"{escaped}"'
        return str(value)

    @classmethod
    def load(cls, path: Path | None = None) -> "Config":
        """Load configuration from file.

        A missing file yields the defaults; nothing is written to disk.

        Args:
            path: Explicit config file. Defaults to ``default_config_path()``.

        Returns:
            Config: Loaded configuration object.
        """
        config_file = path or default_config_path()
        if cls._instance is not None and cls._loaded_from == config_file:
            return cls._instance

        if config_file.exists():
            try:
                with open(config_file, "rb") as f:
                    config_dict = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError) as e:
                logger.error("Failed to load configuration: %s", e)
                raise

            known = {f.name for f in fields(cls)}
            unknown = sorted(set(config_dict) - known)
            if unknown:
                logger.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))
            instance = cls(**{k: v for k, v in config_dict.items() if k in known})
            logger.debug("Configuration loaded from %s", config_file)
        else:
            instance = cls()

        cls._instance = instance
        cls._loaded_from = config_file
        return instance


# Global configuration instance
config = Config.load()
