"""Configuration management for parkr."""

import tomllib
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, ClassVar, Final

from parkr.config.file_ops import write_text_file
from parkr.config.paths import default_config_path
from parkr.platform.logging import logger


FILE_HASH_CHUNK_SIZE_DEFAULT: Final[int] = 1024 * 1024
VERIFY_MODE_CHOICES: Final[tuple[str, ...]] = ("auto", "mtime")


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
    """Application configuration."""

    # Location of the project state document
    state_file: Path | None = _path_field()

    # Log file path
    log_file: Path | None = _path_field()

    # Hashing
    file_hash_chunk_size: int = FILE_HASH_CHUNK_SIZE_DEFAULT

    # Verification used by prune when no flag overrides it
    default_verify_mode: str = "auto"

    # Ask for a final y/N after the interactive selector
    confirm_interactive: bool = True

    # Singleton instance
    _instance: ClassVar["Config | None"] = None
    _loaded_from: ClassVar[Path | None] = None

    def __post_init__(self) -> None:
        """Convert string paths to ``Path`` objects using field metadata.

        Only fields created through ``_path_field`` are converted.
        """
        for f in fields(self):
            if not f.metadata.get("path", False):
                continue
            value = getattr(self, f.name)
            if isinstance(value, str):
                setattr(self, f.name, Path(value).expanduser() if value else None)

    def save(self, target: Path | None = None) -> Path:
        """Save configuration to file and return the written path."""
        config_dict = asdict(self)

        for key, value in config_dict.items():
            if isinstance(value, Path):
                config_dict[key] = str(value)

        destination = target or default_config_path()
        try:
            content = self._render_toml(config_dict)
            write_text_file(destination, content)
            logger.info("Configuration saved to %s", destination)
        except OSError as e:
            logger.error("Failed to save configuration: %s", e)
            raise
        return destination

    def _render_toml(self, config: dict[str, Any]) -> str:
        """Render configuration as TOML with inline guidance."""

        lines: list[str] = []

        lines.append("# parkr configuration file")
        lines.append("")

        lines.append("# Project state document (optional)")
        lines.append("# Defaults to ~/.parkr/state.json or $PARKR_STATE_FILE")
        lines.append('# Example: state_file = "/path/to/state.json"')
        if config["state_file"] is not None:
            lines.append(f"state_file = {self._format_toml_value(config['state_file'])}")
        lines.append("")

        lines.append("# Log file path (optional)")
        lines.append('# Example: log_file = "/path/to/logs/parkr.log"')
        if config["log_file"] is not None:
            lines.append(f"log_file = {self._format_toml_value(config['log_file'])}")
        lines.append("")

        lines.append("# Read size in bytes used when hashing project files")
        lines.append(
            f"file_hash_chunk_size = {self._format_toml_value(config['file_hash_chunk_size'])}"
        )
        lines.append("")

        lines.append("# Verification used by prune: \"auto\" (hash when available) or \"mtime\"")
        lines.append(
            f"default_verify_mode = {self._format_toml_value(config['default_verify_mode'])}"
        )
        lines.append("")

        lines.append("# Ask for confirmation after interactive selection")
        lines.append(
            f"confirm_interactive = {self._format_toml_value(config['confirm_interactive'])}"
        )
        lines.append("")

        return "\n".join(lines)

    def _format_toml_value(self, value: Any) -> str:
        """Format a value for TOML serialization."""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (str, Path)):
            return f'"{str(value)}"'
        return str(value)

    @classmethod
    def load(cls, config_file: Path | None = None) -> "Config":
        """Load configuration from file, falling back to defaults when absent."""
        if cls._instance is not None and config_file is None:
            return cls._instance

        source = config_file or default_config_path()

        if not source.exists():
            instance = cls()
            if config_file is None:
                cls._instance = instance
                cls._loaded_from = None
            return instance

        try:
            with open(source, "rb") as f:
                config_dict = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.error("Failed to load configuration: %s", e)
            raise

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config_dict) - known)
        for key in unknown:
            logger.warning("Ignoring unknown configuration key %r in %s", key, source)
            _ = config_dict.pop(key)

        for key, value in config_dict.items():
            if key.endswith("_file") and isinstance(value, str) and not value.strip():
                config_dict[key] = None

        logger.debug("Configuration loaded from %s", source)
        instance = cls(**config_dict)
        if config_file is None:
            cls._instance = instance
            cls._loaded_from = source
        return instance


# Global configuration instance
config = Config.load()
