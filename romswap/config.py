"""Parse and validate romswap.yaml configuration."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

from romswap.types import WORD_SIZE, ConfigError, RomType

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "romswap.yaml"
DEFAULT_CHUNK_SIZE = 1024 * 1024  # 1 MB


@dataclass
class RomSwapConfig:
    """Settings shared by every conversion run.

    Attributes:
        default_type: Output order when neither ``--type`` nor the
            destination suffix names one.
        force: Overwrite an existing destination file.
        chunk_size: Bytes read per body chunk, a positive multiple of 4.
    """

    default_type: RomType = RomType.BIG_ENDIAN
    force: bool = False
    chunk_size: int = DEFAULT_CHUNK_SIZE

    def validate(self) -> None:
        """Raise :class:`ConfigError` if a field is out of range."""
        if not isinstance(self.chunk_size, int) or isinstance(self.chunk_size, bool):
            raise ConfigError(f"chunk_size must be an integer, got {self.chunk_size!r}")
        if self.chunk_size <= 0 or self.chunk_size % WORD_SIZE:
            raise ConfigError(
                f"chunk_size must be a positive multiple of {WORD_SIZE}, got {self.chunk_size}"
            )

    def to_dict(self) -> dict:
        """Serialise back to a plain dict (for writing romswap.yaml)."""
        return {
            "default_type": self.default_type.value,
            "force": self.force,
            "chunk_size": self.chunk_size,
        }


def _parse_type(raw: object) -> RomType:
    try:
        return RomType.parse(str(raw))
    except ValueError as exc:
        raise ConfigError(f"Invalid default_type: {exc}") from exc


def load_config(path: str | Path = DEFAULT_CONFIG_FILE) -> RomSwapConfig:
    """Load and parse ``romswap.yaml``.

    Args:
        path: Path to the configuration file.

    Returns:
        Parsed :class:`RomSwapConfig`.

    Raises:
        ConfigError: If the file is missing or malformed.
    """
    p = Path(path)
    if not p.exists():
        raise ConfigError(f"Configuration file not found: {p}")

    try:
        with open(p, encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {p}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {p}, got {type(data).__name__}")

    cfg = RomSwapConfig()
    if "default_type" in data:
        cfg.default_type = _parse_type(data["default_type"])
    if "force" in data:
        if not isinstance(data["force"], bool):
            raise ConfigError(f"force must be true or false, got {data['force']!r}")
        cfg.force = data["force"]
    if "chunk_size" in data:
        cfg.chunk_size = data["chunk_size"]
    cfg.validate()

    logger.debug("Loaded configuration from %s: %s", p, cfg)
    return cfg


def find_config(path: str | Path | None = None) -> RomSwapConfig:
    """Return the configuration for this run.

    An explicit *path* must exist. Without one, ``./romswap.yaml`` is used
    when present and the built-in defaults otherwise.
    """
    if path is not None:
        return load_config(path)
    default = Path(DEFAULT_CONFIG_FILE)
    if default.is_file():
        return load_config(default)
    return RomSwapConfig()


def save_config(cfg: RomSwapConfig, path: str | Path = DEFAULT_CONFIG_FILE) -> None:
    """Write the config back to ``romswap.yaml``."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with open(p, "w", encoding="utf-8") as fh:
        yaml.dump(cfg.to_dict(), fh, default_flow_style=False, sort_keys=False)
