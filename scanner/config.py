"""Scan configuration loaded from an optional YAML file."""

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional, Set

import yaml

from .discovery import DEFAULT_EXCLUDE_DIRS, DEFAULT_EXTENSIONS

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".depgraph.yml"


class ConfigError(ValueError):
    """Raised for unreadable or malformed configuration files."""


@dataclass(frozen=True)
class ScanConfig:
    """Options controlling file discovery."""

    include_ext: Set[str] = field(default_factory=lambda: set(DEFAULT_EXTENSIONS))
    exclude_dirs: Set[str] = field(default_factory=lambda: set(DEFAULT_EXCLUDE_DIRS))
    max_depth: Optional[int] = None

    def merged(
        self,
        include_ext: Optional[Set[str]] = None,
        exclude_dirs: Optional[Set[str]] = None,
        max_depth: Optional[int] = None,
    ) -> "ScanConfig":
        """Return a copy with the given non-None values overriding this config."""
        overrides: Dict[str, Any] = {}
        if include_ext is not None:
            overrides["include_ext"] = set(include_ext)
        if exclude_dirs is not None:
            overrides["exclude_dirs"] = set(exclude_dirs)
        if max_depth is not None:
            overrides["max_depth"] = max_depth
        return replace(self, **overrides)


def normalize_extension(ext: str) -> str:
    """Lowercase an extension and make sure it starts with a dot."""
    ext = ext.strip().lower()
    if not ext.startswith("."):
        ext = "." + ext
    return ext


def _string_set(data: Dict[str, Any], key: str) -> Optional[Set[str]]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"'{key}' must be a list of strings")
    return set(value)


def load_config(path: Path) -> ScanConfig:
    """
    Load a scan configuration file.

    Recognized keys: ``include_ext`` (list of extensions), ``exclude_dirs``
    (list of directory names, added to the defaults) and ``max_depth``
    (integer). Unknown keys are ignored with a warning.

    Args:
        path: Path to a YAML file.

    Returns:
        ScanConfig with file values applied over the defaults.

    Raises:
        ConfigError: If the file cannot be read or has invalid values.
    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if data is None:
        return ScanConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    for key in sorted(set(data) - {"include_ext", "exclude_dirs", "max_depth"}):
        logger.warning("Ignoring unknown config key %r in %s", key, path)

    include_ext = _string_set(data, "include_ext")
    if include_ext is not None:
        include_ext = {normalize_extension(ext) for ext in include_ext}

    exclude_dirs = _string_set(data, "exclude_dirs")
    if exclude_dirs is not None:
        exclude_dirs = exclude_dirs | DEFAULT_EXCLUDE_DIRS

    max_depth = data.get("max_depth")
    if max_depth is not None and (isinstance(max_depth, bool) or not isinstance(max_depth, int)):
        raise ConfigError("'max_depth' must be an integer")

    return ScanConfig().merged(include_ext, exclude_dirs, max_depth)


def find_config(root: Path) -> Optional[Path]:
    """Return the default config file under root, if there is one."""
    candidate = root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None
