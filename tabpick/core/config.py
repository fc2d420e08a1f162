"""
Configuration for the tab picker.

The host hands the picker a flat mapping of strings. Two flags are
recognized; anything malformed falls back to the documented default with a
warning rather than aborting. The same keys can be kept in a YAML file.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, bool] = {
    "ignore_case": True,
    "fullscreen": False,
}

_TRUE = frozenset({"true", "yes", "on", "1"})
_FALSE = frozenset({"false", "no", "off", "0"})


def get_config_path() -> Path:
    """Default config file location (~/.tabpick/config.yaml)."""
    return Path.home() / ".tabpick" / "config.yaml"


def parse_bool(value: Any) -> Optional[bool]:
    """Parse boolean text. Returns None when the value is not a recognizable boolean."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if not isinstance(value, str):
        return None
    text = value.strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    return None


@dataclass(frozen=True)
class PickerConfig:
    ignore_case: bool = DEFAULTS["ignore_case"]
    fullscreen: bool = DEFAULTS["fullscreen"]

    def to_dict(self) -> Dict[str, bool]:
        return asdict(self)

    @staticmethod
    def from_configuration(configuration: Mapping[str, Any]) -> "PickerConfig":
        values, problems = _parse(configuration)
        for problem in problems:
            logger.warning("%s", problem)
        return PickerConfig(**values)


def _parse(configuration: Mapping[str, Any]) -> Tuple[Dict[str, bool], List[str]]:
    values = dict(DEFAULTS)
    problems: List[str] = []
    for key, default in DEFAULTS.items():
        if key not in configuration:
            continue
        raw = configuration[key]
        parsed = parse_bool(raw)
        if parsed is None:
            problems.append(f"Invalid boolean for '{key}': {raw!r} (using default {default})")
            continue
        values[key] = parsed
    return values, problems


def validate_configuration(configuration: Mapping[str, Any]) -> List[str]:
    """Return human-readable problems with a configuration mapping (empty if valid)."""
    _, problems = _parse(configuration)
    for key in configuration:
        if key not in DEFAULTS:
            problems.append(f"Unknown key '{key}'")
    return problems


def read_config_file(path: Path) -> Dict[str, Any]:
    """
    Read a YAML config file into a mapping.

    Raises:
        OSError: If the file cannot be read
        ValueError: If the file is not valid YAML or not a mapping
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top of {path}")
    return data


def load_config(
    path: Optional[Path] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> PickerConfig:
    """
    Load configuration from YAML, then apply ``overrides`` (e.g. CLI flags).

    A missing or unreadable file yields defaults.

    Args:
        path: Config file (defaults to ~/.tabpick/config.yaml)
        overrides: Values taking precedence over the file

    Returns:
        Parsed PickerConfig
    """
    cfg_path = path or get_config_path()
    data: Dict[str, Any] = {}
    if cfg_path.exists():
        try:
            data = read_config_file(cfg_path)
        except (OSError, ValueError) as e:
            logger.warning("Could not load config: %s", e)
    elif path is not None:
        logger.warning("Config file not found: %s", cfg_path)
    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return PickerConfig.from_configuration(data)
