"""Load the ValidMeasure keyword group from a TOML definition file."""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Union

from measure_validator.errors import ConfigurationError
from measure_validator.results.constants import GROUP_NAME

logger = logging.getLogger(__name__)

__all__ = ['load_toml', 'find_group', 'load_threshold_group']


def load_toml(path: Union[str, Path]) -> Dict[str, Any]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Definition file not found: {path}")
    with open(path, "rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Failed to parse {path}: {e}") from e


def find_group(cfg: Dict[str, Any], name: str = GROUP_NAME) -> Optional[Dict[str, Any]]:
    """
    Find a table by name, at the top level first and then depth-first.

    Names are matched case-insensitively.

    Returns:
        The table, or None if no table has that name
    """
    wanted = name.casefold()
    for key, value in cfg.items():
        if key.casefold() == wanted and isinstance(value, dict):
            return value
    for value in cfg.values():
        if isinstance(value, dict):
            found = find_group(value, name)
            if found is not None:
                return found
    return None


def load_threshold_group(path: Union[str, Path]) -> Dict[str, Any]:
    """Return the flat ValidMeasure group of a definition file."""
    cfg = load_toml(path)
    group = find_group(cfg)
    if group is None:
        raise ConfigurationError(f"No [{GROUP_NAME}] table in {path}")

    # Nested tables are not keywords
    flat = {key: value for key, value in group.items() if not isinstance(value, dict)}
    logger.debug(f"Read {len(flat)} keywords from {path}")
    return flat
