"""Configuration loading for Folio.

Settings live in an optional ``folio.yaml`` next to the documents. Anything
the file leaves out falls back to ``DEFAULT_CONFIG``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .log import get_logger

logger = get_logger(__name__)

CONFIG_FILENAME = "folio.yaml"

DEFAULT_CONFIG: dict[str, Any] = {
    "layouts_dir": "_layouts",
    "output_dir": "output",
    "default_layout": None,
    "highlight": False,
    "markdown_plugins": ["strikethrough", "footnotes", "table", "url"],
}


def load_config(project_root: Path) -> dict[str, Any]:
    """Load configuration from folio.yaml.

    Args:
        project_root: Directory that may contain folio.yaml.

    Returns:
        Dictionary containing configuration values, with defaults applied.
    """
    config_path = Path(project_root) / CONFIG_FILENAME
    config = DEFAULT_CONFIG.copy()
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
        if isinstance(loaded, dict):
            config.update(loaded)
        else:
            logger.warning("Ignoring %s: expected a mapping", config_path)
    return config


def resolve_path(project_root: Path, value: str | Path) -> Path:
    """Resolve a configured path relative to the project root."""
    path = Path(value)
    return path if path.is_absolute() else Path(project_root) / path
