"""Locations of the config file and rotating logs.

TEXTALGOS_CONFIG and TEXTALGOS_LOG_DIR point at explicit locations;
TEXTALGOS_ROOT moves both under another directory.
"""

from __future__ import annotations

import os
from pathlib import Path


def project_root() -> Path:
    override = os.environ.get("TEXTALGOS_ROOT")
    if override:
        return Path(override).resolve()
    return Path(__file__).resolve().parents[2]


def config_path() -> Path:
    """Return the config.yml read by load_config() when no path is given."""
    explicit = os.environ.get("TEXTALGOS_CONFIG")
    if explicit:
        return Path(explicit).resolve()
    return project_root() / "config.yml"


def log_dir() -> Path:
    """Return the directory setup_logging() writes textalgos.log to."""
    explicit = os.environ.get("TEXTALGOS_LOG_DIR")
    if explicit:
        return Path(explicit).resolve()
    return project_root() / "logs"
