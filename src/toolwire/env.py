"""
Lightweight environment variable loader for local development.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Optional

logger = logging.getLogger(__name__)


def load_env_if_present(candidate_paths: Iterable[Path]) -> Optional[Path]:
    """
    Load key=value pairs from the first .env-style file that exists.

    Variables already present in the environment are left untouched.

    Returns:
        The path that was loaded, or None if no candidate exists.
    """
    for env_path in candidate_paths:
        if not env_path.is_file():
            continue
        for line in env_path.read_text().splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#") or "=" not in stripped:
                continue
            key, value = stripped.split("=", 1)
            key = key.strip()
            if key.startswith("export "):
                key = key[len("export ") :].strip()
            value = value.strip().strip("'\"")
            if key and key not in os.environ:
                os.environ[key] = value
        logger.debug(f"Loaded environment from {env_path}")
        return env_path
    return None


def load_default_env() -> Optional[Path]:
    """Load from cwd/.env if present."""
    return load_env_if_present([Path.cwd() / ".env"])


def require_env(name: str) -> Optional[str]:
    """Load the default .env file, then return the variable (None when unset or empty)."""
    load_default_env()
    return os.environ.get(name) or None


__all__ = ["load_default_env", "load_env_if_present", "require_env"]
