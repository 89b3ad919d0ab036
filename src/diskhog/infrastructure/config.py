"""Configuration constants and .env parsing."""

from __future__ import annotations

import math
import os
from pathlib import Path


def read_env_file(keys: list[str]) -> dict[str, str]:
    """Parse .env file and return values for requested keys.

    Does NOT load into os.environ; callers decide what to do with values.
    """
    env_file = Path.cwd() / ".env"
    try:
        content = env_file.read_text()
    except OSError:
        return {}

    result: dict[str, str] = {}
    wanted = set(keys)

    for line in content.splitlines():
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("#"):
            continue
        eq_idx = trimmed.find("=")
        if eq_idx == -1:
            continue
        key = trimmed[:eq_idx].strip()
        if key not in wanted:
            continue
        value = trimmed[eq_idx + 1 :].strip()
        if (value.startswith('"') and value.endswith('"')) or (value.startswith("'") and value.endswith("'")):
            value = value[1:-1]
        if value:
            result[key] = value

    return result


def _get_setting(key: str, default: str, env_config: dict[str, str]) -> str:
    return os.environ.get(key) or env_config.get(key, default)


def parse_positive_int(raw: str, default: int) -> int:
    """Parse a positive integer setting, falling back to default on junk."""
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


def parse_gigabytes(raw: str) -> float | None:
    """Parse a non-negative size in GB; None for empty, junk or negative input."""
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) and value >= 0 else None


def gigabytes_to_bytes(gb: float) -> int:
    return int(gb * 1024 * 1024 * 1024)


# Environment first, then .env in the working directory.
_env_config = read_env_file(["DISKHOG_BUFFER_SIZE", "DISKHOG_SET_PREFIX", "DISKHOG_MAX_SPACE_GB", "LOG_LEVEL"])

DEFAULT_BUFFER_SIZE = 64 * 1024

BUFFER_SIZE: int = parse_positive_int(
    _get_setting("DISKHOG_BUFFER_SIZE", str(DEFAULT_BUFFER_SIZE), _env_config), DEFAULT_BUFFER_SIZE
)
SET_PREFIX: str = _get_setting("DISKHOG_SET_PREFIX", "dhb-set-", _env_config)
SET_NAME_FORMAT = "%Y%m%d-%H%M%S"
MANIFEST_SUFFIX = ".manifest.yaml"
LOG_LEVEL: str = _get_setting("LOG_LEVEL", "INFO", _env_config).upper()

DEFAULT_MAX_SPACE_GB: float | None = parse_gigabytes(_get_setting("DISKHOG_MAX_SPACE_GB", "", _env_config))
